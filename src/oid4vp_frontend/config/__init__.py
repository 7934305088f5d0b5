"""Configuration module"""

from oid4vp_frontend.config.loader import (
    FrontendConfig,
    create_test_config,
    load_config_from_env,
    load_or_create_config,
)

__all__ = ["FrontendConfig", "load_config_from_env", "create_test_config", "load_or_create_config"]
