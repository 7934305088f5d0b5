"""Logging adapter"""

from oid4vp_frontend.adapter.output.logging.default_logger import (
    DEVELOPMENT_LOGGER_CONFIG,
    PRODUCTION_LOGGER_CONFIG,
    REDACTED,
    SECRET_DISABLED_NOTICE,
    DefaultLogger,
    create_development_logger,
    create_logger,
    create_production_logger,
    redact,
    strip_control_chars,
)

__all__ = [
    "DefaultLogger",
    "create_logger",
    "create_production_logger",
    "create_development_logger",
    "PRODUCTION_LOGGER_CONFIG",
    "DEVELOPMENT_LOGGER_CONFIG",
    "REDACTED",
    "SECRET_DISABLED_NOTICE",
    "redact",
    "strip_control_chars",
]
