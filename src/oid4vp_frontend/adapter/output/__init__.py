"""Output adapters - Infrastructure implementations of output ports"""

from oid4vp_frontend.adapter.output.cfg import (
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
)
from oid4vp_frontend.adapter.output.http import (
    DefaultFetcher,
    FetcherConfig,
    create_default_fetcher,
    default_is_mobile,
)
from oid4vp_frontend.adapter.output.jose import JoseServiceImpl
from oid4vp_frontend.adapter.output.logging import DefaultLogger, create_logger
from oid4vp_frontend.adapter.output.prex import mdl_presentation_definition
from oid4vp_frontend.adapter.output.session import InMemorySession, InMemorySessionStore

__all__ = [
    "default_generate_nonce",
    "default_generate_wallet_redirect_uri",
    "default_generate_wallet_response_redirect_uri_template",
    "DefaultFetcher",
    "FetcherConfig",
    "create_default_fetcher",
    "default_is_mobile",
    "JoseServiceImpl",
    "DefaultLogger",
    "create_logger",
    "mdl_presentation_definition",
    "InMemorySession",
    "InMemorySessionStore",
]
