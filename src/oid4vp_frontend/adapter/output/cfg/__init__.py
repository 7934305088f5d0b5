"""Default generators for nonces and redirect URIs"""

from oid4vp_frontend.adapter.output.cfg.default_generators import (
    RESPONSE_CODE_PARAM,
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
)

__all__ = [
    "RESPONSE_CODE_PARAM",
    "default_generate_nonce",
    "default_generate_wallet_redirect_uri",
    "default_generate_wallet_response_redirect_uri_template",
]
