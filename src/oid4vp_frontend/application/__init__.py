"""Application layer - Use case implementations

This layer orchestrates domain objects and talks to the backend, the
session and the crypto services through ports.
"""

from oid4vp_frontend.application.init_transaction_impl import (
    InitTransactionImpl,
    generate_request,
    store_transaction_in_session,
    validate_user_agent,
)
from oid4vp_frontend.application.get_wallet_response_impl import (
    GetWalletResponseImpl,
    get_presentation_id_from_session,
)

__all__ = [
    "InitTransactionImpl",
    "GetWalletResponseImpl",
    "generate_request",
    "store_transaction_in_session",
    "validate_user_agent",
    "get_presentation_id_from_session",
]
