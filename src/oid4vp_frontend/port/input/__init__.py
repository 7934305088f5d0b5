"""Input ports - Use case interfaces"""

from oid4vp_frontend.port.input.init_transaction import (
    InitTransaction,
    InitTransactionErrorType,
    InitTransactionInput,
    InitTransactionRequest,
    InitTransactionRequestSchema,
    InitTransactionResponse,
    InitTransactionResponseSchema,
    InitTransactionResult,
    InitTransactionServiceError,
    WalletRedirectParams,
)
from oid4vp_frontend.port.input.get_wallet_response import (
    GetWalletResponse,
    GetWalletResponseErrorType,
    GetWalletResponseInput,
    GetWalletResponseResult,
    GetWalletResponseServiceError,
)

__all__ = [
    # Init Transaction
    "InitTransaction",
    "InitTransactionInput",
    "InitTransactionRequest",
    "InitTransactionRequestSchema",
    "InitTransactionResponse",
    "InitTransactionResponseSchema",
    "InitTransactionResult",
    "InitTransactionErrorType",
    "InitTransactionServiceError",
    "WalletRedirectParams",
    # Get Wallet Response
    "GetWalletResponse",
    "GetWalletResponseInput",
    "GetWalletResponseResult",
    "GetWalletResponseErrorType",
    "GetWalletResponseServiceError",
]
