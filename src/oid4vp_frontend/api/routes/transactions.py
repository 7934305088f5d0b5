"""Transaction endpoints called by the verifier UI"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from oid4vp_frontend.api.dependencies import (
    get_get_wallet_response_use_case,
    get_init_transaction_use_case,
)
from oid4vp_frontend.api.models import (
    ErrorResponseModel,
    InitTransactionResponseModel,
    WalletResponseModel,
)
from oid4vp_frontend.port.input import (
    GetWalletResponse,
    GetWalletResponseInput,
    InitTransaction,
    InitTransactionInput,
)

router = APIRouter(tags=["Transactions"])

_ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponseModel},
    500: {"model": ErrorResponseModel},
    502: {"model": ErrorResponseModel},
    504: {"model": ErrorResponseModel},
}


@router.post(
    "/init",
    response_model=InitTransactionResponseModel,
    responses=_ERROR_RESPONSES,
    summary="Initiate presentation transaction",
    description="Start a transaction at the verifier backend and return the wallet redirect URI",
)
async def init_transaction(
    request: Request,
    init_transaction_uc: InitTransaction = Depends(get_init_transaction_use_case),
) -> InitTransactionResponseModel:
    """
    Initiate a new presentation transaction.

    The transaction secrets are bound to the caller's session cookie. Mobile
    callers get a same-device redirect; others render the URI as a QR code.
    """
    result = await init_transaction_uc.execute(InitTransactionInput(headers=dict(request.headers)))
    return InitTransactionResponseModel(
        wallet_redirect_uri=result.wallet_redirect_uri,
        is_mobile=result.is_mobile,
    )


@router.get(
    "/result",
    response_model=WalletResponseModel,
    responses=_ERROR_RESPONSES,
    summary="Get wallet response",
    description="Retrieve and verify the wallet response of the session's transaction",
)
async def get_wallet_response(
    response_code: Optional[str] = Query(None, description="Response code from the same-device redirect"),
    get_wallet_response_uc: GetWalletResponse = Depends(get_get_wallet_response_use_case),
) -> Dict[str, Any]:
    result = await get_wallet_response_uc.execute(GetWalletResponseInput(response_code=response_code))
    return result.to_json()
