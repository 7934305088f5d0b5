"""Mapping of use case errors to HTTP responses"""

from typing import Final, Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from oid4vp_frontend.api.models import ErrorResponseModel
from oid4vp_frontend.port.input import (
    GetWalletResponseErrorType,
    GetWalletResponseServiceError,
    InitTransactionErrorType,
    InitTransactionServiceError,
)
from oid4vp_frontend.port.output import FetcherError, FetcherErrorType

ServiceError = Union[InitTransactionServiceError, GetWalletResponseServiceError]

_UPSTREAM_ERRORS: Final = {
    InitTransactionErrorType.API_REQUEST_FAILED,
    GetWalletResponseErrorType.API_REQUEST_FAILED,
}
_SERVER_ERRORS: Final = {
    InitTransactionErrorType.SESSION_ERROR,
    GetWalletResponseErrorType.SESSION_ERROR,
}


def _is_timeout(error: BaseException) -> bool:
    cause = error.__cause__
    while cause is not None:
        if isinstance(cause, FetcherError):
            return cause.error_type is FetcherErrorType.TIMEOUT_ERROR
        cause = cause.__cause__
    return False


def status_code_for(error: ServiceError) -> int:
    """
    HTTP status for a use case error.

    Backend failures are 502 (504 on timeout), session failures 500,
    everything else is a client-side precondition failure (400).
    """
    if error.error_type in _UPSTREAM_ERRORS:
        return 504 if _is_timeout(error) else 502
    if error.error_type in _SERVER_ERRORS:
        return 500
    return 400


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    body = ErrorResponseModel(error=exc.error_type.value, error_description=exc.details)
    return JSONResponse(
        status_code=status_code_for(exc),
        content=body.model_dump(exclude_none=True),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InitTransactionServiceError, service_error_handler)
    app.add_exception_handler(GetWalletResponseServiceError, service_error_handler)
