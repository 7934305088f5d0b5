"""Get wallet response use case - Correlate the wallet's answer with the session"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Final, Mapping, Optional


@dataclass(frozen=True)
class GetWalletResponseInput:
    """
    Inbound result call.

    Attributes:
        response_code: Code appended by the wallet to the same-device redirect
    """

    response_code: Optional[str] = None


@dataclass(frozen=True)
class GetWalletResponseResult:
    """
    Verified wallet response.

    Attributes:
        verify_result: mDoc verifier output, passed through unchanged
        vp_token: The verified vp_token
    """

    verify_result: Mapping[str, Any]
    vp_token: str

    def to_json(self) -> Dict[str, Any]:
        return {**self.verify_result, "vp_token": self.vp_token}


class GetWalletResponseErrorType(str, Enum):
    MISSING_PRESENTATION_ID: Final[str] = "MISSING_PRESENTATION_ID"
    MISSING_EPHEMERAL_ECDH_PRIVATE_JWK: Final[str] = "MISSING_EPHEMERAL_ECDH_PRIVATE_JWK"
    MISSING_VP_TOKEN: Final[str] = "MISSING_VP_TOKEN"
    JARM_VERIFICATION_FAILED: Final[str] = "JARM_VERIFICATION_FAILED"
    API_REQUEST_FAILED: Final[str] = "API_REQUEST_FAILED"
    INVALID_RESPONSE: Final[str] = "INVALID_RESPONSE"
    SESSION_ERROR: Final[str] = "SESSION_ERROR"

    def __str__(self) -> str:
        return self.value


class GetWalletResponseServiceError(Exception):
    """
    Error raised by the get wallet response service.

    Attributes:
        error_type: Stable discriminator
        details: Human-readable details
        original_error: Underlying error, if any (also the ``__cause__``)
    """

    def __init__(
        self,
        error_type: GetWalletResponseErrorType,
        details: str,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(f"GetWalletResponse Service Error ({error_type.value}): {details}")
        self.error_type = error_type
        self.details = details
        self.original_error = original_error
        if original_error is not None:
            self.__cause__ = original_error


class GetWalletResponse(ABC):
    """
    Use case: Retrieve and verify the wallet response of the session's transaction.

    The backend is asked for the response stored under the session's
    presentation id; JARM responses are decrypted with the session's
    ephemeral key before the vp_token is handed to the mDoc verifier.
    """

    @abstractmethod
    async def execute(self, request: GetWalletResponseInput) -> GetWalletResponseResult:
        """
        Execute the get wallet response use case.

        Raises:
            GetWalletResponseServiceError: On any failure
        """
        pass
