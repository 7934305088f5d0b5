"""Init transaction use case - Start a presentation transaction with the backend"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Final, Mapping, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from oid4vp_frontend.domain import (
    EphemeralECDHPublicJwk,
    JarMode,
    Nonce,
    PresentationDefinitionMode,
    PresentationId,
    PresentationType,
    ResponseMode,
)

# ======================
# Wire schemas
# ======================

_url_adapter: Final[TypeAdapter[AnyUrl]] = TypeAdapter(AnyUrl)


class InitTransactionRequestSchema(BaseModel):
    """Body of the backend's init transaction endpoint"""

    model_config = ConfigDict(extra="forbid")

    type: PresentationType
    presentation_definition: Dict[str, Any]
    ephemeral_ecdh_public_jwk: str
    nonce: Optional[str] = None
    response_mode: Optional[ResponseMode] = None
    jar_mode: Optional[JarMode] = None
    presentation_definition_mode: Optional[PresentationDefinitionMode] = None
    wallet_response_redirect_uri_template: Optional[str] = None


class InitTransactionResponseSchema(BaseModel):
    """Answer of the backend's init transaction endpoint"""

    presentation_id: str = Field(..., min_length=1)
    client_id: str
    request: Optional[str] = None
    request_uri: Optional[str] = None

    @field_validator("request_uri")
    @classmethod
    def request_uri_is_url(cls, v: Optional[str]) -> Optional[str]:
        # validated as a URL but kept verbatim; AnyUrl would normalise it
        if v is not None:
            try:
                _url_adapter.validate_python(v)
            except ValidationError:
                raise ValueError("request_uri must be a valid URL") from None
        return v


# ======================
# Request / Response
# ======================


@dataclass(frozen=True)
class InitTransactionRequest:
    """
    Request sent to the backend to open a presentation transaction.

    Attributes:
        type: Token(s) requested from the wallet
        presentation_definition: DIF presentation definition (opaque)
        ephemeral_ecdh_public_jwk: Public key the wallet encrypts its response to
        nonce: Replay protection nonce
        response_mode: direct_post or direct_post.jwt
        jar_mode: Whether the wallet gets the request by value or by reference
        presentation_definition_mode: Embedding of the presentation definition
        wallet_response_redirect_uri_template: Same-device return URI, mobile only
    """

    type: PresentationType
    presentation_definition: Dict[str, Any]
    ephemeral_ecdh_public_jwk: EphemeralECDHPublicJwk
    nonce: Optional[Nonce] = None
    response_mode: Optional[ResponseMode] = None
    jar_mode: Optional[JarMode] = None
    presentation_definition_mode: Optional[PresentationDefinitionMode] = None
    wallet_response_redirect_uri_template: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        """Wire representation; unset optionals are omitted"""
        data: Dict[str, Any] = {
            "type": self.type.value,
            "presentation_definition": self.presentation_definition,
            "ephemeral_ecdh_public_jwk": self.ephemeral_ecdh_public_jwk.to_json(),
        }
        if self.nonce is not None:
            data["nonce"] = str(self.nonce)
        if self.response_mode is not None:
            data["response_mode"] = self.response_mode.value
        if self.jar_mode is not None:
            data["jar_mode"] = self.jar_mode.value
        if self.presentation_definition_mode is not None:
            data["presentation_definition_mode"] = self.presentation_definition_mode.value
        if self.wallet_response_redirect_uri_template is not None:
            data["wallet_response_redirect_uri_template"] = self.wallet_response_redirect_uri_template
        return data

    @staticmethod
    def from_json(json_data: Mapping[str, Any]) -> "InitTransactionRequest":
        parsed = InitTransactionRequestSchema.model_validate(json_data)
        return InitTransactionRequest(
            type=parsed.type,
            presentation_definition=parsed.presentation_definition,
            ephemeral_ecdh_public_jwk=EphemeralECDHPublicJwk(parsed.ephemeral_ecdh_public_jwk),
            nonce=Nonce(parsed.nonce) if parsed.nonce is not None else None,
            response_mode=parsed.response_mode,
            jar_mode=parsed.jar_mode,
            presentation_definition_mode=parsed.presentation_definition_mode,
            wallet_response_redirect_uri_template=parsed.wallet_response_redirect_uri_template,
        )


WalletRedirectParams = Dict[str, Optional[str]]
"""``client_id``, ``request`` and ``request_uri``; never the presentation id"""


@dataclass(frozen=True)
class InitTransactionResponse:
    """
    Backend answer to an init request.

    Attributes:
        presentation_id: Correlation key, kept in the session only
        client_id: Verifier client identifier
        request: JAR, when delivered by value
        request_uri: Where the wallet fetches the JAR, when delivered by reference
    """

    presentation_id: PresentationId
    client_id: str
    request: Optional[str] = None
    request_uri: Optional[str] = None

    @staticmethod
    def from_json(json_data: Any) -> "InitTransactionResponse":
        parsed = InitTransactionResponseSchema.model_validate(json_data)
        return InitTransactionResponse(
            presentation_id=PresentationId(parsed.presentation_id),
            client_id=parsed.client_id,
            request=parsed.request,
            request_uri=parsed.request_uri,
        )

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "presentation_id": str(self.presentation_id),
            "client_id": self.client_id,
        }
        if self.request is not None:
            data["request"] = self.request
        if self.request_uri is not None:
            data["request_uri"] = self.request_uri
        return data

    def to_wallet_redirect_params(self) -> WalletRedirectParams:
        return {
            "client_id": self.client_id,
            "request": self.request,
            "request_uri": self.request_uri,
        }


@dataclass(frozen=True)
class InitTransactionInput:
    """
    Inbound init call.

    Attributes:
        headers: Headers of the browser request; only ``user-agent`` is read
    """

    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class InitTransactionResult:
    """
    Outcome of a successful init.

    Attributes:
        wallet_redirect_uri: URI that hands the user over to the wallet
        is_mobile: Whether the caller is on a mobile device (same-device flow)
    """

    wallet_redirect_uri: str
    is_mobile: bool


# ======================
# Errors
# ======================


class InitTransactionErrorType(str, Enum):
    MISSING_USER_AGENT: Final[str] = "MISSING_USER_AGENT"
    API_REQUEST_FAILED: Final[str] = "API_REQUEST_FAILED"
    INVALID_RESPONSE: Final[str] = "INVALID_RESPONSE"
    SESSION_ERROR: Final[str] = "SESSION_ERROR"

    def __str__(self) -> str:
        return self.value


class InitTransactionServiceError(Exception):
    """
    Error raised by the init transaction service.

    Attributes:
        error_type: Stable discriminator
        details: Human-readable details
        original_error: Underlying error, if any (also the ``__cause__``)
    """

    def __init__(
        self,
        error_type: InitTransactionErrorType,
        details: str,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(f"InitTransaction Service Error ({error_type.value}): {details}")
        self.error_type = error_type
        self.details = details
        self.original_error = original_error
        if original_error is not None:
            self.__cause__ = original_error


class InitTransaction(ABC):
    """
    Use case: Start a presentation transaction.

    Flow:
    1. Require a user agent and derive the device class
    2. Generate nonce and ephemeral key pair
    3. Build the request and post it to the backend
    4. Bind presentation id, nonce and private key to the session
    5. Return the wallet redirect URI
    """

    @abstractmethod
    async def execute(self, request: InitTransactionInput) -> InitTransactionResult:
        """
        Execute the init transaction use case.

        Args:
            request: Inbound call

        Returns:
            Wallet redirect URI and device class

        Raises:
            InitTransactionServiceError: On any failure
        """
        pass
