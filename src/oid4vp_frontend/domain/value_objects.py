"""Value objects for the domain layer"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, Final

from pydantic import BaseModel, ConfigDict, StringConstraints, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

NonEmptyStr = Annotated[str, StringConstraints(min_length=1, strict=True)]

# Only emptiness and non-string input are rejected; whitespace is a valid value.
nonce_schema: Final[TypeAdapter[str]] = TypeAdapter(NonEmptyStr)
presentation_id_schema: Final[TypeAdapter[str]] = TypeAdapter(NonEmptyStr)


@dataclass(frozen=True)
class Nonce:
    """Cryptographic nonce for replay protection"""

    value: str

    def __post_init__(self) -> None:
        nonce_schema.validate_python(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PresentationId:
    """
    Identifier of a presentation transaction, assigned by the backend.

    Used as the correlation key between the browser session and the
    verifier backend. Never sent to the wallet.
    """

    value: str

    def __post_init__(self) -> None:
        presentation_id_schema.validate_python(self.value)

    def __str__(self) -> str:
        return self.value


# ======================
# Ephemeral ECDH keys
# ======================


class _EcPublicJwkMembers(BaseModel):
    model_config = ConfigDict(extra="allow", strict=True)

    kty: str
    crv: str
    x: str
    y: str


class _EcPrivateJwkMembers(_EcPublicJwkMembers):
    d: str


PRIVATE_JWK_ERROR: Final[str] = (
    "Must be a valid JSON string representing a JWK with kty, crv, x, y, and d properties"
)
PUBLIC_JWK_ERROR: Final[str] = "Must be a valid JSON string representing a JWK with kty, crv, x, and y properties"


def _validate_jwk_json(value: Any, members: type[BaseModel], message: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(message)
    try:
        members.model_validate_json(value)
    except SchemaValidationError:
        # pydantic echoes the input in its messages; key material must not leak
        raise ValueError(message) from None


@dataclass(frozen=True, repr=False)
class EphemeralECDHPublicJwk:
    """Public half of the ephemeral ECDH key pair, as a JSON-encoded JWK"""

    value: str

    def __post_init__(self) -> None:
        _validate_jwk_json(self.value, _EcPublicJwkMembers, PUBLIC_JWK_ERROR)

    def to_json(self) -> str:
        return self.value

    def as_dict(self) -> Dict[str, Any]:
        return json.loads(self.value)

    def __repr__(self) -> str:
        return f"EphemeralECDHPublicJwk({self.value})"


@dataclass(frozen=True, repr=False)
class EphemeralECDHPrivateJwk:
    """
    Private half of the ephemeral ECDH key pair, as a JSON-encoded JWK.

    Lives in the session from transaction init until the wallet response is
    decrypted. The string representation is redacted so the key cannot end
    up in logs or tracebacks by accident; use ``to_json()`` to get the key.
    """

    value: str

    def __post_init__(self) -> None:
        _validate_jwk_json(self.value, _EcPrivateJwkMembers, PRIVATE_JWK_ERROR)

    def to_json(self) -> str:
        return self.value

    def as_dict(self) -> Dict[str, Any]:
        return json.loads(self.value)

    def to_public_jwk(self) -> EphemeralECDHPublicJwk:
        """Derive the public JWK by dropping the private scalar ``d``"""
        jwk = self.as_dict()
        jwk.pop("d", None)
        return EphemeralECDHPublicJwk(json.dumps(jwk))

    def __repr__(self) -> str:
        return "EphemeralECDHPrivateJwk(<redacted>)"

    def __str__(self) -> str:
        return "<redacted>"


# ======================
# Request options
# ======================


class PresentationType(str, Enum):
    """Type of token requested from the wallet"""

    ID_TOKEN: Final[str] = "id_token"
    VP_TOKEN: Final[str] = "vp_token"
    ID_AND_VP_TOKEN: Final[str] = "id_token vp_token"

    def __str__(self) -> str:
        return self.value


class ResponseMode(str, Enum):
    """Response mode options for wallet responses"""

    DIRECT_POST: Final[str] = "direct_post"
    DIRECT_POST_JWT: Final[str] = "direct_post.jwt"

    def __str__(self) -> str:
        return self.value


class JarMode(str, Enum):
    """How the authorization request (JAR) is handed to the wallet"""

    BY_VALUE: Final[str] = "by_value"
    BY_REFERENCE: Final[str] = "by_reference"

    def __str__(self) -> str:
        return self.value


class PresentationDefinitionMode(str, Enum):
    """How the presentation definition is embedded in the request"""

    BY_VALUE: Final[str] = "by_value"
    BY_REFERENCE: Final[str] = "by_reference"

    def __str__(self) -> str:
        return self.value


class TransactionPhase(str, Enum):
    """
    Phases of a presentation transaction, in order.

    Transitions only move forward; a transaction that never reaches
    CORRELATED expires with the session.
    """

    INIT: Final[str] = "init"
    REQUEST_BUILT: Final[str] = "request_built"
    SESSION_BOUND: Final[str] = "session_bound"
    AWAITING_RESPONSE: Final[str] = "awaiting_response"
    CORRELATED: Final[str] = "correlated"

    def __str__(self) -> str:
        return self.value
