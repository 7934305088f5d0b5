"""Domain layer - Value objects and response models"""

from oid4vp_frontend.domain.authorization_response import (
    AuthorizationResponse,
    AuthorizationResponseData,
    DirectPost,
    DirectPostJwt,
    DirectPostJwtSchema,
    DirectPostResponseSchema,
    DirectPostSchema,
    parse_authorization_response,
)
from oid4vp_frontend.domain.jarm_option import (
    Encrypted,
    JarmOption,
    Signed,
    SignedAndEncrypted,
)
from oid4vp_frontend.domain.value_objects import (
    PRIVATE_JWK_ERROR,
    PUBLIC_JWK_ERROR,
    EphemeralECDHPrivateJwk,
    EphemeralECDHPublicJwk,
    JarMode,
    Nonce,
    PresentationDefinitionMode,
    PresentationId,
    PresentationType,
    ResponseMode,
    TransactionPhase,
    nonce_schema,
    presentation_id_schema,
)

__all__ = [
    # Value objects
    "Nonce",
    "PresentationId",
    "EphemeralECDHPrivateJwk",
    "EphemeralECDHPublicJwk",
    "PRIVATE_JWK_ERROR",
    "PUBLIC_JWK_ERROR",
    "nonce_schema",
    "presentation_id_schema",
    # Request options
    "PresentationType",
    "ResponseMode",
    "JarMode",
    "PresentationDefinitionMode",
    "TransactionPhase",
    # JARM
    "JarmOption",
    "Signed",
    "Encrypted",
    "SignedAndEncrypted",
    # Authorization response
    "AuthorizationResponse",
    "AuthorizationResponseData",
    "DirectPost",
    "DirectPostJwt",
    "DirectPostSchema",
    "DirectPostResponseSchema",
    "DirectPostJwtSchema",
    "parse_authorization_response",
]
