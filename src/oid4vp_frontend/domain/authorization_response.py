"""Authorization response models

The wallet answers an OpenID4VP authorization request in one of two shapes:

- direct_post: plaintext form fields (state, vp_token, presentation_submission, ...)
- direct_post.jwt: a single JARM JWT under ``response``, signed and/or encrypted

Schemas gate the wire boundary. The variant classes do not re-validate what
they are given.
"""

import json
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _decode_json_string(v: Any) -> Any:
    """Form-encoded wallet posts carry presentation_submission as a JSON string"""
    if isinstance(v, str):
        return json.loads(v)
    return v


# ======================
# Payload
# ======================


class AuthorizationResponseData(BaseModel):
    """
    Plaintext authorization response parameters.

    Attributes:
        state: State parameter echoed from the request
        vp_token: Verifiable presentation(s)
        id_token: ID token, for id_token flows
        presentation_submission: Presentation submission descriptor (opaque)
        error: Error code, when the wallet refused or failed
        error_description: Human-readable error description
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    state: Optional[str] = None
    vp_token: Optional[str] = None
    id_token: Optional[str] = None
    presentation_submission: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_description: Optional[str] = None

    @field_validator("presentation_submission", mode="before")
    @classmethod
    def decode_presentation_submission(cls, v: Any) -> Any:
        return _decode_json_string(v)


# ======================
# Wire schemas
# ======================


class DirectPostResponseSchema(AuthorizationResponseData):
    """direct_post payload: state and presentation_submission are mandatory"""

    state: str = Field(..., description="State parameter")
    presentation_submission: Dict[str, Any] = Field(..., description="Presentation submission descriptor")


class DirectPostSchema(BaseModel):
    """Envelope of a direct_post response"""

    response: DirectPostResponseSchema


class DirectPostJwtSchema(BaseModel):
    """Envelope of a direct_post.jwt response"""

    model_config = ConfigDict(strict=True)

    state: str = Field(..., description="State parameter")
    response: str = Field(..., description="JARM JWT")


# ======================
# Variants
# ======================


@dataclass(frozen=True)
class DirectPost:
    """
    Response delivered as plaintext form fields.

    Attributes:
        response: Authorization response parameters
    """

    kind: ClassVar[Literal["DirectPost"]] = "DirectPost"
    response: AuthorizationResponseData


@dataclass(frozen=True)
class DirectPostJwt:
    """
    Response delivered as a JARM JWT.

    Attributes:
        state: State parameter echoed from the request
        jarm: Signed and/or encrypted JWT carrying the response parameters
    """

    kind: ClassVar[Literal["DirectPostJwt"]] = "DirectPostJwt"
    state: str
    jarm: str

    def to_json(self) -> Dict[str, str]:
        return {"state": self.state, "response": self.jarm}

    @staticmethod
    def from_json(json_data: Mapping[str, Any]) -> "DirectPostJwt":
        parsed = DirectPostJwtSchema.model_validate(json_data)
        return DirectPostJwt(state=parsed.state, jarm=parsed.response)


AuthorizationResponse = DirectPost | DirectPostJwt


# ======================
# Factory Functions
# ======================


def parse_authorization_response(payload: Mapping[str, Any]) -> AuthorizationResponse:
    """
    Normalize an inbound wallet response payload into its variant.

    A string ``response`` member marks a direct_post.jwt response; anything
    else is treated as direct_post form fields.

    Args:
        payload: Decoded form fields or JSON body

    Returns:
        DirectPostJwt or DirectPost

    Raises:
        pydantic.ValidationError: If the payload does not match the schema of its shape
    """
    if isinstance(payload.get("response"), str):
        return DirectPostJwt.from_json(payload)

    parsed = DirectPostSchema.model_validate({"response": dict(payload)})
    data = AuthorizationResponseData.model_validate(parsed.response.model_dump())
    return DirectPost(response=data)
