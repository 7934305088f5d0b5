"""API models - Response DTOs"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class InitTransactionResponseModel(BaseModel):
    """Response from transaction initiation"""

    wallet_redirect_uri: str = Field(..., description="URI handing the user over to the wallet")
    is_mobile: bool = Field(..., description="Same-device flow (true) or cross-device QR flow (false)")


class WalletResponseModel(BaseModel):
    """Verified wallet response: the mDoc verifier output plus the vp_token"""

    model_config = ConfigDict(extra="allow")

    vp_token: str = Field(..., description="Verified VP token")


class ErrorResponseModel(BaseModel):
    """Standard error response"""

    error: str = Field(..., description="Error code")
    error_description: str = Field(..., description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


__all__ = ["InitTransactionResponseModel", "WalletResponseModel", "ErrorResponseModel"]
