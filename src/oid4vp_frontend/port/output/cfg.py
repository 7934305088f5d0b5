"""Configuration generator ports - nonce and redirect URIs"""

from enum import Enum
from typing import Callable, Final, Mapping, Optional

from oid4vp_frontend.domain import Nonce


class UrlGenerationErrorType(str, Enum):
    """Why a URL could not be generated"""

    INVALID_BASE_URL: Final[str] = "INVALID_BASE_URL"
    INVALID_PATH: Final[str] = "INVALID_PATH"
    MISSING_PLACEHOLDER: Final[str] = "MISSING_PLACEHOLDER"
    MISSING_REQUEST_PARAMETER: Final[str] = "MISSING_REQUEST_PARAMETER"
    MALFORMED_URL: Final[str] = "MALFORMED_URL"

    def __str__(self) -> str:
        return self.value


class UrlGenerationError(ValueError):
    """
    URL generation failed.

    Attributes:
        error_type: Failure classification
        details: Human-readable details
        original_url: The URL being worked on, when there was one
    """

    def __init__(self, error_type: UrlGenerationErrorType, details: str, original_url: Optional[str] = None):
        super().__init__(f"URL Generation Error ({error_type.value}): {details}")
        self.error_type = error_type
        self.details = details
        self.original_url = original_url


class MissingRequestParameterError(UrlGenerationError):
    """Neither ``request`` nor ``request_uri`` was supplied"""

    def __init__(self, details: str = "request or request_uri is required", original_url: Optional[str] = None):
        super().__init__(UrlGenerationErrorType.MISSING_REQUEST_PARAMETER, details, original_url)


class MalformedBaseUriError(UrlGenerationError):
    """The base URI is not a syntactically valid absolute URI"""

    def __init__(self, details: str, original_url: Optional[str] = None):
        super().__init__(UrlGenerationErrorType.MALFORMED_URL, details, original_url)


GenerateNonce = Callable[[], Nonce]
"""Produces a fresh nonce; randomness failures propagate unmodified"""

WalletRedirectUriQuery = Mapping[str, Optional[str]]
"""``client_id`` plus ``request`` and/or ``request_uri``, optionally more keys"""

GenerateWalletRedirectUri = Callable[[str, WalletRedirectUriQuery], str]
"""(wallet_url, query) -> URI that hands the user over to the wallet"""

GenerateWalletResponseRedirectUriTemplate = Callable[[str, str, str], str]
"""(base_url, path, placeholder) -> URI the wallet redirects back to"""
