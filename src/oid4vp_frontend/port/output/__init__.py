"""Output ports - Interfaces for external dependencies"""

from oid4vp_frontend.port.output.cfg import (
    GenerateNonce,
    GenerateWalletRedirectUri,
    GenerateWalletResponseRedirectUriTemplate,
    MalformedBaseUriError,
    MissingRequestParameterError,
    UrlGenerationError,
    UrlGenerationErrorType,
    WalletRedirectUriQuery,
)
from oid4vp_frontend.port.output.http import (
    Fetcher,
    FetcherError,
    FetcherErrorType,
    FormBody,
    HttpRequestOptions,
    HttpResponse,
    HttpResponseMetadata,
    IsMobile,
    MultipartBody,
    RequestBody,
)
from oid4vp_frontend.port.output.jose_service import (
    JarmVerificationError,
    JoseError,
    JoseService,
    KeyGenerationError,
)
from oid4vp_frontend.port.output.logger import (
    LOG_LEVEL_PRIORITY,
    Logger,
    LoggerConfig,
    LogLevel,
    LogType,
    NullLogger,
)
from oid4vp_frontend.port.output.mdoc_verifier import MdocVerifier
from oid4vp_frontend.port.output.presentation_definition import GeneratePresentationDefinition
from oid4vp_frontend.port.output.session import SESSION_SCHEMA, Session

__all__ = [
    # Generators
    "GenerateNonce",
    "GenerateWalletRedirectUri",
    "GenerateWalletResponseRedirectUriTemplate",
    "WalletRedirectUriQuery",
    "UrlGenerationError",
    "UrlGenerationErrorType",
    "MissingRequestParameterError",
    "MalformedBaseUriError",
    # HTTP
    "Fetcher",
    "FetcherError",
    "FetcherErrorType",
    "FormBody",
    "MultipartBody",
    "RequestBody",
    "HttpRequestOptions",
    "HttpResponse",
    "HttpResponseMetadata",
    "IsMobile",
    # JOSE Service
    "JoseService",
    "JoseError",
    "KeyGenerationError",
    "JarmVerificationError",
    # Logger
    "Logger",
    "LoggerConfig",
    "LogLevel",
    "LogType",
    "LOG_LEVEL_PRIORITY",
    "NullLogger",
    # Collaborators
    "MdocVerifier",
    "GeneratePresentationDefinition",
    # Session
    "Session",
    "SESSION_SCHEMA",
]
