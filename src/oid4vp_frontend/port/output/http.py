"""HTTP port - Interface for typed JSON calls to the verifier backend"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Final, Generic, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")


class FetcherErrorType(str, Enum):
    """Classification of transport failures"""

    NETWORK_ERROR: Final[str] = "NETWORK_ERROR"
    TIMEOUT_ERROR: Final[str] = "TIMEOUT_ERROR"
    HTTP_ERROR: Final[str] = "HTTP_ERROR"
    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"

    def __str__(self) -> str:
        return self.value


class FetcherError(Exception):
    """
    Single error kind raised by the fetcher.

    Attributes:
        error_type: Sub-classification of the failure
        message: Human-readable message
        url: Request URL
        status: HTTP status, when a response was obtained
        status_text: HTTP reason phrase, when a response was obtained
        headers: Response headers, when a response was obtained
        response_body: Raw body text (HTTP_ERROR and VALIDATION_ERROR)
        original_error: Underlying exception, also chained as ``__cause__``
    """

    def __init__(
        self,
        error_type: FetcherErrorType,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        response_body: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.url = url
        self.status = status
        self.status_text = status_text
        self.headers = headers
        self.response_body = response_body
        self.original_error = original_error
        if original_error is not None:
            self.__cause__ = original_error

    def __repr__(self) -> str:
        return f"FetcherError({self.error_type.value}, {self.message!r}, status={self.status})"


@dataclass(frozen=True)
class HttpResponseMetadata:
    """Status line, headers and final URL of a response"""

    status: int
    status_text: str
    headers: Dict[str, str]
    url: str
    ok: bool


@dataclass(frozen=True)
class HttpResponse(Generic[T]):
    """Schema-validated body plus response metadata"""

    data: T
    metadata: HttpResponseMetadata


@dataclass(frozen=True)
class HttpRequestOptions:
    """
    Per-request options.

    Attributes:
        headers: Merged over the fetcher's default headers; caller keys win
        timeout_ms: Overrides the fetcher's default timeout
        signal: External cancellation; setting the event aborts the call
        enable_logging: Log request and response at debug level
    """

    headers: Dict[str, str] = field(default_factory=dict)
    timeout_ms: Optional[int] = None
    signal: Optional[asyncio.Event] = None
    enable_logging: bool = False


# ======================
# Request bodies
# ======================


@dataclass(frozen=True)
class FormBody:
    """application/x-www-form-urlencoded body, sent as is"""

    fields: Mapping[str, str]


@dataclass(frozen=True)
class MultipartBody:
    """multipart/form-data body, sent as is"""

    fields: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, Any] = field(default_factory=dict)


RequestBody = Union[str, bytes, bytearray, FormBody, MultipartBody, BaseModel, Mapping[str, Any], list]


class Fetcher(ABC):
    """
    Typed JSON transport.

    Every call validates the decoded body against ``schema`` (anything a
    pydantic ``TypeAdapter`` accepts). All failures surface as ``FetcherError``.
    """

    @abstractmethod
    async def get(
        self,
        base_url: str,
        path: str,
        query: Optional[Mapping[str, str]],
        schema: Any,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse[Any]:
        """
        Send a GET request.

        Args:
            base_url: Backend base URL
            path: Path appended to base_url
            query: Query parameters (None for none)
            schema: Expected body type
            options: Per-request options

        Returns:
            Validated response

        Raises:
            FetcherError: On any transport, HTTP or validation failure
        """
        pass

    @abstractmethod
    async def post(
        self,
        base_url: str,
        path: str,
        body: RequestBody,
        schema: Any,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse[Any]:
        """
        Send a POST request.

        Structured bodies are sent as JSON; strings, bytes and form bodies pass
        through unmodified.

        Raises:
            FetcherError: On any transport, HTTP or validation failure
        """
        pass

    async def aclose(self) -> None:
        """Release pooled connections. Fetchers without a pool have nothing to close."""


IsMobile = Callable[[str], bool]
"""Decides from a User-Agent header whether the client is a mobile device"""
