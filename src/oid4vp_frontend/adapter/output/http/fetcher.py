"""Fetcher implementation using httpx"""

import asyncio
import json
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Awaitable, Dict, Final, Mapping, Optional

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from oid4vp_frontend.port.output import (
    Fetcher,
    FetcherError,
    FetcherErrorType,
    FormBody,
    HttpRequestOptions,
    HttpResponse,
    HttpResponseMetadata,
    Logger,
    MultipartBody,
    NullLogger,
    RequestBody,
)

DEFAULT_TIMEOUT_MS: Final[int] = 30000
DEFAULT_HEADERS: Final[Mapping[str, str]] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

_SERVICE: Final[str] = "DefaultFetcher"


@dataclass(frozen=True)
class FetcherConfig:
    """
    Fetcher configuration.

    Attributes:
        timeout_ms: Default per-request timeout in milliseconds
        default_headers: Headers sent with every request unless overridden
        transport: httpx transport; tests plug in ``httpx.MockTransport``
    """

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    default_headers: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    transport: Optional[httpx.AsyncBaseTransport] = None


@lru_cache(maxsize=64)
def _type_adapter(schema: Any) -> TypeAdapter[Any]:
    return TypeAdapter(schema)


def _join_url(base_url: str, path: str) -> str:
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class DefaultFetcher(Fetcher):
    """
    Typed JSON transport over one pooled ``httpx.AsyncClient``.

    Redirects are followed; ``metadata.url`` is the final URL.
    Each call is raced against its timeout and the caller's cancellation
    event; whichever fires first aborts the request. A response that has
    already arrived is kept even if the event is set afterwards.
    """

    def __init__(self, config: Optional[FetcherConfig] = None, logger: Optional[Logger] = None):
        self.config = config or FetcherConfig()
        self.logger = logger or NullLogger()
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(transport=self.config.transport, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        """Close the pooled connections; a later call opens a new client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(
        self,
        base_url: str,
        path: str,
        query: Optional[Mapping[str, str]],
        schema: Any,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse[Any]:
        options = options or HttpRequestOptions()
        params = {k: v for k, v in (query or {}).items() if v is not None}
        return await self._request(
            "GET",
            _join_url(base_url, path),
            schema,
            options,
            self._merge_headers(options),
            params=params,
        )

    async def post(
        self,
        base_url: str,
        path: str,
        body: RequestBody,
        schema: Any,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse[Any]:
        options = options or HttpRequestOptions()
        headers = self._merge_headers(options)
        payload = self._encode_body(body, headers, options)
        return await self._request("POST", _join_url(base_url, path), schema, options, headers, **payload)

    # ======================
    # Request
    # ======================

    def _merge_headers(self, options: HttpRequestOptions) -> httpx.Headers:
        headers = httpx.Headers(dict(self.config.default_headers))
        headers.update(options.headers)
        return headers

    @staticmethod
    def _encode_body(body: RequestBody, headers: httpx.Headers, options: HttpRequestOptions) -> Dict[str, Any]:
        caller_set_content_type = any(k.lower() == "content-type" for k in options.headers)

        if isinstance(body, (str, bytes)):
            return {"content": body}
        if isinstance(body, bytearray):
            return {"content": bytes(body)}
        if isinstance(body, (FormBody, MultipartBody)):
            # httpx writes the form content type (and multipart boundary) itself
            if not caller_set_content_type and "content-type" in headers:
                del headers["content-type"]
            if isinstance(body, FormBody):
                return {"data": dict(body.fields)}
            return {"data": dict(body.fields), "files": dict(body.files)}

        if isinstance(body, BaseModel):
            content = body.model_dump_json()
        else:
            content = json.dumps(body)
        if "content-type" not in headers:
            headers["Content-Type"] = "application/json"
        return {"content": content}

    async def _request(
        self,
        method: str,
        url: str,
        schema: Any,
        options: HttpRequestOptions,
        headers: httpx.Headers,
        **kwargs: Any,
    ) -> HttpResponse[Any]:
        timeout_ms = options.timeout_ms if options.timeout_ms is not None else self.config.timeout_ms

        if options.enable_logging:
            self.logger.debug(_SERVICE, f"{method} {url}", {"context": {"timeout_ms": timeout_ms}})

        client = self._get_client()
        try:
            response = await self._race(
                client.request(method, url, headers=headers, timeout=httpx.Timeout(timeout_ms / 1000), **kwargs),
                url,
                timeout_ms,
                options.signal,
            )
        except FetcherError:
            raise
        except httpx.TimeoutException as e:
            raise FetcherError(
                FetcherErrorType.TIMEOUT_ERROR,
                f"Request timeout after {timeout_ms} ms",
                url=url,
                original_error=e,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetcherError(
                FetcherErrorType.NETWORK_ERROR,
                "Network request failed",
                url=url,
                original_error=e,
            ) from e

        result = self._handle_response(response, url, schema)

        if options.enable_logging:
            self.logger.debug(
                _SERVICE,
                f"{method} {url} -> {result.metadata.status}",
                {"context": {"status": result.metadata.status}},
            )
        return result

    @staticmethod
    async def _race(
        request: Awaitable[httpx.Response],
        url: str,
        timeout_ms: int,
        signal: Optional[asyncio.Event],
    ) -> httpx.Response:
        request_task = asyncio.ensure_future(request)
        if signal is not None and signal.is_set():
            request_task.cancel()
            await asyncio.gather(request_task, return_exceptions=True)
            raise FetcherError(FetcherErrorType.TIMEOUT_ERROR, "Request aborted", url=url)

        waiters = {request_task}
        signal_task = None
        if signal is not None:
            signal_task = asyncio.ensure_future(signal.wait())
            waiters.add(signal_task)

        try:
            done, pending = await asyncio.wait(
                waiters, timeout=timeout_ms / 1000, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            leftovers = [task for task in waiters if not task.done()]
            for task in leftovers:
                task.cancel()
            await asyncio.gather(*leftovers, return_exceptions=True)

        if request_task in done:
            return request_task.result()
        if signal_task is not None and signal_task in done:
            raise FetcherError(FetcherErrorType.TIMEOUT_ERROR, "Request aborted", url=url)
        raise FetcherError(FetcherErrorType.TIMEOUT_ERROR, f"Request timeout after {timeout_ms} ms", url=url)

    # ======================
    # Response
    # ======================

    @staticmethod
    def _handle_response(response: httpx.Response, url: str, schema: Any) -> HttpResponse[Any]:
        metadata = HttpResponseMetadata(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
            url=str(response.url),
            ok=response.is_success,
        )
        error_fields = {
            "url": url,
            "status": metadata.status,
            "status_text": metadata.status_text,
            "headers": metadata.headers,
        }
        body = response.text

        if not metadata.ok:
            raise FetcherError(
                FetcherErrorType.HTTP_ERROR,
                f"HTTP {metadata.status}: {metadata.status_text}",
                response_body=body,
                **error_fields,
            )

        if not body.strip():
            data = None
        else:
            try:
                data = json.loads(body)
            except ValueError as e:
                raise FetcherError(
                    FetcherErrorType.VALIDATION_ERROR,
                    "Failed to parse response as JSON",
                    response_body=body,
                    original_error=e,
                    **error_fields,
                ) from e

        try:
            validated = _type_adapter(schema).validate_python(data)
        except ValidationError as e:
            raise FetcherError(
                FetcherErrorType.VALIDATION_ERROR,
                "Response validation failed",
                response_body=body,
                original_error=e,
                **error_fields,
            ) from e

        return HttpResponse(data=validated, metadata=metadata)


def create_default_fetcher(config: Optional[FetcherConfig] = None, logger: Optional[Logger] = None) -> DefaultFetcher:
    """Create a fetcher with the default timeout and JSON headers"""
    return DefaultFetcher(config=config, logger=logger)
