"""Fakes for the output ports, shared by the unit and integration tests"""

from typing import Any, Dict, List, Mapping, Optional

from oid4vp_frontend.adapter import InMemorySession
from oid4vp_frontend.port.output import (
    Fetcher,
    HttpRequestOptions,
    HttpResponse,
    HttpResponseMetadata,
    MdocVerifier,
)

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
DESKTOP_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def ok_response(data: Any, url: str = "http://backend.test") -> HttpResponse[Any]:
    return HttpResponse(
        data=data,
        metadata=HttpResponseMetadata(status=200, status_text="OK", headers={}, url=url, ok=True),
    )


class RecordingFetcher(Fetcher):
    """Fetcher returning canned data (or raising) and recording every call"""

    def __init__(self, get_data: Any = None, post_data: Any = None, error: Optional[Exception] = None):
        self.get_data = get_data
        self.post_data = post_data
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def get(
        self,
        base_url: str,
        path: str,
        query: Optional[Mapping[str, str]],
        schema: Any,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse[Any]:
        self.calls.append({"method": "GET", "base_url": base_url, "path": path, "query": dict(query or {})})
        if self.error is not None:
            raise self.error
        return ok_response(self.get_data)

    async def post(
        self,
        base_url: str,
        path: str,
        body: Any,
        schema: Any,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse[Any]:
        self.calls.append({"method": "POST", "base_url": base_url, "path": path, "body": body})
        if self.error is not None:
            raise self.error
        return ok_response(self.post_data)


class FakeMdocVerifier(MdocVerifier):
    """Records the vp_tokens it was given and returns a fixed result"""

    def __init__(self, result: Optional[Mapping[str, Any]] = None, error: Optional[Exception] = None):
        self.result = result if result is not None else {"verified": True}
        self.error = error
        self.tokens: List[str] = []

    async def verify(self, vp_token: str) -> Mapping[str, Any]:
        self.tokens.append(vp_token)
        if self.error is not None:
            raise self.error
        return self.result


class FlakySession(InMemorySession):
    """Session whose n-th ``set`` call fails"""

    def __init__(self, fail_on_call: int, error: Optional[Exception] = None):
        super().__init__()
        self.fail_on_call = fail_on_call
        self.error = error or ConnectionError("session store unavailable")
        self.set_calls = 0

    async def set(self, key: str, value: Any) -> None:
        self.set_calls += 1
        if self.set_calls == self.fail_on_call:
            raise self.error
        await super().set(key, value)
