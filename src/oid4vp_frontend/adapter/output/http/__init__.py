"""HTTP adapters - backend transport and device detection"""

from oid4vp_frontend.adapter.output.http.fetcher import (
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT_MS,
    DefaultFetcher,
    FetcherConfig,
    create_default_fetcher,
)
from oid4vp_frontend.adapter.output.http.is_mobile import default_is_mobile

__all__ = [
    "DEFAULT_HEADERS",
    "DEFAULT_TIMEOUT_MS",
    "DefaultFetcher",
    "FetcherConfig",
    "create_default_fetcher",
    "default_is_mobile",
]
