"""Default nonce and redirect URI generators"""

import re
import uuid
from typing import Final, List, Tuple
from urllib.parse import parse_qsl, quote, quote_plus, urlencode, urlsplit, urlunsplit

from oid4vp_frontend.domain import Nonce
from oid4vp_frontend.port.output import (
    MalformedBaseUriError,
    MissingRequestParameterError,
    UrlGenerationError,
    UrlGenerationErrorType,
    WalletRedirectUriQuery,
)

_SCHEME: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_PATH_SAFE: Final[str] = "/:@!$&'()*+,;=-._~%"
_HOST_SCHEMES: Final[Tuple[str, ...]] = ("http", "https")

RESPONSE_CODE_PARAM: Final[str] = "response_code"


def default_generate_nonce() -> Nonce:
    """
    Generate a random nonce.

    Returns:
        UUID4-based nonce

    Raises:
        pydantic.ValidationError: If the generated value is rejected by the nonce schema
    """
    return Nonce(str(uuid.uuid4()))


def _check_base_uri(uri: str) -> None:
    """
    Raise MalformedBaseUriError unless ``uri`` is an absolute URI.

    Custom schemes (``openid4vp://``, ``haip://``) may have an empty
    authority; http(s) URIs need a host.
    """
    if not isinstance(uri, str) or not uri:
        raise MalformedBaseUriError("Base URI is empty", uri)
    if any(c.isspace() for c in uri):
        raise MalformedBaseUriError("Base URI contains whitespace", uri)
    try:
        parts = urlsplit(uri)
        parts.port
    except ValueError as e:
        raise MalformedBaseUriError(f"Base URI cannot be parsed: {e}", uri) from e
    if not parts.scheme or not _SCHEME.match(parts.scheme) or not uri.lower().startswith(f"{parts.scheme}:"):
        raise MalformedBaseUriError("Base URI has no valid scheme", uri)
    if parts.scheme in _HOST_SCHEMES and not parts.hostname:
        raise MalformedBaseUriError("Base URI has no host", uri)


def _ordered_query(query: WalletRedirectUriQuery) -> List[Tuple[str, str]]:
    request = query.get("request")
    request_uri = query.get("request_uri")
    if not request and not request_uri:
        raise MissingRequestParameterError()

    client_id = query.get("client_id")
    if client_id is None:
        raise MissingRequestParameterError("client_id is required")

    params: List[Tuple[str, str]] = [("client_id", client_id)]
    # exactly one of the two; a by-value request wins
    if request:
        params.append(("request", request))
    else:
        params.append(("request_uri", request_uri))
    for key, value in query.items():
        if key in ("client_id", "request", "request_uri") or value is None:
            continue
        params.append((key, value))
    return params


def default_generate_wallet_redirect_uri(wallet_url: str, query: WalletRedirectUriQuery) -> str:
    """
    Build the URI that hands the user over to the wallet.

    Any query already on ``wallet_url`` is replaced; scheme, authority, path
    and fragment are kept as given. Keys are emitted as ``client_id``, then
    ``request`` or ``request_uri``, then any other keys in insertion order.
    When both are set only ``request`` is sent.

    Args:
        wallet_url: Wallet authorization endpoint (https or custom scheme)
        query: ``client_id`` and at least one of ``request``/``request_uri``

    Returns:
        Wallet redirect URI

    Raises:
        MissingRequestParameterError: Neither request nor request_uri is set
        MalformedBaseUriError: wallet_url is not an absolute URI

    Example:
        >>> default_generate_wallet_redirect_uri(
        ...     "https://wallet.example.com/auth", {"client_id": "c1", "request": "tok"}
        ... )
        'https://wallet.example.com/auth?client_id=c1&request=tok'
    """
    params = _ordered_query(query)
    _check_base_uri(wallet_url)

    head, sep, fragment = wallet_url.partition("#")
    head = head.split("?", 1)[0]
    uri = f"{head}?{urlencode(params, quote_via=quote_plus)}"
    if sep:
        uri = f"{uri}#{fragment}"
    return uri


def default_generate_wallet_response_redirect_uri_template(base_url: str, path: str, placeholder: str) -> str:
    """
    Build the same-device redirect template handed to the backend.

    The path of ``base_url`` is replaced by ``path`` and ``response_code`` is
    set to ``placeholder``. Braces stay literal so the backend can find and
    substitute the placeholder.

    Example:
        >>> default_generate_wallet_response_redirect_uri_template(
        ...     "https://example.com", "/", "{CODE}"
        ... )
        'https://example.com/?response_code={CODE}'
    """
    try:
        _check_base_uri(base_url)
    except MalformedBaseUriError as e:
        raise UrlGenerationError(UrlGenerationErrorType.INVALID_BASE_URL, e.details, base_url) from e
    if not isinstance(path, str):
        raise UrlGenerationError(UrlGenerationErrorType.INVALID_PATH, "Path must be a string", base_url)
    if not placeholder:
        raise UrlGenerationError(UrlGenerationErrorType.MISSING_PLACEHOLDER, "Placeholder is required", base_url)

    parts = urlsplit(base_url)
    new_path = quote(path if path.startswith("/") else f"/{path}", safe=_PATH_SAFE)

    pairs = parse_qsl(parts.query, keep_blank_values=True)
    query: List[Tuple[str, str]] = []
    replaced = False
    for key, value in pairs:
        if key == RESPONSE_CODE_PARAM:
            if not replaced:
                query.append((key, placeholder))
                replaced = True
            continue
        query.append((key, value))
    if not replaced:
        query.append((RESPONSE_CODE_PARAM, placeholder))

    encoded = urlencode(query, quote_via=quote_plus, safe="{}")
    return urlunsplit((parts.scheme, parts.netloc, new_path, encoded, parts.fragment))

