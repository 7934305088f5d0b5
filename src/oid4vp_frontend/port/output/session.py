"""Session port - Per-browser storage of transaction secrets"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Final, List, Mapping, Optional

from oid4vp_frontend.domain import EphemeralECDHPrivateJwk, Nonce, PresentationId

SESSION_SCHEMA: Final[Mapping[str, type]] = {
    "presentation_id": PresentationId,
    "nonce": Nonce,
    "ephemeral_ecdh_private_jwk": EphemeralECDHPrivateJwk,
}
"""Fields a session may hold, with the type each value must have"""


def check_session_key(key: str) -> None:
    if key not in SESSION_SCHEMA:
        raise KeyError(f"Unknown session key: {key}")


def check_session_value(key: str, value: Any) -> None:
    check_session_key(key)
    expected = SESSION_SCHEMA[key]
    if not isinstance(value, expected):
        raise TypeError(f"Session key {key} expects {expected.__name__}, got {type(value).__name__}")


class Session(ABC):
    """
    Typed key-value storage scoped to one browser session.

    Keys are restricted to ``SESSION_SCHEMA``. Unknown keys raise ``KeyError``
    and wrongly typed values raise ``TypeError``.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value or None"""
        pass

    @abstractmethod
    async def get_batch(self, *keys: str) -> Dict[str, Any]:
        """Return the stored values of ``keys``; absent keys are omitted"""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    async def set_batch(self, batch: Mapping[str, Any]) -> None:
        """Store all pairs; nothing is written if any pair is invalid"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> Optional[Any]:
        """Remove ``key`` and return its previous value"""
        pass

    @abstractmethod
    async def delete_batch(self, *keys: str) -> Dict[str, Optional[Any]]:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass

    @abstractmethod
    async def has(self, key: str) -> bool:
        pass

    @abstractmethod
    async def keys(self) -> List[str]:
        pass

    @abstractmethod
    async def size(self) -> int:
        pass
