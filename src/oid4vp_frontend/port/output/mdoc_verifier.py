"""mDoc verifier port - Credential verification delegated to an external library"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class MdocVerifier(ABC):
    """Verifies an ISO 18013-5 device response carried in a vp_token"""

    @abstractmethod
    async def verify(self, vp_token: str) -> Mapping[str, Any]:
        """
        Verify a vp_token.

        Args:
            vp_token: Base64url encoded device response

        Returns:
            Verification result, passed through to the caller unchanged

        Raises:
            Exception: Whatever the underlying verifier raises
        """
        pass
