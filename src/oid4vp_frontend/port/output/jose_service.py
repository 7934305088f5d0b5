"""JOSE service port - Ephemeral keys and JARM response verification"""

from abc import ABC, abstractmethod

from returns.result import Result

from oid4vp_frontend.domain import AuthorizationResponseData, EphemeralECDHPrivateJwk, JarmOption


class JoseError(Exception):
    """Base exception for JOSE operations"""

    pass


class KeyGenerationError(JoseError):
    """Error while generating an ephemeral key pair"""

    pass


class JarmVerificationError(JoseError):
    """JARM response could not be decrypted, verified or decoded"""

    pass


class JoseService(ABC):
    """
    Service for the JOSE operations of the frontend.

    Cryptographic primitives are delegated to a JOSE library; this port only
    exposes what the transaction flow needs.
    """

    @abstractmethod
    async def generate_ephemeral_ecdh_private_jwk(
        self, curve: str = "P-256"
    ) -> Result[EphemeralECDHPrivateJwk, KeyGenerationError]:
        """
        Generate an ephemeral EC key for ECDH-ES response encryption.

        Args:
            curve: EC curve name (P-256, P-384, P-521)

        Returns:
            Success(private JWK) or Failure(KeyGenerationError)
        """
        pass

    @abstractmethod
    async def verify_jarm_jwt(
        self,
        jarm_option: JarmOption,
        private_jwk: EphemeralECDHPrivateJwk,
        jarm: str,
    ) -> Result[AuthorizationResponseData, JarmVerificationError]:
        """
        Decrypt and/or verify a JARM response.

        Args:
            jarm_option: Expected protection of the response
            private_jwk: Ephemeral key the wallet encrypted to
            jarm: Compact JWE or JWS

        Returns:
            Success(response parameters) or Failure(JarmVerificationError)
        """
        pass
