"""JOSE service implementation using joserfc"""

import json
from typing import Any, Dict, Optional

from joserfc import jwe, jwt
from joserfc.jwk import ECKey, KeySet, OKPKey, RSAKey
from pydantic import ValidationError
from returns.result import Failure, Result, Success

from oid4vp_frontend.domain import (
    AuthorizationResponseData,
    EphemeralECDHPrivateJwk,
    Encrypted,
    JarmOption,
    Signed,
    SignedAndEncrypted,
)
from oid4vp_frontend.port.output import (
    JarmVerificationError,
    JoseService,
    KeyGenerationError,
)


class JoseServiceImpl(JoseService):
    """
    Implementation of JoseService using joserfc library.

    Args:
        wallet_jwks: JWK set of the wallets whose signed responses are accepted.
            Only needed for the Signed and SignedAndEncrypted JARM options.
    """

    def __init__(self, wallet_jwks: Optional[Dict[str, Any]] = None):
        self.wallet_jwks = wallet_jwks

    async def generate_ephemeral_ecdh_private_jwk(
        self, curve: str = "P-256"
    ) -> Result[EphemeralECDHPrivateJwk, KeyGenerationError]:
        try:
            key = ECKey.generate_key(crv=curve, private=True)
            private_jwk = key.as_dict(private=True)
            return Success(EphemeralECDHPrivateJwk(json.dumps(private_jwk)))
        except Exception as e:
            return Failure(KeyGenerationError(f"Failed to generate ephemeral key: {e}"))

    async def verify_jarm_jwt(
        self,
        jarm_option: JarmOption,
        private_jwk: EphemeralECDHPrivateJwk,
        jarm: str,
    ) -> Result[AuthorizationResponseData, JarmVerificationError]:
        """
        Decrypt and/or verify a JARM response.

        Encrypted responses are decrypted with the ephemeral key, signed ones
        are verified against ``wallet_jwks``; nested responses are decrypted
        first and the inner JWS verified after.
        """
        try:
            if isinstance(jarm_option, Signed):
                claims = self._verify(jarm, jarm_option.algorithm)
            elif isinstance(jarm_option, Encrypted):
                claims = json.loads(self._decrypt(jarm, private_jwk, jarm_option))
            elif isinstance(jarm_option, SignedAndEncrypted):
                inner = self._decrypt(jarm, private_jwk, jarm_option.encrypted)
                claims = self._verify(inner.decode("utf-8"), jarm_option.signed.algorithm)
            else:
                return Failure(JarmVerificationError(f"Unsupported JARM option: {jarm_option!r}"))
        except JarmVerificationError as e:
            return Failure(e)
        except Exception as e:
            return Failure(JarmVerificationError(f"Failed to process JARM response: {e}"))

        try:
            return Success(AuthorizationResponseData.model_validate(claims))
        except ValidationError as e:
            return Failure(JarmVerificationError(f"JARM claims are not an authorization response: {e}"))

    def _decrypt(self, value: str, private_jwk: EphemeralECDHPrivateJwk, option: Encrypted) -> bytes:
        key = ECKey.import_key(private_jwk.as_dict())
        decrypted = jwe.decrypt_compact(value, key, algorithms=[option.algorithm, option.enc_method])
        if decrypted.plaintext is None:
            raise JarmVerificationError("Encrypted JARM response has no payload")
        return decrypted.plaintext

    def _verify(self, value: str, algorithm: str) -> Dict[str, Any]:
        if not self.wallet_jwks or not self.wallet_jwks.get("keys"):
            raise JarmVerificationError("No wallet keys configured to verify signed JARM responses")
        token = jwt.decode(value, self._verification_key(), algorithms=[algorithm])
        return token.claims

    def _verification_key(self):
        keys = self.wallet_jwks["keys"]
        if len(keys) == 1:
            # a lone key is used even when the JWS header carries no kid
            return self._load_key(keys[0])
        return KeySet.import_key_set(self.wallet_jwks)

    def _load_key(self, jwk_dict: Dict[str, Any]):
        kty = jwk_dict.get("kty")

        if kty == "EC":
            return ECKey.import_key(jwk_dict)
        elif kty == "RSA":
            return RSAKey.import_key(jwk_dict)
        elif kty == "OKP":
            return OKPKey.import_key(jwk_dict)
        else:
            raise JarmVerificationError(f"Unsupported key type: {kty}")
