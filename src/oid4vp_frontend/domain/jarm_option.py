"""JARM options

How the wallet protects a ``direct_post.jwt`` authorization response:
signed (JWS), encrypted (JWE), or signed and then encrypted.
"""

from dataclasses import dataclass
from typing import ClassVar, Literal, Optional


@dataclass(frozen=True)
class Signed:
    """
    Response is a JWS signed by the wallet.

    Attributes:
        algorithm: JWS algorithm (ES256, RS256, ...)
    """

    kind: ClassVar[Literal["Signed"]] = "Signed"
    algorithm: str

    def jws_alg(self) -> Optional[str]:
        return self.algorithm

    def jwe_alg(self) -> Optional[str]:
        return None

    def jwe_enc(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class Encrypted:
    """
    Response is a JWE encrypted to the verifier's ephemeral key.

    Attributes:
        algorithm: JWE key management algorithm (ECDH-ES, ECDH-ES+A256KW, ...)
        enc_method: JWE content encryption method (A128GCM, A256GCM, ...)
    """

    kind: ClassVar[Literal["Encrypted"]] = "Encrypted"
    algorithm: str
    enc_method: str

    def jws_alg(self) -> Optional[str]:
        return None

    def jwe_alg(self) -> Optional[str]:
        return self.algorithm

    def jwe_enc(self) -> Optional[str]:
        return self.enc_method


@dataclass(frozen=True)
class SignedAndEncrypted:
    """Response is a JWS nested inside a JWE"""

    kind: ClassVar[Literal["SignedAndEncrypted"]] = "SignedAndEncrypted"
    signed: Signed
    encrypted: Encrypted

    def jws_alg(self) -> Optional[str]:
        return self.signed.jws_alg()

    def jwe_alg(self) -> Optional[str]:
        return self.encrypted.jwe_alg()

    def jwe_enc(self) -> Optional[str]:
        return self.encrypted.jwe_enc()


JarmOption = Signed | Encrypted | SignedAndEncrypted
