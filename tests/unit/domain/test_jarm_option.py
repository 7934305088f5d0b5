"""Tests for JARM options"""

import pytest

from oid4vp_frontend.domain import Encrypted, Signed, SignedAndEncrypted


class TestJarmOption:
    def test_signed(self):
        option = Signed(algorithm="ES256")
        assert option.kind == "Signed"
        assert option.jws_alg() == "ES256"
        assert option.jwe_alg() is None
        assert option.jwe_enc() is None

    def test_encrypted(self):
        option = Encrypted(algorithm="ECDH-ES", enc_method="A128GCM")
        assert option.kind == "Encrypted"
        assert option.jws_alg() is None
        assert option.jwe_alg() == "ECDH-ES"
        assert option.jwe_enc() == "A128GCM"

    def test_signed_and_encrypted_delegates(self):
        option = SignedAndEncrypted(
            signed=Signed(algorithm="ES256"),
            encrypted=Encrypted(algorithm="ECDH-ES+A256KW", enc_method="A256GCM"),
        )
        assert option.kind == "SignedAndEncrypted"
        assert option.jws_alg() == "ES256"
        assert option.jwe_alg() == "ECDH-ES+A256KW"
        assert option.jwe_enc() == "A256GCM"

    def test_immutable(self):
        option = Signed(algorithm="ES256")
        with pytest.raises(Exception):
            option.algorithm = "RS256"
