"""Tests for the joserfc JOSE service"""

import json

import pytest
from joserfc import jwe, jwt
from joserfc.jwk import ECKey
from returns.result import Failure, Success

from oid4vp_frontend.adapter.output.jose import JoseServiceImpl
from oid4vp_frontend.domain import (
    AuthorizationResponseData,
    Encrypted,
    EphemeralECDHPrivateJwk,
    Signed,
    SignedAndEncrypted,
)
from oid4vp_frontend.port.output import JarmVerificationError, KeyGenerationError

CLAIMS = {
    "state": "tx-1234",
    "vp_token": "o2d2ZXJzaW9uYzEuMA",
    "presentation_submission": {"id": "sub-1", "definition_id": "pd", "descriptor_map": []},
}
ENCRYPTED = Encrypted(algorithm="ECDH-ES", enc_method="A128GCM")
SIGNED = Signed(algorithm="ES256")


def encrypt_to(private_jwk: EphemeralECDHPrivateJwk, payload: bytes, enc: str = "A128GCM") -> str:
    public_key = ECKey.import_key(private_jwk.to_public_jwk().as_dict())
    return jwe.encrypt_compact({"alg": "ECDH-ES", "enc": enc}, payload, public_key)


@pytest.fixture
def wallet_key() -> ECKey:
    return ECKey.generate_key("P-256", private=True, auto_kid=True)


@pytest.fixture
def wallet_jwks(wallet_key: ECKey) -> dict:
    return {"keys": [wallet_key.as_dict(private=False)]}


def sign_with(key: ECKey, claims: dict) -> str:
    return jwt.encode({"alg": "ES256", "kid": key.kid}, claims, key)


class TestGenerateEphemeralKey:
    @pytest.mark.asyncio
    async def test_generates_p256_private_jwk(self):
        result = await JoseServiceImpl().generate_ephemeral_ecdh_private_jwk()

        assert isinstance(result, Success)
        jwk = result.unwrap().as_dict()
        assert jwk["kty"] == "EC"
        assert jwk["crv"] == "P-256"
        assert "d" in jwk

    @pytest.mark.asyncio
    async def test_keys_are_fresh(self):
        service = JoseServiceImpl()
        first = (await service.generate_ephemeral_ecdh_private_jwk()).unwrap()
        second = (await service.generate_ephemeral_ecdh_private_jwk()).unwrap()
        assert first.as_dict()["d"] != second.as_dict()["d"]

    @pytest.mark.asyncio
    async def test_unknown_curve_is_a_failure(self):
        result = await JoseServiceImpl().generate_ephemeral_ecdh_private_jwk(curve="P-999")
        assert isinstance(result, Failure)
        assert isinstance(result.failure(), KeyGenerationError)


class TestVerifyEncryptedJarm:
    @pytest.mark.asyncio
    async def test_decrypts_response(self, private_jwk):
        jarm = encrypt_to(private_jwk, json.dumps(CLAIMS).encode())

        result = await JoseServiceImpl().verify_jarm_jwt(ENCRYPTED, private_jwk, jarm)

        assert isinstance(result, Success)
        data = result.unwrap()
        assert isinstance(data, AuthorizationResponseData)
        assert data.state == "tx-1234"
        assert data.vp_token == CLAIMS["vp_token"]
        assert data.presentation_submission == CLAIMS["presentation_submission"]

    @pytest.mark.asyncio
    async def test_wrong_key_is_a_failure(self, private_jwk):
        other = EphemeralECDHPrivateJwk(json.dumps(ECKey.generate_key("P-256", private=True).as_dict(private=True)))
        jarm = encrypt_to(other, json.dumps(CLAIMS).encode())

        result = await JoseServiceImpl().verify_jarm_jwt(ENCRYPTED, private_jwk, jarm)

        assert isinstance(result, Failure)
        assert isinstance(result.failure(), JarmVerificationError)

    @pytest.mark.asyncio
    async def test_unexpected_enc_is_a_failure(self, private_jwk):
        jarm = encrypt_to(private_jwk, json.dumps(CLAIMS).encode(), enc="A256GCM")
        result = await JoseServiceImpl().verify_jarm_jwt(ENCRYPTED, private_jwk, jarm)
        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_garbage_is_a_failure(self, private_jwk):
        result = await JoseServiceImpl().verify_jarm_jwt(ENCRYPTED, private_jwk, "not-a-jwe")
        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_payload_must_be_an_object(self, private_jwk):
        jarm = encrypt_to(private_jwk, b'["not", "an", "object"]')
        result = await JoseServiceImpl().verify_jarm_jwt(ENCRYPTED, private_jwk, jarm)
        assert isinstance(result, Failure)
        assert "not an authorization response" in str(result.failure())


class TestVerifySignedJarm:
    @pytest.mark.asyncio
    async def test_verifies_signature(self, private_jwk, wallet_key, wallet_jwks):
        jarm = sign_with(wallet_key, CLAIMS)

        result = await JoseServiceImpl(wallet_jwks=wallet_jwks).verify_jarm_jwt(SIGNED, private_jwk, jarm)

        assert isinstance(result, Success)
        assert result.unwrap().vp_token == CLAIMS["vp_token"]

    @pytest.mark.asyncio
    async def test_picks_key_by_kid_from_set(self, private_jwk, wallet_key):
        other = ECKey.generate_key("P-256", private=True, auto_kid=True)
        jwks = {"keys": [other.as_dict(private=False), wallet_key.as_dict(private=False)]}

        result = await JoseServiceImpl(wallet_jwks=jwks).verify_jarm_jwt(SIGNED, private_jwk, sign_with(wallet_key, CLAIMS))

        assert isinstance(result, Success)

    @pytest.mark.asyncio
    async def test_foreign_signature_is_a_failure(self, private_jwk, wallet_jwks):
        intruder = ECKey.generate_key("P-256", private=True)
        jarm = jwt.encode({"alg": "ES256"}, CLAIMS, intruder)

        result = await JoseServiceImpl(wallet_jwks=wallet_jwks).verify_jarm_jwt(SIGNED, private_jwk, jarm)

        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_no_wallet_keys_is_a_failure(self, private_jwk, wallet_key):
        result = await JoseServiceImpl().verify_jarm_jwt(SIGNED, private_jwk, sign_with(wallet_key, CLAIMS))
        assert isinstance(result, Failure)
        assert "No wallet keys" in str(result.failure())


class TestVerifySignedAndEncryptedJarm:
    @pytest.mark.asyncio
    async def test_decrypts_then_verifies(self, private_jwk, wallet_key, wallet_jwks):
        inner = sign_with(wallet_key, CLAIMS)
        jarm = encrypt_to(private_jwk, inner.encode())
        option = SignedAndEncrypted(signed=SIGNED, encrypted=ENCRYPTED)

        result = await JoseServiceImpl(wallet_jwks=wallet_jwks).verify_jarm_jwt(option, private_jwk, jarm)

        assert isinstance(result, Success)
        assert result.unwrap().state == "tx-1234"
