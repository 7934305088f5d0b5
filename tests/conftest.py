"""Shared fixtures"""

import json
from typing import Any, Dict

import pytest
from joserfc.jwk import ECKey

from oid4vp_frontend.domain import EphemeralECDHPrivateJwk, Nonce


@pytest.fixture
def ec_key() -> ECKey:
    """Fresh P-256 key pair"""
    return ECKey.generate_key("P-256", private=True)


@pytest.fixture
def private_jwk(ec_key: ECKey) -> EphemeralECDHPrivateJwk:
    return EphemeralECDHPrivateJwk(json.dumps(ec_key.as_dict(private=True)))


@pytest.fixture
def nonce() -> Nonce:
    """Sample nonce"""
    return Nonce("nonce_xyz789")


@pytest.fixture
def init_backend_response() -> Dict[str, Any]:
    """Backend answer to an init request, JAR by reference"""
    return {
        "presentation_id": "tx-1234",
        "client_id": "verifier.example.com",
        "request_uri": "https://verifier.example.com/wallet/request.jwt/abcd",
    }
