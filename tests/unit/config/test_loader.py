"""Tests for the configuration loader"""

import json
import os

import pytest
from pydantic import ValidationError

from oid4vp_frontend.config import (
    FrontendConfig,
    create_test_config,
    load_config_from_env,
    load_or_create_config,
)
from oid4vp_frontend.domain import Encrypted, JarMode, ResponseMode, Signed, SignedAndEncrypted
from oid4vp_frontend.port.output import LogLevel


@pytest.fixture
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("OID4VP_"):
            monkeypatch.delenv(name)
    return monkeypatch


class TestLoadConfigFromEnv:
    def test_returns_none_without_required_variables(self, clean_env):
        assert load_config_from_env() is None
        clean_env.setenv("OID4VP_API_BASE_URL", "http://backend.test")
        assert load_config_from_env() is None

    def test_loads_variables(self, clean_env):
        clean_env.setenv("OID4VP_API_BASE_URL", "http://backend.test")
        clean_env.setenv("OID4VP_PUBLIC_URL", "https://v.example")
        clean_env.setenv("OID4VP_WALLET_URL", "haip://")
        clean_env.setenv("OID4VP_RESPONSE_MODE", "direct_post.jwt")
        clean_env.setenv("OID4VP_JAR_MODE", "by_reference")
        clean_env.setenv("OID4VP_HTTP_TIMEOUT_MS", "5000")
        clean_env.setenv("OID4VP_LOG_LEVEL", "debug")

        config = load_config_from_env()

        assert config.api_base_url == "http://backend.test"
        assert config.public_url == "https://v.example"
        assert config.wallet_url == "haip://"
        assert config.response_mode is ResponseMode.DIRECT_POST_JWT
        assert config.jar_mode is JarMode.BY_REFERENCE
        assert config.http_timeout_ms == 5000
        assert config.log_level is LogLevel.DEBUG
        assert config.init_transaction_api_path == "/ui/presentations"

    def test_invalid_value(self, clean_env):
        clean_env.setenv("OID4VP_API_BASE_URL", "http://backend.test")
        clean_env.setenv("OID4VP_PUBLIC_URL", "https://v.example")
        clean_env.setenv("OID4VP_RESPONSE_MODE", "fragment")
        with pytest.raises(ValidationError):
            load_config_from_env()

    def test_wallet_jwks_file(self, clean_env, tmp_path):
        jwks = {"keys": [{"kty": "EC", "crv": "P-256", "x": "x", "y": "y"}]}
        path = tmp_path / "wallet.jwks.json"
        path.write_text(json.dumps(jwks))
        clean_env.setenv("OID4VP_API_BASE_URL", "http://backend.test")
        clean_env.setenv("OID4VP_PUBLIC_URL", "https://v.example")
        clean_env.setenv("OID4VP_WALLET_JWKS", str(path))

        assert load_config_from_env().wallet_jwks == jwks

    def test_missing_wallet_jwks_file(self, clean_env, tmp_path):
        clean_env.setenv("OID4VP_API_BASE_URL", "http://backend.test")
        clean_env.setenv("OID4VP_PUBLIC_URL", "https://v.example")
        clean_env.setenv("OID4VP_WALLET_JWKS", str(tmp_path / "missing.json"))
        with pytest.raises(FileNotFoundError):
            load_config_from_env()


class TestJarmOption:
    def test_default_is_encrypted(self):
        assert create_test_config().jarm_option() == Encrypted(algorithm="ECDH-ES", enc_method="A128GCM")

    def test_signed_only(self):
        config = FrontendConfig(
            api_base_url="http://b",
            public_url="https://v",
            jarm_encryption_algorithm=None,
            jarm_signing_algorithm="ES256",
        )
        assert config.jarm_option() == Signed(algorithm="ES256")

    def test_signed_and_encrypted(self):
        config = FrontendConfig(api_base_url="http://b", public_url="https://v", jarm_signing_algorithm="ES256")
        assert isinstance(config.jarm_option(), SignedAndEncrypted)

    def test_none(self):
        config = FrontendConfig(
            api_base_url="http://b", public_url="https://v", jarm_encryption_algorithm=None, jarm_encryption_method=None
        )
        assert config.jarm_option() is None


class TestLoadOrCreateConfig:
    def test_falls_back_to_test_config(self, clean_env):
        assert load_or_create_config() == create_test_config()
