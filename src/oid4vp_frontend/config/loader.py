"""Configuration loader for the OID4VP frontend"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from oid4vp_frontend.domain import (
    Encrypted,
    JarMode,
    JarmOption,
    PresentationDefinitionMode,
    PresentationType,
    ResponseMode,
    Signed,
    SignedAndEncrypted,
)
from oid4vp_frontend.port.output import LogLevel

logger = logging.getLogger(__name__)

ENV_PREFIX = "OID4VP_"


class FrontendConfig(BaseModel):
    """
    Settings shared by every request the frontend serves.

    URLs are kept as plain strings; the generators validate them when the
    redirect URIs are built.
    """

    model_config = ConfigDict(frozen=True)

    api_base_url: str
    init_transaction_api_path: str = "/ui/presentations"
    get_wallet_response_api_path: str = "/ui/presentations"
    public_url: str
    wallet_url: str = "eudi-openid4vp://"
    wallet_response_redirect_path: str = "/result"
    wallet_response_redirect_query_template: str = "{RESPONSE_CODE}"

    token_type: PresentationType = PresentationType.VP_TOKEN
    response_mode: Optional[ResponseMode] = None
    jar_mode: Optional[JarMode] = None
    presentation_definition_mode: Optional[PresentationDefinitionMode] = None

    # JARM: a JWE alg/enc pair, a JWS alg, or both
    jarm_encryption_algorithm: Optional[str] = "ECDH-ES"
    jarm_encryption_method: Optional[str] = "A128GCM"
    jarm_signing_algorithm: Optional[str] = None
    wallet_jwks: Optional[Dict[str, Any]] = None

    http_timeout_ms: int = Field(default=30000, gt=0)
    session_max_age_seconds: Optional[float] = Field(default=600, gt=0)
    session_cookie_name: str = "oid4vp_session"
    log_level: LogLevel = LogLevel.INFO

    def jarm_option(self) -> Optional[JarmOption]:
        """Build the JARM option, or None when neither half is configured"""
        encrypted = None
        if self.jarm_encryption_algorithm and self.jarm_encryption_method:
            encrypted = Encrypted(
                algorithm=self.jarm_encryption_algorithm,
                enc_method=self.jarm_encryption_method,
            )
        signed = Signed(algorithm=self.jarm_signing_algorithm) if self.jarm_signing_algorithm else None

        if signed and encrypted:
            return SignedAndEncrypted(signed=signed, encrypted=encrypted)
        return signed or encrypted


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    return value if value else None


def load_config_from_env() -> FrontendConfig | None:
    """
    Load frontend configuration from environment variables.

    Environment variables:
    - OID4VP_API_BASE_URL: Verifier backend base URL (required)
    - OID4VP_PUBLIC_URL: Public URL of this frontend (required)
    - OID4VP_WALLET_URL: Wallet deep link or URL
    - OID4VP_INIT_TRANSACTION_API_PATH, OID4VP_GET_WALLET_RESPONSE_API_PATH
    - OID4VP_WALLET_RESPONSE_REDIRECT_PATH, OID4VP_WALLET_RESPONSE_REDIRECT_QUERY_TEMPLATE
    - OID4VP_TOKEN_TYPE, OID4VP_RESPONSE_MODE, OID4VP_JAR_MODE, OID4VP_PRESENTATION_DEFINITION_MODE
    - OID4VP_JARM_ENCRYPTION_ALGORITHM, OID4VP_JARM_ENCRYPTION_METHOD, OID4VP_JARM_SIGNING_ALGORITHM
    - OID4VP_WALLET_JWKS: Path to the wallet's JWKS file (signed JARM only)
    - OID4VP_HTTP_TIMEOUT_MS, OID4VP_SESSION_MAX_AGE_SECONDS, OID4VP_LOG_LEVEL

    Returns:
        FrontendConfig if the required variables are set, None otherwise

    Raises:
        FileNotFoundError: If OID4VP_WALLET_JWKS points to a missing file
        pydantic.ValidationError: If a variable has an invalid value
    """
    api_base_url = _env("API_BASE_URL")
    public_url = _env("PUBLIC_URL")
    if not api_base_url or not public_url:
        return None

    values: Dict[str, Any] = {"api_base_url": api_base_url, "public_url": public_url}
    for field_name in (
        "wallet_url",
        "init_transaction_api_path",
        "get_wallet_response_api_path",
        "wallet_response_redirect_path",
        "wallet_response_redirect_query_template",
        "token_type",
        "response_mode",
        "jar_mode",
        "presentation_definition_mode",
        "jarm_encryption_algorithm",
        "jarm_encryption_method",
        "jarm_signing_algorithm",
        "http_timeout_ms",
        "session_max_age_seconds",
        "session_cookie_name",
        "log_level",
    ):
        value = _env(field_name.upper())
        if value is not None:
            values[field_name] = value

    jwks_path = _env("WALLET_JWKS")
    if jwks_path:
        jwks_file = Path(jwks_path)
        if not jwks_file.exists():
            raise FileNotFoundError(f"Wallet JWKS not found: {jwks_path}")
        with open(jwks_file, "r") as f:
            values["wallet_jwks"] = json.load(f)

    return FrontendConfig.model_validate(values)


def create_test_config() -> FrontendConfig:
    """
    Create a configuration pointing at a local backend.

    Useful for development and tests when no environment is set up.
    """
    return FrontendConfig(
        api_base_url="http://localhost:8080",
        public_url="http://localhost:8000",
        wallet_url="eudi-openid4vp://",
        log_level=LogLevel.DEBUG,
    )


def load_or_create_config() -> FrontendConfig:
    """
    Load configuration from environment or create test config.

    Returns:
        FrontendConfig
    """
    config = load_config_from_env()
    if config is None:
        logger.warning("No environment configuration found, using test config")
        config = create_test_config()
    else:
        logger.info("Loaded configuration from environment")

    return config
