"""
Basic usage example for the OID4VP frontend

This script demonstrates, against an in-process fake verifier backend:
1. Wiring the adapters and use cases
2. Initializing a presentation transaction from a mobile browser
3. The wallet posting an encrypted (JARM) response to the backend
4. Retrieving and verifying the wallet response
"""

import asyncio
import json
from typing import Any, Dict, Mapping

import httpx
from joserfc import jwe
from joserfc.jwk import ECKey

from oid4vp_frontend.adapter import (
    DefaultFetcher,
    FetcherConfig,
    InMemorySession,
    JoseServiceImpl,
    create_logger,
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
    default_is_mobile,
    mdl_presentation_definition,
)
from oid4vp_frontend.application import GetWalletResponseImpl, InitTransactionImpl
from oid4vp_frontend.config import create_test_config
from oid4vp_frontend.port.input import GetWalletResponseInput, InitTransactionInput
from oid4vp_frontend.port.output import MdocVerifier

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


class FakeBackend:
    """Stands in for the verifier backend: stores the init request and the wallet's post"""

    def __init__(self):
        self.init_request: Dict[str, Any] = {}
        self.wallet_post: Dict[str, Any] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            self.init_request = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "presentation_id": "tx-1234",
                    "client_id": "verifier.example.com",
                    "request_uri": "https://verifier.example.com/wallet/request.jwt/abcd",
                },
            )
        return httpx.Response(200, json=self.wallet_post)


class PrintingMdocVerifier(MdocVerifier):
    """Accepts any vp_token; replace with a real ISO 18013-5 verifier"""

    async def verify(self, vp_token: str) -> Mapping[str, Any]:
        return {"verified": True, "documents": ["org.iso.18013.5.1.mDL"]}


async def main():
    """Run the example"""

    print("=" * 60)
    print("OID4VP Frontend - Basic Usage Example")
    print("=" * 60)

    # 1. Setup
    print("\n1. Wiring adapters...")

    config = create_test_config()
    backend = FakeBackend()
    fetcher = DefaultFetcher(FetcherConfig(transport=httpx.MockTransport(backend.handler)))
    jose_service = JoseServiceImpl()
    logger = create_logger(name="oid4vp_frontend.example")
    session = InMemorySession()

    init_transaction = InitTransactionImpl(
        api_base_url=config.api_base_url,
        api_path=config.init_transaction_api_path,
        public_url=config.public_url,
        wallet_url=config.wallet_url,
        wallet_response_redirect_path=config.wallet_response_redirect_path,
        wallet_response_redirect_query_template=config.wallet_response_redirect_query_template,
        fetcher=fetcher,
        session=session,
        jose_service=jose_service,
        is_mobile=default_is_mobile,
        generate_nonce=default_generate_nonce,
        generate_presentation_definition=mdl_presentation_definition,
        generate_wallet_redirect_uri=default_generate_wallet_redirect_uri,
        generate_wallet_response_redirect_uri_template=default_generate_wallet_response_redirect_uri_template,
        logger=logger,
    )
    print("✓ Frontend configured")

    # 2. Init
    print("\n2. Initiating presentation transaction...")

    init_result = await init_transaction.execute(InitTransactionInput(headers={"User-Agent": IPHONE_UA}))

    print("✓ Transaction initiated")
    print(f"  - Mobile: {init_result.is_mobile}")
    print(f"  - Wallet redirect URI: {init_result.wallet_redirect_uri}")
    print(f"  - Redirect template: {backend.init_request.get('wallet_response_redirect_uri_template')}")

    # 3. Wallet answers (simulated): encrypt to the ephemeral public key sent at init
    print("\n3. Wallet posting encrypted response...")

    public_key = ECKey.import_key(json.loads(backend.init_request["ephemeral_ecdh_public_jwk"]))
    claims = {
        "state": "tx-1234",
        "vp_token": "o2d2ZXJzaW9uYzEuMGlkb2N1bWVudHOB",
        "presentation_submission": {"id": "sub-1", "definition_id": "test-presentation-id", "descriptor_map": []},
    }
    jarm = jwe.encrypt_compact(
        {"alg": "ECDH-ES", "enc": "A128GCM"},
        json.dumps(claims).encode("utf-8"),
        public_key,
    )
    backend.wallet_post = {"state": "tx-1234", "response": jarm}
    print(f"✓ JARM length: {len(jarm)} bytes")

    # 4. Result
    print("\n4. Retrieving wallet response...")

    get_wallet_response = GetWalletResponseImpl(
        api_base_url=config.api_base_url,
        api_path=config.get_wallet_response_api_path,
        fetcher=fetcher,
        session=session,
        mdoc_verifier=PrintingMdocVerifier(),
        jose_service=jose_service,
        jarm_option=config.jarm_option(),
        logger=logger,
    )
    result = await get_wallet_response.execute(GetWalletResponseInput(response_code="code-5678"))

    print("✓ Wallet response verified")
    print(f"  - Result: {result.to_json()}")
    await fetcher.aclose()

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
