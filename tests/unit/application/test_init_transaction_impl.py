"""Tests for InitTransactionImpl"""

from typing import Any, Dict, Optional

import pytest
from returns.result import Failure

from fakes import DESKTOP_UA, IPHONE_UA, FlakySession, RecordingFetcher
from oid4vp_frontend.adapter import (
    InMemorySession,
    JoseServiceImpl,
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
    default_is_mobile,
    mdl_presentation_definition,
)
from oid4vp_frontend.application import (
    InitTransactionImpl,
    generate_request,
    store_transaction_in_session,
    validate_user_agent,
)
from oid4vp_frontend.domain import Nonce, PresentationId, PresentationType, ResponseMode
from oid4vp_frontend.port.input import (
    InitTransactionErrorType,
    InitTransactionInput,
    InitTransactionServiceError,
)
from oid4vp_frontend.port.output import FetcherError, FetcherErrorType, KeyGenerationError, Session

PUBLIC_URL = "https://v.example"
WALLET_URL = "eudi-openid4vp://"


class FailingKeyJoseService(JoseServiceImpl):
    async def generate_ephemeral_ecdh_private_jwk(self, curve: str = "P-256"):
        return Failure(KeyGenerationError("no entropy"))


def make_service(
    fetcher: RecordingFetcher,
    session: Optional[Session] = None,
    **overrides: Any,
) -> InitTransactionImpl:
    params: Dict[str, Any] = dict(
        api_base_url="http://backend.test",
        api_path="/ui/presentations",
        public_url=PUBLIC_URL,
        wallet_url=WALLET_URL,
        wallet_response_redirect_path="/result",
        wallet_response_redirect_query_template="{RESPONSE_CODE}",
        fetcher=fetcher,
        session=session or InMemorySession(),
        jose_service=JoseServiceImpl(),
        is_mobile=default_is_mobile,
        generate_nonce=default_generate_nonce,
        generate_presentation_definition=mdl_presentation_definition,
        generate_wallet_redirect_uri=default_generate_wallet_redirect_uri,
        generate_wallet_response_redirect_uri_template=default_generate_wallet_response_redirect_uri_template,
    )
    params.update(overrides)
    return InitTransactionImpl(**params)


class TestValidateUserAgent:
    def test_header_lookup_is_case_insensitive(self):
        assert validate_user_agent({"User-Agent": "ua"}) == "ua"
        assert validate_user_agent({"user-agent": "ua"}) == "ua"

    @pytest.mark.parametrize("headers", [{}, {"user-agent": ""}, {"accept": "text/html"}])
    def test_missing_user_agent(self, headers):
        with pytest.raises(InitTransactionServiceError) as exc_info:
            validate_user_agent(headers)
        assert exc_info.value.error_type is InitTransactionErrorType.MISSING_USER_AGENT


class TestGenerateRequest:
    def _generate(self, is_mobile: bool, **overrides: Any):
        params: Dict[str, Any] = dict(
            public_url=PUBLIC_URL,
            wallet_response_redirect_path="/result",
            wallet_response_redirect_query_template="{RESPONSE_CODE}",
            is_mobile=is_mobile,
            token_type=PresentationType.VP_TOKEN,
            nonce=Nonce("n-1"),
            ephemeral_ecdh_public_jwk=None,
            generate_presentation_definition=mdl_presentation_definition,
            generate_wallet_response_redirect_uri_template=default_generate_wallet_response_redirect_uri_template,
        )
        params.update(overrides)
        return generate_request(**params)

    def test_mobile_gets_redirect_template(self, private_jwk):
        request = self._generate(True, ephemeral_ecdh_public_jwk=private_jwk.to_public_jwk())
        assert request.wallet_response_redirect_uri_template == "https://v.example/result?response_code={RESPONSE_CODE}"

    def test_desktop_gets_no_redirect_template(self, private_jwk):
        request = self._generate(False, ephemeral_ecdh_public_jwk=private_jwk.to_public_jwk())
        assert request.wallet_response_redirect_uri_template is None
        assert "wallet_response_redirect_uri_template" not in request.to_json()

    def test_modes_are_passed_through(self, private_jwk):
        request = self._generate(
            False,
            ephemeral_ecdh_public_jwk=private_jwk.to_public_jwk(),
            response_mode=ResponseMode.DIRECT_POST_JWT,
        )
        assert request.to_json()["response_mode"] == "direct_post.jwt"
        assert request.to_json()["nonce"] == "n-1"

    @pytest.mark.parametrize(
        "missing",
        ["public_url", "wallet_response_redirect_path", "wallet_response_redirect_query_template"],
    )
    def test_missing_url_parameter(self, private_jwk, missing):
        with pytest.raises(InitTransactionServiceError) as exc_info:
            self._generate(True, ephemeral_ecdh_public_jwk=private_jwk.to_public_jwk(), **{missing: ""})
        assert exc_info.value.error_type is InitTransactionErrorType.INVALID_RESPONSE
        assert exc_info.value.details == "Required URL parameters are missing"

    def test_template_failure(self, private_jwk):
        with pytest.raises(InitTransactionServiceError) as exc_info:
            self._generate(True, ephemeral_ecdh_public_jwk=private_jwk.to_public_jwk(), public_url="not a url")
        assert exc_info.value.error_type is InitTransactionErrorType.INVALID_RESPONSE

    def test_invalid_public_url_is_ignored_for_desktop(self, private_jwk):
        request = self._generate(False, ephemeral_ecdh_public_jwk=private_jwk.to_public_jwk(), public_url="not a url")
        assert request.wallet_response_redirect_uri_template is None


class TestStoreTransactionInSession:
    @pytest.mark.asyncio
    async def test_stores_all_values(self, private_jwk):
        session = InMemorySession()
        await store_transaction_in_session(session, PresentationId("p"), Nonce("n"), private_jwk)
        assert await session.get_batch("presentation_id", "nonce", "ephemeral_ecdh_private_jwk") == {
            "presentation_id": PresentationId("p"),
            "nonce": Nonce("n"),
            "ephemeral_ecdh_private_jwk": private_jwk,
        }

    @pytest.mark.asyncio
    async def test_second_write_failure_keeps_first_write(self, private_jwk):
        session = FlakySession(fail_on_call=2)

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await store_transaction_in_session(session, PresentationId("p"), Nonce("n"), private_jwk)

        error = exc_info.value
        assert error.error_type is InitTransactionErrorType.SESSION_ERROR
        assert error.original_error is session.error
        assert error.__cause__ is session.error
        assert await session.get("presentation_id") == PresentationId("p")
        assert await session.get("nonce") is None


class TestInitTransactionImpl:
    def test_missing_configuration(self):
        with pytest.raises(InitTransactionServiceError) as exc_info:
            make_service(RecordingFetcher(), wallet_url="")
        assert exc_info.value.error_type is InitTransactionErrorType.INVALID_RESPONSE
        assert exc_info.value.details == "Required configuration parameters are missing"

    @pytest.mark.asyncio
    async def test_mobile_flow(self, init_backend_response):
        fetcher = RecordingFetcher(post_data=init_backend_response)
        session = InMemorySession()

        result = await make_service(fetcher, session).execute(InitTransactionInput(headers={"User-Agent": IPHONE_UA}))

        assert result.is_mobile is True
        assert result.wallet_redirect_uri == (
            "eudi-openid4vp://?client_id=verifier.example.com"
            "&request_uri=https%3A%2F%2Fverifier.example.com%2Fwallet%2Frequest.jwt%2Fabcd"
        )
        assert "tx-1234" not in result.wallet_redirect_uri

        [call] = fetcher.calls
        assert call["method"] == "POST"
        assert call["base_url"] == "http://backend.test"
        assert call["path"] == "/ui/presentations"
        body = call["body"]
        assert body["type"] == "vp_token"
        assert body["wallet_response_redirect_uri_template"] == "https://v.example/result?response_code={RESPONSE_CODE}"
        assert body["presentation_definition"]["input_descriptors"][0]["id"] == "org.iso.18013.5.1.mDL"

        stored = await session.get_batch("presentation_id", "nonce", "ephemeral_ecdh_private_jwk")
        assert stored["presentation_id"] == PresentationId("tx-1234")
        assert str(stored["nonce"]) == body["nonce"]
        assert stored["ephemeral_ecdh_private_jwk"].to_public_jwk().to_json() == body["ephemeral_ecdh_public_jwk"]

    @pytest.mark.asyncio
    async def test_desktop_flow_sends_no_redirect_template(self, init_backend_response):
        fetcher = RecordingFetcher(post_data=init_backend_response)

        result = await make_service(fetcher).execute(InitTransactionInput(headers={"user-agent": DESKTOP_UA}))

        assert result.is_mobile is False
        assert "wallet_response_redirect_uri_template" not in fetcher.calls[0]["body"]

    @pytest.mark.asyncio
    async def test_public_key_only_is_sent(self, init_backend_response):
        fetcher = RecordingFetcher(post_data=init_backend_response)
        await make_service(fetcher).execute(InitTransactionInput(headers={"User-Agent": DESKTOP_UA}))
        assert '"d"' not in fetcher.calls[0]["body"]["ephemeral_ecdh_public_jwk"]

    @pytest.mark.asyncio
    async def test_missing_user_agent_makes_no_network_call(self, init_backend_response):
        fetcher = RecordingFetcher(post_data=init_backend_response)
        session = InMemorySession()

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(fetcher, session).execute(InitTransactionInput(headers={}))

        assert exc_info.value.error_type is InitTransactionErrorType.MISSING_USER_AGENT
        assert fetcher.calls == []
        assert await session.size() == 0

    @pytest.mark.asyncio
    async def test_invalid_url_configuration_makes_no_network_call(self, init_backend_response):
        fetcher = RecordingFetcher(post_data=init_backend_response)

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(fetcher, wallet_response_redirect_path="").execute(
                InitTransactionInput(headers={"User-Agent": IPHONE_UA})
            )

        assert exc_info.value.error_type is InitTransactionErrorType.INVALID_RESPONSE
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_backend_failure(self):
        cause = FetcherError(FetcherErrorType.HTTP_ERROR, "HTTP 500: Internal Server Error", status=500)
        session = InMemorySession()

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(RecordingFetcher(error=cause), session).execute(
                InitTransactionInput(headers={"User-Agent": IPHONE_UA})
            )

        assert exc_info.value.error_type is InitTransactionErrorType.API_REQUEST_FAILED
        assert exc_info.value.details == "Failed to communicate with InitTransaction API"
        assert exc_info.value.__cause__ is cause
        assert await session.size() == 0

    @pytest.mark.asyncio
    async def test_malformed_backend_answer(self):
        fetcher = RecordingFetcher(post_data={"client_id": "c"})

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(fetcher).execute(InitTransactionInput(headers={"User-Agent": IPHONE_UA}))

        assert exc_info.value.error_type is InitTransactionErrorType.INVALID_RESPONSE
        assert exc_info.value.details == "Failed to parse InitTransaction API response"

    @pytest.mark.asyncio
    async def test_key_generation_failure(self, init_backend_response):
        fetcher = RecordingFetcher(post_data=init_backend_response)

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(fetcher, jose_service=FailingKeyJoseService()).execute(
                InitTransactionInput(headers={"User-Agent": IPHONE_UA})
            )

        assert exc_info.value.error_type is InitTransactionErrorType.INVALID_RESPONSE
        assert isinstance(exc_info.value.original_error, KeyGenerationError)
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_session_failure_on_second_write(self, init_backend_response):
        session = FlakySession(fail_on_call=2)

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(RecordingFetcher(post_data=init_backend_response), session).execute(
                InitTransactionInput(headers={"User-Agent": IPHONE_UA})
            )

        assert exc_info.value.error_type is InitTransactionErrorType.SESSION_ERROR
        assert exc_info.value.original_error is session.error
        assert await session.get("presentation_id") == PresentationId("tx-1234")

    @pytest.mark.asyncio
    async def test_backend_answer_without_jar(self):
        fetcher = RecordingFetcher(post_data={"presentation_id": "tx-1", "client_id": "c"})

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(fetcher).execute(InitTransactionInput(headers={"User-Agent": IPHONE_UA}))

        assert exc_info.value.error_type is InitTransactionErrorType.INVALID_RESPONSE
        assert exc_info.value.details == "Failed to generate wallet redirect URI"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self, init_backend_response):
        def broken_nonce() -> Nonce:
            raise RuntimeError("rng unavailable")

        with pytest.raises(InitTransactionServiceError) as exc_info:
            await make_service(RecordingFetcher(post_data=init_backend_response), generate_nonce=broken_nonce).execute(
                InitTransactionInput(headers={"User-Agent": IPHONE_UA})
            )

        assert exc_info.value.error_type is InitTransactionErrorType.API_REQUEST_FAILED
        assert exc_info.value.details == "Unexpected error during transaction initialization"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
