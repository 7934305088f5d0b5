"""InitTransaction use case implementation"""

from typing import Any, Dict, Mapping, Optional

from returns.result import Failure

from oid4vp_frontend.domain import (
    EphemeralECDHPrivateJwk,
    EphemeralECDHPublicJwk,
    JarMode,
    Nonce,
    PresentationDefinitionMode,
    PresentationId,
    PresentationType,
    ResponseMode,
    TransactionPhase,
)
from oid4vp_frontend.port.input import (
    InitTransaction,
    InitTransactionErrorType,
    InitTransactionInput,
    InitTransactionRequest,
    InitTransactionResponse,
    InitTransactionResult,
    InitTransactionServiceError,
)
from oid4vp_frontend.port.output import (
    Fetcher,
    GenerateNonce,
    GeneratePresentationDefinition,
    GenerateWalletRedirectUri,
    GenerateWalletResponseRedirectUriTemplate,
    IsMobile,
    JoseService,
    Logger,
    NullLogger,
    Session,
)

SERVICE = "InitTransactionService"


# ======================
# Helpers
# ======================


def validate_user_agent(headers: Mapping[str, str]) -> str:
    """
    Return the User-Agent header.

    Raises:
        InitTransactionServiceError: MISSING_USER_AGENT if absent or empty
    """
    for name, value in headers.items():
        if name.lower() == "user-agent" and value:
            return value
    raise InitTransactionServiceError(
        InitTransactionErrorType.MISSING_USER_AGENT,
        "User agent header is required to determine device type",
    )


def generate_request(
    *,
    public_url: str,
    wallet_response_redirect_path: str,
    wallet_response_redirect_query_template: str,
    is_mobile: bool,
    token_type: PresentationType,
    nonce: Nonce,
    ephemeral_ecdh_public_jwk: EphemeralECDHPublicJwk,
    generate_presentation_definition: GeneratePresentationDefinition,
    generate_wallet_response_redirect_uri_template: GenerateWalletResponseRedirectUriTemplate,
    response_mode: Optional[ResponseMode] = None,
    jar_mode: Optional[JarMode] = None,
    presentation_definition_mode: Optional[PresentationDefinitionMode] = None,
) -> InitTransactionRequest:
    """
    Assemble the init request sent to the backend.

    Only mobile clients get a ``wallet_response_redirect_uri_template``: the
    wallet runs on the same device and must be able to redirect back.
    Cross-device (QR code) flows poll for the result instead.

    Raises:
        InitTransactionServiceError: INVALID_RESPONSE if a URL parameter is
            missing or the redirect template cannot be built
    """
    if not public_url or not wallet_response_redirect_path or not wallet_response_redirect_query_template:
        raise InitTransactionServiceError(
            InitTransactionErrorType.INVALID_RESPONSE,
            "Required URL parameters are missing",
        )

    template: Optional[str] = None
    if is_mobile:
        try:
            template = generate_wallet_response_redirect_uri_template(
                public_url,
                wallet_response_redirect_path,
                wallet_response_redirect_query_template,
            )
        except ValueError as e:
            raise InitTransactionServiceError(
                InitTransactionErrorType.INVALID_RESPONSE,
                "Failed to generate wallet response redirect URI template",
                e,
            ) from e

    return InitTransactionRequest(
        type=token_type,
        presentation_definition=generate_presentation_definition(),
        ephemeral_ecdh_public_jwk=ephemeral_ecdh_public_jwk,
        nonce=nonce,
        response_mode=response_mode,
        jar_mode=jar_mode,
        presentation_definition_mode=presentation_definition_mode,
        wallet_response_redirect_uri_template=template,
    )


async def store_transaction_in_session(
    session: Session,
    presentation_id: PresentationId,
    nonce: Nonce,
    ephemeral_ecdh_private_jwk: EphemeralECDHPrivateJwk,
) -> None:
    """
    Bind the transaction secrets to the session.

    Writes happen one by one; a failure leaves earlier writes in place.

    Raises:
        InitTransactionServiceError: SESSION_ERROR wrapping the store's error
    """
    try:
        await session.set("presentation_id", presentation_id)
        await session.set("nonce", nonce)
        await session.set("ephemeral_ecdh_private_jwk", ephemeral_ecdh_private_jwk)
    except Exception as e:
        raise InitTransactionServiceError(
            InitTransactionErrorType.SESSION_ERROR,
            "Failed to store transaction data in session",
            e,
        ) from e


# ======================
# Use case
# ======================


class InitTransactionImpl(InitTransaction):
    """
    Implementation of InitTransaction use case.

    Bound to one browser session; create one instance per request.

    Raises:
        InitTransactionServiceError: INVALID_RESPONSE at construction if a
            required URL setting is missing
    """

    def __init__(
        self,
        *,
        api_base_url: str,
        api_path: str,
        public_url: str,
        wallet_url: str,
        wallet_response_redirect_path: str,
        wallet_response_redirect_query_template: str,
        fetcher: Fetcher,
        session: Session,
        jose_service: JoseService,
        is_mobile: IsMobile,
        generate_nonce: GenerateNonce,
        generate_presentation_definition: GeneratePresentationDefinition,
        generate_wallet_redirect_uri: GenerateWalletRedirectUri,
        generate_wallet_response_redirect_uri_template: GenerateWalletResponseRedirectUriTemplate,
        token_type: PresentationType = PresentationType.VP_TOKEN,
        response_mode: Optional[ResponseMode] = None,
        jar_mode: Optional[JarMode] = None,
        presentation_definition_mode: Optional[PresentationDefinitionMode] = None,
        logger: Optional[Logger] = None,
    ):
        if not api_base_url or not api_path or not public_url or not wallet_url:
            raise InitTransactionServiceError(
                InitTransactionErrorType.INVALID_RESPONSE,
                "Required configuration parameters are missing",
            )
        self.api_base_url = api_base_url
        self.api_path = api_path
        self.public_url = public_url
        self.wallet_url = wallet_url
        self.wallet_response_redirect_path = wallet_response_redirect_path
        self.wallet_response_redirect_query_template = wallet_response_redirect_query_template
        self.fetcher = fetcher
        self.session = session
        self.jose_service = jose_service
        self.is_mobile = is_mobile
        self.generate_nonce = generate_nonce
        self.generate_presentation_definition = generate_presentation_definition
        self.generate_wallet_redirect_uri = generate_wallet_redirect_uri
        self.generate_wallet_response_redirect_uri_template = generate_wallet_response_redirect_uri_template
        self.token_type = token_type
        self.response_mode = response_mode
        self.jar_mode = jar_mode
        self.presentation_definition_mode = presentation_definition_mode
        self.logger = logger or NullLogger()

    async def execute(self, request: InitTransactionInput) -> InitTransactionResult:
        """
        Execute the init transaction use case.

        Flow:
        1. Validate the user agent and detect the device class
        2. Generate nonce and ephemeral ECDH key pair
        3. Build the init request
        4. Post it to the backend and parse the answer
        5. Store presentation id, nonce and private key in the session
        6. Build the wallet redirect URI

        A session failure does not cancel the backend transaction; it expires
        on the backend.
        """
        try:
            self._enter_phase(TransactionPhase.INIT)
            user_agent = validate_user_agent(request.headers)
            is_mobile = self.is_mobile(user_agent)
            self.logger.debug(SERVICE, "Device type detected", {"context": {"is_mobile": is_mobile}})

            nonce = self.generate_nonce()
            key_result = await self.jose_service.generate_ephemeral_ecdh_private_jwk()
            if isinstance(key_result, Failure):
                raise InitTransactionServiceError(
                    InitTransactionErrorType.INVALID_RESPONSE,
                    "Failed to generate ephemeral ECDH key pair",
                    key_result.failure(),
                )
            private_jwk = key_result.unwrap()

            init_request = generate_request(
                public_url=self.public_url,
                wallet_response_redirect_path=self.wallet_response_redirect_path,
                wallet_response_redirect_query_template=self.wallet_response_redirect_query_template,
                is_mobile=is_mobile,
                token_type=self.token_type,
                nonce=nonce,
                ephemeral_ecdh_public_jwk=private_jwk.to_public_jwk(),
                generate_presentation_definition=self.generate_presentation_definition,
                generate_wallet_response_redirect_uri_template=self.generate_wallet_response_redirect_uri_template,
                response_mode=self.response_mode,
                jar_mode=self.jar_mode,
                presentation_definition_mode=self.presentation_definition_mode,
            )
            self._enter_phase(TransactionPhase.REQUEST_BUILT)

            init_response = await self._post_init_request(init_request)

            await store_transaction_in_session(self.session, init_response.presentation_id, nonce, private_jwk)
            self._enter_phase(TransactionPhase.SESSION_BOUND)

            try:
                wallet_redirect_uri = self.generate_wallet_redirect_uri(
                    self.wallet_url, init_response.to_wallet_redirect_params()
                )
            except ValueError as e:
                raise InitTransactionServiceError(
                    InitTransactionErrorType.INVALID_RESPONSE,
                    "Failed to generate wallet redirect URI",
                    e,
                ) from e
            self._enter_phase(TransactionPhase.AWAITING_RESPONSE)

            self.logger.log_audit(
                SERVICE,
                "Transaction initialized",
                {"context": {"presentation_id": str(init_response.presentation_id), "is_mobile": is_mobile}},
            )
            return InitTransactionResult(wallet_redirect_uri=wallet_redirect_uri, is_mobile=is_mobile)

        except InitTransactionServiceError as e:
            self.logger.error(SERVICE, str(e), {"error": {"type": e.error_type.value, "message": e.details}})
            raise
        except Exception as e:
            self.logger.error(SERVICE, "Unexpected error during transaction initialization", {"error": {"message": str(e)}})
            raise InitTransactionServiceError(
                InitTransactionErrorType.API_REQUEST_FAILED,
                "Unexpected error during transaction initialization",
                e,
            ) from e

    async def _post_init_request(self, init_request: InitTransactionRequest) -> InitTransactionResponse:
        try:
            api_response = await self.fetcher.post(
                self.api_base_url,
                self.api_path,
                init_request.to_json(),
                Dict[str, Any],
            )
        except Exception as e:
            raise InitTransactionServiceError(
                InitTransactionErrorType.API_REQUEST_FAILED,
                "Failed to communicate with InitTransaction API",
                e,
            ) from e

        try:
            return InitTransactionResponse.from_json(api_response.data)
        except ValueError as e:
            raise InitTransactionServiceError(
                InitTransactionErrorType.INVALID_RESPONSE,
                "Failed to parse InitTransaction API response",
                e,
            ) from e

    def _enter_phase(self, phase: TransactionPhase) -> None:
        self.logger.debug(SERVICE, f"Transaction phase: {phase}", {"context": {"phase": phase.value}})
