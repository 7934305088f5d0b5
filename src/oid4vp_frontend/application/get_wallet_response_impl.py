"""GetWalletResponse use case implementation"""

from typing import Any, Dict, Optional

from returns.result import Failure
from typing_extensions import assert_never

from oid4vp_frontend.domain import (
    AuthorizationResponse,
    AuthorizationResponseData,
    DirectPost,
    DirectPostJwt,
    EphemeralECDHPrivateJwk,
    JarmOption,
    PresentationId,
    TransactionPhase,
    parse_authorization_response,
)
from oid4vp_frontend.port.input import (
    GetWalletResponse,
    GetWalletResponseErrorType,
    GetWalletResponseInput,
    GetWalletResponseResult,
    GetWalletResponseServiceError,
)
from oid4vp_frontend.port.output import (
    Fetcher,
    JoseService,
    Logger,
    LogLevel,
    MdocVerifier,
    NullLogger,
    Session,
)

SERVICE = "GetWalletResponseService"


async def get_presentation_id_from_session(session: Session, logger: Logger) -> PresentationId:
    """
    Read the presentation id bound to the session at init time.

    Raises:
        GetWalletResponseServiceError: MISSING_PRESENTATION_ID if absent,
            SESSION_ERROR if the session cannot be read
    """
    logger.debug(SERVICE, "Retrieving presentation ID from session")

    try:
        presentation_id = await session.get("presentation_id")
    except Exception as e:
        raise GetWalletResponseServiceError(
            GetWalletResponseErrorType.SESSION_ERROR,
            "Failed to read presentation ID from session",
            e,
        ) from e

    if presentation_id is None:
        session_keys = []
        try:
            session_keys = await session.keys()
        except Exception as e:
            logger.debug(
                SERVICE,
                "Failed to retrieve session keys for debugging",
                {"error": {"name": type(e).__name__, "message": str(e)}},
            )

        logger.log_security(
            LogLevel.ERROR,
            SERVICE,
            "Presentation ID not found in session",
            {"context": {"available_keys": [str(k) for k in session_keys]}},
        )
        raise GetWalletResponseServiceError(
            GetWalletResponseErrorType.MISSING_PRESENTATION_ID,
            "Presentation ID not found in session. "
            "The session may have expired or the transaction was not properly initialized.",
        )

    logger.debug(
        SERVICE,
        "Presentation ID retrieved successfully",
        {"context": {"presentation_id": str(presentation_id)}},
    )
    return presentation_id


class GetWalletResponseImpl(GetWalletResponse):
    """
    Implementation of GetWalletResponse use case.

    Bound to one browser session; create one instance per request.
    """

    def __init__(
        self,
        *,
        api_base_url: str,
        api_path: str,
        fetcher: Fetcher,
        session: Session,
        mdoc_verifier: Optional[MdocVerifier],
        jose_service: Optional[JoseService],
        jarm_option: Optional[JarmOption],
        logger: Optional[Logger] = None,
    ):
        if not api_base_url or not api_path or mdoc_verifier is None or jose_service is None or jarm_option is None:
            raise GetWalletResponseServiceError(
                GetWalletResponseErrorType.INVALID_RESPONSE,
                "Required configuration parameters are missing",
            )
        self.api_base_url = api_base_url
        self.api_path = api_path
        self.fetcher = fetcher
        self.session = session
        self.mdoc_verifier = mdoc_verifier
        self.jose_service = jose_service
        self.jarm_option = jarm_option
        self.logger = logger or NullLogger()

    async def execute(self, request: GetWalletResponseInput) -> GetWalletResponseResult:
        """
        Execute the get wallet response use case.

        Flow:
        1. Read the presentation id from the session
        2. Fetch the stored wallet response from the backend
        3. Discriminate direct_post from direct_post.jwt
        4. Decrypt/verify JARM responses with the session's ephemeral key
        5. Hand the vp_token to the mDoc verifier
        """
        try:
            presentation_id = await get_presentation_id_from_session(self.session, self.logger)
            authorization_response = await self._fetch_wallet_response(presentation_id, request.response_code)
            self.logger.debug(
                SERVICE,
                f"Transaction phase: {TransactionPhase.CORRELATED}",
                {"context": {"phase": TransactionPhase.CORRELATED.value, "kind": authorization_response.kind}},
            )

            private_jwk = await self._read_ephemeral_key()
            response_data = await self._response_data(authorization_response, private_jwk)

            vp_token = response_data.vp_token
            if not vp_token:
                raise GetWalletResponseServiceError(
                    GetWalletResponseErrorType.MISSING_VP_TOKEN,
                    "VP token is required for MDOC verification but was not found in the wallet response",
                )

            try:
                verify_result = await self.mdoc_verifier.verify(vp_token)
            except Exception as e:
                raise GetWalletResponseServiceError(
                    GetWalletResponseErrorType.INVALID_RESPONSE,
                    "MDOC verification failed due to technical error",
                    e,
                ) from e

            self.logger.log_audit(
                SERVICE,
                "Wallet response verified",
                {"context": {"presentation_id": str(presentation_id)}},
            )
            return GetWalletResponseResult(verify_result=verify_result, vp_token=vp_token)

        except GetWalletResponseServiceError as e:
            self.logger.error(SERVICE, str(e), {"error": {"type": e.error_type.value, "message": e.details}})
            raise
        except Exception as e:
            self.logger.error(SERVICE, "Unexpected error during wallet response retrieval", {"error": {"message": str(e)}})
            raise GetWalletResponseServiceError(
                GetWalletResponseErrorType.API_REQUEST_FAILED,
                "Unexpected error during wallet response retrieval",
                e,
            ) from e

    async def _fetch_wallet_response(
        self, presentation_id: PresentationId, response_code: Optional[str]
    ) -> AuthorizationResponse:
        query = {"response_code": response_code} if response_code else {}
        try:
            api_response = await self.fetcher.get(
                self.api_base_url,
                f"{self.api_path}/{presentation_id}",
                query,
                Dict[str, Any],
            )
        except Exception as e:
            raise GetWalletResponseServiceError(
                GetWalletResponseErrorType.API_REQUEST_FAILED,
                "Failed to communicate with GetWalletResponse API",
                e,
            ) from e

        try:
            return parse_authorization_response(api_response.data)
        except ValueError as e:
            raise GetWalletResponseServiceError(
                GetWalletResponseErrorType.INVALID_RESPONSE,
                "Failed to parse GetWalletResponse API response",
                e,
            ) from e

    async def _read_ephemeral_key(self) -> EphemeralECDHPrivateJwk:
        try:
            private_jwk = await self.session.get("ephemeral_ecdh_private_jwk")
        except Exception as e:
            raise GetWalletResponseServiceError(
                GetWalletResponseErrorType.SESSION_ERROR,
                "Failed to read ephemeral ECDH private JWK from session",
                e,
            ) from e

        if private_jwk is None:
            raise GetWalletResponseServiceError(
                GetWalletResponseErrorType.MISSING_EPHEMERAL_ECDH_PRIVATE_JWK,
                "Ephemeral ECDH private JWK not found in session",
            )
        return private_jwk

    async def _response_data(
        self, authorization_response: AuthorizationResponse, private_jwk: EphemeralECDHPrivateJwk
    ) -> AuthorizationResponseData:
        if isinstance(authorization_response, DirectPostJwt):
            result = await self.jose_service.verify_jarm_jwt(self.jarm_option, private_jwk, authorization_response.jarm)
            if isinstance(result, Failure):
                raise GetWalletResponseServiceError(
                    GetWalletResponseErrorType.JARM_VERIFICATION_FAILED,
                    "JARM verification failed",
                    result.failure(),
                )
            return result.unwrap()
        elif isinstance(authorization_response, DirectPost):
            return authorization_response.response
        else:
            assert_never(authorization_response)
