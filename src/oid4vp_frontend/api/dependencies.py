"""Dependency injection container for FastAPI"""

from typing import Optional

from fastapi import Depends, Request, Response

from oid4vp_frontend.adapter import (
    DefaultLogger,
    FetcherConfig,
    InMemorySessionStore,
    JoseServiceImpl,
    create_default_fetcher,
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
    default_is_mobile,
    mdl_presentation_definition,
)
from oid4vp_frontend.application import GetWalletResponseImpl, InitTransactionImpl
from oid4vp_frontend.config import FrontendConfig, load_or_create_config
from oid4vp_frontend.port.input import GetWalletResponse, InitTransaction
from oid4vp_frontend.port.output import (
    Fetcher,
    GeneratePresentationDefinition,
    IsMobile,
    JoseService,
    Logger,
    LoggerConfig,
    MdocVerifier,
    Session,
)


class DependencyContainer:
    """
    Dependency injection container for the OID4VP frontend.

    Adapters are singletons created on first use. Use cases are bound to a
    browser session, so a new instance is built for every request.
    """

    def __init__(
        self,
        config: Optional[FrontendConfig] = None,
        *,
        fetcher: Optional[Fetcher] = None,
        jose_service: Optional[JoseService] = None,
        mdoc_verifier: Optional[MdocVerifier] = None,
        session_store: Optional[InMemorySessionStore] = None,
        logger: Optional[Logger] = None,
        is_mobile: Optional[IsMobile] = None,
        generate_presentation_definition: Optional[GeneratePresentationDefinition] = None,
    ):
        """
        Initialize container with optional configuration and adapters.

        Args:
            config: Frontend configuration (if None, loaded on first use)
            mdoc_verifier: mDoc verifier; there is no default, result
                retrieval fails until one is provided
            Other arguments replace the default adapter of the same name.
        """
        self._config = config
        self._fetcher = fetcher
        self._jose_service = jose_service
        self._mdoc_verifier = mdoc_verifier
        self._session_store = session_store
        self._logger = logger
        self._is_mobile = is_mobile
        self._generate_presentation_definition = generate_presentation_definition

    def get_config(self) -> FrontendConfig:
        """Get frontend configuration"""
        if self._config is None:
            self._config = load_or_create_config()
        return self._config

    def get_logger(self) -> Logger:
        """Get logger (singleton)"""
        if self._logger is None:
            self._logger = DefaultLogger(LoggerConfig(min_level=self.get_config().log_level))
        return self._logger

    def get_fetcher(self) -> Fetcher:
        """Get HTTP fetcher (singleton)"""
        if self._fetcher is None:
            self._fetcher = create_default_fetcher(
                FetcherConfig(timeout_ms=self.get_config().http_timeout_ms),
                logger=self.get_logger(),
            )
        return self._fetcher

    async def aclose(self) -> None:
        """Release the fetcher's connections"""
        if self._fetcher is not None:
            await self._fetcher.aclose()

    def get_jose_service(self) -> JoseService:
        """Get JOSE service (singleton)"""
        if self._jose_service is None:
            self._jose_service = JoseServiceImpl(wallet_jwks=self.get_config().wallet_jwks)
        return self._jose_service

    def get_mdoc_verifier(self) -> Optional[MdocVerifier]:
        return self._mdoc_verifier

    def set_mdoc_verifier(self, mdoc_verifier: MdocVerifier) -> None:
        self._mdoc_verifier = mdoc_verifier

    def get_session_store(self) -> InMemorySessionStore:
        """Get session store (singleton)"""
        if self._session_store is None:
            self._session_store = InMemorySessionStore(max_age_seconds=self.get_config().session_max_age_seconds)
        return self._session_store

    def get_is_mobile(self) -> IsMobile:
        return self._is_mobile or default_is_mobile

    def get_generate_presentation_definition(self) -> GeneratePresentationDefinition:
        return self._generate_presentation_definition or mdl_presentation_definition

    def get_init_transaction(self, session: Session) -> InitTransaction:
        """Build the InitTransaction use case for one session"""
        config = self.get_config()
        return InitTransactionImpl(
            api_base_url=config.api_base_url,
            api_path=config.init_transaction_api_path,
            public_url=config.public_url,
            wallet_url=config.wallet_url,
            wallet_response_redirect_path=config.wallet_response_redirect_path,
            wallet_response_redirect_query_template=config.wallet_response_redirect_query_template,
            fetcher=self.get_fetcher(),
            session=session,
            jose_service=self.get_jose_service(),
            is_mobile=self.get_is_mobile(),
            generate_nonce=default_generate_nonce,
            generate_presentation_definition=self.get_generate_presentation_definition(),
            generate_wallet_redirect_uri=default_generate_wallet_redirect_uri,
            generate_wallet_response_redirect_uri_template=default_generate_wallet_response_redirect_uri_template,
            token_type=config.token_type,
            response_mode=config.response_mode,
            jar_mode=config.jar_mode,
            presentation_definition_mode=config.presentation_definition_mode,
            logger=self.get_logger(),
        )

    def get_get_wallet_response(self, session: Session) -> GetWalletResponse:
        """Build the GetWalletResponse use case for one session"""
        config = self.get_config()
        return GetWalletResponseImpl(
            api_base_url=config.api_base_url,
            api_path=config.get_wallet_response_api_path,
            fetcher=self.get_fetcher(),
            session=session,
            mdoc_verifier=self.get_mdoc_verifier(),
            jose_service=self.get_jose_service(),
            jarm_option=config.jarm_option(),
            logger=self.get_logger(),
        )


# Global container instance
_container: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """Get or create global dependency container"""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


def set_container(container: DependencyContainer) -> None:
    """Set global dependency container (useful for testing)"""
    global _container
    _container = container


# FastAPI dependency functions
def get_session(request: Request, response: Response) -> Session:
    """
    FastAPI dependency resolving the browser session from its cookie.

    A fresh session id is issued (and the cookie set) when the cookie is
    missing or its session has expired.
    """
    container = get_container()
    cookie_name = container.get_config().session_cookie_name
    current_id = request.cookies.get(cookie_name)
    session_id, session = container.get_session_store().get_or_create(current_id)
    if session_id != current_id:
        response.set_cookie(cookie_name, session_id, httponly=True, samesite="lax")
    return session


def get_init_transaction_use_case(session: Session = Depends(get_session)) -> InitTransaction:
    """FastAPI dependency for InitTransaction use case"""
    return get_container().get_init_transaction(session)


def get_get_wallet_response_use_case(session: Session = Depends(get_session)) -> GetWalletResponse:
    """FastAPI dependency for GetWalletResponse use case"""
    return get_container().get_get_wallet_response(session)
