"""
Session Identity Provider - Identidade da sessão autenticada do app
O fluxo de login é externo; aqui só guardamos o uid resultante
"""
from typing import Optional

from application.ports.output.identity_provider_port import IIdentityProvider
from shared.config.logger_config import bind_session, get_logger

logger = get_logger(child=True)


class SessionIdentityProvider(IIdentityProvider):
    """Provider de identidade de sessão única"""

    def __init__(self, user_id: Optional[str] = None):
        self._user_id: Optional[str] = None
        if user_id:
            self.sign_in(user_id)

    def current_user_id(self) -> Optional[str]:
        return self._user_id

    def sign_in(self, user_id: str) -> None:
        """Vincula o uid retornado pelo provedor de autenticação"""
        if not user_id or not user_id.strip():
            raise ValueError("user_id cannot be empty")
        self._user_id = user_id.strip()
        bind_session(self._user_id)
        logger.info("User signed in")

    def sign_out(self) -> None:
        self._user_id = None
        bind_session(None)
        logger.info("User signed out")
