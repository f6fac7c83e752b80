"""
Output Port: Identity Provider
Fonte externa do identificador estável do usuário autenticado
"""
from abc import ABC, abstractmethod
from typing import Optional


class IIdentityProvider(ABC):
    """Interface para o provedor de identidade"""

    @abstractmethod
    def current_user_id(self) -> Optional[str]:
        """Identificador opaco do usuário ou None se não autenticado"""
        pass
