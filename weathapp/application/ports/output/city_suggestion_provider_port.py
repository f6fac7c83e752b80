"""
Output Port: City Suggestion Provider
Contrato para provedores de geocoding (nome parcial → cidades candidatas)
"""
from abc import ABC, abstractmethod
from typing import List

from domain.entities.city_suggestion import CitySuggestion


class ICitySuggestionProvider(ABC):
    """Interface para provedores de sugestões de cidades"""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex.: OpenMeteo)"""
        raise NotImplementedError

    @abstractmethod
    async def search(self, query: str) -> List[CitySuggestion]:
        """
        Busca cidades candidatas para uma consulta parcial

        Consulta vazia (ou só espaços) retorna [] sem chamada de rede.
        A coroutine pode ser cancelada quando uma consulta mais nova a substitui.

        Args:
            query: Texto digitado pelo usuário

        Returns:
            Sugestões na ordem da fonte

        Raises:
            NetworkException: Falha de rede
            DecodeException: Resposta com formato inesperado
        """
        raise NotImplementedError
