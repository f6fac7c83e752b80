"""
Input Port: Interface para carregar a lista de cidades do usuário
"""
from abc import ABC, abstractmethod
from typing import List

from domain.entities.city import City


class ILoadCitiesUseCase(ABC):
    """Interface para caso de uso de carregar cidades"""

    @abstractmethod
    async def execute(self) -> List[City]:
        """
        Carrega as cidades do usuário ordenadas por date_added

        Returns:
            Lista ordenada (registros sem date_added primeiro)

        Raises:
            NotAuthenticatedException: Sem usuário autenticado
            PersistenceException: Falha no armazenamento
        """
        pass
