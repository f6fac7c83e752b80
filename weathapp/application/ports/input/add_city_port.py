"""
Input Port: Interface para adicionar uma cidade (clima → persistência)
"""
from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.city import City


class IAddCityUseCase(ABC):
    """Interface para caso de uso de adicionar cidade pelo nome"""

    @abstractmethod
    async def execute(self, city_name: str) -> Optional[City]:
        """
        Busca o clima da cidade e persiste um novo registro

        Args:
            city_name: Nome da cidade (busca, sugestão ou localização)

        Returns:
            City persistida, ou None se o nome for vazio

        Raises:
            DomainException: Falha ao buscar clima ou ao persistir
        """
        pass
