"""
Input Port: Interfaces para atualizar o clima das cidades
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from application.dtos.responses import RefreshAllResult, RefreshCityResult
from domain.entities.city import City


class IRefreshAllWeatherUseCase(ABC):
    """Interface para atualização em lote (pull-to-refresh da lista)"""

    @abstractmethod
    async def execute(
        self,
        cities: Sequence[City],
        on_persist_error: Optional[Callable[[BaseException], None]] = None,
        is_deleted: Optional[Callable[[str], bool]] = None
    ) -> RefreshAllResult:
        """
        Atualiza o clima de todas as cidades, uma por vez

        Falha de uma cidade nunca interrompe as demais. Cidades para as quais
        is_deleted(city_id) retorna True ficam fora do resultado e não são salvas.
        """
        pass


class IRefreshCityWeatherUseCase(ABC):
    """Interface para atualização de uma única cidade (tela de detalhe)"""

    @abstractmethod
    async def execute(
        self,
        city: City,
        on_persist_error: Optional[Callable[[BaseException], None]] = None
    ) -> RefreshCityResult:
        """
        Busca o clima atual de uma cidade e agenda a persistência

        Raises:
            DomainException: Falha ao buscar clima
        """
        pass
