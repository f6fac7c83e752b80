"""
Output Port: Interface do Repositório de Cidades
Todas as operações usam a identidade autenticada no momento da chamada
"""
from abc import ABC, abstractmethod
from typing import List

from domain.entities.city import City
from domain.entities.weather_snapshot import WeatherSnapshot


class ICityRepository(ABC):
    """Interface para repositório das cidades do usuário"""

    @abstractmethod
    async def list_all(self) -> List[City]:
        """
        Retorna todas as cidades do usuário ([] se não houver nenhuma)

        Raises:
            NotAuthenticatedException: Sem usuário autenticado
            PersistenceException: Falha de leitura
        """
        pass

    @abstractmethod
    async def upsert(self, city: City) -> None:
        """Insere ou substitui o registro inteiro pelo id canônico"""
        pass

    @abstractmethod
    async def update_weather_field(self, city_name: str, weather: WeatherSnapshot) -> City:
        """
        Atualiza apenas o clima de uma cidade (read-modify-write)

        Preserva os demais campos do registro existente (inclusive date_added).
        Se não houver registro, cria um novo com date_added = agora.

        Returns:
            Cidade persistida
        """
        pass

    @abstractmethod
    async def delete(self, city_id: str) -> None:
        """Remove a cidade; remover id inexistente não é erro"""
        pass
