"""Weather Provider Port - Interface para provedores de condições atuais"""
from abc import ABC, abstractmethod

from domain.entities.weather_snapshot import WeatherSnapshot


class IWeatherProvider(ABC):
    """
    Interface genérica para provedores de dados meteorológicos.
    Sem retries e sem cache internos: quem chama decide.
    """

    @abstractmethod
    async def fetch(self, city_name: str) -> WeatherSnapshot:
        """
        Busca condições atuais pelo nome da cidade

        Args:
            city_name: Nome livre da cidade (como digitado/selecionado)

        Returns:
            WeatherSnapshot com dados em unidades métricas

        Raises:
            NetworkException: Sem conectividade, timeout ou status inesperado
            DecodeException: Resposta com formato inesperado
            CityNotFoundException: Fonte não encontrou a cidade
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex: 'OpenWeather')"""
        pass
