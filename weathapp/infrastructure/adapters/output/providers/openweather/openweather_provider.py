"""OpenWeather Provider - Condições atuais pela API /data/2.5/weather"""

import asyncio
from typing import Optional

import aiohttp
from ddtrace.trace import tracer

from application.ports.output.weather_provider_port import IWeatherProvider
from domain.constants import API
from domain.entities.weather_snapshot import WeatherSnapshot
from domain.exceptions import CityNotFoundException, DecodeException, NetworkException
from infrastructure.adapters.output.http.aiohttp_session_manager import AiohttpSessionManager
from infrastructure.adapters.output.providers.openweather.mappers import OpenWeatherDataMapper
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class OpenWeatherProvider(IWeatherProvider):
    """
    Provider para OpenWeather Current Weather API

    Características:
    - Busca por nome livre da cidade (q=<nome>)
    - Unidades métricas solicitadas explicitamente (°C, m/s)
    - Sem cache e sem retries: o chamador decide
    - 100% async com aiohttp
    """

    def __init__(
        self,
        session_manager: AiohttpSessionManager,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None
    ):
        """
        Inicializa provider

        Args:
            session_manager: Sessão HTTP compartilhada
            api_key: OpenWeather API key (env se None)
            base_url: URL base da API (env se None)

        Raises:
            ValueError: Se API key não configurada
        """
        self.api_key = api_key or API.OPENWEATHER_API_KEY
        if not self.api_key:
            raise ValueError("OPENWEATHER_API_KEY não configurada")

        self.base_url = (base_url or API.OPENWEATHER_BASE_URL).rstrip("/")
        self.session_manager = session_manager

    @property
    def provider_name(self) -> str:
        return "OpenWeather"

    @tracer.wrap(resource="openweather.fetch")
    async def fetch(self, city_name: str) -> WeatherSnapshot:
        """
        Busca condições atuais do OpenWeather

        Args:
            city_name: Nome da cidade

        Returns:
            WeatherSnapshot

        Raises:
            CityNotFoundException: HTTP 404
            NetworkException: Falha de conexão, timeout ou status inesperado
            DecodeException: JSON inválido ou campos ausentes
        """
        url = f"{self.base_url}/weather"
        params = {
            'q': city_name,
            'appid': self.api_key,
            'units': API.OPENWEATHER_UNITS
        }

        try:
            session = await self.session_manager.get_session()
            async with session.get(url, params=params) as response:
                status = response.status

                if status == 404:
                    raise CityNotFoundException(
                        "City not found at weather source",
                        details={"city_name": city_name, "status": status}
                    )

                if status >= 400:
                    raise NetworkException(
                        "Weather service returned an error",
                        details={"city_name": city_name, "status": status}
                    )

                try:
                    data = await response.json(content_type=None)
                except ValueError as ex:
                    raise DecodeException(
                        "Weather response is not valid JSON",
                        details={"city_name": city_name}
                    ) from ex

        except (aiohttp.ClientError, asyncio.TimeoutError) as ex:
            raise NetworkException(
                f"Weather request failed: {str(ex) or type(ex).__name__}",
                details={"city_name": city_name}
            ) from ex

        weather = OpenWeatherDataMapper.map_current_weather(data, city_name=city_name)
        logger.debug(
            "Weather fetched",
            city_name=city_name,
            location=weather.location_name,
            country=weather.country
        )
        return weather
