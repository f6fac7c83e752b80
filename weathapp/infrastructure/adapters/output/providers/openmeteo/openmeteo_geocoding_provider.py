"""Open-Meteo Geocoding Provider - Sugestões de cidades para a busca"""

import asyncio
import logging
from typing import List, Optional

import aiohttp
from ddtrace.trace import tracer
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from application.ports.output.city_suggestion_provider_port import ICitySuggestionProvider
from domain.constants import API
from domain.entities.city_suggestion import CitySuggestion
from domain.exceptions import DecodeException, NetworkException
from infrastructure.adapters.output.http.aiohttp_session_manager import AiohttpSessionManager
from infrastructure.adapters.output.providers.openmeteo.mappers import OpenMeteoGeocodingMapper
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class RateLimitedException(NetworkException):
    """HTTP 429/503 do geocoding (único caso com retry)"""
    pass


class OpenMeteoGeocodingProvider(ICitySuggestionProvider):
    """
    Provider para Open-Meteo Geocoding API

    Características:
    - API gratuita, sem chave
    - Até 20 candidatos por consulta (nome, país, estado)
    - Retry com backoff exponencial apenas para rate limiting
    - Cancelável: CancelledError propaga normalmente
    """

    def __init__(
        self,
        session_manager: AiohttpSessionManager,
        base_url: Optional[str] = None,
        max_results: int = API.GEOCODING_MAX_RESULTS,
        retry_attempts: int = API.RETRY_ATTEMPTS
    ):
        self.base_url = (base_url or API.GEOCODING_BASE_URL).rstrip("/")
        self.session_manager = session_manager
        self.max_results = max_results
        self.retry_attempts = retry_attempts

    @property
    def provider_name(self) -> str:
        return "OpenMeteo"

    @tracer.wrap(resource="openmeteo.geocoding_search")
    async def search(self, query: str) -> List[CitySuggestion]:
        """
        Busca cidades candidatas

        Args:
            query: Texto digitado (vazio → [] sem chamada de rede)

        Returns:
            Lista de CitySuggestion

        Raises:
            NetworkException: Falha de rede ou rate limit persistente
            DecodeException: Resposta inválida
        """
        trimmed = (query or "").strip()
        if not trimmed:
            return []

        url = f"{self.base_url}/search"
        params = {
            'name': trimmed,
            'count': str(self.max_results),
            'language': API.GEOCODING_LANGUAGE,
            'format': 'json'
        }

        # Retry com exponential backoff para rate limiting
        @retry(
            retry=retry_if_exception_type(RateLimitedException),
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        async def fetch_with_retry():
            session = await self.session_manager.get_session()
            async with session.get(url, params=params) as response:
                status = response.status

                if status in API.RETRY_STATUSES:
                    raise RateLimitedException(
                        "Geocoding service is rate limiting",
                        details={"query": trimmed, "status": status}
                    )

                if status >= 400:
                    raise NetworkException(
                        "Geocoding service returned an error",
                        details={"query": trimmed, "status": status}
                    )

                try:
                    return await response.json(content_type=None)
                except ValueError as ex:
                    raise DecodeException(
                        "Geocoding response is not valid JSON",
                        details={"query": trimmed}
                    ) from ex

        try:
            data = await fetch_with_retry()
        except (aiohttp.ClientError, asyncio.TimeoutError) as ex:
            raise NetworkException(
                f"Geocoding request failed: {str(ex) or type(ex).__name__}",
                details={"query": trimmed}
            ) from ex

        suggestions = OpenMeteoGeocodingMapper.map_search_results(data)
        logger.debug("City search completed", query=trimmed, results=len(suggestions))
        return suggestions
