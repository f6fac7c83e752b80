"""
Error Message Service
Centraliza a conversão de exceções em mensagens para o usuário, com logging estruturado
"""
from typing import Optional

from domain.exceptions import (
    DomainException,
    NetworkException,
    DecodeException,
    CityNotFoundException,
    NotAuthenticatedException,
    PersistenceException,
)
from shared.config.logger_config import logger as app_logger


class ErrorMessageService:
    """
    Service para centralizar tratamento de exceções da aplicação
    Responsável por converter exceções em mensagens exibíveis (last_error)
    """

    def __init__(self, logger=app_logger):
        # Permite injeção de logger compartilhado para manter contexto da sessão
        self.logger = logger

    def for_weather_fetch(self, ex: Exception, city_name: str) -> str:
        """Mensagem para falha ao buscar clima de uma cidade (sempre cita a cidade)"""
        self._log(ex, operation="weather_fetch", city_name=city_name)

        if isinstance(ex, CityNotFoundException):
            return f"Could not find weather for {city_name}. Check the city name."
        if isinstance(ex, NetworkException):
            return f"Could not fetch weather for {city_name}. Check your connection and try again."
        if isinstance(ex, DecodeException):
            return f"Received unexpected weather data for {city_name}."
        return f"Could not fetch weather for {city_name}. Please try again."

    def for_operation(self, ex: Exception, operation: str, city_name: Optional[str] = None) -> str:
        """Mensagem para falhas de repositório (load, save, delete)"""
        self._log(ex, operation=operation, city_name=city_name)

        if isinstance(ex, NotAuthenticatedException):
            return "You are not signed in. Please sign in again."
        if isinstance(ex, PersistenceException):
            target = city_name or "city"
            if operation == "save":
                return f"Failed to save {target}. Please try again."
            if operation == "delete":
                return f"Failed to delete {target}."
            return "Failed to load your cities. Please try again."
        if isinstance(ex, NetworkException):
            return "Network error. Check your connection and try again."
        return "Something went wrong. Please try again."

    def for_refresh_failures(self, city_names) -> Optional[str]:
        """Resumo das falhas isoladas do refresh em lote (None se não houve falha)"""
        names = list(city_names)
        if not names:
            return None
        self.logger.warning("Bulk refresh had failures", failed=names, failed_count=len(names))
        return f"Could not refresh weather for: {', '.join(names)}"

    def _log(self, ex: Exception, operation: str, city_name: Optional[str]) -> None:
        if isinstance(ex, DomainException):
            self.logger.warning(
                f"{type(ex).__name__} during {operation}",
                error=str(ex),
                details=ex.details,
                city_name=city_name
            )
        else:
            self.logger.error(
                f"Unexpected error during {operation}",
                error=str(ex),
                error_type=type(ex).__name__,
                city_name=city_name
            )
