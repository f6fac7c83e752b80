"""
City Weather Session - Estado da tela de detalhe de uma cidade
"""
from datetime import datetime
from typing import Callable, Optional

from application.ports.input.refresh_weather_port import IRefreshCityWeatherUseCase
from application.services.error_message_service import ErrorMessageService
from domain.constants import Detail
from domain.entities.city import City
from domain.entities.weather_snapshot import WeatherSnapshot
from shared.config.logger_config import get_logger
from shared.utils.datetime_parser import utc_now

logger = get_logger(child=True)


class CityWeatherSession:
    """
    Clima de uma cidade: começa com o cache da lista e atualiza sob demanda

    Derivados (is_daytime, condition_icon, theme, nascer/pôr do sol) usam o
    fuso da cidade, nunca o do dispositivo.
    """

    def __init__(
        self,
        city: City,
        refresh_city_weather: IRefreshCityWeatherUseCase,
        error_messages: Optional[ErrorMessageService] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.city = city
        self.refresh_use_case = refresh_city_weather
        self.error_messages = error_messages or ErrorMessageService()
        self.clock = clock

        self.is_loading = False
        self.status_text: Optional[str] = None if city.has_weather() else Detail.STATUS_EMPTY
        self.last_error: Optional[str] = None

    @property
    def weather(self) -> Optional[WeatherSnapshot]:
        return self.city.last_weather

    @property
    def last_updated(self) -> Optional[datetime]:
        return self.city.last_updated

    async def refresh(self) -> bool:
        """
        Busca o clima atual; a gravação no repositório é fire-and-forget

        Returns:
            True se o clima foi atualizado
        """
        self.is_loading = True
        if self.weather is None:
            self.status_text = Detail.STATUS_LOADING

        try:
            result = await self.refresh_use_case.execute(
                self.city,
                on_persist_error=self._on_persist_error
            )
        except Exception as ex:
            self.last_error = self.error_messages.for_weather_fetch(ex, self.city.name)
            self.status_text = (
                Detail.STATUS_UPDATE_FAILED if self.weather is not None
                else Detail.STATUS_LOAD_FAILED
            )
            return False
        finally:
            self.is_loading = False

        self.city = result.city
        self.status_text = None
        self.last_error = None
        logger.debug("City weather refreshed", city_id=self.city.id)
        return True

    def _on_persist_error(self, error: BaseException) -> None:
        self.last_error = self.error_messages.for_operation(error, "save", self.city.name)

    # Derivados

    def is_daytime(self, now: Optional[datetime] = None) -> Optional[bool]:
        if self.weather is None:
            return None
        return self.weather.is_daytime(now or self.clock())

    def condition_icon(self, now: Optional[datetime] = None) -> Optional[str]:
        if self.weather is None:
            return None
        return self.weather.condition_icon(now or self.clock())

    def theme(self, now: Optional[datetime] = None) -> Optional[str]:
        if self.weather is None:
            return None
        return self.weather.theme(now or self.clock())

    @property
    def sunrise_local(self) -> Optional[datetime]:
        if self.weather is None:
            return None
        return self.weather.local_datetime(self.weather.sunrise)

    @property
    def sunset_local(self) -> Optional[datetime]:
        if self.weather is None:
            return None
        return self.weather.local_datetime(self.weather.sunset)
