"""
Async Use Case: Refresh City Weather
Tela de detalhe: busca o clima de uma cidade e agenda a gravação
"""
from datetime import datetime
from typing import Callable, Optional

from ddtrace.trace import tracer

from application.dtos.responses import RefreshCityResult
from application.ports.input.refresh_weather_port import IRefreshCityWeatherUseCase
from application.ports.output.city_repository_port import ICityRepository
from application.ports.output.weather_provider_port import IWeatherProvider
from application.services.background_tasks import BackgroundTaskRunner, ErrorCallback
from domain.entities.city import City
from shared.utils.datetime_parser import utc_now


class RefreshCityWeatherUseCase(IRefreshCityWeatherUseCase):
    """Async use case: Refresh a single city and persist only its weather fields"""

    def __init__(
        self,
        city_repository: ICityRepository,
        weather_provider: IWeatherProvider,
        task_runner: BackgroundTaskRunner,
        clock: Callable[[], datetime] = utc_now
    ):
        self.city_repository = city_repository
        self.weather_provider = weather_provider
        self.task_runner = task_runner
        self.clock = clock

    @tracer.wrap(resource="use_case.refresh_city_weather")
    async def execute(
        self,
        city: City,
        on_persist_error: Optional[ErrorCallback] = None
    ) -> RefreshCityResult:
        weather = await self.weather_provider.fetch(city.name)
        fetched_at = self.clock()

        # Read-modify-write no repositório preserva date_added do registro salvo
        self.task_runner.spawn(
            self.city_repository.update_weather_field(city.name, weather),
            name=f"update-weather:{city.id}",
            on_error=on_persist_error
        )

        return RefreshCityResult(
            city=city.with_weather(weather, fetched_at),
            weather=weather,
            fetched_at=fetched_at
        )
