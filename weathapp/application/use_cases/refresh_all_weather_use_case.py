"""
Async Use Case: Refresh All Weather
Atualização sequencial com falhas isoladas por cidade
"""
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ddtrace.trace import tracer

from application.dtos.responses import RefreshAllResult, RefreshFailure
from application.ports.input.refresh_weather_port import IRefreshAllWeatherUseCase
from application.ports.output.city_repository_port import ICityRepository
from application.ports.output.weather_provider_port import IWeatherProvider
from application.services.background_tasks import BackgroundTaskRunner, ErrorCallback
from domain.entities.city import City
from domain.services.city_ordering import sort_by_date_added
from shared.config.logger_config import get_logger
from shared.utils.datetime_parser import utc_now

logger = get_logger(child=True)


class RefreshAllWeatherUseCase(IRefreshAllWeatherUseCase):
    """
    Async use case: Refresh weather for every city, one at a time

    Cities are fetched sequentially to bound the load on the weather source.
    Each success is persisted fire-and-forget; each failure keeps the city's
    cached state unchanged and the pass continues.
    """

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

    @tracer.wrap(resource="use_case.refresh_all_weather")
    async def execute(
        self,
        cities: Sequence[City],
        on_persist_error: Optional[ErrorCallback] = None,
        is_deleted: Optional[Callable[[str], bool]] = None
    ) -> RefreshAllResult:
        """
        Execute use case asynchronously

        Args:
            cities: Current list (copied; never mutated)
            on_persist_error: Called when a background save fails
            is_deleted: Checked after each fetch; deleted cities are dropped
                from the result and never saved back

        Returns:
            RefreshAllResult with every remaining city (updated or unchanged), re-sorted
        """
        snapshot = list(cities)
        if not snapshot:
            return RefreshAllResult(cities=())

        updated: List[City] = []
        failures: List[RefreshFailure] = []
        dropped = 0

        for city in snapshot:
            try:
                weather = await self.weather_provider.fetch(city.name)
            except Exception as ex:
                logger.warning(
                    "Failed to refresh weather, keeping cached data",
                    city_name=city.name,
                    error=str(ex),
                    error_type=type(ex).__name__
                )
                if is_deleted is not None and is_deleted(city.id):
                    dropped += 1
                    continue
                failures.append(RefreshFailure(city_name=city.name, error=ex))
                updated.append(city)
                continue

            if is_deleted is not None and is_deleted(city.id):
                logger.debug("City deleted during refresh, skipping save", city_id=city.id)
                dropped += 1
                continue

            refreshed = city.with_weather(weather, self.clock())
            updated.append(refreshed)
            self.task_runner.spawn(
                self.city_repository.upsert(refreshed),
                name=f"save-city:{refreshed.id}",
                on_error=on_persist_error
            )

        logger.info(
            "Bulk weather refresh completed",
            total=len(snapshot),
            failed=len(failures),
            dropped=dropped
        )
        return RefreshAllResult(
            cities=tuple(sort_by_date_added(updated)),
            failures=tuple(failures)
        )
