"""
Async Use Case: Add City
Pipeline: nome → clima atual → persistência
"""
from datetime import datetime
from typing import Callable, Optional

from ddtrace.trace import tracer

from application.ports.input.add_city_port import IAddCityUseCase
from application.ports.output.city_repository_port import ICityRepository
from application.ports.output.weather_provider_port import IWeatherProvider
from domain.entities.city import City
from shared.config.logger_config import get_logger
from shared.utils.datetime_parser import utc_now
from shared.utils.validators import CityNameValidator

logger = get_logger(child=True)


class AddCityFailed(Exception):
    """Wraps the failing step of the add-city pipeline"""

    STEP_WEATHER = "weather"
    STEP_SAVE = "save"

    def __init__(self, step: str, city_name: str, cause: Exception):
        super().__init__(f"Add city failed at {step}: {cause}")
        self.step = step
        self.city_name = city_name
        self.cause = cause


class AddCityUseCase(IAddCityUseCase):
    """Async use case: Fetch weather for a new city and persist it"""

    def __init__(
        self,
        city_repository: ICityRepository,
        weather_provider: IWeatherProvider,
        clock: Callable[[], datetime] = utc_now
    ):
        self.city_repository = city_repository
        self.weather_provider = weather_provider
        self.clock = clock

    @tracer.wrap(resource="use_case.add_city")
    async def execute(self, city_name: str) -> Optional[City]:
        """
        Execute use case asynchronously

        Args:
            city_name: Name as typed, selected or resolved from location

        Returns:
            The persisted City, or None when the name is empty (no-op)

        Raises:
            AddCityFailed: Weather fetch or save failed; nothing partial is stored
        """
        name = CityNameValidator.normalize(city_name)
        if name is None:
            return None

        try:
            weather = await self.weather_provider.fetch(name)
        except Exception as ex:
            raise AddCityFailed(AddCityFailed.STEP_WEATHER, name, ex) from ex

        now = self.clock()
        city = City(
            name=name,
            last_weather=weather,
            last_updated=now,
            date_added=now
        )

        try:
            await self.city_repository.upsert(city)
        except Exception as ex:
            raise AddCityFailed(AddCityFailed.STEP_SAVE, name, ex) from ex

        logger.info("City added", city_id=city.id, location=weather.location_name)
        return city
