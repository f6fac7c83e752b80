"""
Document City Repository - Cidades do usuário sobre um document store
Coleção por usuário: {userId} → {cityId (nome em minúsculas)} → documento City
"""
from datetime import datetime
from typing import Callable, List

from ddtrace.trace import tracer

from application.ports.output.city_document_store_port import ICityDocumentStore
from application.ports.output.city_repository_port import ICityRepository
from application.ports.output.identity_provider_port import IIdentityProvider
from domain.entities.city import City, canonical_city_id
from domain.entities.weather_snapshot import WeatherSnapshot
from domain.exceptions import NotAuthenticatedException
from shared.config.logger_config import get_logger
from shared.utils.datetime_parser import utc_now
from shared.utils.validators import CityNameValidator

logger = get_logger(child=True)

DECODE_ERRORS = (KeyError, TypeError, ValueError)


class DocumentCityRepository(ICityRepository):
    """
    Repositório de cidades por usuário

    - A identidade é lida a cada chamada (nunca em cache)
    - upsert substitui o documento inteiro
    - update_weather_field faz read-modify-write preservando date_added
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        document_store: ICityDocumentStore,
        clock: Callable[[], datetime] = utc_now
    ):
        self.identity_provider = identity_provider
        self.document_store = document_store
        self.clock = clock

    def _require_user_id(self) -> str:
        user_id = self.identity_provider.current_user_id()
        if not user_id:
            raise NotAuthenticatedException("No authenticated user")
        return user_id

    @tracer.wrap(resource="city_repository.list_all")
    async def list_all(self) -> List[City]:
        user_id = self._require_user_id()
        documents = await self.document_store.get_all(user_id)

        cities: List[City] = []
        for document in documents:
            try:
                cities.append(City.from_document(document))
            except DECODE_ERRORS as ex:
                logger.warning(
                    "Failed to decode city document, skipping",
                    city_name=document.get('name') if isinstance(document, dict) else None,
                    error=str(ex)
                )

        return cities

    @tracer.wrap(resource="city_repository.upsert")
    async def upsert(self, city: City) -> None:
        user_id = self._require_user_id()
        await self.document_store.set(user_id, city.id, city.to_document())
        logger.debug("City saved", city_id=city.id)

    @tracer.wrap(resource="city_repository.update_weather_field")
    async def update_weather_field(self, city_name: str, weather: WeatherSnapshot) -> City:
        user_id = self._require_user_id()
        city_name = CityNameValidator.validate(city_name)
        city_id = canonical_city_id(city_name)
        now = self.clock()

        existing_document = await self.document_store.get(user_id, city_id)

        city = None
        if existing_document is not None:
            try:
                city = City.from_document(existing_document).with_weather(weather, now)
            except DECODE_ERRORS as ex:
                logger.warning(
                    "Failed to decode existing city, overwriting",
                    city_id=city_id,
                    error=str(ex)
                )

        if city is None:
            if existing_document is None:
                logger.warning(
                    "Weather update for unknown city, creating record",
                    city_id=city_id
                )
            city = City(
                name=city_name,
                last_weather=weather,
                last_updated=now,
                date_added=now
            )

        await self.document_store.set(user_id, city.id, city.to_document())
        return city

    @tracer.wrap(resource="city_repository.delete")
    async def delete(self, city_id: str) -> None:
        user_id = self._require_user_id()
        await self.document_store.delete(user_id, city_id)
        logger.debug("City deleted", city_id=city_id)
