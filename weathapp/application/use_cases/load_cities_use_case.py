"""
Async Use Case: Load Cities
Lista do usuário ordenada por data de inclusão
"""
from typing import List

from ddtrace.trace import tracer

from application.ports.input.load_cities_port import ILoadCitiesUseCase
from application.ports.output.city_repository_port import ICityRepository
from domain.entities.city import City
from domain.services.city_ordering import sort_by_date_added


class LoadCitiesUseCase(ILoadCitiesUseCase):
    """Async use case: Load the user's cities sorted by date_added"""

    def __init__(self, city_repository: ICityRepository):
        self.city_repository = city_repository

    @tracer.wrap(resource="use_case.load_cities")
    async def execute(self) -> List[City]:
        cities = await self.city_repository.list_all()
        return sort_by_date_added(cities)
