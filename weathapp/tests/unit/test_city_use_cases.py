"""
Testes Unitários - Use cases de cidades (load, add, refresh)
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from application.use_cases import (
    AddCityFailed,
    AddCityUseCase,
    LoadCitiesUseCase,
    RefreshAllWeatherUseCase,
    RefreshCityWeatherUseCase,
)
from domain.exceptions import CityNotFoundException, NetworkException, PersistenceException

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


class TestLoadCitiesUseCase:

    @pytest.mark.asyncio
    async def test_returns_sorted(self, city_repository, make_city):
        await city_repository.upsert(make_city('Tokyo', date_added=T0 + timedelta(days=1)))
        await city_repository.upsert(make_city('Oslo', date_added=T0))

        cities = await LoadCitiesUseCase(city_repository).execute()

        assert [c.name for c in cities] == ['Oslo', 'Tokyo']


class TestAddCityUseCase:

    @pytest.fixture
    def use_case(self, city_repository, weather_provider, fixed_clock):
        return AddCityUseCase(city_repository, weather_provider, clock=fixed_clock)

    @pytest.mark.asyncio
    async def test_add_persists_city(self, use_case, city_repository, fixed_clock):
        """Testa clima → City(date_added = last_updated = agora) → upsert"""
        city = await use_case.execute('  Paris ')

        assert city.name == 'Paris'
        assert city.date_added == fixed_clock()
        assert city.last_updated == fixed_clock()
        assert city.last_weather.location_name == 'Paris'
        assert await city_repository.list_all() == [city]

    @pytest.mark.asyncio
    async def test_blank_name_is_noop(self, use_case, weather_provider):
        assert await use_case.execute('   ') is None
        weather_provider.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_weather_failure_stores_nothing(self, use_case, weather_provider, city_repository):
        weather_provider.failures['Atlantis'] = CityNotFoundException('404')

        with pytest.raises(AddCityFailed) as exc_info:
            await use_case.execute('Atlantis')

        assert exc_info.value.step == AddCityFailed.STEP_WEATHER
        assert isinstance(exc_info.value.cause, CityNotFoundException)
        assert await city_repository.list_all() == []

    @pytest.mark.asyncio
    async def test_save_failure(self, weather_provider):
        repository = MagicMock()
        repository.upsert = AsyncMock(side_effect=PersistenceException('down'))

        with pytest.raises(AddCityFailed) as exc_info:
            await AddCityUseCase(repository, weather_provider).execute('Paris')

        assert exc_info.value.step == AddCityFailed.STEP_SAVE
        assert exc_info.value.city_name == 'Paris'


class TestRefreshAllWeatherUseCase:

    @pytest.fixture
    def use_case(self, city_repository, weather_provider, task_runner, fixed_clock):
        return RefreshAllWeatherUseCase(city_repository, weather_provider, task_runner, clock=fixed_clock)

    @pytest.fixture
    def cities(self, make_city):
        return [
            make_city('Oslo', date_added=T0, temperature=1.0),
            make_city('Tokyo', date_added=T0 + timedelta(days=1), temperature=2.0),
            make_city('Lima', date_added=T0 + timedelta(days=2), temperature=3.0),
        ]

    @pytest.mark.asyncio
    async def test_empty_list(self, use_case, weather_provider):
        result = await use_case.execute([])
        assert result.cities == ()
        weather_provider.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_all_succeed(self, use_case, cities, weather_provider, task_runner, city_repository):
        result = await use_case.execute(cities)
        await task_runner.drain()

        assert result.failures == ()
        assert [c.last_weather.temperature for c in result.cities] == [21.0, 21.0, 21.0]
        assert weather_provider.calls == ['Oslo', 'Tokyo', 'Lima']
        assert len(await city_repository.list_all()) == 3

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_cached_entry(self, use_case, cities, weather_provider, task_runner, city_repository):
        """Testa K de N falhando: N entradas, falhas inalteradas, sucessos atualizados"""
        weather_provider.failures['Tokyo'] = NetworkException('timeout')

        result = await use_case.execute(cities)
        await task_runner.drain()

        assert len(result.cities) == 3
        by_name = {c.name: c for c in result.cities}
        assert by_name['Tokyo'] == cities[1]
        assert by_name['Oslo'].last_weather.temperature == 21.0
        assert by_name['Lima'].last_weather.temperature == 21.0
        assert result.failed_names == ('Tokyo',)
        # Apenas os sucessos são gravados
        assert sorted(c.name for c in await city_repository.list_all()) == ['Lima', 'Oslo']

    @pytest.mark.asyncio
    async def test_all_fail_still_completes(self, use_case, cities, weather_provider, task_runner):
        for city in cities:
            weather_provider.failures[city.name] = NetworkException('offline')

        result = await use_case.execute(cities)

        assert list(result.cities) == cities
        assert len(result.failures) == 3
        assert task_runner.pending_count == 0

    @pytest.mark.asyncio
    async def test_input_not_mutated_and_result_sorted(self, use_case, cities):
        shuffled = [cities[2], cities[0], cities[1]]

        result = await use_case.execute(shuffled)

        assert [c.name for c in shuffled] == ['Lima', 'Oslo', 'Tokyo']
        assert [c.name for c in result.cities] == ['Oslo', 'Tokyo', 'Lima']

    @pytest.mark.asyncio
    async def test_persist_error_reported(self, weather_provider, task_runner, cities):
        repository = MagicMock()
        repository.upsert = AsyncMock(side_effect=PersistenceException('down'))
        errors = []

        use_case = RefreshAllWeatherUseCase(repository, weather_provider, task_runner)
        result = await use_case.execute(cities[:1], on_persist_error=errors.append)
        await task_runner.drain()

        assert result.failures == ()
        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_deleted_cities_dropped_and_not_saved(self, use_case, cities, weather_provider, task_runner, city_repository):
        """Testa que cidades removidas durante o lote não são gravadas de volta"""
        weather_provider.failures['Lima'] = NetworkException('timeout')
        deleted = {'tokyo', 'lima'}

        result = await use_case.execute(cities, is_deleted=lambda city_id: city_id in deleted)
        await task_runner.drain()

        assert [c.name for c in result.cities] == ['Oslo']
        assert result.failures == ()
        assert [c.name for c in await city_repository.list_all()] == ['Oslo']


class TestRefreshCityWeatherUseCase:

    @pytest.mark.asyncio
    async def test_refresh_updates_weather_field_only(self, city_repository, weather_provider, task_runner, make_city, fixed_clock):
        """Testa que a gravação usa update_weather_field (preserva date_added salvo)"""
        stored = make_city('Oslo', date_added=T0, temperature=1.0)
        await city_repository.upsert(stored)
        stale_copy = make_city('Oslo', date_added=None, temperature=1.0)

        use_case = RefreshCityWeatherUseCase(city_repository, weather_provider, task_runner, clock=fixed_clock)
        result = await use_case.execute(stale_copy)
        await task_runner.drain()

        assert result.weather.temperature == 21.0
        assert result.fetched_at == fixed_clock()
        saved = (await city_repository.list_all())[0]
        assert saved.date_added == T0
        assert saved.last_weather.temperature == 21.0

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self, city_repository, weather_provider, task_runner, make_city):
        weather_provider.failures['Oslo'] = NetworkException('offline')
        use_case = RefreshCityWeatherUseCase(city_repository, weather_provider, task_runner)

        with pytest.raises(NetworkException):
            await use_case.execute(make_city('Oslo'))
        assert task_runner.pending_count == 0
