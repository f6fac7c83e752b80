"""
Testes Unitários - CityWeatherSession (tela de detalhe)
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from application.services.city_weather_session import CityWeatherSession
from application.use_cases import RefreshCityWeatherUseCase
from domain.exceptions import NetworkException, PersistenceException

NIGHT = datetime(2026, 10, 19, 22, 0, tzinfo=timezone.utc)


@pytest.fixture
def refresh_use_case(city_repository, weather_provider, task_runner, fixed_clock):
    return RefreshCityWeatherUseCase(city_repository, weather_provider, task_runner, clock=fixed_clock)


class TestCityWeatherSession:

    def test_initial_without_weather(self, refresh_use_case, make_city, fixed_clock):
        session = CityWeatherSession(make_city('Oslo', with_weather=False), refresh_use_case, clock=fixed_clock)

        assert session.weather is None
        assert session.status_text == 'Pull to refresh to load weather.'
        assert session.is_daytime() is None
        assert session.condition_icon() is None
        assert session.sunrise_local is None

    def test_initial_with_cached_weather(self, refresh_use_case, make_city, fixed_clock):
        session = CityWeatherSession(make_city('Paris'), refresh_use_case, clock=fixed_clock)

        assert session.status_text is None
        assert session.is_daytime() is True
        assert session.condition_icon() == 'sun.max.fill'
        assert session.theme() == 'day'
        assert session.condition_icon(NIGHT) == 'moon.stars.fill'
        assert session.theme(NIGHT) == 'night'

    def test_sunrise_sunset_in_city_timezone(self, refresh_use_case, make_city):
        session = CityWeatherSession(make_city('Paris', timezone_offset=7200), refresh_use_case)

        assert session.sunrise_local.utcoffset() == timedelta(hours=2)
        assert (session.sunrise_local.hour, session.sunrise_local.minute) == (8, 20)
        assert session.sunset_local.hour == 19

    @pytest.mark.asyncio
    async def test_refresh_success(self, refresh_use_case, make_city, task_runner, city_repository, fixed_clock):
        session = CityWeatherSession(make_city('Oslo', with_weather=False), refresh_use_case, clock=fixed_clock)

        assert await session.refresh() is True
        await task_runner.drain()

        assert session.weather.temperature == 21.0
        assert session.last_updated == fixed_clock()
        assert session.status_text is None
        assert session.is_loading is False
        assert (await city_repository.list_all())[0].name == 'Oslo'

    @pytest.mark.asyncio
    async def test_refresh_failure_without_weather(self, refresh_use_case, make_city, weather_provider):
        weather_provider.failures['Oslo'] = NetworkException('offline')
        session = CityWeatherSession(make_city('Oslo', with_weather=False), refresh_use_case)

        assert await session.refresh() is False
        assert session.status_text == 'Could not load weather.'
        assert 'Oslo' in session.last_error
        assert session.is_loading is False

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_cached_weather(self, refresh_use_case, make_city, weather_provider):
        weather_provider.failures['Paris'] = NetworkException('offline')
        city = make_city('Paris')
        session = CityWeatherSession(city, refresh_use_case)

        assert await session.refresh() is False
        assert session.status_text == 'Last update failed.'
        assert session.weather == city.last_weather

    @pytest.mark.asyncio
    async def test_background_save_failure(self, weather_provider, task_runner, make_city):
        repository = MagicMock()
        repository.update_weather_field = AsyncMock(side_effect=PersistenceException('down'))
        use_case = RefreshCityWeatherUseCase(repository, weather_provider, task_runner)
        session = CityWeatherSession(make_city('Paris'), use_case)

        assert await session.refresh() is True
        await task_runner.drain()

        assert session.last_error == 'Failed to save Paris. Please try again.'
