"""
Configurações e fixtures compartilhadas para testes unitários
"""
from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from application.services.background_tasks import BackgroundTaskRunner
from domain.entities.city import City
from domain.entities.weather_snapshot import WeatherSnapshot
from infrastructure.adapters.output.city_repository import DocumentCityRepository
from infrastructure.adapters.output.identity.session_identity_provider import SessionIdentityProvider
from infrastructure.adapters.output.persistence.in_memory_city_document_store import InMemoryCityDocumentStore

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_weather_snapshot():
    """
    Factory fixture para criar WeatherSnapshot com valores padrão

    Usage:
        def test_something(make_weather_snapshot):
            weather = make_weather_snapshot(temperature=30.0)
    """
    def _make(
        location_name: str = 'Paris',
        country: str = 'FR',
        temperature: float = 18.5,
        feels_like: float = 17.9,
        temp_min: float = 16.0,
        temp_max: float = 20.0,
        humidity: int = 60,
        pressure: int = 1015,
        wind_speed: float = 3.6,
        condition: str = 'Clear',
        description: str = 'clear sky',
        icon: str = '01d',
        sunrise: int = 1792390800,  # 2026-10-19T06:20:00Z
        sunset: int = 1792429200,  # 2026-10-19T17:00:00Z
        timezone_offset: int = 7200,
        visibility: Optional[int] = 10000
    ) -> WeatherSnapshot:
        return WeatherSnapshot(
            location_name=location_name,
            country=country,
            temperature=temperature,
            feels_like=feels_like,
            temp_min=temp_min,
            temp_max=temp_max,
            humidity=humidity,
            pressure=pressure,
            wind_speed=wind_speed,
            condition=condition,
            description=description,
            icon=icon,
            sunrise=sunrise,
            sunset=sunset,
            timezone_offset=timezone_offset,
            visibility=visibility
        )

    return _make


@pytest.fixture
def make_city(make_weather_snapshot):
    """
    Factory fixture para criar City

    Usage:
        city = make_city('Oslo', date_added=datetime(...), with_weather=False)
    """
    def _make(
        name: str = 'Paris',
        date_added: Optional[datetime] = FIXED_NOW,
        with_weather: bool = True,
        last_updated: Optional[datetime] = FIXED_NOW,
        **weather_overrides
    ) -> City:
        if not with_weather:
            return City(name=name, date_added=date_added)
        weather_overrides.setdefault('location_name', name)
        return City(
            name=name,
            last_weather=make_weather_snapshot(**weather_overrides),
            last_updated=last_updated,
            date_added=date_added
        )

    return _make


@pytest.fixture
def fixed_clock():
    """Relógio fixo (FIXED_NOW)"""
    return lambda: FIXED_NOW


@pytest.fixture
def identity():
    """Sessão autenticada como user-1"""
    return SessionIdentityProvider(user_id='user-1')


@pytest.fixture
def document_store():
    return InMemoryCityDocumentStore()


@pytest.fixture
def city_repository(identity, document_store, fixed_clock):
    """Repositório real sobre o store em memória"""
    return DocumentCityRepository(identity, document_store, clock=fixed_clock)


@pytest.fixture
def task_runner():
    return BackgroundTaskRunner()


@pytest.fixture
def weather_provider(make_weather_snapshot):
    """
    Mock do provider de clima: devolve um snapshot com o nome pedido

    Falhas por cidade: weather_provider.failures['Oslo'] = NetworkException(...)
    """
    provider = MagicMock()
    provider.provider_name = 'FakeWeather'
    provider.failures = {}
    provider.calls = []

    async def fetch(city_name):
        provider.calls.append(city_name)
        error = provider.failures.get(city_name)
        if error is not None:
            raise error
        return make_weather_snapshot(location_name=city_name, temperature=21.0)

    provider.fetch = AsyncMock(side_effect=fetch)
    return provider


@pytest.fixture
def suggestion_provider():
    """Mock do provider de sugestões (search configurável por teste)"""
    provider = MagicMock()
    provider.provider_name = 'FakeGeocoding'
    provider.search = AsyncMock(return_value=[])
    return provider
