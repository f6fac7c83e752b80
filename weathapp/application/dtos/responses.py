"""Response DTOs - Contratos de saída dos use cases e estado observável"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from domain.entities.city import City
from domain.entities.weather_snapshot import WeatherSnapshot


@dataclass(frozen=True)
class CityListState:
    """Snapshot imutável do estado da lista entregue aos observadores"""
    cities: Tuple[City, ...] = ()
    is_loading: bool = False
    last_error: Optional[str] = None

    @property
    def city_names(self) -> Tuple[str, ...]:
        return tuple(city.name for city in self.cities)


@dataclass(frozen=True)
class RefreshFailure:
    """Falha isolada de uma cidade durante o refresh em lote"""
    city_name: str
    error: Exception


@dataclass(frozen=True)
class RefreshAllResult:
    """Resultado do refresh em lote (lista já reordenada)"""
    cities: Tuple[City, ...]
    failures: Tuple[RefreshFailure, ...] = field(default_factory=tuple)

    @property
    def refreshed_count(self) -> int:
        return len(self.cities) - len(self.failures)

    @property
    def failed_names(self) -> Tuple[str, ...]:
        return tuple(failure.city_name for failure in self.failures)


@dataclass(frozen=True)
class RefreshCityResult:
    """Resultado do refresh de uma única cidade"""
    city: City
    weather: WeatherSnapshot
    fetched_at: datetime
