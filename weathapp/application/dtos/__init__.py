"""Application DTOs - Estado observável e resultados dos use cases"""

from application.dtos.responses import (
    CityListState,
    RefreshFailure,
    RefreshAllResult,
    RefreshCityResult
)

__all__ = [
    'CityListState',
    'RefreshFailure',
    'RefreshAllResult',
    'RefreshCityResult'
]
