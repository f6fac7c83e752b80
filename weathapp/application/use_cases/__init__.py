"""Application Use Cases - 100% ASYNC com providers e repositório injetados"""
from .load_cities_use_case import LoadCitiesUseCase
from .add_city_use_case import AddCityUseCase, AddCityFailed
from .refresh_all_weather_use_case import RefreshAllWeatherUseCase
from .refresh_city_weather_use_case import RefreshCityWeatherUseCase

__all__ = [
    'LoadCitiesUseCase',
    'AddCityUseCase',
    'AddCityFailed',
    'RefreshAllWeatherUseCase',
    'RefreshCityWeatherUseCase'
]
