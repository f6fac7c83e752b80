"""Infrastructure Providers - Clima atual (OpenWeather) e geocoding (Open-Meteo)"""

from infrastructure.adapters.output.providers.openweather.openweather_provider import OpenWeatherProvider
from infrastructure.adapters.output.providers.openmeteo.openmeteo_geocoding_provider import OpenMeteoGeocodingProvider

__all__ = ['OpenWeatherProvider', 'OpenMeteoGeocodingProvider']
