"""Open-Meteo Provider Package"""

from infrastructure.adapters.output.providers.openmeteo.openmeteo_geocoding_provider import (
    OpenMeteoGeocodingProvider
)

__all__ = ['OpenMeteoGeocodingProvider']
