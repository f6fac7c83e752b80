"""Open-Meteo mappers"""
from .openmeteo_geocoding_mapper import OpenMeteoGeocodingMapper

__all__ = ['OpenMeteoGeocodingMapper']
