"""
Configurações centralizadas da aplicação
"""
import os

# OpenWeather (current conditions)
OPENWEATHER_API_KEY = os.environ.get('OPENWEATHER_API_KEY', '')
OPENWEATHER_BASE_URL = os.environ.get('OPENWEATHER_BASE_URL', 'https://api.openweathermap.org/data/2.5')

# Open-Meteo geocoding (não requer chave)
GEOCODING_BASE_URL = os.environ.get('GEOCODING_BASE_URL', 'https://geocoding-api.open-meteo.com/v1')

# Persistência das cidades por usuário
CITIES_TABLE_NAME = os.environ.get('CITIES_TABLE_NAME', 'weathapp-cities')
DYNAMODB_ENDPOINT_URL = os.environ.get('DYNAMODB_ENDPOINT_URL') or None
STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'dynamodb').lower()

# AWS
AWS_REGION = os.environ.get('AWS_REGION', 'sa-east-1')

# Busca de cidades (segundos)
SEARCH_DEBOUNCE_SECONDS = float(os.environ.get('SEARCH_DEBOUNCE_SECONDS', '0.35'))
