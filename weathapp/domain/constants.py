"""
Domain Constants - Todas as constantes da aplicação centralizadas
Valores de ambiente vêm de shared.config.settings
"""
from shared.config import settings


class API:
    """Constantes de APIs externas"""

    # OpenWeather current weather
    OPENWEATHER_BASE_URL = settings.OPENWEATHER_BASE_URL
    OPENWEATHER_API_KEY = settings.OPENWEATHER_API_KEY
    OPENWEATHER_UNITS = "metric"

    # Open-Meteo geocoding
    GEOCODING_BASE_URL = settings.GEOCODING_BASE_URL
    GEOCODING_MAX_RESULTS = 20
    GEOCODING_LANGUAGE = "en"

    # Timeouts e limites HTTP
    HTTP_TIMEOUT_TOTAL = 10  # segundos
    HTTP_TIMEOUT_CONNECT = 3  # segundos
    HTTP_TIMEOUT_READ = 8  # segundos
    HTTP_CONNECTION_LIMIT = 20
    HTTP_CONNECTION_LIMIT_PER_HOST = 10
    DNS_CACHE_TTL = 300  # segundos

    # Rate limiting (geocoding)
    RETRY_STATUSES = (429, 503)
    RETRY_ATTEMPTS = 3


class Storage:
    """Constantes do armazenamento de cidades"""

    TABLE_NAME = settings.CITIES_TABLE_NAME
    REGION = settings.AWS_REGION
    ENDPOINT_URL = settings.DYNAMODB_ENDPOINT_URL

    # Cliente aioboto3
    MAX_POOL_CONNECTIONS = 10
    CONNECT_TIMEOUT = 3  # segundos
    READ_TIMEOUT = 5  # segundos
    MAX_ATTEMPTS = 2

    PARTITION_KEY = "userId"
    SORT_KEY = "cityId"
    DATA_ATTRIBUTE = "data"


class Search:
    """Constantes da busca de cidades (tela de adicionar cidade)"""

    DEBOUNCE_SECONDS = settings.SEARCH_DEBOUNCE_SECONDS
    MIN_QUERY_LENGTH = 2

    PROMPT_EMPTY = "Start typing a city name…"
    PROMPT_TOO_SHORT = "Type at least 2 letters"
    STATUS_SEARCHING = "Searching…"
    STATUS_NO_RESULTS = "No cities found"
    STATUS_FAILED = "Something went wrong. Please try again."


class Detail:
    """Mensagens da tela de detalhe de uma cidade"""

    STATUS_EMPTY = "Pull to refresh to load weather."
    STATUS_LOADING = "Loading…"
    STATUS_LOAD_FAILED = "Could not load weather."
    STATUS_UPDATE_FAILED = "Last update failed."


class WeatherCondition:
    """
    Mapeamento da categoria principal do OpenWeather (weather[0].main)
    para a chave de ícone exibida
    """

    ICON_DEFAULT = "cloud.fill"
    ICON_CLEAR_DAY = "sun.max.fill"
    ICON_CLEAR_NIGHT = "moon.stars.fill"

    ICONS = {
        "clouds": "cloud.fill",
        "rain": "cloud.rain.fill",
        "drizzle": "cloud.rain.fill",
        "snow": "cloud.snow.fill",
        "thunderstorm": "cloud.bolt.rain.fill",
        "mist": "cloud.fog.fill",
        "fog": "cloud.fog.fill",
        "haze": "cloud.fog.fill",
        "smoke": "cloud.fog.fill",
        "dust": "cloud.fog.fill",
    }

    THEME_DAY = "day"
    THEME_NIGHT = "night"

    @staticmethod
    def icon_for(condition: str, is_day: bool) -> str:
        """
        Retorna a chave de ícone para a categoria (case-insensitive)

        Args:
            condition: Categoria principal (ex: "Clear", "Rain")
            is_day: True se é dia no local da cidade

        Returns:
            Chave do ícone
        """
        key = (condition or "").strip().lower()
        if key == "clear":
            return WeatherCondition.ICON_CLEAR_DAY if is_day else WeatherCondition.ICON_CLEAR_NIGHT
        return WeatherCondition.ICONS.get(key, WeatherCondition.ICON_DEFAULT)
