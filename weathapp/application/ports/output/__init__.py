"""
Output Ports - Interfaces para comunicação com infraestrutura externa
Define contratos que devem ser implementados pelos adapters de saída
"""

from .weather_provider_port import IWeatherProvider
from .city_suggestion_provider_port import ICitySuggestionProvider
from .city_repository_port import ICityRepository
from .city_document_store_port import ICityDocumentStore
from .identity_provider_port import IIdentityProvider
