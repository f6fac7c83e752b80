"""
Container - Composição explícita das dependências do app

Cada container monta seu próprio grafo (sessão HTTP, cliente DynamoDB,
repositório, providers, engine); nada é singleton global.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from application.ports.output.city_document_store_port import ICityDocumentStore
from application.ports.output.city_suggestion_provider_port import ICitySuggestionProvider
from application.ports.output.identity_provider_port import IIdentityProvider
from application.ports.output.weather_provider_port import IWeatherProvider
from application.services.background_tasks import BackgroundTaskRunner
from application.services.city_search_session import CitySearchSession
from application.services.city_sync_engine import CitySyncEngine
from application.services.city_weather_session import CityWeatherSession
from application.services.error_message_service import ErrorMessageService
from application.use_cases.add_city_use_case import AddCityUseCase
from application.use_cases.load_cities_use_case import LoadCitiesUseCase
from application.use_cases.refresh_all_weather_use_case import RefreshAllWeatherUseCase
from application.use_cases.refresh_city_weather_use_case import RefreshCityWeatherUseCase
from domain.constants import Search
from domain.entities.city import City
from infrastructure.adapters.output.city_repository import DocumentCityRepository
from infrastructure.adapters.output.http.aiohttp_session_manager import AiohttpSessionManager
from infrastructure.adapters.output.http.dynamodb_client_manager import DynamoDBClientManager
from infrastructure.adapters.output.persistence.dynamodb_city_document_store import DynamoDBCityDocumentStore
from infrastructure.adapters.output.persistence.in_memory_city_document_store import InMemoryCityDocumentStore
from infrastructure.adapters.output.providers import OpenMeteoGeocodingProvider, OpenWeatherProvider
from shared.config import settings
from shared.config.logger_config import get_logger
from shared.utils.datetime_parser import utc_now

logger = get_logger(child=True)

STORAGE_DYNAMODB = "dynamodb"
STORAGE_MEMORY = "memory"


@dataclass
class AppContainer:
    """Grafo montado: engine + fábricas das telas de busca e detalhe"""
    engine: CitySyncEngine
    suggestion_provider: ICitySuggestionProvider
    refresh_city_weather: RefreshCityWeatherUseCase
    error_messages: ErrorMessageService
    task_runner: BackgroundTaskRunner
    clock: Callable[[], datetime] = utc_now
    search_debounce_seconds: float = Search.DEBOUNCE_SECONDS
    session_manager: Optional[AiohttpSessionManager] = None
    client_manager: Optional[DynamoDBClientManager] = None
    _open_searches: List[CitySearchSession] = field(default_factory=list)

    def new_search_session(self) -> CitySearchSession:
        session = CitySearchSession(
            self.suggestion_provider,
            engine=self.engine,
            debounce_seconds=self.search_debounce_seconds,
            on_close=self._forget_search
        )
        self._open_searches.append(session)
        return session

    def _forget_search(self, session: CitySearchSession) -> None:
        if session in self._open_searches:
            self._open_searches.remove(session)

    def new_weather_session(self, city: City) -> CityWeatherSession:
        return CityWeatherSession(
            city,
            self.refresh_city_weather,
            error_messages=self.error_messages,
            clock=self.clock
        )

    async def cleanup(self) -> None:
        """Fecha buscas abertas e encerra o engine (gravações pendentes + conexões)"""
        for search in list(self._open_searches):
            search.close()

        await self.engine.shutdown()
        logger.info("Container cleaned up")


def build_container(
    identity: IIdentityProvider,
    storage_backend: Optional[str] = None,
    weather_provider: Optional[IWeatherProvider] = None,
    suggestion_provider: Optional[ICitySuggestionProvider] = None,
    document_store: Optional[ICityDocumentStore] = None,
    clock: Callable[[], datetime] = utc_now,
    search_debounce_seconds: float = Search.DEBOUNCE_SECONDS
) -> AppContainer:
    """
    Monta o grafo completo

    Args:
        identity: Provider da identidade da sessão
        storage_backend: "dynamodb" ou "memory" (padrão: STORAGE_BACKEND)
        weather_provider, suggestion_provider, document_store: Substituem os adapters reais
        clock: Relógio (testes)
        search_debounce_seconds: Atraso da busca

    Returns:
        AppContainer pronto para uso
    """
    session_manager: Optional[AiohttpSessionManager] = None
    if weather_provider is None or suggestion_provider is None:
        session_manager = AiohttpSessionManager()
    if weather_provider is None:
        weather_provider = OpenWeatherProvider(session_manager)
    if suggestion_provider is None:
        suggestion_provider = OpenMeteoGeocodingProvider(session_manager)

    client_manager: Optional[DynamoDBClientManager] = None
    if document_store is None:
        backend = (storage_backend or settings.STORAGE_BACKEND).lower()
        if backend == STORAGE_MEMORY:
            document_store = InMemoryCityDocumentStore()
        elif backend == STORAGE_DYNAMODB:
            client_manager = DynamoDBClientManager()
            document_store = DynamoDBCityDocumentStore(client_manager)
        else:
            raise ValueError(f"Unknown storage backend: {backend}")

    repository = DocumentCityRepository(identity, document_store, clock=clock)
    task_runner = BackgroundTaskRunner()
    error_messages = ErrorMessageService()

    engine = CitySyncEngine(
        city_repository=repository,
        load_cities=LoadCitiesUseCase(repository),
        add_city=AddCityUseCase(repository, weather_provider, clock=clock),
        refresh_all_weather=RefreshAllWeatherUseCase(
            repository, weather_provider, task_runner, clock=clock
        ),
        task_runner=task_runner,
        error_messages=error_messages
    )

    if session_manager is not None:
        engine.add_shutdown_hook(session_manager.cleanup)
    if client_manager is not None:
        engine.add_shutdown_hook(client_manager.cleanup)

    logger.info(
        "Container built",
        weather_provider=weather_provider.provider_name,
        suggestion_provider=suggestion_provider.provider_name,
        document_store=type(document_store).__name__
    )

    return AppContainer(
        engine=engine,
        suggestion_provider=suggestion_provider,
        refresh_city_weather=RefreshCityWeatherUseCase(
            repository, weather_provider, task_runner, clock=clock
        ),
        error_messages=error_messages,
        task_runner=task_runner,
        clock=clock,
        search_debounce_seconds=search_debounce_seconds,
        session_manager=session_manager,
        client_manager=client_manager
    )


def build_city_sync_engine(identity: IIdentityProvider, **overrides) -> CitySyncEngine:
    """
    Atalho: monta o container e retorna apenas o engine

    engine.shutdown() drena as tarefas e fecha a sessão HTTP e o cliente DynamoDB.
    """
    return build_container(identity, **overrides).engine
