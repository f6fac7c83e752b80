"""
City Sync Engine - Estado da lista de cidades e orquestração de load/add/refresh/delete

O engine é o único dono do estado (cities, is_loading, last_error). Todas as
mutações acontecem no event loop que executa o engine; chamadas de rede são
aguardadas nesse mesmo loop, então os resultados sempre voltam para ele.
"""
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Iterable, List, Optional, Set

from application.dtos.responses import CityListState
from application.ports.output.city_repository_port import ICityRepository
from application.services.background_tasks import BackgroundTaskRunner
from application.services.error_message_service import ErrorMessageService
from application.use_cases.add_city_use_case import AddCityFailed, AddCityUseCase
from application.use_cases.load_cities_use_case import LoadCitiesUseCase
from application.use_cases.refresh_all_weather_use_case import RefreshAllWeatherUseCase
from domain.entities.city import City
from domain.entities.city_suggestion import CitySuggestion
from shared.config.logger_config import get_logger
from shared.utils.validators import CityNameValidator

logger = get_logger(child=True)

StateListener = Callable[[CityListState], None]
ShutdownHook = Callable[[], Awaitable[None]]


class CitySyncEngine:
    """
    Orquestra repositório + providers para a lista de cidades do usuário

    Operações não são enfileiradas: uma nova operação pode começar enquanto
    outra está em andamento, e as duas se intercalam a cada chamada de rede.
    is_loading fica True enquanto houver ao menos uma operação em andamento.
    """

    def __init__(
        self,
        city_repository: ICityRepository,
        load_cities: LoadCitiesUseCase,
        add_city: AddCityUseCase,
        refresh_all_weather: RefreshAllWeatherUseCase,
        task_runner: BackgroundTaskRunner,
        error_messages: Optional[ErrorMessageService] = None
    ):
        self.city_repository = city_repository
        self.load_cities_use_case = load_cities
        self.add_city_use_case = add_city
        self.refresh_all_use_case = refresh_all_weather
        self.task_runner = task_runner
        self.error_messages = error_messages or ErrorMessageService()

        self._cities: List[City] = []
        self._operations_in_flight = 0
        self._refreshes_in_flight = 0
        self._deleted_during_refresh: Set[str] = set()
        self._last_error: Optional[str] = None
        self._listeners: List[StateListener] = []
        self._shutdown_hooks: List[ShutdownHook] = []

    # ------------------------------------------------------------------ state

    @property
    def cities(self) -> List[City]:
        return list(self._cities)

    @property
    def is_loading(self) -> bool:
        return self._operations_in_flight > 0

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def state(self) -> CityListState:
        return CityListState(
            cities=tuple(self._cities),
            is_loading=self.is_loading,
            last_error=self._last_error
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Registra um observador do estado

        Returns:
            Função que cancela a inscrição
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_error(self) -> None:
        """Usuário dispensou a mensagem de erro"""
        if self._last_error is not None:
            self._last_error = None
            self._publish()

    def _publish(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("City list listener failed")

    def _fail(self, message: str) -> None:
        self._last_error = message
        self._publish()

    def _background_error_handler(self, operation: str, city_name: Optional[str] = None):
        def handle(error: BaseException) -> None:
            self._fail(self.error_messages.for_operation(error, operation, city_name))
        return handle

    @asynccontextmanager
    async def _operation(self, name: str):
        self._operations_in_flight += 1
        self._publish()
        logger.debug("Operation started", operation=name, in_flight=self._operations_in_flight)
        try:
            yield
        finally:
            self._operations_in_flight -= 1
            self._publish()

    # ------------------------------------------------------------- operations

    async def load(self) -> bool:
        """
        Carrega a lista do repositório e substitui o estado

        Em falha o estado anterior é mantido (a lista nunca é esvaziada).

        Returns:
            True se carregou
        """
        async with self._operation("load"):
            return await self._reload()

    async def _reload(self) -> bool:
        try:
            cities = await self.load_cities_use_case.execute()
        except Exception as ex:
            self._fail(self.error_messages.for_operation(ex, "load"))
            return False

        self._cities = list(cities)
        self._last_error = None
        self._publish()
        logger.info("Cities loaded", count=len(self._cities))
        return True

    async def add_city(self, city_name: str) -> bool:
        """
        Adiciona uma cidade: clima → persistência → reload completo

        Nome vazio é no-op (não é erro).

        Returns:
            True se a cidade foi salva e a lista recarregada
        """
        if CityNameValidator.normalize(city_name) is None:
            return False

        async with self._operation("add_city"):
            try:
                city = await self.add_city_use_case.execute(city_name)
            except AddCityFailed as ex:
                if ex.step == AddCityFailed.STEP_WEATHER:
                    message = self.error_messages.for_weather_fetch(ex.cause, ex.city_name)
                else:
                    message = self.error_messages.for_operation(ex.cause, "save", ex.city_name)
                self._fail(message)
                return False

            if city is None:
                return False
            self._deleted_during_refresh.discard(city.id)

            # Recarrega do repositório: a ordem e colisões de id vêm do estado salvo
            return await self._reload()

    async def add_city_from_suggestion(self, suggestion: CitySuggestion) -> bool:
        """Adiciona a cidade escolhida na busca (pelo nome da sugestão)"""
        return await self.add_city(suggestion.name)

    async def refresh_all(self) -> bool:
        """
        Pull-to-refresh: atualiza o clima de todas as cidades, uma por vez

        Falhas individuais mantêm o cache da cidade e não interrompem o lote.

        Returns:
            True se todas as cidades foram atualizadas (False se vazia ou com falhas)
        """
        if not self._cities:
            return False

        async with self._operation("refresh_all"):
            self._refreshes_in_flight += 1
            try:
                result = await self.refresh_all_use_case.execute(
                    tuple(self._cities),
                    on_persist_error=self._background_error_handler("save"),
                    is_deleted=lambda city_id: city_id in self._deleted_during_refresh
                )
            except Exception as ex:
                self._fail(self.error_messages.for_operation(ex, "refresh"))
                return False
            finally:
                self._refreshes_in_flight -= 1
                deleted = set(self._deleted_during_refresh)
                if not self._refreshes_in_flight:
                    self._deleted_during_refresh.clear()

            # Remoções feitas durante o lote não voltam para a lista
            self._cities = [city for city in result.cities if city.id not in deleted]
            self._last_error = self.error_messages.for_refresh_failures(result.failed_names)
            self._publish()
            return not result.failures

    def delete_cities(self, city_ids: Iterable[str]) -> List[str]:
        """
        Remove cidades da lista imediatamente e agenda a remoção no repositório

        Falhas na remoção são reportadas em last_error mas não desfazem a
        remoção local. Precisa ser chamado dentro do event loop.

        Returns:
            Ids efetivamente removidos da lista em memória
        """
        ids = list(dict.fromkeys(city_ids))
        if not ids:
            return []

        wanted = set(ids)
        if self._refreshes_in_flight:
            self._deleted_during_refresh.update(wanted)

        removed = [city for city in self._cities if city.id in wanted]
        if removed:
            self._cities = [city for city in self._cities if city.id not in wanted]
            self._publish()

        names = {city.id: city.name for city in removed}
        for city_id in ids:
            self.task_runner.spawn(
                self.city_repository.delete(city_id),
                name=f"delete-city:{city_id}",
                on_error=self._background_error_handler("delete", names.get(city_id, city_id))
            )

        return [city.id for city in removed]

    def delete_cities_at(self, offsets: Iterable[int]) -> List[str]:
        """Remove pelas posições na lista exibida (swipe-to-delete)"""
        size = len(self._cities)
        ids = [self._cities[index].id for index in offsets if 0 <= index < size]
        return self.delete_cities(ids)

    def add_shutdown_hook(self, hook: ShutdownHook) -> None:
        """Registra um recurso a liberar em shutdown (sessão HTTP, cliente DynamoDB)"""
        self._shutdown_hooks.append(hook)

    async def shutdown(self) -> None:
        """Aguarda gravações/remoções pendentes e libera os recursos registrados"""
        await self.task_runner.drain()

        for hook in self._shutdown_hooks:
            try:
                await hook()
            except Exception as e:
                logger.warning("Shutdown hook failed", error=str(e), error_type=type(e).__name__)
