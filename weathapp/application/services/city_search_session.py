"""
City Search Session - Busca de cidades com debounce (tela de adicionar cidade)
"""
import asyncio
from typing import Callable, List, Optional

from application.ports.output.city_suggestion_provider_port import ICitySuggestionProvider
from domain.constants import Search
from domain.entities.city_suggestion import CitySuggestion
from shared.config.logger_config import get_logger
from shared.utils.validators import SearchQueryValidator

logger = get_logger(child=True)


class CitySearchSession:
    """
    Estado da busca: suggestions, status_text, is_loading

    Cada mudança do texto cancela a busca agendada. Resultados só são
    aplicados se a consulta ainda for a atual quando a busca termina.
    """

    def __init__(
        self,
        suggestion_provider: ICitySuggestionProvider,
        engine=None,
        debounce_seconds: float = Search.DEBOUNCE_SECONDS,
        min_query_length: int = Search.MIN_QUERY_LENGTH,
        on_close: Optional[Callable[['CitySearchSession'], None]] = None
    ):
        self.suggestion_provider = suggestion_provider
        self.engine = engine
        self.debounce_seconds = debounce_seconds
        self.min_query_length = min_query_length
        self.on_close = on_close

        self.suggestions: List[CitySuggestion] = []
        self.status_text: Optional[str] = Search.PROMPT_EMPTY
        self.is_loading = False

        self._query = ""
        self._pending: Optional[asyncio.Task] = None
        self._listeners: List[Callable[['CitySearchSession'], None]] = []

    @property
    def query(self) -> str:
        return self._query

    def subscribe(self, listener: Callable[['CitySearchSession'], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Search listener failed")

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def on_query_changed(self, text: str) -> None:
        """
        Chamado a cada tecla; precisa rodar dentro do event loop

        Args:
            text: Texto atual do campo de busca
        """
        self._cancel_pending()
        self._query = (text or "").strip()

        if not self._query:
            self._show_prompt(Search.PROMPT_EMPTY)
            return

        if not SearchQueryValidator.is_searchable(self._query, self.min_query_length):
            self._show_prompt(Search.PROMPT_TOO_SHORT)
            return

        self.is_loading = True
        self.status_text = Search.STATUS_SEARCHING
        self._publish()
        self._pending = asyncio.get_running_loop().create_task(
            self._debounced_search(self._query),
            name=f"city-search:{self._query}"
        )

    def _show_prompt(self, text: str) -> None:
        self.suggestions = []
        self.is_loading = False
        self.status_text = text
        self._publish()

    async def _debounced_search(self, query: str) -> None:
        await asyncio.sleep(self.debounce_seconds)

        try:
            results = await self.suggestion_provider.search(query)
        except Exception as ex:
            if query != self._query:
                return
            logger.warning(
                "City search failed",
                query=query,
                error=str(ex),
                error_type=type(ex).__name__
            )
            self.suggestions = []
            self.is_loading = False
            self.status_text = Search.STATUS_FAILED
            self._publish()
            return

        if query != self._query:
            logger.debug("Discarding stale search results", query=query, current=self._query)
            return

        self.suggestions = list(results)
        self.is_loading = False
        self.status_text = None if self.suggestions else Search.STATUS_NO_RESULTS
        self._publish()

    async def wait_idle(self) -> None:
        """Aguarda a busca agendada terminar (se houver)"""
        pending = self._pending
        if pending is None:
            return
        try:
            await pending
        except asyncio.CancelledError:
            if not pending.cancelled():
                raise

    async def select(self, suggestion: CitySuggestion) -> bool:
        """Adiciona a cidade escolhida à lista do usuário"""
        if self.engine is None:
            raise RuntimeError("Search session has no engine to add cities to")
        self.close()
        return await self.engine.add_city_from_suggestion(suggestion)

    def close(self) -> None:
        """Cancela a busca pendente (tela fechada)"""
        self._cancel_pending()
        self.is_loading = False
        if self.on_close is not None:
            self.on_close(self)
