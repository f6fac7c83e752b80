"""
Background Task Runner - Operações fire-and-forget (persistência após refresh/delete)
"""
import asyncio
from typing import Awaitable, Callable, Optional, Set

from shared.config.logger_config import get_logger

logger = get_logger(child=True)

ErrorCallback = Callable[[BaseException], None]


class BackgroundTaskRunner:
    """
    Agenda coroutines sem que o chamador aguarde o resultado

    - Mantém referência forte até a conclusão (tasks não são coletadas no meio)
    - Falhas são logadas e repassadas ao callback on_error
    - drain() aguarda tudo que está pendente (shutdown e testes)
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def spawn(
        self,
        coro: Awaitable,
        name: str,
        on_error: Optional[ErrorCallback] = None
    ) -> asyncio.Task:
        """
        Agenda a coroutine no event loop atual

        Args:
            coro: Coroutine a executar
            name: Nome da operação (logs)
            on_error: Chamado no event loop quando a operação falha

        Returns:
            Task criada
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(lambda done: self._on_done(done, on_error))
        return task

    def _on_done(self, task: asyncio.Task, on_error: Optional[ErrorCallback]) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.debug("Background task cancelled", task=task.get_name())
            return

        error = task.exception()
        if error is None:
            logger.debug("Background task completed", task=task.get_name())
            return

        logger.warning(
            "Background task failed",
            task=task.get_name(),
            error=str(error),
            error_type=type(error).__name__
        )
        if on_error is not None:
            try:
                on_error(error)
            except Exception:
                logger.exception("Background task error callback failed", task=task.get_name())

    async def drain(self) -> None:
        """Aguarda todas as tasks pendentes (inclusive as agendadas durante a espera)"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self) -> None:
        """Cancela tasks pendentes e aguarda o encerramento"""
        for task in list(self._tasks):
            task.cancel()
        await self.drain()
