"""
Aiohttp Session Manager - Sessão HTTP compartilhada pelos providers
Uma instância por engine, injetada nos providers (sem singleton global)
"""
import asyncio
from typing import Optional

import aiohttp

from domain.constants import API
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class AiohttpSessionManager:
    """
    Gerenciador de sessão aiohttp

    Benefícios:
    - Uma única sessão (pool de conexões) para OpenWeather e geocoding
    - Detecta mudanças de event loop e recria a sessão
    - Criação preguiçosa: nada é aberto até a primeira requisição

    Uso:
        manager = AiohttpSessionManager()
        session = await manager.get_session()
        async with session.get(url) as response:
            data = await response.json()
        await manager.cleanup()
    """

    def __init__(
        self,
        total_timeout: int = API.HTTP_TIMEOUT_TOTAL,
        connect_timeout: int = API.HTTP_TIMEOUT_CONNECT,
        sock_read_timeout: int = API.HTTP_TIMEOUT_READ,
        limit: int = API.HTTP_CONNECTION_LIMIT,
        limit_per_host: int = API.HTTP_CONNECTION_LIMIT_PER_HOST,
        ttl_dns_cache: int = API.DNS_CACHE_TTL
    ):
        """
        Inicializa gerenciador de sessão aiohttp

        Args:
            total_timeout: Timeout total em segundos
            connect_timeout: Timeout de conexão em segundos
            sock_read_timeout: Timeout de leitura em segundos
            limit: Limite total de conexões no pool
            limit_per_host: Limite de conexões por host
            ttl_dns_cache: TTL do cache DNS em segundos
        """
        self.total_timeout = total_timeout
        self.connect_timeout = connect_timeout
        self.sock_read_timeout = sock_read_timeout
        self.limit = limit
        self.limit_per_host = limit_per_host
        self.ttl_dns_cache = ttl_dns_cache

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop_id: Optional[int] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Retorna sessão aiohttp (cria ou reutiliza)

        A sessão é reutilizada dentro do mesmo event loop e recriada
        quando o loop muda (ex: asyncio.run em testes/scripts).

        Returns:
            Sessão aiohttp
        """
        current_loop_id = id(asyncio.get_running_loop())

        if (self._session is not None and
                not self._session.closed and
                self._session_loop_id == current_loop_id):
            return self._session

        if self._session is not None and not self._session.closed:
            logger.info(
                "Event loop changed - recreating session",
                old_loop_id=self._session_loop_id,
                new_loop_id=current_loop_id
            )
            await self._close_session()

        timeout = aiohttp.ClientTimeout(
            total=self.total_timeout,
            connect=self.connect_timeout,
            sock_read=self.sock_read_timeout
        )
        connector = aiohttp.TCPConnector(
            limit=self.limit,
            limit_per_host=self.limit_per_host,
            ttl_dns_cache=self.ttl_dns_cache
        )
        self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
        self._session_loop_id = current_loop_id

        logger.debug(
            "Aiohttp session created",
            loop_id=current_loop_id,
            limit=self.limit,
            limit_per_host=self.limit_per_host
        )
        return self._session

    async def _close_session(self) -> None:
        """Fecha sessão aiohttp existente"""
        if self._session is not None and not self._session.closed:
            try:
                await self._session.close()
            except aiohttp.ClientError as e:
                logger.warning(
                    "Error closing aiohttp session",
                    error=str(e),
                    loop_id=self._session_loop_id
                )
            finally:
                self._session = None
                self._session_loop_id = None

    async def cleanup(self) -> None:
        """Fecha a sessão e libera o pool de conexões"""
        await self._close_session()
        logger.debug("AiohttpSessionManager cleanup completed")
