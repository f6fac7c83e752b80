"""
DynamoDB Client Manager - Cliente aioboto3 do armazenamento de cidades
Uma instância por container, injetada no document store
"""
import asyncio
from contextlib import AsyncExitStack
from typing import Optional

import aioboto3
from botocore.config import Config

from domain.constants import Storage
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class DynamoDBClientManager:
    """
    Dono do ciclo de vida do cliente DynamoDB

    O cliente aioboto3 é um async context manager; ele fica aberto num
    AsyncExitStack enquanto o event loop for o mesmo e é recriado quando
    o loop muda. Aponte endpoint_url para DynamoDB Local no desenvolvimento.
    """

    def __init__(
        self,
        region_name: str = Storage.REGION,
        endpoint_url: Optional[str] = Storage.ENDPOINT_URL,
        max_pool_connections: int = Storage.MAX_POOL_CONNECTIONS,
        connect_timeout: int = Storage.CONNECT_TIMEOUT,
        read_timeout: int = Storage.READ_TIMEOUT
    ):
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.session = aioboto3.Session()
        self.boto_config = Config(
            region_name=region_name,
            max_pool_connections=max_pool_connections,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={'max_attempts': Storage.MAX_ATTEMPTS, 'mode': 'adaptive'}
        )

        self._client = None
        self._stack: Optional[AsyncExitStack] = None
        self._loop_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def get_client(self):
        """
        Cliente do event loop atual (aberto sob demanda)

        Raises:
            RuntimeError: Fora de um event loop ou falha ao abrir o cliente
        """
        loop_id = id(asyncio.get_running_loop())
        if self._client is not None:
            if self._loop_id == loop_id:
                return self._client
            await self.cleanup()

        stack = AsyncExitStack()
        try:
            self._client = await stack.enter_async_context(
                self.session.client(
                    'dynamodb',
                    region_name=self.region_name,
                    endpoint_url=self.endpoint_url,
                    config=self.boto_config
                )
            )
        except Exception as e:
            await stack.aclose()
            raise RuntimeError(f"Failed to create DynamoDB client: {str(e)}") from e

        self._stack = stack
        self._loop_id = loop_id
        logger.debug("DynamoDB client opened", region=self.region_name, endpoint=self.endpoint_url)
        return self._client

    async def cleanup(self) -> None:
        """Fecha o cliente (se aberto)"""
        stack, self._stack = self._stack, None
        self._client = None
        self._loop_id = None
        if stack is None:
            return
        try:
            await stack.aclose()
        except Exception as e:
            logger.warning("Error closing DynamoDB client", error=str(e))
