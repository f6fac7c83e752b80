"""Testes unitários para DynamoDBClientManager"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.adapters.output.http.dynamodb_client_manager import DynamoDBClientManager


def make_client_context(client):
    """Mock do async context manager retornado por session.client(...)"""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=client)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


@pytest.fixture
def manager():
    manager = DynamoDBClientManager(region_name='us-east-1', endpoint_url='http://localhost:8000')
    manager.session = MagicMock()
    return manager


class TestDynamoDBClientManager:

    @pytest.mark.asyncio
    async def test_client_reused_in_same_loop(self, manager):
        client = AsyncMock()
        manager.session.client.return_value = make_client_context(client)

        first = await manager.get_client()
        second = await manager.get_client()

        assert first is client
        assert second is client
        manager.session.client.assert_called_once()
        kwargs = manager.session.client.call_args.kwargs
        assert kwargs['endpoint_url'] == 'http://localhost:8000'
        assert kwargs['region_name'] == 'us-east-1'

    @pytest.mark.asyncio
    async def test_cleanup_closes_client(self, manager):
        context = make_client_context(AsyncMock())
        manager.session.client.return_value = context

        await manager.get_client()
        assert manager.is_open

        await manager.cleanup()

        context.__aexit__.assert_awaited_once()
        assert not manager.is_open

    @pytest.mark.asyncio
    async def test_cleanup_without_client(self, manager):
        await manager.cleanup()
        assert not manager.is_open

    @pytest.mark.asyncio
    async def test_creation_failure_raises_runtime_error(self, manager):
        context = MagicMock()
        context.__aenter__ = AsyncMock(side_effect=ValueError('bad credentials'))
        context.__aexit__ = AsyncMock(return_value=False)
        manager.session.client.return_value = context

        with pytest.raises(RuntimeError, match='Failed to create DynamoDB client'):
            await manager.get_client()
        assert not manager.is_open

    @pytest.mark.asyncio
    async def test_loop_change_recreates_client(self, manager):
        old_context = make_client_context(AsyncMock())
        new_client = AsyncMock()
        manager.session.client.side_effect = [old_context, make_client_context(new_client)]

        await manager.get_client()
        manager._loop_id = -1  # simula cliente aberto em outro event loop

        assert await manager.get_client() is new_client
        old_context.__aexit__.assert_awaited_once()
