"""
DynamoDB City Document Store - Coleção de cidades por usuário com aioboto3

Estrutura do item:
{
    "userId": "uid-123",          # partition key
    "cityId": "paris",            # sort key (id canônico)
    "data": "{...}",              # documento City em JSON compacto
    "updatedAt": "2026-10-19T10:00:00+00:00"
}
"""
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from ddtrace.trace import tracer

from application.ports.output.city_document_store_port import ICityDocumentStore
from domain.constants import Storage
from domain.exceptions import PersistenceException
from infrastructure.adapters.output.http.dynamodb_client_manager import DynamoDBClientManager
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

STORE_ERRORS = (BotoCoreError, ClientError, RuntimeError)


class DynamoDBCityDocumentStore(ICityDocumentStore):
    """
    Document store das cidades em DynamoDB

    - get_all: Query paginada pela partition key do usuário
    - set: PutItem (substitui o documento inteiro, last-write-wins)
    - delete: DeleteItem (idempotente por natureza no DynamoDB)
    """

    def __init__(
        self,
        client_manager: DynamoDBClientManager,
        table_name: Optional[str] = None
    ):
        self.client_manager = client_manager
        self.table_name = table_name or Storage.TABLE_NAME

    def _key(self, user_id: str, city_id: str) -> Dict[str, Dict[str, str]]:
        return {
            Storage.PARTITION_KEY: {'S': user_id},
            Storage.SORT_KEY: {'S': city_id}
        }

    @staticmethod
    def _decode_item(item: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        data_json = item.get(Storage.DATA_ATTRIBUTE, {}).get('S')
        if not data_json:
            return None
        try:
            document = json.loads(data_json)
        except ValueError:
            logger.warning(
                "Invalid JSON in city item",
                city_id=item.get(Storage.SORT_KEY, {}).get('S')
            )
            return None
        return document if isinstance(document, dict) else None

    @tracer.wrap(resource="city_store.get_all")
    async def get_all(self, user_id: str) -> List[Dict[str, Any]]:
        documents: List[Dict[str, Any]] = []
        query_kwargs: Dict[str, Any] = {
            'TableName': self.table_name,
            'KeyConditionExpression': '#pk = :uid',
            'ExpressionAttributeNames': {'#pk': Storage.PARTITION_KEY},
            'ExpressionAttributeValues': {':uid': {'S': user_id}}
        }

        try:
            client = await self.client_manager.get_client()
            while True:
                response = await client.query(**query_kwargs)
                for item in response.get('Items', []):
                    document = self._decode_item(item)
                    if document is not None:
                        documents.append(document)

                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                query_kwargs['ExclusiveStartKey'] = last_key

        except STORE_ERRORS as ex:
            raise PersistenceException(
                f"Failed to list cities: {str(ex)}",
                details={"table": self.table_name}
            ) from ex

        return documents

    @tracer.wrap(resource="city_store.get")
    async def get(self, user_id: str, city_id: str) -> Optional[Dict[str, Any]]:
        try:
            client = await self.client_manager.get_client()
            response = await client.get_item(
                TableName=self.table_name,
                Key=self._key(user_id, city_id),
                ConsistentRead=True
            )
        except STORE_ERRORS as ex:
            raise PersistenceException(
                f"Failed to read city: {str(ex)}",
                details={"table": self.table_name, "city_id": city_id}
            ) from ex

        if 'Item' not in response:
            return None

        return self._decode_item(response['Item'])

    @tracer.wrap(resource="city_store.set")
    async def set(self, user_id: str, city_id: str, document: Dict[str, Any]) -> None:
        item = self._key(user_id, city_id)
        item[Storage.DATA_ATTRIBUTE] = {
            'S': json.dumps(document, separators=(',', ':'))
        }
        item['updatedAt'] = {'S': datetime.now(timezone.utc).isoformat()}

        try:
            client = await self.client_manager.get_client()
            await client.put_item(TableName=self.table_name, Item=item)
        except STORE_ERRORS as ex:
            raise PersistenceException(
                f"Failed to save city: {str(ex)}",
                details={"table": self.table_name, "city_id": city_id}
            ) from ex

    @tracer.wrap(resource="city_store.delete")
    async def delete(self, user_id: str, city_id: str) -> None:
        try:
            client = await self.client_manager.get_client()
            await client.delete_item(
                TableName=self.table_name,
                Key=self._key(user_id, city_id)
            )
        except STORE_ERRORS as ex:
            raise PersistenceException(
                f"Failed to delete city: {str(ex)}",
                details={"table": self.table_name, "city_id": city_id}
            ) from ex
