"""
In-Memory City Document Store - Desenvolvimento local e testes
"""
import copy
from typing import Any, Dict, List, Optional

from application.ports.output.city_document_store_port import ICityDocumentStore


class InMemoryCityDocumentStore(ICityDocumentStore):
    """Document store em memória: {user_id: {city_id: documento}}"""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = copy.deepcopy(initial or {})

    async def get_all(self, user_id: str) -> List[Dict[str, Any]]:
        collection = self._collections.get(user_id, {})
        return [copy.deepcopy(document) for document in collection.values()]

    async def get(self, user_id: str, city_id: str) -> Optional[Dict[str, Any]]:
        document = self._collections.get(user_id, {}).get(city_id)
        return copy.deepcopy(document) if document is not None else None

    async def set(self, user_id: str, city_id: str, document: Dict[str, Any]) -> None:
        self._collections.setdefault(user_id, {})[city_id] = copy.deepcopy(document)

    async def delete(self, user_id: str, city_id: str) -> None:
        self._collections.get(user_id, {}).pop(city_id, None)
