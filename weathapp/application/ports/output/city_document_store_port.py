"""
Output Port: City Document Store
Coleção de documentos por usuário, chaveada pelo id canônico da cidade
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class ICityDocumentStore(ABC):
    """Interface para o armazenamento de documentos (last-write-wins)"""

    @abstractmethod
    async def get_all(self, user_id: str) -> List[Dict[str, Any]]:
        """Retorna todos os documentos do usuário"""
        pass

    @abstractmethod
    async def get(self, user_id: str, city_id: str) -> Optional[Dict[str, Any]]:
        """Retorna um documento ou None"""
        pass

    @abstractmethod
    async def set(self, user_id: str, city_id: str, document: Dict[str, Any]) -> None:
        """Grava o documento inteiro (substitui o anterior)"""
        pass

    @abstractmethod
    async def delete(self, user_id: str, city_id: str) -> None:
        """Remove o documento (idempotente)"""
        pass
