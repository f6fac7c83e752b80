"""
Open-Meteo Geocoding Mapper - Transforma resultados de /v1/search em CitySuggestion
"""
from typing import Any, Dict, List

from domain.entities.city_suggestion import CitySuggestion
from domain.exceptions import DecodeException


class OpenMeteoGeocodingMapper:
    """Mapper da API de geocoding do Open-Meteo"""

    @staticmethod
    def map_search_results(data: Dict[str, Any]) -> List[CitySuggestion]:
        """
        Mapeia a resposta de busca para sugestões

        Sem a chave 'results' significa nenhum resultado. Itens sem nome são
        descartados; país ausente vira string vazia.

        Args:
            data: Resposta raw da API

        Returns:
            Sugestões na ordem da API

        Raises:
            DecodeException: Se a resposta não tiver o formato esperado
        """
        if not isinstance(data, dict):
            raise DecodeException(
                "Unexpected geocoding payload",
                details={"type": type(data).__name__}
            )

        results = data.get('results') or []
        if not isinstance(results, list):
            raise DecodeException("Geocoding 'results' is not a list")

        suggestions: List[CitySuggestion] = []
        for item in results:
            if not isinstance(item, dict) or not item.get('name'):
                continue
            suggestions.append(CitySuggestion(
                name=str(item['name']),
                country=str(item.get('country') or ''),
                region=item.get('admin1') or None
            ))

        return suggestions
