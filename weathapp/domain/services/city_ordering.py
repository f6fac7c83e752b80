"""
City Ordering - Ordem da lista de cidades visível ao usuário
"""
from datetime import datetime, timezone
from typing import Iterable, List

from domain.entities.city import City

# Registros legados sem dateAdded são tratados como adicionados no início dos tempos
EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def date_added_key(city: City) -> datetime:
    date_added = city.date_added
    if date_added is None:
        return EARLIEST
    if date_added.tzinfo is None:
        return date_added.replace(tzinfo=timezone.utc)
    return date_added


def sort_by_date_added(cities: Iterable[City]) -> List[City]:
    """
    Ordena por date_added ascendente (mais antiga primeiro)

    Ordenação estável: empates preservam a ordem de entrada.
    """
    return sorted(cities, key=date_added_key)
