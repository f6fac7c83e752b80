"""
Domain Services - Serviços de lógica de negócio pura (sem conhecimento de APIs externas)
"""

from domain.services.city_ordering import sort_by_date_added, date_added_key

__all__ = [
    'sort_by_date_added',
    'date_added_key'
]
