"""
City Entity - Entidade de domínio que representa uma cidade acompanhada pelo usuário
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from domain.entities.weather_snapshot import WeatherSnapshot
from shared.utils.datetime_parser import DateTimeParser


def canonical_city_id(name: str) -> str:
    """ID canônico (chave de persistência): nome em minúsculas"""
    return name.lower()


@dataclass(frozen=True)
class City:
    """Entidade Cidade"""
    name: str
    last_weather: Optional[WeatherSnapshot] = None
    last_updated: Optional[datetime] = None
    date_added: Optional[datetime] = None  # Ausente em registros legados

    def __post_init__(self):
        if (self.last_weather is None) != (self.last_updated is None):
            raise ValueError("last_weather and last_updated must be set together")

    @property
    def id(self) -> str:
        return canonical_city_id(self.name)

    def has_weather(self) -> bool:
        return self.last_weather is not None

    def with_weather(self, weather: WeatherSnapshot, fetched_at: datetime) -> 'City':
        """
        Retorna cópia com o clima atualizado

        Apenas last_weather/last_updated mudam; name e date_added são preservados.
        """
        return replace(self, last_weather=weather, last_updated=fetched_at)

    def to_document(self) -> Dict[str, Any]:
        """Converte para o documento persistido (chaves camelCase)"""
        document: Dict[str, Any] = {'name': self.name}
        if self.last_weather is not None:
            document['lastWeather'] = self.last_weather.to_dict()
            document['lastUpdated'] = DateTimeParser.to_iso(self.last_updated)
        if self.date_added is not None:
            document['dateAdded'] = DateTimeParser.to_iso(self.date_added)
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'City':
        """
        Reconstrói a cidade a partir do documento persistido

        Clima sem lastUpdated é descartado; a cidade continua na lista.

        Raises:
            KeyError, TypeError, ValueError: Se o documento estiver malformado
        """
        weather_data = document.get('lastWeather')
        last_updated = document.get('lastUpdated')
        date_added = document.get('dateAdded')

        last_weather = None
        if weather_data and last_updated:
            last_weather = WeatherSnapshot.from_dict(weather_data)

        return cls(
            name=str(document['name']),
            last_weather=last_weather,
            last_updated=DateTimeParser.from_iso(last_updated) if last_weather else None,
            date_added=DateTimeParser.from_iso(date_added)
        )
