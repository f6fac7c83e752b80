"""
WeatherSnapshot Entity - Condições atuais de uma cidade no momento da busca
"""
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from domain.constants import WeatherCondition


@dataclass(frozen=True)
class WeatherSnapshot:
    """Entidade Condições Atuais (unidades métricas)"""
    location_name: str  # Nome reportado pela fonte (pode diferir do digitado)
    country: str  # Código do país (ex: "FR")
    temperature: float  # °C
    feels_like: float  # Sensação térmica (°C)
    temp_min: float  # °C
    temp_max: float  # °C
    humidity: int  # %
    pressure: int  # hPa
    wind_speed: float  # m/s
    condition: str  # Categoria principal (ex: "Clear", "Rain")
    description: str  # Descrição livre (ex: "light rain")
    icon: str  # Código do ícone da fonte (ex: "10d")
    sunrise: int  # Epoch seconds (UTC)
    sunset: int  # Epoch seconds (UTC)
    timezone_offset: int  # Segundos em relação ao UTC
    visibility: Optional[int] = None  # Metros (informativo)

    @property
    def tzinfo(self) -> timezone:
        """Timezone fixo da cidade; nunca usar o fuso do dispositivo"""
        return timezone(timedelta(seconds=self.timezone_offset))

    def local_datetime(self, epoch_seconds: int) -> datetime:
        """Converte epoch seconds para datetime no fuso da cidade"""
        return datetime.fromtimestamp(epoch_seconds, tz=self.tzinfo)

    def is_daytime(self, now: Optional[datetime] = None) -> bool:
        """
        Verifica se é dia no local da cidade

        Compara o instante atual com nascer/pôr do sol, todos deslocados
        pelo mesmo offset da cidade.

        Args:
            now: Instante de referência (aware); padrão: agora em UTC

        Returns:
            True entre o nascer (inclusive) e o pôr do sol (exclusive)
        """
        if now is None:
            now = datetime.now(timezone.utc)
        now_local = int(now.timestamp()) + self.timezone_offset
        sunrise_local = self.sunrise + self.timezone_offset
        sunset_local = self.sunset + self.timezone_offset
        return sunrise_local <= now_local < sunset_local

    def condition_icon(self, now: Optional[datetime] = None) -> str:
        """Chave de ícone para a condição atual"""
        return WeatherCondition.icon_for(self.condition, self.is_daytime(now))

    def theme(self, now: Optional[datetime] = None) -> str:
        """Tema visual (dia/noite) para o fundo da tela"""
        if self.is_daytime(now):
            return WeatherCondition.THEME_DAY
        return WeatherCondition.THEME_NIGHT

    def to_dict(self) -> Dict[str, Any]:
        """Converte para dicionário (documento persistido)"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WeatherSnapshot':
        """
        Reconstrói a partir do documento persistido

        Raises:
            KeyError, TypeError, ValueError: Se o documento estiver incompleto
        """
        visibility = data.get('visibility')
        return cls(
            location_name=str(data['location_name']),
            country=str(data['country']),
            temperature=float(data['temperature']),
            feels_like=float(data['feels_like']),
            temp_min=float(data['temp_min']),
            temp_max=float(data['temp_max']),
            humidity=int(data['humidity']),
            pressure=int(data['pressure']),
            wind_speed=float(data['wind_speed']),
            condition=str(data['condition']),
            description=str(data['description']),
            icon=str(data['icon']),
            sunrise=int(data['sunrise']),
            sunset=int(data['sunset']),
            timezone_offset=int(data['timezone_offset']),
            visibility=int(visibility) if visibility is not None else None
        )
