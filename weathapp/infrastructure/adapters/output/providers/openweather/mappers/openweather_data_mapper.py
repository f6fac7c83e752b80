"""
OpenWeather Data Mapper - Transforma a resposta /weather em WeatherSnapshot
LOCALIZAÇÃO: infrastructure (transforma dados externos → domínio)
"""
from typing import Any, Dict, Optional

from domain.entities.weather_snapshot import WeatherSnapshot
from domain.exceptions import DecodeException


class OpenWeatherDataMapper:
    """
    Mapper para transformar respostas da API OpenWeather em entities de domínio

    Responsabilidade: Traduzir formato OpenWeather → WeatherSnapshot
    Todos os campos renomeados (feels_like, temp_min, ...) são mapeados
    explicitamente aqui; nenhum outro módulo conhece o formato da API.
    """

    @staticmethod
    def map_current_weather(data: Dict[str, Any], city_name: Optional[str] = None) -> WeatherSnapshot:
        """
        Mapeia resposta de current weather (/data/2.5/weather)

        Args:
            data: Resposta raw da API
            city_name: Nome solicitado (apenas para detalhes de erro)

        Returns:
            WeatherSnapshot

        Raises:
            DecodeException: Se algum campo obrigatório estiver ausente ou inválido
        """
        if not isinstance(data, dict):
            raise DecodeException(
                "Unexpected weather payload",
                details={"city_name": city_name, "type": type(data).__name__}
            )

        try:
            main = data['main']
            sys_info = data['sys']
            conditions = data['weather']
            if not conditions:
                raise ValueError("empty 'weather' list")
            condition = conditions[0]
            visibility = data.get('visibility')

            return WeatherSnapshot(
                location_name=str(data['name']),
                country=str(sys_info['country']),
                temperature=float(main['temp']),
                feels_like=float(main['feels_like']),
                temp_min=float(main['temp_min']),
                temp_max=float(main['temp_max']),
                humidity=int(main['humidity']),
                pressure=int(main['pressure']),
                wind_speed=float(data['wind']['speed']),
                condition=str(condition['main']),
                description=str(condition['description']),
                icon=str(condition['icon']),
                sunrise=int(sys_info['sunrise']),
                sunset=int(sys_info['sunset']),
                timezone_offset=int(data['timezone']),
                visibility=int(visibility) if visibility is not None else None
            )
        except (KeyError, IndexError, TypeError, ValueError) as ex:
            raise DecodeException(
                f"Malformed weather payload: {ex}",
                details={"city_name": city_name}
            ) from ex
