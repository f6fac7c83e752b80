"""
Testes Unitários - OpenWeatherDataMapper
"""
import copy
import json
from pathlib import Path

import pytest

from domain.exceptions import DecodeException
from infrastructure.adapters.output.providers.openweather.mappers import OpenWeatherDataMapper


@pytest.fixture
def openweather_responses():
    """Load sample responses from fixtures"""
    fixtures_path = Path(__file__).parent.parent / 'fixtures' / 'openweather_sample_responses.json'
    with open(fixtures_path, 'r', encoding='utf-8') as f:
        return json.load(f)


class TestOpenWeatherDataMapper:

    def test_map_current_weather(self, openweather_responses):
        """Testa mapeamento completo (campos renomeados da API)"""
        weather = OpenWeatherDataMapper.map_current_weather(openweather_responses['paris'])

        assert weather.location_name == 'Paris'
        assert weather.country == 'FR'
        assert weather.temperature == 18.52
        assert weather.feels_like == 17.94
        assert weather.temp_min == 16.8
        assert weather.temp_max == 19.93
        assert weather.humidity == 61
        assert weather.pressure == 1015
        assert weather.wind_speed == 3.6
        assert weather.condition == 'Clear'
        assert weather.description == 'clear sky'
        assert weather.icon == '01d'
        assert weather.sunrise == 1792390800
        assert weather.sunset == 1792429200
        assert weather.timezone_offset == 7200
        assert weather.visibility == 10000

    def test_visibility_optional(self, openweather_responses):
        weather = OpenWeatherDataMapper.map_current_weather(openweather_responses['tokyo_without_visibility'])
        assert weather.visibility is None
        assert weather.timezone_offset == 32400

    @pytest.mark.parametrize('path', [
        ('main',),
        ('sys',),
        ('wind',),
        ('timezone',),
        ('name',),
        ('main', 'temp'),
        ('sys', 'sunrise'),
    ])
    def test_missing_field_raises_decode(self, openweather_responses, path):
        """Testa que qualquer campo obrigatório ausente vira DecodeException"""
        data = copy.deepcopy(openweather_responses['paris'])
        target = data
        for key in path[:-1]:
            target = target[key]
        del target[path[-1]]

        with pytest.raises(DecodeException):
            OpenWeatherDataMapper.map_current_weather(data, city_name='Paris')

    def test_empty_weather_list_raises_decode(self, openweather_responses):
        data = copy.deepcopy(openweather_responses['paris'])
        data['weather'] = []
        with pytest.raises(DecodeException):
            OpenWeatherDataMapper.map_current_weather(data)

    def test_non_numeric_value_raises_decode(self, openweather_responses):
        data = copy.deepcopy(openweather_responses['paris'])
        data['main']['humidity'] = 'humid'
        with pytest.raises(DecodeException):
            OpenWeatherDataMapper.map_current_weather(data)

    def test_non_dict_payload(self):
        with pytest.raises(DecodeException) as exc_info:
            OpenWeatherDataMapper.map_current_weather(['not', 'a', 'dict'], city_name='Paris')
        assert exc_info.value.details['city_name'] == 'Paris'
