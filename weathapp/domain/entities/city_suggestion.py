"""
CitySuggestion - Sugestão de geocoding exibida na busca (não persistida)
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CitySuggestion:
    """Candidato retornado pela busca de cidades"""
    name: str
    country: str
    region: Optional[str] = None  # Estado/região administrativa

    @property
    def display_name(self) -> str:
        """Texto para desambiguar (ex: "Springfield, Illinois, United States")"""
        if self.region:
            return f"{self.name}, {self.region}, {self.country}"
        return f"{self.name}, {self.country}"
