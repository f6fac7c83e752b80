"""
Validators Utility
Normalização de entradas de texto (nomes de cidades, consultas de busca)
"""
from typing import Optional, Type


class GenericValidator:
    """Validador genérico para reduzir duplicação de código"""

    @staticmethod
    def validate_not_empty(
        value: str,
        param_name: str,
        exception_class: Type[Exception] = ValueError
    ) -> str:
        """
        Valida se string não está vazia

        Args:
            value: String a validar
            param_name: Nome do parâmetro (para mensagem de erro)
            exception_class: Classe de exceção a lançar

        Returns:
            String validada e trimmed

        Raises:
            exception_class: Se string vazia
        """
        if not value or not value.strip():
            raise exception_class(f"{param_name} cannot be empty")
        return value.strip()


class CityNameValidator:
    """Normaliza nomes de cidades vindos da busca, sugestão ou localização"""

    @staticmethod
    def normalize(name: Optional[str]) -> Optional[str]:
        """
        Remove espaços nas pontas

        Returns:
            Nome limpo, ou None se vazio/só espaços (no-op para quem chama)
        """
        if name is None:
            return None
        cleaned = name.strip()
        return cleaned or None

    @staticmethod
    def validate(name: str) -> str:
        """
        Valida nome obrigatório

        Raises:
            ValueError: Se vazio
        """
        return GenericValidator.validate_not_empty(name, "city_name")


class SearchQueryValidator:
    """Regras da consulta de busca de cidades"""

    @staticmethod
    def is_searchable(query: Optional[str], min_length: int) -> bool:
        """True se a consulta (trimmed) tem ao menos min_length caracteres"""
        return len((query or "").strip()) >= min_length
