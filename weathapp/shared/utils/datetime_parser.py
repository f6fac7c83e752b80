"""
DateTime Parser Utility
Timestamps persistidos são sempre ISO 8601 em UTC
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Instante atual (aware, UTC)"""
    return datetime.now(timezone.utc)


class DateTimeParser:
    """Parse/format de timestamps dos documentos de cidade"""

    @staticmethod
    def from_iso(value: Optional[str]) -> Optional[datetime]:
        """
        Parse de string ISO 8601

        Args:
            value: Ex: "2026-10-19T10:00:00+00:00" ou "2026-10-19T10:00:00Z"

        Returns:
            Datetime aware (naive é interpretado como UTC) ou None se vazio

        Raises:
            ValueError: Se o formato for inválido

        Examples:
            >>> DateTimeParser.from_iso("2026-10-19T10:00:00Z")
            datetime.datetime(2026, 10, 19, 10, 0, tzinfo=datetime.timezone.utc)
        """
        if not value:
            return None

        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'

        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @staticmethod
    def to_iso(value: Optional[datetime]) -> Optional[str]:
        """Formata em ISO 8601 UTC (naive é interpretado como UTC)"""
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
