"""
Domain Exceptions - Falhas de rede, decodificação, identidade e persistência
Clean Architecture: Domain layer exceptions
"""


class DomainException(Exception):
    """Base exception for all domain-level errors"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NetworkException(DomainException):
    """Raised on connectivity loss, timeouts or unexpected HTTP status (transient)"""
    pass


class DecodeException(DomainException):
    """Raised when a provider or stored document has an unexpected shape (non-retryable)"""
    pass


class CityNotFoundException(DomainException):
    """Raised when the weather source has no match for a city name"""
    pass


class NotAuthenticatedException(DomainException):
    """Raised when the city repository is used without a bound identity"""
    pass


class PersistenceException(DomainException):
    """Raised when the city document store fails to read or write"""
    pass
