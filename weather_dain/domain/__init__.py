from .errors import (
    MalformedProviderResponse,
    ProviderUnavailable,
    UnknownRegistration,
    WeatherServiceError,
)

__all__ = [
    "MalformedProviderResponse",
    "ProviderUnavailable",
    "UnknownRegistration",
    "WeatherServiceError",
]
