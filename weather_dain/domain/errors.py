"""Error types raised by the weather service core."""

from __future__ import annotations

from typing import Optional


class WeatherServiceError(RuntimeError):
    kind = "weather_service_error"


class ProviderUnavailable(WeatherServiceError):
    """The upstream weather call failed in transport or returned non-2xx."""

    kind = "provider_unavailable"

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedProviderResponse(WeatherServiceError):
    """The upstream replied successfully but the payload is unusable."""

    kind = "malformed_provider_response"


class UnknownRegistration(KeyError):
    def __init__(self, kind: str, registration_id: str) -> None:
        super().__init__(registration_id)
        self.kind = kind
        self.registration_id = registration_id

    def __str__(self) -> str:
        return f"unknown {self.kind}: {self.registration_id}"
