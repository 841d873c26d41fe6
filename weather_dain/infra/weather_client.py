"""Open-Meteo forecast endpoint client."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ..domain.errors import MalformedProviderResponse, ProviderUnavailable
from ..schemas import ProviderCurrentBlock, ProviderHourlyBlock
from .config import get_config


CURRENT_FIELDS = ("temperature_2m", "wind_speed_10m")
HOURLY_FIELDS = ("temperature_2m", "relative_humidity_2m", "wind_speed_10m")


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str,
        timeout: float,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def fetch_current(self, latitude: float, longitude: float) -> ProviderCurrentBlock:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
        }
        block = self._get_block(params, "current")
        try:
            return ProviderCurrentBlock.model_validate(block)
        except ValidationError as exc:
            raise MalformedProviderResponse(
                f"invalid current block: {exc.error_count()} error(s)"
            ) from exc

    def fetch_hourly(self, latitude: float, longitude: float) -> ProviderHourlyBlock:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": ",".join(HOURLY_FIELDS),
        }
        block = self._get_block(params, "hourly")
        try:
            return ProviderHourlyBlock.model_validate(block)
        except ValidationError as exc:
            raise MalformedProviderResponse(
                f"invalid hourly block: {exc.error_count()} error(s)"
            ) from exc

    def _get_block(self, params: Dict[str, Any], block_name: str) -> Dict[str, Any]:
        payload = self._request(params)
        if not isinstance(payload, dict):
            raise MalformedProviderResponse("provider reply is not a JSON object")
        block = payload.get(block_name)
        if not isinstance(block, dict):
            raise MalformedProviderResponse(f"provider reply lacks '{block_name}'")
        return block

    def _request(self, params: Dict[str, Any]) -> Any:
        try:
            with httpx.Client(
                timeout=self._timeout, trust_env=False, transport=self._transport
            ) as client:
                response = client.get(self._base_url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ProviderUnavailable(
                f"provider returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailable(f"provider request failed: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedProviderResponse("provider reply is not valid JSON") from exc


def build_weather_client() -> OpenMeteoClient:
    cfg = get_config()
    return OpenMeteoClient(
        base_url=cfg.weather_api_url,
        timeout=cfg.weather_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_weather_client() -> OpenMeteoClient:
    return build_weather_client()
