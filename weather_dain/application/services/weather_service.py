from __future__ import annotations

import time
from typing import Callable, Optional

from ...domain.errors import MalformedProviderResponse, ProviderUnavailable
from ...domain.formatting import format_number
from ...infra.history_store import HistoryStore
from ...infra.weather_client import OpenMeteoClient
from ...observability.logging_utils import log_event, log_provider_failure
from ...schemas import (
    AgentInfo,
    CurrentWeather,
    HistoryEntry,
    ToolResult,
    WeatherQueryInput,
)


def _now_ms() -> int:
    return int(time.time() * 1000)


def lookup_current_weather(
    query: WeatherQueryInput,
    agent: AgentInfo,
    *,
    client: OpenMeteoClient,
    store: HistoryStore,
    clock: Optional[Callable[[], int]] = None,
) -> ToolResult:
    log_event(
        "weather_requested",
        agent_id=agent.id,
        latitude=query.latitude,
        longitude=query.longitude,
    )
    try:
        current = client.fetch_current(query.latitude, query.longitude)
    except (ProviderUnavailable, MalformedProviderResponse) as exc:
        log_provider_failure("get-weather", agent.id, exc)
        raise

    # The store is only touched once the fetch has fully succeeded.
    entry = HistoryEntry(
        timestamp=(clock or _now_ms)(),
        latitude=query.latitude,
        longitude=query.longitude,
        temperature=current.temperature_2m,
        wind_speed=current.wind_speed_10m,
    )
    store.append(agent.id, entry)

    weather = CurrentWeather(
        temperature=current.temperature_2m,
        wind_speed=current.wind_speed_10m,
    )
    return ToolResult(
        text=(
            f"The current temperature is {format_number(weather.temperature)}°C "
            f"with wind speed of {format_number(weather.wind_speed)} km/h"
        ),
        data=weather.model_dump(mode="json", by_alias=True),
        ui={},
    )


def lookup_hourly_forecast(
    query: WeatherQueryInput,
    agent: AgentInfo,
    *,
    client: OpenMeteoClient,
) -> ToolResult:
    log_event(
        "forecast_requested",
        agent_id=agent.id,
        latitude=query.latitude,
        longitude=query.longitude,
    )
    try:
        hourly = client.fetch_hourly(query.latitude, query.longitude)
    except (ProviderUnavailable, MalformedProviderResponse) as exc:
        log_provider_failure("get-weather-forecast", agent.id, exc)
        raise

    forecast = hourly.to_forecast()
    return ToolResult(
        text=f"Weather forecast available for the next {len(forecast.times)} hours",
        data=forecast.model_dump(mode="json", by_alias=True),
        ui={},
    )
