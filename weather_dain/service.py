"""Wire the weather tools, history context and history widget together."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from .agent.registry import (
    ContextDefinition,
    PinnableDefinition,
    ServiceRegistry,
    ToolDefinition,
)
from .application.services.history_service import (
    build_history_context,
    build_history_widget,
)
from .application.services.weather_service import (
    lookup_current_weather,
    lookup_hourly_forecast,
)
from .infra.config import get_config
from .infra.history_store import HistoryStore, get_history_store
from .infra.weather_client import OpenMeteoClient, get_weather_client
from .schemas import (
    CurrentWeather,
    HourlyForecast,
    Pricing,
    ServiceMetadata,
    WeatherQueryInput,
)


SERVICE_METADATA = ServiceMetadata(
    title="Weather DAIN Service",
    description="A DAIN service for current weather and forecasts using Open-Meteo API",
    version="1.0.0",
    author="Weather DAIN maintainers",
    logo="https://cdn-icons-png.flaticon.com/512/252/252035.png",
    tags=["weather", "forecast", "dain"],
)


def build_service(
    store: Optional[HistoryStore] = None,
    client: Optional[OpenMeteoClient] = None,
    context_limit: Optional[int] = None,
    api_key_configured: Optional[bool] = None,
) -> ServiceRegistry:
    store = store if store is not None else get_history_store()
    client = client if client is not None else get_weather_client()
    cfg = get_config()
    if context_limit is None:
        context_limit = cfg.history_context_limit
    if api_key_configured is None:
        api_key_configured = bool(cfg.dain_api_key)

    registry = ServiceRegistry(SERVICE_METADATA, api_key_configured=api_key_configured)
    registry.register_tool(
        ToolDefinition(
            id="get-weather",
            name="Get Weather",
            description="Fetches current weather for a city",
            input_model=WeatherQueryInput,
            output_model=CurrentWeather,
            handler=lambda query, agent: lookup_current_weather(
                query, agent, client=client, store=store
            ),
            pricing=Pricing(price_per_use=0, currency="USD"),
        )
    )
    registry.register_tool(
        ToolDefinition(
            id="get-weather-forecast",
            name="Get Weather Forecast",
            description="Fetches hourly weather forecast",
            input_model=WeatherQueryInput,
            output_model=HourlyForecast,
            handler=lambda query, agent: lookup_hourly_forecast(
                query, agent, client=client
            ),
            pricing=Pricing(price_per_use=0, currency="USD"),
        )
    )
    registry.register_context(
        ContextDefinition(
            id="weatherHistory",
            name="Weather Search History",
            description="User's previous weather searches",
            provider=lambda agent: build_history_context(
                agent, store=store, limit=context_limit
            ),
        )
    )
    registry.register_pinnable(
        PinnableDefinition(
            id="weatherHistoryButton",
            name="Weather History",
            description="View your weather search history",
            type="button",
            label="History",
            icon="history",
            provider=lambda agent: build_history_widget(agent, store=store),
        )
    )
    return registry


@lru_cache(maxsize=1)
def get_service() -> ServiceRegistry:
    return build_service()
