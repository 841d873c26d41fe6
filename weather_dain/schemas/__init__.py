from .models import (
    AgentInfo,
    CurrentWeather,
    HistoryEntry,
    HourlyForecast,
    Pricing,
    ProviderCurrentBlock,
    ProviderHourlyBlock,
    ServiceMetadata,
    TableColumn,
    TableDescription,
    ToolResult,
    WeatherQueryInput,
)

__all__ = [
    "AgentInfo",
    "CurrentWeather",
    "HistoryEntry",
    "HourlyForecast",
    "Pricing",
    "ProviderCurrentBlock",
    "ProviderHourlyBlock",
    "ServiceMetadata",
    "TableColumn",
    "TableDescription",
    "ToolResult",
    "WeatherQueryInput",
]
