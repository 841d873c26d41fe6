from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from ..domain.formatting import as_reported


class AgentInfo(BaseModel):
    """Identity attached to every invocation by the agent platform."""

    id: str = Field(..., min_length=1, description="Opaque agent identifier.")


class WeatherQueryInput(BaseModel):
    """Input parameters for the weather request"""

    model_config = ConfigDict(strict=True)

    latitude: float = Field(..., description="Latitude coordinate")
    longitude: float = Field(..., description="Longitude coordinate")


class HistoryEntry(BaseModel):
    """One recorded current-conditions lookup."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: int = Field(..., description="Milliseconds since epoch at write time.")
    latitude: float
    longitude: float
    temperature: float
    wind_speed: float = Field(..., alias="windSpeed")

    @field_serializer("latitude", "longitude", "temperature", "wind_speed")
    def _serialize_number(self, value: float):
        return as_reported(value)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class CurrentWeather(BaseModel):
    """Current weather information"""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(..., description="Current temperature in Celsius")
    wind_speed: float = Field(
        ..., alias="windSpeed", description="Current wind speed in km/h"
    )

    @field_serializer("temperature", "wind_speed")
    def _serialize_number(self, value: float):
        return as_reported(value)


class HourlyForecast(BaseModel):
    """Hourly weather forecast"""

    model_config = ConfigDict(populate_by_name=True)

    times: List[str] = Field(..., description="Forecast times")
    temperatures: List[float] = Field(
        ..., description="Temperature forecasts in Celsius"
    )
    wind_speeds: List[float] = Field(
        ..., alias="windSpeeds", description="Wind speed forecasts in km/h"
    )
    humidity: List[float] = Field(
        ..., description="Relative humidity forecasts in %"
    )


class ProviderCurrentBlock(BaseModel):
    """`current` block of an Open-Meteo forecast reply."""

    time: Optional[str] = None
    temperature_2m: float
    wind_speed_10m: float


class ProviderHourlyBlock(BaseModel):
    """`hourly` block of an Open-Meteo forecast reply."""

    time: List[str]
    temperature_2m: List[float]
    wind_speed_10m: List[float]
    relative_humidity_2m: List[float]

    @model_validator(mode="after")
    def check_parallel_lengths(self) -> "ProviderHourlyBlock":
        lengths = {
            "time": len(self.time),
            "temperature_2m": len(self.temperature_2m),
            "wind_speed_10m": len(self.wind_speed_10m),
            "relative_humidity_2m": len(self.relative_humidity_2m),
        }
        if len(set(lengths.values())) > 1:
            raise ValueError(f"hourly arrays differ in length: {lengths}")
        return self

    def to_forecast(self) -> HourlyForecast:
        return HourlyForecast(
            times=list(self.time),
            temperatures=list(self.temperature_2m),
            wind_speeds=list(self.wind_speed_10m),
            humidity=list(self.relative_humidity_2m),
        )


class ToolResult(BaseModel):
    """Canonical payload returned by tools and widgets to the platform."""

    text: str
    data: Any = Field(default_factory=dict)
    ui: Dict[str, Any] = Field(default_factory=dict)


class TableColumn(BaseModel):
    key: str
    header: str
    type: Literal["text", "number", "link"] = "text"
    width: str = "25%"


class TableDescription(BaseModel):
    columns: List[TableColumn]
    rows: List[Dict[str, str]] = Field(default_factory=list)


class Pricing(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price_per_use: float = Field(default=0, alias="pricePerUse", ge=0)
    currency: str = "USD"


class ServiceMetadata(BaseModel):
    title: str
    description: str
    version: str
    author: str
    logo: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
