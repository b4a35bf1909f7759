from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class Coordinate(BaseModel):
    """A geographic point in decimal degrees, as returned by the geocoder."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class WeatherRecord(BaseModel):
    """Normalized weather for one address.

    Notes
    -----
    - Temperatures are in °C and wind speed in m/s (OpenWeatherMap `units=metric`).
    - `temp_min`/`temp_max` are today's extremes from the forecast series when
      any same-day samples exist.
    - `sunrise`/`sunset` are `HH:MM` in server-local time, or `"N/A"`.
    """

    model_config = ConfigDict(frozen=True)

    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: float
    pressure: float
    wind_speed: float
    description: str
    city: str
    country: str
    sunrise: str
    sunset: str


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    LOCATION_NOT_FOUND = "location_not_found"
    UPSTREAM_FAILURE = "upstream_failure"
    PROCESSING_FAILURE = "processing_failure"


class ErrorResult(BaseModel):
    """A failed lookup. Only `message` is shown to the caller."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str


ForecastResult = Union[WeatherRecord, ErrorResult]


class ForecastView(BaseModel):
    data: WeatherRecord
    from_cache: bool


class RedirectView(BaseModel):
    target: Literal["index"] = "index"
    alert: str


ViewResult = Union[ForecastView, RedirectView]


class IndexResponse(BaseModel):
    service: str
    alert: str | None = None
