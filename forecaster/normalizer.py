"""Flatten OpenWeatherMap current + forecast payloads into a `WeatherRecord`."""
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .schemas import WeatherRecord

NO_DESCRIPTION = "No description available"
NOT_AVAILABLE = "N/A"


def _first(*values: Any) -> Any:
    """Return the first value that is not `None` (a present zero counts)."""

    return next((v for v in values if v is not None), None)


def _clock(epoch: Optional[int]) -> str:
    if epoch is None:
        return NOT_AVAILABLE
    return datetime.fromtimestamp(epoch).strftime("%H:%M")


def todays_temperatures(forecast: Dict[str, Any], today: date) -> List[float]:
    """Temperatures of the forecast samples that fall on `today` (local date)."""

    return [
        item["main"]["temp"]
        for item in forecast["list"]
        if datetime.fromtimestamp(item["dt"]).date() == today
    ]


def normalize(current: Dict[str, Any], forecast: Dict[str, Any], address: str,
              today: Optional[date] = None) -> WeatherRecord:
    """Merge the two upstream payloads into one record.

    Parameters
    ----------
    current : Dict[str, Any]
        Body of `/weather`.
    forecast : Dict[str, Any]
        Body of `/forecast`; only `list[].dt` and `list[].main.temp` are read.
    address : str
        Address as typed by the caller; used when the payload has no city name.
    today : Optional[date]
        Day to compute the temperature range for. Defaults to the server's date.

    Returns
    -------
    WeatherRecord

    Raises
    ------
    Exception
        Anything from a malformed payload (`KeyError`, `TypeError`, ...).
        Callers turn these into a processing error.
    """

    temps = todays_temperatures(forecast, today or date.today())
    main = current.get("main") or {}
    wind = current.get("wind") or {}
    sys = current.get("sys") or {}
    conditions = current.get("weather") or [{}]

    temperature = _first(main.get("temp"), 0)
    return WeatherRecord(
        temperature=temperature,
        temp_min=float(min(temps) if temps else _first(main.get("temp_min"), temperature)),
        temp_max=float(max(temps) if temps else _first(main.get("temp_max"), temperature)),
        feels_like=float(_first(main.get("feels_like"), temperature)),
        humidity=_first(main.get("humidity"), 0),
        pressure=_first(main.get("pressure"), 0),
        wind_speed=_first(wind.get("speed"), 0),
        description=_first(conditions[0].get("description"), NO_DESCRIPTION),
        city=_first(current.get("name"), address),
        country=_first(sys.get("country"), ""),
        sunrise=_clock(sys.get("sunrise")),
        sunset=_clock(sys.get("sunset")),
    )
