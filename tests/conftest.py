import os

# settings are read at import time; the key is required
os.environ.setdefault("OPENWEATHERMAP_API_KEY", "test-key")

import time  # noqa: E402
from typing import Callable, Dict, List  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402

from forecaster.cache import TTLCache  # noqa: E402
from forecaster.geocoding import NominatimGeocoder  # noqa: E402
from forecaster.openweather_client import OpenWeatherClient  # noqa: E402
from forecaster.service import ForecastService  # noqa: E402

NEW_YORK = {"lat": "40.7128", "lon": "-74.0060", "display_name": "New York, United States"}


def current_payload(**overrides) -> Dict:
    now = int(time.time())
    payload = {
        "main": {
            "temp": 20,
            "feels_like": 22,
            "temp_min": 18,
            "temp_max": 23,
            "humidity": 65,
            "pressure": 1015,
        },
        "weather": [{"description": "clear sky"}],
        "wind": {"speed": 5.5},
        "name": "New York",
        "sys": {"country": "US", "sunrise": now, "sunset": now + 12 * 3600},
    }
    payload.update(overrides)
    return payload


def forecast_payload(*temps: float) -> Dict:
    now = int(time.time())
    return {"list": [{"dt": now, "main": {"temp": t}} for t in temps]}


class Upstream:
    """Scripted geocoder + OpenWeatherMap backend for `httpx.MockTransport`."""

    def __init__(self):
        self.places: List[Dict] = [NEW_YORK]
        self.geocode_status = 200
        self.weather_status = 200
        self.forecast_status = 200
        self.current = current_payload()
        self.forecast = forecast_payload(19, 24)
        self.requests: List[httpx.Request] = []

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/search":
            return httpx.Response(self.geocode_status, json=self.places)
        if request.url.path.endswith("/weather"):
            return httpx.Response(self.weather_status, json=self.current)
        if request.url.path.endswith("/forecast"):
            return httpx.Response(self.forecast_status, json=self.forecast)
        return httpx.Response(404)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def transport(upstream) -> httpx.MockTransport:
    return httpx.MockTransport(upstream.handler)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_service(transport, clock) -> Callable[[], ForecastService]:
    def factory() -> ForecastService:
        return ForecastService(
            geocoder=NominatimGeocoder(base_url="https://geocode.test", transport=transport),
            client=OpenWeatherClient(api_key="test-key", base_url="https://owm.test/data/2.5", transport=transport),
            cache=TTLCache(30 * 60, time_func=clock),
        )

    return factory


@pytest.fixture
def service(make_service) -> ForecastService:
    return make_service()
