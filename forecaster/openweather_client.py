import asyncio
import logging
from typing import NamedTuple, Optional, Union

import httpx

from .schemas import Coordinate, ErrorKind, ErrorResult
from .settings import settings

logger = logging.getLogger(__name__)

INVALID_API_KEY = "Invalid API key. Please check your configuration."
LOCATION_NOT_FOUND = "Location not found. Please try a different location."
FETCH_FAILED = "Error fetching weather data. Please try again later."


class UpstreamResponses(NamedTuple):
    current: httpx.Response
    forecast: httpx.Response


def classify_failure(current_status: Optional[int], forecast_status: Optional[int]) -> ErrorResult:
    """Map the status codes of a failed fetch to a caller-facing error.

    A 401 on either call wins over a 404, which wins over anything else.
    `None` stands for a call that never got a response.
    """

    statuses = (current_status, forecast_status)
    if 401 in statuses:
        return ErrorResult(kind=ErrorKind.UNAUTHORIZED, message=INVALID_API_KEY)
    if 404 in statuses:
        return ErrorResult(kind=ErrorKind.LOCATION_NOT_FOUND, message=LOCATION_NOT_FOUND)
    return ErrorResult(kind=ErrorKind.UPSTREAM_FAILURE, message=FETCH_FAILED)


class OpenWeatherClient:
    """Thin async client for the OpenWeatherMap 2.5 data API.

    Parameters
    ----------
    api_key : Optional[str]
        OpenWeatherMap credential sent as `appid`. Defaults to `settings.openweather_api_key`.
    base_url : Optional[str]
        API root, e.g. `http://api.openweathermap.org/data/2.5`.
    transport : Optional[httpx.AsyncBaseTransport]
        Alternative transport, e.g. `httpx.MockTransport` in tests.

    Notes
    -----
    - All requests use `units=metric`.
    - Bodies are not decoded here; that is left to the normalizer so a bad
      payload is reported as a processing failure, not a fetch failure.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key or settings.openweather_api_key
        self.base_url = (base_url or settings.openweather_base_url).rstrip("/")
        self._transport = transport

    def _params(self, coordinate: Coordinate) -> dict:
        return {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "appid": self.api_key,
            "units": "metric",
        }

    async def fetch(self, coordinate: Coordinate) -> Union[UpstreamResponses, ErrorResult]:
        """Fetch current conditions and the 5-day/3-hour forecast for a point.

        Parameters
        ----------
        coordinate : Coordinate
            Point to query.

        Returns
        -------
        Union[UpstreamResponses, ErrorResult]
            Both responses when both are 2xx, otherwise the classified error.
            There is no partial result.
        """

        params = self._params(coordinate)
        async with httpx.AsyncClient(timeout=settings.http_timeout, transport=self._transport) as client:
            current, forecast = await asyncio.gather(
                client.get(f"{self.base_url}/weather", params=params),
                client.get(f"{self.base_url}/forecast", params=params),
                return_exceptions=True,
            )

        statuses = []
        for response in (current, forecast):
            if isinstance(response, httpx.RequestError):
                logger.debug("OpenWeatherMap request failed: %s", response)
                statuses.append(None)
            elif isinstance(response, BaseException):
                raise response
            else:
                statuses.append(response.status_code)

        if all(s is not None and 200 <= s < 300 for s in statuses):
            return UpstreamResponses(current=current, forecast=forecast)
        logger.debug("OpenWeatherMap returned %s/%s", *statuses)
        return classify_failure(*statuses)
