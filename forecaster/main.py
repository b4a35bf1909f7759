import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import Depends, FastAPI, Query
from fastapi.responses import RedirectResponse
from .schemas import ForecastView, IndexResponse, RedirectView
from .service import ForecastService
from .settings import settings
from .views import handle_forecast

SERVICE_NAME = "Weather Forecast API"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging(settings.log_level)

app = FastAPI(title=SERVICE_NAME, version="1.0.0")
_service = ForecastService()


def get_service() -> ForecastService:
    """Shared pipeline instance; overridden in tests."""

    return _service


@app.get("/health")
async def health():
    """Liveness probe for the service.

    Returns
    -------
    dict
        A fixed payload `{"status": "ok"}` used by orchestrators and uptime checks.
    """

    return {"status": "ok"}


@app.get("/", response_model=IndexResponse)
async def index(alert: Optional[str] = Query(None, description="Message left by a failed forecast request")):
    """Landing endpoint; failed forecast requests redirect here with an `alert`."""

    return IndexResponse(service=SERVICE_NAME, alert=alert)


@app.get("/forecast", response_model=ForecastView)
async def forecast(
        address: Optional[str] = Query(None, description="Free-form address: city, postal code or street address"),
        refresh: bool = Query(False, description="Bypass the cached record and query upstream again"),
        service: ForecastService = Depends(get_service),
):
    """Return current weather and today's temperature range for an address.

    Parameters
    ----------
    address : Optional[str]
        Address to look up. Matching against the cache ignores case and extra whitespace.
    refresh : bool
        Force a fresh upstream lookup.

    Returns
    -------
    ForecastView
        `data` (normalized weather record) and `from_cache`.

    Notes
    -----
    - Every failure (blank address, unknown location, bad API key, provider
      error, malformed payload) becomes a 303 redirect to `/?alert=<message>`.
    - Successful records are cached for 30 minutes by default.

    Examples
    --------
    - `GET /forecast?address=New%20York`
    - `GET /forecast?address=10001&refresh=true`
    """

    view = await handle_forecast(address, service, refresh=refresh)
    if isinstance(view, RedirectView):
        return RedirectResponse(url=f"/?{urlencode({'alert': view.alert})}", status_code=303)
    return view
