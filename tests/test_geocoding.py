import httpx
import pytest

from forecaster.geocoding import NominatimGeocoder


@pytest.fixture
def geocoder(transport):
    return NominatimGeocoder(base_url="https://geocode.test", user_agent="tests", transport=transport)


@pytest.mark.asyncio
async def test_returns_first_match(geocoder, upstream):
    coordinate = await geocoder.coordinates("New York")

    assert coordinate.latitude == 40.7128
    assert coordinate.longitude == -74.006
    request = upstream.requests[0]
    assert request.url.params["q"] == "New York"
    assert request.url.params["format"] == "json"
    assert request.url.params["limit"] == "1"
    assert request.headers["User-Agent"] == "tests"


@pytest.mark.asyncio
async def test_no_match_is_none(geocoder, upstream):
    upstream.places = []
    assert await geocoder.coordinates("Invalid Location") is None


@pytest.mark.asyncio
async def test_provider_error_is_none(geocoder, upstream):
    upstream.geocode_status = 503
    assert await geocoder.coordinates("New York") is None


@pytest.mark.asyncio
async def test_malformed_payload_is_none(geocoder, upstream):
    upstream.places = [{"display_name": "no coordinates"}]
    assert await geocoder.coordinates("New York") is None


@pytest.mark.asyncio
async def test_transport_error_is_none():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    geocoder = NominatimGeocoder(base_url="https://geocode.test", transport=httpx.MockTransport(handler))
    assert await geocoder.coordinates("New York") is None
