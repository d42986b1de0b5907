import httpx
import pytest

from services.zone_resolver import MAX_ZONE_LENGTH, HeuristicZoneResolver, NominatimZoneResolver


@pytest.fixture
def resolver():
    return HeuristicZoneResolver()


@pytest.mark.parametrize(
    "address,expected",
    [
        ("4700 Taft Blvd, Wichita Falls, TX 76308", "Wichita Falls"),
        ("4700 taft blvd wichita falls", "wichita falls"),
        ("1 Market St, San Francisco", "San Francisco"),
        ("12 Main Street, Springfield 62701", "Springfield"),
        ("12 Main Street Springfield", "Street Springfield"),
        ("Riverside", "Riverside"),
    ],
)
async def test_heuristic_zone(resolver, address, expected):
    assert await resolver.resolve(address) == expected


async def test_no_address_has_no_zone(resolver):
    assert await resolver.resolve(None) is None
    assert await resolver.resolve("   ") is None


async def test_long_trailing_segment_is_clipped(resolver):
    zone = await resolver.resolve("12 Main Street, " + "Long Hollow " * 20)
    assert len(zone) <= MAX_ZONE_LENGTH
    assert zone.startswith("Long Hollow Long Hollow")


async def test_nominatim_uses_city_from_lookup():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/search"
        assert request.url.params["q"] == "4700 Taft Blvd"
        assert request.headers["User-Agent"] == "RescueLink-Test"
        return httpx.Response(200, json=[{"address": {"city": "Wichita Falls", "state": "Texas"}}])

    resolver = NominatimZoneResolver(
        base_url="https://geo.test",
        user_agent="RescueLink-Test",
        transport=httpx.MockTransport(handler),
    )
    assert await resolver.resolve("4700 Taft Blvd") == "Wichita Falls"


async def test_nominatim_falls_back_on_error():
    resolver = NominatimZoneResolver(
        base_url="https://geo.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    assert await resolver.resolve("12 Main Street, Springfield 62701") == "Springfield"


async def test_nominatim_falls_back_without_results():
    resolver = NominatimZoneResolver(
        base_url="https://geo.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
    )
    assert await resolver.resolve("4700 Taft Blvd, Wichita Falls, TX 76308") == "Wichita Falls"
