"""
Zone resolution: turn a free-text address into the coarse zone label used to
match volunteers to requests.
"""

import re
from typing import Optional

import httpx

from core.config import settings
from core.logging import get_logger


logger = get_logger(__name__)

KNOWN_CITY_PATTERNS = [
    re.compile(r"\b(Wichita\s+Falls)\b", re.IGNORECASE),
    re.compile(r"\b(San\s+Francisco)\b", re.IGNORECASE),
    re.compile(r"\b(New\s+York)\b", re.IGNORECASE),
    re.compile(r"\b(Los\s+Angeles)\b", re.IGNORECASE),
]

# Last comma separated segment, without a trailing 5-digit ZIP.
TRAILING_SEGMENT = re.compile(r",\s*([^,]+?)(?:\s+\d{5})?$", re.IGNORECASE)

# Width of emergency_requests.address_zone.
MAX_ZONE_LENGTH = 100


def clip_zone(zone: Optional[str]) -> Optional[str]:
    return zone[:MAX_ZONE_LENGTH].strip() if zone else zone


class ZoneResolver:
    """Interface: ``await resolve(address)`` returns a zone or None."""

    async def resolve(self, address: Optional[str]) -> Optional[str]:
        raise NotImplementedError


class HeuristicZoneResolver(ZoneResolver):

    def resolve_sync(self, address: Optional[str]) -> Optional[str]:
        return clip_zone(self._guess(address))

    def _guess(self, address: Optional[str]) -> Optional[str]:
        if not address or not address.strip():
            return None
        clean = address.strip()

        for pattern in KNOWN_CITY_PATTERNS:
            match = pattern.search(clean)
            if match:
                return match.group(1).strip()

        match = TRAILING_SEGMENT.search(clean)
        if match:
            return match.group(1).strip()

        words = clean.split()
        if len(words) > 1:
            return f"{words[-2]} {words[-1]}"
        return clean

    async def resolve(self, address: Optional[str]) -> Optional[str]:
        return self.resolve_sync(address)


class NominatimZoneResolver(ZoneResolver):
    """Looks the address up on OpenStreetMap Nominatim and uses the city.

    Falls back to the heuristic when the lookup fails or has no city-level
    component, so intake never blocks on the geocoder.
    """

    CITY_KEYS = ("city", "town", "village", "municipality", "county")

    def __init__(
        self,
        base_url: str = None,
        user_agent: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
    ) -> None:
        self.base_url = (base_url or settings.NOMINATIM_BASE_URL).rstrip("/")
        self.user_agent = user_agent or settings.NOMINATIM_USER_AGENT
        self.timeout = timeout or settings.NOMINATIM_TIMEOUT
        self.transport = transport
        self.fallback = HeuristicZoneResolver()

    async def resolve(self, address: Optional[str]) -> Optional[str]:
        if not address or not address.strip():
            return None

        params = {"q": address.strip(), "format": "json", "addressdetails": 1, "limit": 1}
        headers = {"User-Agent": self.user_agent}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(f"{self.base_url}/search", params=params, headers=headers)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Nominatim lookup failed for '{address}': {str(e)}")
            return self.fallback.resolve_sync(address)

        if data:
            details = data[0].get("address") or {}
            for key in self.CITY_KEYS:
                if details.get(key):
                    logger.info(f"Resolved zone via Nominatim: {address} -> {details[key]}")
                    return clip_zone(details[key])

        logger.info(f"No Nominatim city for '{address}', using heuristic")
        return self.fallback.resolve_sync(address)


def get_zone_resolver() -> ZoneResolver:
    if settings.ZONE_RESOLVER == "nominatim":
        return NominatimZoneResolver()
    return HeuristicZoneResolver()
