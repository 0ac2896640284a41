"""ZIP geocoding via Zippopotam.us (free, no API key)."""

import logging
import time
from abc import ABC, abstractmethod

import requests

from .config import Config
from .errors import GeocoderUnavailableError, ZipNotFoundError
from .models import Place

logger = logging.getLogger(__name__)


class Geocoder(ABC):
    @abstractmethod
    def resolve(self, zip_code: str) -> Place:
        """Resolve a validated ZIP to city/state. Raises ZipNotFoundError on a miss."""
        ...


class ZippopotamGeocoder(Geocoder):
    """Zippopotam.us ZIP -> place lookup. ~100-300ms per call."""

    BASE_URL = "https://api.zippopotam.us/us"

    def __init__(self, base_url: str = BASE_URL, timeout: float = 10.0,
                 user_agent: str = "zip-utility-lookup/1.0"):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

    def resolve(self, zip_code: str) -> Place:
        url = f"{self.base_url}/{zip_code}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            t0 = time.time()
            resp = requests.get(url, headers=headers, timeout=self.timeout)
            elapsed_ms = int((time.time() - t0) * 1000)
        except requests.RequestException as e:
            logger.error(f"Zippopotam error for '{zip_code}': {e}")
            raise GeocoderUnavailableError(str(e)) from e

        if not resp.ok:
            logger.debug(f"Zippopotam: no match for '{zip_code}' (HTTP {resp.status_code}, {elapsed_ms}ms)")
            raise ZipNotFoundError(zip_code)

        place = self._parse_place(zip_code, resp.json())
        logger.debug(f"Zippopotam: {zip_code} -> {place.city}, {place.state} ({elapsed_ms}ms)")
        return place

    @staticmethod
    def _parse_place(zip_code: str, data) -> Place:
        """Take the first entry of `places`; absent fields become empty strings."""
        places = data.get("places") if isinstance(data, dict) else None
        first = places[0] if isinstance(places, list) and places else {}
        if not isinstance(first, dict):
            first = {}
        return Place(
            zip_code=zip_code,
            city=_text(first.get("place name")),
            state=_text(first.get("state abbreviation")),
        )


def _text(value) -> str:
    """Trimmed string field; None, numbers and other non-strings become ""."""
    return value.strip() if isinstance(value, str) else ""


def create_geocoder(config: Config) -> Geocoder:
    """Factory function to create the geocoder configured for this process."""
    return ZippopotamGeocoder(
        base_url=config.geocoder_base_url,
        timeout=config.geocode_timeout,
        user_agent=config.user_agent,
    )
