"""Shared fixtures: a stub geocoder so no test touches the network."""

import pytest

from zip_lookup.errors import ZipNotFoundError
from zip_lookup.geocoder import Geocoder
from zip_lookup.models import Place
from zip_lookup.resolver import ZipUtilityResolver

KNOWN_PLACES = {
    "44114": ("Cleveland", "OH"),
    "45501": ("Springfield", "OH"),
    "19103": ("Philadelphia", "PA"),
    "16830": ("Clearfield", "PA"),
    "10001": ("New York City", "NY"),
    "48823": ("East Lansing", "MI"),
    "48933": ("Lansing", "MI"),
    "19901": ("Dover", "DE"),
    "59601": ("Helena", "MT"),
    "00000": ("", ""),
}


class StubGeocoder(Geocoder):
    """Answers from KNOWN_PLACES; anything else is a miss."""

    def __init__(self, places=None):
        self.places = KNOWN_PLACES if places is None else places
        self.calls = []

    def resolve(self, zip_code):
        self.calls.append(zip_code)
        if zip_code not in self.places:
            raise ZipNotFoundError(zip_code)
        city, state = self.places[zip_code]
        return Place(zip_code=zip_code, city=city, state=state)


@pytest.fixture
def geocoder():
    return StubGeocoder()


@pytest.fixture
def resolver(geocoder):
    return ZipUtilityResolver(geocoder=geocoder)
