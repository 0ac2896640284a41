"""Tests for the static utility table and the city/state matcher."""

import pytest

from zip_lookup.models import MATCHED_CITY, MATCHED_NONE, MATCHED_STATE_DEFAULT, ProviderRecord
from zip_lookup.utility_table import (
    DEFAULT_KEY,
    DEFAULT_TABLE,
    NO_DATA,
    STATE_DEFAULTS,
    UTILITY_MAP,
    build_table,
    match,
)


class TestCityMatch:

    def test_cleveland_beats_ohio_default(self):
        r = match(DEFAULT_TABLE, "OH", "Cleveland")
        assert r.electric == "The Illuminating Company (FirstEnergy)"
        assert r.gas == "Dominion Energy Ohio"
        assert r.matched_via == MATCHED_CITY
        assert r.matched_key == "cleveland"

    def test_city_is_case_insensitive(self):
        assert match(DEFAULT_TABLE, "OH", "CINCINNATI").electric == "Duke Energy Ohio"

    def test_state_is_case_insensitive(self):
        assert match(DEFAULT_TABLE, "oh", "Columbus").electric == "AEP Ohio"

    def test_substring_match_new_york_city(self):
        r = match(DEFAULT_TABLE, "NY", "New York City")
        assert r.electric == "Con Edison"
        assert r.matched_key == "new york"

    def test_hyphenated_key(self):
        r = match(DEFAULT_TABLE, "PA", "Wilkes-Barre")
        assert r.electric == "FirstEnergy (Penelec)"
        assert r.matched_via == MATCHED_CITY

    def test_alternatives_are_state_common_providers(self):
        r = match(DEFAULT_TABLE, "NJ", "Newark")
        assert r.alternatives == list(STATE_DEFAULTS["NJ"])


class TestKeyOrder:

    def test_michigan_east_lansing_declared_before_lansing(self):
        keys = DEFAULT_TABLE["MI"].city_keys
        assert keys.index("east lansing") < keys.index("lansing")

    def test_east_lansing_resolves_to_its_own_entry(self):
        r = match(DEFAULT_TABLE, "MI", "East Lansing")
        assert r.matched_key == "east lansing"
        assert r.electric == "Consumers Energy"

    def test_lansing_resolves_to_its_own_entry(self):
        r = match(DEFAULT_TABLE, "MI", "Lansing")
        assert r.matched_key == "lansing"
        assert r.electric == "Consumers Energy"

    def test_first_declared_key_wins(self):
        short_first = build_table({"ZZ": (("york", "Short"), ("new york", "Long"))})
        long_first = build_table({"ZZ": (("new york", "Long"), ("york", "Short"))})
        assert match(short_first, "ZZ", "New York").electric == "Short"
        assert match(long_first, "ZZ", "New York").electric == "Long"

    def test_table_keeps_declared_order(self):
        declared = [k for k, _ in UTILITY_MAP["OH"] if k != DEFAULT_KEY]
        assert list(DEFAULT_TABLE["OH"].city_keys) == declared


class TestStateFallback:

    def test_unmapped_city_uses_state_default_entry(self):
        r = match(DEFAULT_TABLE, "OH", "Springfield")
        assert r.electric == "Ohio Edison (FirstEnergy)"
        assert r.gas == "Columbia Gas of Ohio"
        assert r.matched_via == MATCHED_STATE_DEFAULT
        assert r.matched_key == DEFAULT_KEY

    def test_default_only_state(self):
        r = match(DEFAULT_TABLE, "DE", "Dover")
        assert r.electric == "Delmarva Power"
        assert r.matched_via == MATCHED_STATE_DEFAULT

    def test_state_without_default_uses_first_common_provider(self):
        r = match(DEFAULT_TABLE, "PA", "Clearfield")
        assert r.electric == "PECO Energy"
        assert r.gas is None
        assert r.matched_via == MATCHED_STATE_DEFAULT
        assert r.matched_key is None

    def test_empty_city_falls_back(self):
        r = match(DEFAULT_TABLE, "RI", "")
        assert r.electric == "Rhode Island Energy"
        assert r.matched_via == MATCHED_STATE_DEFAULT

    def test_state_listed_only_in_defaults(self):
        table = build_table({}, {"VT": ("Green Mountain Power",)})
        r = match(table, "VT", "Burlington")
        assert r.electric == "Green Mountain Power"
        assert r.matched_via == MATCHED_STATE_DEFAULT


class TestNoData:

    @pytest.mark.parametrize("state", ["ZZ", "MT", ""])
    def test_absent_state_returns_sentinel(self, state):
        r = match(DEFAULT_TABLE, state, "Anywhere")
        assert r.electric == NO_DATA
        assert r.gas == NO_DATA
        assert r.matched_via == MATCHED_NONE
        assert r.alternatives == []

    def test_state_with_nothing_to_fall_back_on(self):
        table = build_table({"ZZ": (("somewhere", "Somewhere Power"),)})
        r = match(table, "ZZ", "Elsewhere")
        assert r.electric == NO_DATA
        assert r.matched_via == MATCHED_NONE

    def test_none_inputs_do_not_raise(self):
        r = match(DEFAULT_TABLE, None, None)
        assert r.matched_via == MATCHED_NONE


class TestBuildTable:

    def test_legacy_string_becomes_electric_only_record(self):
        table = build_table({"ZZ": (("Gotham", "Gotham Light"),)})
        assert table["ZZ"].cities == (("gotham", ProviderRecord("Gotham Light", None)),)

    def test_default_key_is_pulled_out_of_cities(self):
        table = build_table({"zz": (("a", "A"), ("Default", ("D", "DG")))})
        entry = table["ZZ"]
        assert entry.city_keys == ("a",)
        assert entry.default == ProviderRecord("D", "DG")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_TABLE["ZZ"] = None

    def test_every_mapped_state_has_common_providers(self):
        assert set(UTILITY_MAP) <= set(STATE_DEFAULTS)


# City -> electric provider pairs of the hand-curated source table.
CURATED_ELECTRIC = [
    ("OH", "Cleveland", "The Illuminating Company (FirstEnergy)"),
    ("OH", "Akron", "Ohio Edison (FirstEnergy)"),
    ("OH", "Toledo", "Toledo Edison (FirstEnergy)"),
    ("OH", "Columbus", "AEP Ohio"),
    ("OH", "Cincinnati", "Duke Energy Ohio"),
    ("OH", "Dayton", "DP&L (AES Ohio)"),
    ("OH", "Youngstown", "FirstEnergy (Ohio Edison/Penn Power area)"),
    ("PA", "Philadelphia", "PECO Energy"),
    ("PA", "Pittsburgh", "Duquesne Light Company"),
    ("PA", "Allentown", "PPL Electric Utilities"),
    ("PA", "Harrisburg", "PPL / Hershey area (PPL)"),
    ("PA", "Erie", "Penelec / FirstEnergy"),
    ("PA", "Reading", "PPL / Met-Ed area (PPL/FirstEnergy)"),
    ("PA", "Wilkes-Barre", "FirstEnergy (Penelec)"),
    ("NJ", "Newark", "PSE&G"),
    ("NJ", "Jersey City", "PSE&G"),
    ("NJ", "Trenton", "PSE&G / Atlantic City Electric depending on area"),
    ("NJ", "Atlantic City", "Atlantic City Electric"),
    ("NJ", "Toms River", "JCP&L"),
    ("CA", "Los Angeles", "Southern California Edison"),
    ("CA", "San Francisco", "Pacific Gas & Electric (PG&E)"),
    ("CA", "San Diego", "San Diego Gas & Electric (SDG&E)"),
    ("CA", "San Jose", "Pacific Gas & Electric (PG&E)"),
    ("CA", "Fresno", "Pacific Gas & Electric (PG&E)"),
    ("NY", "New York", "Con Edison"),
    ("NY", "Brooklyn", "Con Edison"),
    ("NY", "Buffalo", "National Grid"),
    ("NY", "Rochester", "NYSEG / RG&E (RG&E)"),
    ("NY", "Syracuse", "National Grid / NYSEG"),
    ("DE", "Wilmington", "Delmarva Power"),
    ("MI", "Detroit", "DTE Energy"),
    ("MI", "Grand Rapids", "Consumers Energy"),
    ("MI", "Lansing", "Consumers Energy"),
    ("MI", "Flint", "DTE Energy / Consumers area (depends)"),
    ("RI", "Providence", "Rhode Island Energy"),
]


@pytest.mark.parametrize("state,city,electric", CURATED_ELECTRIC)
def test_curated_electric_provider(state, city, electric):
    assert match(DEFAULT_TABLE, state, city).electric == electric
