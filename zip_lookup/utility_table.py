"""Static city -> utility table with state-level fallbacks.

Hand-curated, practical mapping for a handful of states; not an official
service-territory dataset. Each state lists (city_key, provider) pairs in the
order they are tried: a city matches the FIRST key it contains as a substring,
so "new york city" hits "new york" and "east lansing" must be declared before
"lansing".

Provider values are either (electric, gas) tuples or a bare electric name.
The reserved "default" key is the state fallback when no city key matches;
STATE_DEFAULTS is the last resort for states without one.

Priority within a state:
    city key (declared order) -> "default" -> STATE_DEFAULTS[0]
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .models import (
    MATCHED_CITY,
    MATCHED_NONE,
    MATCHED_STATE_DEFAULT,
    LookupResult,
    ProviderRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"
NO_DATA = "No utility data available for this state"

ProviderValue = Union[str, Tuple[str, Optional[str]]]

UTILITY_MAP = {
    "OH": (
        ("cleveland", ("The Illuminating Company (FirstEnergy)", "Dominion Energy Ohio")),
        ("akron", ("Ohio Edison (FirstEnergy)", "Dominion Energy Ohio")),
        ("toledo", ("Toledo Edison (FirstEnergy)", "Columbia Gas of Ohio")),
        ("columbus", ("AEP Ohio", "Columbia Gas of Ohio")),
        ("cincinnati", ("Duke Energy Ohio", "Duke Energy Ohio")),
        ("dayton", ("DP&L (AES Ohio)", "CenterPoint Energy Ohio")),
        ("youngstown", ("FirstEnergy (Ohio Edison/Penn Power area)", "Dominion Energy Ohio")),
        (DEFAULT_KEY, ("Ohio Edison (FirstEnergy)", "Columbia Gas of Ohio")),
    ),
    # No statewide default: falls through to STATE_DEFAULTS["PA"]
    "PA": (
        ("philadelphia", ("PECO Energy", "Philadelphia Gas Works")),
        ("pittsburgh", ("Duquesne Light Company", "Peoples Gas")),
        ("allentown", ("PPL Electric Utilities", "UGI Utilities")),
        ("harrisburg", ("PPL / Hershey area (PPL)", "UGI Utilities")),
        ("erie", ("Penelec / FirstEnergy", "National Fuel Gas")),
        ("reading", ("PPL / Met-Ed area (PPL/FirstEnergy)", "UGI Utilities")),
        ("wilkes-barre", ("FirstEnergy (Penelec)", "UGI Utilities")),
    ),
    "NJ": (
        ("newark", ("PSE&G", "PSE&G")),
        ("jersey city", ("PSE&G", "PSE&G")),
        ("trenton", ("PSE&G / Atlantic City Electric depending on area", "PSE&G")),
        ("atlantic city", ("Atlantic City Electric", "South Jersey Gas")),
        ("toms river", ("JCP&L", "New Jersey Natural Gas")),
        (DEFAULT_KEY, ("PSE&G", "PSE&G")),
    ),
    "CA": (
        ("los angeles", ("Southern California Edison", "SoCalGas")),
        ("san francisco", ("Pacific Gas & Electric (PG&E)", "Pacific Gas & Electric (PG&E)")),
        ("san diego", ("San Diego Gas & Electric (SDG&E)", "San Diego Gas & Electric (SDG&E)")),
        ("san jose", ("Pacific Gas & Electric (PG&E)", "Pacific Gas & Electric (PG&E)")),
        ("fresno", ("Pacific Gas & Electric (PG&E)", "Pacific Gas & Electric (PG&E)")),
        (DEFAULT_KEY, ("Pacific Gas & Electric (PG&E)", "Pacific Gas & Electric (PG&E)")),
    ),
    "NY": (
        ("new york", ("Con Edison", "Con Edison")),
        ("brooklyn", ("Con Edison", "National Grid")),
        ("buffalo", ("National Grid", "National Fuel Gas")),
        ("rochester", ("NYSEG / RG&E (RG&E)", "RG&E")),
        ("syracuse", ("National Grid / NYSEG", "National Grid")),
        (DEFAULT_KEY, ("National Grid", "National Grid")),
    ),
    # Delmarva covers most of DE; some towns run municipal electric
    "DE": (
        (DEFAULT_KEY, ("Delmarva Power", "Delmarva Power")),
    ),
    "MI": (
        ("detroit", ("DTE Energy", "DTE Gas")),
        ("grand rapids", ("Consumers Energy", "DTE Gas")),
        # must stay ahead of "lansing"
        ("east lansing", ("Consumers Energy", "Consumers Energy")),
        ("lansing", ("Consumers Energy", "Consumers Energy")),
        ("flint", ("DTE Energy / Consumers area (depends)", "Consumers Energy")),
        (DEFAULT_KEY, ("DTE Energy", "Consumers Energy")),
    ),
    "RI": (
        (DEFAULT_KEY, ("Rhode Island Energy", "Rhode Island Energy")),
    ),
}

# Common providers per state, most likely first. Also returned as alternatives.
STATE_DEFAULTS = {
    "OH": ("Ohio Edison (FirstEnergy)", "AEP Ohio", "Duke Energy Ohio", "Toledo Edison", "The Illuminating Company"),
    "PA": ("PECO Energy", "PPL Electric Utilities", "Duquesne Light", "Columbia Gas of PA", "UGI"),
    "NJ": ("PSE&G", "JCP&L", "Atlantic City Electric"),
    "CA": ("Pacific Gas & Electric (PG&E)", "Southern California Edison", "SDG&E"),
    "NY": ("Con Edison", "National Grid", "NYSEG", "RG&E"),
    "DE": ("Delmarva Power",),
    "MI": ("DTE Energy", "Consumers Energy"),
    "RI": ("Rhode Island Energy",),
}


@dataclass(frozen=True)
class StateEntry:
    cities: Tuple[Tuple[str, ProviderRecord], ...] = ()
    default: Optional[ProviderRecord] = None
    common_providers: Tuple[str, ...] = ()

    @property
    def city_keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.cities)


UtilityTable = Mapping[str, StateEntry]


def _to_record(value: ProviderValue) -> ProviderRecord:
    if isinstance(value, ProviderRecord):
        return value
    if isinstance(value, str):
        return ProviderRecord(electric=value)
    electric, gas = value
    return ProviderRecord(electric=electric, gas=gas)


def build_table(utility_map: dict, state_defaults: Optional[dict] = None) -> UtilityTable:
    """
    Build an immutable UtilityTable from declarative data.

    utility_map: {state: ((city_key, provider), ...)}; city keys are lowercased,
        declared order is kept, and DEFAULT_KEY becomes StateEntry.default.
    state_defaults: {state: (provider_name, ...)} common providers per state.
        States listed only here still get an entry (no city keys).
    """
    state_defaults = state_defaults or {}
    table = {}
    for state in list(utility_map) + [s for s in state_defaults if s not in utility_map]:
        cities = []
        default = None
        for key, value in utility_map.get(state, ()):
            key = key.strip().lower()
            if key == DEFAULT_KEY:
                default = _to_record(value)
            elif key:
                cities.append((key, _to_record(value)))
        table[state.upper()] = StateEntry(
            cities=tuple(cities),
            default=default,
            common_providers=tuple(state_defaults.get(state, ())),
        )
    return MappingProxyType(table)


def match(table: UtilityTable, state: str, city: str) -> LookupResult:
    """
    Pick the utility for a city/state. Never raises.

    Returns a LookupResult without zip/timing filled in; matched_via records
    which path produced the provider ("city", "stateDefault", or "none").
    """
    state = (state or "").strip().upper()
    city = city or ""
    city_key = city.lower()

    result = LookupResult(zip_code="", city=city, state=state, electric=NO_DATA, gas=NO_DATA)

    entry = table.get(state)
    if entry is None:
        logger.debug(f"No table entry for state '{state}'")
        return result

    result.alternatives = list(entry.common_providers)

    for key, record in entry.cities:
        if key in city_key:
            result.electric = record.electric
            result.gas = record.gas
            result.matched_via = MATCHED_CITY
            result.matched_key = key
            return result

    if entry.default is not None:
        result.electric = entry.default.electric
        result.gas = entry.default.gas
        result.matched_via = MATCHED_STATE_DEFAULT
        result.matched_key = DEFAULT_KEY
        return result

    if entry.common_providers:
        result.electric = entry.common_providers[0]
        result.gas = None
        result.matched_via = MATCHED_STATE_DEFAULT
        return result

    return result


DEFAULT_TABLE = build_table(UTILITY_MAP, STATE_DEFAULTS)
