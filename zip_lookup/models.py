"""Data models for the ZIP utility lookup."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

MATCHED_CITY = "city"
MATCHED_STATE_DEFAULT = "stateDefault"
MATCHED_NONE = "none"


@dataclass
class Place:
    zip_code: str
    city: str = ""
    state: str = ""


@dataclass(frozen=True)
class ProviderRecord:
    electric: str
    gas: Optional[str] = None


@dataclass
class LookupResult:
    zip_code: str
    city: str = ""
    state: str = ""
    electric: str = ""
    gas: Optional[str] = None
    matched_via: str = MATCHED_NONE
    matched_key: Optional[str] = None
    alternatives: List[str] = field(default_factory=list)
    lookup_time_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())

    def to_dict(self) -> dict:
        """Serialize to dict for JSON output."""
        return {
            "zip": self.zip_code,
            "city": self.city,
            "state": self.state,
            "electric": self.electric,
            "gas": self.gas,
            "matched_via": self.matched_via,
            "matched_key": self.matched_key,
            "alternatives": list(self.alternatives),
            "lookup_time_ms": self.lookup_time_ms,
            "timestamp": self.timestamp,
        }
