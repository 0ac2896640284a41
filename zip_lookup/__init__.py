"""ZIP code -> electric/gas utility lookup. Zippopotam geocoding plus a static city table."""

from .models import LookupResult, Place, ProviderRecord
from .resolver import ZipUtilityResolver

__all__ = ["ZipUtilityResolver", "LookupResult", "Place", "ProviderRecord"]
