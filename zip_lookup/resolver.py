"""ZipUtilityResolver: validate, geocode, match."""

import logging
import time
from typing import Iterable, List, Optional, Union

from .config import Config
from .errors import ZipLookupError
from .geocoder import Geocoder, create_geocoder
from .models import LookupResult
from .utility_table import DEFAULT_TABLE, UtilityTable, match
from .validation import validate_zip

logger = logging.getLogger(__name__)


class ZipUtilityResolver:
    """
    ZIP -> utility resolver.

    Takes a raw ZIP, checks its shape, resolves city/state through the
    geocoder, then matches against the static utility table. The table is
    shared read-only; the resolver holds no per-request state.
    """

    def __init__(self, config: Optional[Config] = None, geocoder: Optional[Geocoder] = None,
                 table: Optional[UtilityTable] = None):
        self.config = config or Config()
        self.geocoder: Geocoder = geocoder or create_geocoder(self.config)
        self.table: UtilityTable = table if table is not None else DEFAULT_TABLE
        logger.info(f"ZipUtilityResolver ready, {len(self.table)} states in table")

    def lookup(self, raw_zip) -> LookupResult:
        """
        Look up the utility for a ZIP.

        1. Validate (InvalidZipError)
        2. Geocode ZIP -> city/state (ZipNotFoundError)
        3. Match city/state against the table (never fails)
        """
        t0 = time.time()
        zip_code = validate_zip(raw_zip)
        place = self.geocoder.resolve(zip_code)

        result = match(self.table, place.state, place.city)
        result.zip_code = zip_code
        result.lookup_time_ms = int((time.time() - t0) * 1000)
        logger.info(
            f"Lookup {zip_code}: {place.city or '?'}, {place.state or '?'} -> "
            f"{result.electric} via {result.matched_via} ({result.lookup_time_ms}ms)"
        )
        return result

    def lookup_batch(self, zips: Iterable) -> List[Union[LookupResult, ZipLookupError]]:
        """
        Look up several ZIPs in order. Errors are returned in place, not raised.

        Unexpected exceptions are logged and returned as a plain ZipLookupError
        (public message "lookup_failed") so one bad ZIP never stops the batch.
        """
        results = []
        for raw_zip in zips:
            try:
                results.append(self.lookup(raw_zip))
            except ZipLookupError as e:
                logger.warning(f"Batch lookup error for {raw_zip!r}: {e.public_message}")
                results.append(e)
            except Exception as e:
                logger.exception(f"Batch lookup error for {raw_zip!r}: {e}")
                results.append(ZipLookupError(str(e)))
        return results
