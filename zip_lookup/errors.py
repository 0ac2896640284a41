"""Errors raised by the lookup pipeline.

Each error carries the HTTP status and the public message the API returns,
so the endpoint maps them without a lookup table of its own.
"""


class ZipLookupError(Exception):
    status_code = 500
    public_message = "lookup_failed"


class InvalidZipError(ZipLookupError):
    """Input is not a 5-digit ZIP string."""

    status_code = 400
    public_message = "Invalid ZIP"


class ZipNotFoundError(ZipLookupError):
    """Geocode provider returned a non-success status for the ZIP."""

    status_code = 404
    public_message = "ZIP not found"


class GeocoderUnavailableError(ZipLookupError):
    """Geocode provider could not be reached (timeout, DNS, connection reset)."""
