"""ZIP input validation and POST body parsing."""

import json
import re
from typing import Optional

from .errors import InvalidZipError

_ZIP_RE = re.compile(r"[0-9]{5}")


def validate_zip(raw) -> str:
    """Return raw unchanged if it is a 5-digit ZIP string, else raise InvalidZipError.

    Only ASCII digits count; whitespace and ZIP+4 suffixes are rejected rather
    than cleaned up.
    """
    if not isinstance(raw, str) or not _ZIP_RE.fullmatch(raw):
        raise InvalidZipError(f"invalid ZIP: {raw!r}")
    return raw


def extract_zip_from_body(body: bytes) -> Optional[str]:
    """
    Pull the `zip` member out of a POST body.

    Accepts a JSON object, or a JSON string holding an encoded object (some
    form posts double-encode). Returns None for an empty body or an object
    without `zip`.
    """
    if not body or not body.strip():
        return None
    try:
        data = json.loads(body)
        if isinstance(data, str):
            data = json.loads(data) if data.strip() else {}
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidZipError(f"malformed request body: {e}") from e

    if not isinstance(data, dict):
        raise InvalidZipError("request body must be a JSON object")
    return data.get("zip")
