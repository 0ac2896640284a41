"""Shape lookup results and errors into the endpoint's JSON payloads."""

from .models import LookupResult

NOTE = (
    "This result is based on an internal mapping (city-first, then state defaults). "
    "For official utility assignments consult the utility or local distribution company."
)


def build_meta(result: LookupResult) -> str:
    return f"Determined from city: {result.city or 'unknown'}, state: {result.state or 'unknown'}."


def assemble(result: LookupResult) -> dict:
    """Wrap a LookupResult in the success payload."""
    return {
        "ok": True,
        "data": result.to_dict(),
        "meta": build_meta(result),
        "note": NOTE,
    }


def error_payload(message: str) -> dict:
    return {"ok": False, "error": message}
