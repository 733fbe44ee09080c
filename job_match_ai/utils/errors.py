"""Error types raised by the match core."""


class MatchError(Exception):
    """Base class for match core errors."""


class InvalidInput(MatchError, ValueError):
    """Structurally invalid request: missing record, blank id, bad k or distance."""


class RecordNotFound(MatchError, LookupError):
    """An id-based lookup found no job or candidate."""


class GeocodingUnavailable(MatchError):
    """
    Raised by a geocoding collaborator when it gives up (e.g. retries exhausted).
    The resolver treats it as not-found; it never reaches match callers.
    """
