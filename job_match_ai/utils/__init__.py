"""Utility exports."""

from .errors import GeocodingUnavailable, InvalidInput, MatchError, RecordNotFound
from .logger import get_logger

__all__ = [
    "get_logger",
    "MatchError",
    "InvalidInput",
    "RecordNotFound",
    "GeocodingUnavailable",
]
