"""Agent exports."""

from .match_agent import MatchQueryService

__all__ = ["MatchQueryService"]
