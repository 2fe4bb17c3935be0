"""Filter predicates shared by request building and result validation."""

from .filters import matches, matches_any, matches_like, strip_wildcards

__all__ = ["matches", "matches_any", "matches_like", "strip_wildcards"]
