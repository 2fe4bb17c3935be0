"""Filter predicates.

The same predicates prune remote search parameters and re-validate every
record Keycloak returns, since Keycloak's own text filters are substring
matches rather than exact or wildcard matches.
"""

import re
from typing import Collection, Optional, TypeVar

T = TypeVar("T")

WILDCARD_PATTERN = re.compile(r"[%*]+")


def matches(criterion: Optional[T], value: Optional[T]) -> bool:
    """True when criterion is unset or equals value."""
    return criterion is None or criterion == value


def matches_any(criteria: Optional[Collection[T]], value: Optional[T]) -> bool:
    """True when criteria is unset or empty, or contains a non-null value."""
    if not criteria:
        return True
    return value is not None and value in criteria


def matches_like(pattern: Optional[str], value: Optional[str]) -> bool:
    """Match value against a pattern where runs of % or * match any text.

    A null value only matches patterns made of wildcards alone.
    """
    if pattern is None:
        return True
    if value is None:
        return strip_wildcards(pattern) == ""
    regex = ".*".join(re.escape(part) for part in WILDCARD_PATTERN.split(pattern))
    return re.fullmatch(regex, value, flags=re.DOTALL) is not None


def strip_wildcards(pattern: str) -> str:
    """Remove wildcard characters, leaving the literal search text."""
    return WILDCARD_PATTERN.sub("", pattern)
