"""Helpers for reading untyped Keycloak JSON payloads."""

from typing import Any, Dict, List, Optional

from ...core.exceptions import ResponseParseError


def as_object(payload: Any, context: Optional[str] = None) -> Dict[str, Any]:
    """Require a single JSON object."""
    if not isinstance(payload, dict):
        raise ResponseParseError(
            f"Expected a JSON object{f' from {context}' if context else ''}, "
            f"got {type(payload).__name__}"
        )
    return payload


def as_object_list(payload: Any, context: Optional[str] = None) -> List[Dict[str, Any]]:
    """Normalize a JSON array or single object into a list of objects."""
    if isinstance(payload, dict):
        return [payload]
    if not isinstance(payload, list):
        raise ResponseParseError(
            f"Expected a JSON array{f' from {context}' if context else ''}, "
            f"got {type(payload).__name__}"
        )
    if not all(isinstance(item, dict) for item in payload):
        raise ResponseParseError(
            f"Expected only JSON objects in array{f' from {context}' if context else ''}"
        )
    return payload


def get_string(record: Dict[str, Any], key: str) -> Optional[str]:
    """Read a non-empty string member, None otherwise."""
    value = record.get(key)
    if isinstance(value, str) and value:
        return value
    return None
