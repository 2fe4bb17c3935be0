"""User entity exposed to the workflow engine."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Read-only user built from a Keycloak user record."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None