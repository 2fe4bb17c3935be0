"""Tenant entity exposed to the workflow engine."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Tenant:
    id: str
    name: Optional[str] = None
