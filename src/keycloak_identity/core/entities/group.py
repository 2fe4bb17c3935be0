"""Group entity exposed to the workflow engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...config.constants import GROUP_TYPE_SYSTEM, GROUP_TYPE_WORKFLOW


class GroupType(str, Enum):
    """Group classification."""
    SYSTEM = GROUP_TYPE_SYSTEM
    WORKFLOW = GROUP_TYPE_WORKFLOW


@dataclass(frozen=True)
class Group:
    id: str
    name: Optional[str] = None
    type: GroupType = GroupType.WORKFLOW
