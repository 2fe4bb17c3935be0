"""Domain entities returned by identity queries."""

from .user import User
from .group import Group, GroupType
from .tenant import Tenant

__all__ = ["User", "Group", "GroupType", "Tenant"]
