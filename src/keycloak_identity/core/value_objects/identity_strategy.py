"""Identity attribute strategies.

A strategy decides which Keycloak field carries the id the workflow engine
sees, and how a logical id is looked up again in Keycloak. Users use one
of ById, ByEmail, ByUsername or ByCustomAttribute; groups and tenants use
ById or ByPath.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .group_path import GroupPath


def _string_field(record: Mapping[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    return value if isinstance(value, str) and value else None


class UserIdStrategy(ABC):
    """Maps logical user ids to Keycloak user records."""

    # Keycloak field that becomes the engine's user id
    id_field: str = "id"

    @abstractmethod
    def search_params(self, user_id: str) -> Optional[Dict[str, str]]:
        """Query parameters for GET /users, or None when no lookup is needed."""

    def matches(self, record: Mapping[str, Any], user_id: str) -> bool:
        """Check whether record is the exact match for user_id."""
        return _string_field(record, self.id_field) == user_id

    def extract_id(self, record: Mapping[str, Any]) -> Optional[str]:
        """Read the engine's user id from a Keycloak user record."""
        return _string_field(record, self.id_field)


@dataclass(frozen=True)
class ById(UserIdStrategy):
    """The Keycloak internal id is used verbatim."""

    def search_params(self, user_id: str) -> Optional[Dict[str, str]]:
        return None


@dataclass(frozen=True)
class ByEmail(UserIdStrategy):
    id_field = "email"

    def search_params(self, user_id: str) -> Optional[Dict[str, str]]:
        return {"email": user_id}


@dataclass(frozen=True)
class ByUsername(UserIdStrategy):
    id_field = "username"

    def search_params(self, user_id: str) -> Optional[Dict[str, str]]:
        return {"username": user_id}


@dataclass(frozen=True)
class ByCustomAttribute(UserIdStrategy):
    """Users are looked up by a custom attribute value.

    Returned users still carry the Keycloak internal id.
    """

    attribute: str = "LDAP_ID"

    def search_params(self, user_id: str) -> Optional[Dict[str, str]]:
        return {"q": f"{self.attribute}:{user_id}"}

    def matches(self, record: Mapping[str, Any], user_id: str) -> bool:
        attributes = record.get("attributes")
        if not isinstance(attributes, Mapping):
            return False
        values = attributes.get(self.attribute)
        if isinstance(values, str):
            return values == user_id
        return isinstance(values, list) and user_id in values


class ContainerIdStrategy(ABC):
    """Maps logical group or tenant ids to Keycloak group records."""

    @abstractmethod
    def extract_id(self, record: Mapping[str, Any]) -> Optional[str]:
        """Read the engine's id from a Keycloak group record."""


@dataclass(frozen=True)
class GroupById(ContainerIdStrategy):
    def extract_id(self, record: Mapping[str, Any]) -> Optional[str]:
        return _string_field(record, "id")


@dataclass(frozen=True)
class ByPath(ContainerIdStrategy):
    """Groups are identified by their path below the context root.

    With tenant_level set, only the segment at that depth is used as id,
    which is how tenant names are exposed.
    """

    context_root: GroupPath = field(default_factory=GroupPath)
    tenant_level: Optional[int] = None

    def relative_path(self, record: Mapping[str, Any]) -> GroupPath:
        return GroupPath.parse(_string_field(record, "path")).relative_to(self.context_root, ignore_case=True)

    def extract_id(self, record: Mapping[str, Any]) -> Optional[str]:
        path = self.relative_path(record)
        if self.tenant_level is None:
            return str(path) or None
        if len(path) <= self.tenant_level:
            return None
        return path.segments[self.tenant_level]
