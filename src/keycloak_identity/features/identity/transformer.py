"""Conversion of Keycloak JSON records into domain entities."""

import logging
from typing import Any, Dict, Optional

from ...config.constants import GROUP_TYPE_SYSTEM, WORKFLOW_ADMIN_GROUP
from ...config.settings import KeycloakIdentitySettings
from ...core.entities import Group, GroupType, Tenant, User
from ...core.value_objects import GroupPath
from ...integrations.keycloak.json_utils import get_string

logger = logging.getLogger(__name__)


class KeycloakEntityTransformer:
    """Maps user and group records onto User, Group and Tenant entities.

    Records without the field that carries the configured id are dropped:
    the to_* methods return None for them.
    """

    def __init__(self, settings: KeycloakIdentitySettings):
        self._settings = settings
        self._user_strategy = settings.user_id_strategy
        self._group_strategy = settings.group_id_strategy
        self._tenant_strategy = settings.tenant_id_strategy

    def to_user(self, record: Dict[str, Any]) -> Optional[User]:
        user_id = self._user_strategy.extract_id(record)
        if user_id is None:
            logger.debug(
                f"Dropping user record {record.get('id')} without '{self._user_strategy.id_field}'"
            )
            return None

        first_name = get_string(record, "firstName")
        last_name = get_string(record, "lastName")
        if not (first_name and first_name.strip()) and not (last_name and last_name.strip()):
            first_name = get_string(record, "username")

        return User(
            id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=get_string(record, "email"),
        )

    def to_group(self, record: Dict[str, Any]) -> Optional[Group]:
        group_id = self._group_strategy.extract_id(record)
        if group_id is None:
            logger.debug(f"Dropping group record without id: {record.get('path')}")
            return None
        return Group(
            id=group_id,
            name=get_string(record, "name"),
            type=GroupType.SYSTEM if self.is_system_group(record) else GroupType.WORKFLOW,
        )

    def to_tenant(self, record: Dict[str, Any]) -> Optional[Tenant]:
        tenant_id = self._tenant_strategy.extract_id(record)
        if tenant_id is None:
            logger.debug(f"Dropping tenant record without id: {record.get('path')}")
            return None
        return Tenant(id=tenant_id, name=get_string(record, "name"))

    def is_system_group(self, record: Dict[str, Any]) -> bool:
        name = get_string(record, "name")
        if name is not None and name in (WORKFLOW_ADMIN_GROUP, self._settings.administrator_group_name):
            return True
        attributes = record.get("attributes")
        if not isinstance(attributes, dict):
            return False
        types = attributes.get("type")
        if isinstance(types, str):
            types = [types]
        if not isinstance(types, list):
            return False
        return any(
            isinstance(value, str) and value.casefold() == GROUP_TYPE_SYSTEM.casefold()
            for value in types
        )

    def is_tenant_group(self, record: Dict[str, Any]) -> bool:
        """Check whether record is a direct child of the tenant root group.

        The context root is stripped first; the remaining path must be
        exactly tenant root plus one segment.
        """
        tenant_root = self._settings.tenant_root
        if not tenant_root:
            return False
        path = GroupPath.parse(get_string(record, "path"))
        context_root = self._settings.context_root
        if context_root and not path.starts_with(context_root, ignore_case=True):
            return False
        relative = path.relative_to(context_root, ignore_case=True)
        return len(relative) == len(tenant_root) + 1 and relative.starts_with(tenant_root, ignore_case=True)
