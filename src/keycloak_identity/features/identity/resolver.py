"""
Identifier resolution.

Translates the ids the workflow engine works with into Keycloak internal
ids, following the configured identity strategies. Lookup misses surface as
NotFoundCondition subclasses so callers can answer with an empty result.
"""
import logging
from typing import Any, Dict, Optional

from ...config.settings import KeycloakIdentitySettings
from ...core.exceptions import (
    GroupNotFound,
    RemoteNotFound,
    ResponseParseError,
    TenantNotFound,
    UserNotFound,
)
from ...core.value_objects import GroupPath
from ...integrations.keycloak import endpoints
from ...integrations.keycloak.json_utils import as_object, as_object_list, get_string
from ...integrations.keycloak.protocols import KeycloakTransportProtocol
from ...config.constants import WORKFLOW_ADMIN_GROUP

logger = logging.getLogger(__name__)


class KeycloakIdentifierResolver:
    """Resolves logical user, group and tenant ids to Keycloak ids."""

    def __init__(self, settings: KeycloakIdentitySettings, client: KeycloakTransportProtocol):
        self._settings = settings
        self._client = client
        self._user_strategy = settings.user_id_strategy

    async def resolve_user_id(self, user_id: str) -> str:
        """Resolve a logical user id to the Keycloak internal user id.

        Args:
            user_id: Id as seen by the workflow engine

        Returns:
            Keycloak internal user id

        Raises:
            UserNotFound: No user has exactly this id under the active strategy
        """
        params = self._user_strategy.search_params(user_id)
        if params is None:
            return user_id

        try:
            payload = await self._client.get_json(endpoints.users(), params=params)
            record = self.find_user(payload, user_id)
        except (RemoteNotFound, ResponseParseError) as e:
            raise UserNotFound(user_id) from e

        keycloak_id = get_string(record, "id") if record else None
        if keycloak_id is None:
            raise UserNotFound(user_id)
        return keycloak_id

    def find_user(self, payload: Any, user_id: str) -> Optional[Dict[str, Any]]:
        """Pick the record whose strategy field equals user_id exactly.

        Keycloak's user search is a substring match, so a search for
        "ann@x.org" may also return "joann@x.org".
        """
        for record in as_object_list(payload):
            if self._user_strategy.matches(record, user_id):
                return record
        return None

    def group_path_for(self, group_id: str) -> GroupPath:
        """Absolute Keycloak path of a group addressed by its path id.

        The tenant root is prepended unless the id already starts with it or
        denotes the administrator group or one of its subgroups.
        """
        path = GroupPath.parse(group_id)
        tenant_root = self._settings.tenant_root
        if tenant_root and not path.starts_with(tenant_root) and not self._is_admin_path(path):
            path = tenant_root.join(path)
        return self._settings.context_root.join(path)

    def tenant_path_for(self, tenant_id: str) -> GroupPath:
        """Absolute Keycloak path of a tenant addressed by its name."""
        return self._settings.context_root.join(self._settings.tenant_root).join(
            GroupPath.parse(tenant_id)
        )

    def canonical_group_id(self, group_id: str) -> str:
        """Normalize a logical group id to the form returned groups carry."""
        if not self._settings.use_group_path_as_group_id:
            return group_id
        return str(self.group_path_for(group_id).relative_to(self._settings.context_root))

    def _is_admin_path(self, path: GroupPath) -> bool:
        admin_groups = [WORKFLOW_ADMIN_GROUP]
        if self._settings.administrator_group_name:
            admin_groups.append(self._settings.administrator_group_name)
        return any(
            path.starts_with(GroupPath.parse(admin), ignore_case=True) for admin in admin_groups
        )

    async def resolve_group_id(self, group_id: str) -> str:
        """Resolve a logical group id to the Keycloak internal group id.

        Raises:
            GroupNotFound: The group path does not exist
        """
        if not self._settings.use_group_path_as_group_id:
            return group_id
        path = self.group_path_for(group_id)
        try:
            return await self._lookup_by_path(path)
        except (RemoteNotFound, ResponseParseError) as e:
            raise GroupNotFound(group_id, details={"path": path.to_absolute()}) from e

    async def resolve_tenant_id(self, tenant_id: str) -> str:
        """Resolve a logical tenant id to the Keycloak internal group id.

        Raises:
            TenantNotFound: The tenant group does not exist
        """
        if not self._settings.use_group_name_as_tenant_id:
            return tenant_id
        path = self.tenant_path_for(tenant_id)
        try:
            return await self._lookup_by_path(path)
        except (RemoteNotFound, ResponseParseError) as e:
            raise TenantNotFound(tenant_id, details={"path": path.to_absolute()}) from e

    async def _lookup_by_path(self, path: GroupPath) -> str:
        payload = await self._client.get_json(endpoints.group_by_path(path))
        keycloak_id = get_string(as_object(payload), "id")
        if keycloak_id is None:
            raise ResponseParseError(f"Group at {path.to_absolute()} has no id")
        logger.debug(f"Resolved group path {path.to_absolute()} to {keycloak_id}")
        return keycloak_id
