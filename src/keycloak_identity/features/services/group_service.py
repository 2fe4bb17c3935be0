"""
Group queries against the Keycloak admin API.
"""
import logging
from typing import Any, Dict, List, Tuple

from .base import KeycloakServiceBase
from ..authorization import Resource
from ..hierarchy import flatten_sub_groups
from ..matching import matches, matches_any, matches_like, strip_wildcards
from ..queries import CacheableGroupQuery, GroupQueryProperty
from ...core.entities import Group
from ...core.exceptions import (
    AmbiguousConfiguration,
    ConfigurationError,
    ProviderFault,
    RemoteNotFound,
    ResponseParseError,
    UserNotFound,
)
from ...core.value_objects import GroupPath
from ...integrations.keycloak import endpoints
from ...integrations.keycloak.json_utils import as_object, as_object_list, get_string

logger = logging.getLogger(__name__)

GROUP_ACCESSORS = {
    GroupQueryProperty.ID: lambda group: group.id,
    GroupQueryProperty.NAME: lambda group: group.name,
    GroupQueryProperty.TYPE: lambda group: group.type.value,
}


class KeycloakGroupService(KeycloakServiceBase):
    """Executes group queries."""

    async def request_groups_by_user_id(self, query: CacheableGroupQuery) -> List[Group]:
        """Groups the queried user is a direct member of."""
        try:
            keycloak_user_id = await self._resolver.resolve_user_id(query.user_id)
        except UserNotFound as e:
            logger.debug(f"Group membership query short-circuits: {e.message}")
            return []

        try:
            payload = await self._get_json(
                endpoints.user_groups(keycloak_user_id),
                params={"max": self.max_query_result_size},
            )
            records = as_object_list(payload, endpoints.user_groups(keycloak_user_id))
        except RemoteNotFound:
            return []
        except ProviderFault as e:
            raise ProviderFault(
                f"Unable to query groups of user '{query.user_id}'",
                context={"user_id": query.user_id, "cause": e.message},
            ) from e

        return self._to_groups(records)

    async def request_groups_without_user_id(self, query: CacheableGroupQuery) -> List[Group]:
        """Groups found by id or by the group search endpoint."""
        try:
            if query.id:
                records = await self._request_group_by_id(query.id)
            else:
                payload = await self._get_json(endpoints.groups(), params=self.create_group_search_filter(query))
                records = flatten_sub_groups(as_object_list(payload, endpoints.groups()))
        except ProviderFault as e:
            raise ProviderFault(
                "Unable to query groups",
                context={"group_id": query.id, "cause": e.message},
            ) from e

        return self._to_groups(records)

    async def _request_group_by_id(self, group_id: str) -> List[Dict[str, Any]]:
        try:
            if self._settings.use_group_path_as_group_id:
                path = self._resolver.group_path_for(group_id)
                payload = await self._get_json(endpoints.group_by_path(path))
            else:
                payload = await self._get_json(endpoints.group(group_id))
        except RemoteNotFound:
            return []
        return [as_object(payload)]

    def create_group_search_filter(self, query: CacheableGroupQuery) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        if query.name:
            params.append(("search", query.name))
        elif query.name_like and strip_wildcards(query.name_like):
            params.append(("search", strip_wildcards(query.name_like)))
        params.append(("max", self.max_query_result_size))
        return params

    def _to_groups(self, records: List[Dict[str, Any]]) -> List[Group]:
        return [group for group in map(self._transformer.to_group, records) if group is not None]

    async def post_process_results(self, query: CacheableGroupQuery, groups: List[Group]) -> List[Group]:
        query_id = self._resolver.canonical_group_id(query.id) if query.id else None
        query_ids = [self._resolver.canonical_group_id(group_id) for group_id in query.ids] if query.ids else None
        member_is_caller = self.is_authenticated_user(query.user_id)

        async def is_valid(group: Group) -> bool:
            if not (
                matches(query_id, group.id)
                and matches_any(query_ids, group.id)
                and matches(query.name, group.name)
                and matches_like(query.name_like, group.name)
                and matches(query.type, group.type)
            ):
                return False
            return member_is_caller or await self.is_authorized(Resource.GROUP, group.id)

        return await self.post_process(query, groups, is_valid, GROUP_ACCESSORS)

    async def get_keycloak_admin_group_id(self, configured_admin_group_name: str) -> str:
        """Engine id of the configured administrator group.

        The name is first tried as a group path, then searched by exact name
        over the whole group tree.

        Raises:
            AmbiguousConfiguration: More than one group carries the name
            ConfigurationError: No group carries the name
            ProviderFault: Keycloak could not be queried
        """
        path = self._settings.context_root.join(GroupPath.parse(configured_admin_group_name))
        try:
            record = as_object(await self._get_json(endpoints.group_by_path(path)))
            admin_id = self._settings.group_id_strategy.extract_id(record)
            if admin_id is not None:
                return admin_id
        except (RemoteNotFound, ResponseParseError):
            logger.debug(f"Administrator group '{configured_admin_group_name}' is not a group path")

        payload = await self._get_json(endpoints.groups(), params={"search": configured_admin_group_name})
        candidates = [
            record
            for record in flatten_sub_groups(as_object_list(payload, endpoints.groups()))
            if get_string(record, "name") == configured_admin_group_name
        ]
        if len(candidates) > 1:
            raise AmbiguousConfiguration(
                f"Configured administrator group name '{configured_admin_group_name}' is not unique",
                details={
                    "administrator_group_name": configured_admin_group_name,
                    "paths": [record.get("path") for record in candidates],
                },
            )
        if candidates:
            admin_id = self._settings.group_id_strategy.extract_id(candidates[0])
            if admin_id is not None:
                return admin_id
        raise ConfigurationError(
            f"Configured administrator group '{configured_admin_group_name}' does not exist",
            details={"administrator_group_name": configured_admin_group_name},
        )
