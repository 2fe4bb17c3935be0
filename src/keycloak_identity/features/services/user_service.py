"""
User queries against the Keycloak admin API.

Membership queries fan out over the resolved group or tenant and all of
its subgroups; other queries use a single user search that is narrowed
by the remote filters and then re-validated locally.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from .base import KeycloakServiceBase
from ..authorization import Resource
from ..matching import matches, matches_any, matches_like, strip_wildcards
from ..queries import CacheableUserQuery, UserQueryProperty
from ...core.entities import User
from ...core.exceptions import (
    ConfigurationError,
    GroupNotFound,
    ProviderFault,
    RemoteNotFound,
    ResponseParseError,
    TenantNotFound,
    UserNotFound,
)
from ...integrations.keycloak import endpoints
from ...integrations.keycloak.json_utils import as_object, as_object_list, get_string

logger = logging.getLogger(__name__)

USER_ACCESSORS = {
    UserQueryProperty.ID: lambda user: user.id,
    UserQueryProperty.EMAIL: lambda user: user.email,
    UserQueryProperty.FIRST_NAME: lambda user: user.first_name,
    UserQueryProperty.LAST_NAME: lambda user: user.last_name,
}


class KeycloakUserService(KeycloakServiceBase):
    """Executes user queries."""

    @property
    def _strategy(self):
        return self._settings.user_id_strategy

    async def request_users_by_group_id(self, query: CacheableUserQuery) -> List[User]:
        """Members common to the queried tenant and group, including subgroups.

        Returns an empty list when the tenant or group does not exist.
        """
        containers: List[str] = []
        try:
            if query.tenant_id:
                containers.append(await self._resolver.resolve_tenant_id(query.tenant_id))
            if query.group_id:
                containers.append(await self._resolver.resolve_group_id(query.group_id))
        except (TenantNotFound, GroupNotFound) as e:
            logger.debug(f"User membership query short-circuits: {e.message}")
            return []

        members_by_container: Dict[str, Dict[str, Dict[str, Any]]] = {}
        try:
            for container_id in containers:
                members = members_by_container.setdefault(container_id, {})
                group_ids = [container_id] + sorted(await self.collect_sub_group_ids(container_id))
                for group_id in group_ids:
                    payload = await self._get_json(
                        endpoints.group_members(group_id),
                        params={"max": self.max_query_result_size},
                    )
                    for record in as_object_list(payload, endpoints.group_members(group_id)):
                        keycloak_id = get_string(record, "id")
                        if keycloak_id is None or self._strategy.extract_id(record) is None:
                            continue
                        members[keycloak_id] = record
        except RemoteNotFound:
            return []
        except ProviderFault as e:
            raise ProviderFault(
                f"Unable to query members of group '{query.group_id}' / tenant '{query.tenant_id}'",
                context={"group_id": query.group_id, "tenant_id": query.tenant_id, "cause": e.message},
            ) from e

        records = self.common_elements(members_by_container.values())
        return [user for user in map(self._transformer.to_user, records) if user is not None]

    async def request_users_without_group_id(self, query: CacheableUserQuery) -> List[User]:
        """Users found by id or by the user search endpoint."""
        try:
            if query.id:
                records = await self._request_user_by_id(query.id)
            elif query.ids and len(query.ids) == 1:
                records = await self._request_user_by_id(query.ids[0])
            else:
                payload = await self._get_json(endpoints.users(), params=self.create_user_search_filter(query))
                records = as_object_list(payload, endpoints.users())
        except ProviderFault as e:
            raise ProviderFault(
                "Unable to query users",
                context={"user_id": query.id, "cause": e.message},
            ) from e

        return [user for user in map(self._transformer.to_user, records) if user is not None]

    async def _request_user_by_id(self, user_id: str) -> List[Dict[str, Any]]:
        """Fetch the user whose engine id is user_id; empty when unknown."""
        try:
            if self._strategy.id_field == "id":
                return [as_object(await self._get_json(endpoints.user(user_id)))]
            payload = await self._get_json(endpoints.users(), params={self._strategy.id_field: user_id})
            return as_object_list(payload, endpoints.users())
        except RemoteNotFound:
            return []

    def create_user_search_filter(self, query: CacheableUserQuery) -> List[Tuple[str, str]]:
        """Remote narrowing of a user search; results are re-validated locally."""
        params: List[Tuple[str, str]] = []
        self._add_filter(params, "email", query.email, query.email_like)
        self._add_filter(params, "firstName", query.first_name, query.first_name_like)
        self._add_filter(params, "lastName", query.last_name, query.last_name_like)
        params.append(("max", self.max_query_result_size))
        return params

    @staticmethod
    def _add_filter(params: List[Tuple[str, str]], name: str, value: Optional[str], like: Optional[str]) -> None:
        if value:
            params.append((name, value))
        elif like:
            literal = strip_wildcards(like)
            if literal:
                params.append((name, literal))

    async def post_process_results(self, query: CacheableUserQuery, users: List[User]) -> List[User]:
        async def is_valid(user: User) -> bool:
            if not (
                matches(query.id, user.id)
                and matches_any(query.ids, user.id)
                and matches(query.email, user.email)
                and matches_like(query.email_like, user.email)
                and matches(query.first_name, user.first_name)
                and matches_like(query.first_name_like, user.first_name)
                and matches(query.last_name, user.last_name)
                and matches_like(query.last_name_like, user.last_name)
            ):
                return False
            return self.is_authenticated_user(user.id) or await self.is_authorized(Resource.USER, user.id)

        return await self.post_process(query, users, is_valid, USER_ACCESSORS)

    async def get_keycloak_admin_user_id(self, configured_admin_user_id: str) -> str:
        """Engine id of the configured administrator user.

        The configured value may be the Keycloak internal id, the email or
        the username of the user.

        Raises:
            ConfigurationError: No such user exists
            ProviderFault: Keycloak could not be queried
        """
        try:
            record = as_object(await self._get_json(endpoints.user(configured_admin_user_id)))
            admin_id = self._strategy.extract_id(record)
            if admin_id is not None:
                return admin_id
        except (RemoteNotFound, ResponseParseError):
            logger.debug(f"Administrator '{configured_admin_user_id}' is not an internal user id")

        if self._settings.use_email_as_user_id and "@" in configured_admin_user_id:
            try:
                await self._resolver.resolve_user_id(configured_admin_user_id)
                return configured_admin_user_id
            except UserNotFound:
                logger.debug(f"Administrator '{configured_admin_user_id}' is not a known email")

        admin_id = await self.get_user_id_by_username(configured_admin_user_id)
        if admin_id is None:
            raise ConfigurationError(
                f"Configured administrator user '{configured_admin_user_id}' does not exist",
                details={"administrator_user_id": configured_admin_user_id},
            )
        return admin_id

    async def get_user_id_by_username(self, username: str) -> Optional[str]:
        """Engine id of the user with exactly this Keycloak username."""
        try:
            payload = await self._get_json(endpoints.users(), params={"username": username})
        except RemoteNotFound:
            return None
        for record in as_object_list(payload, endpoints.users()):
            if (get_string(record, "username") or "").casefold() == username.casefold():
                return self._strategy.extract_id(record)
        return None
