"""
Identity provider façade.

Wires settings, transport, resolver, transformer, services and caches, and
hands out the fluent queries. Raw fetch results are cached per query
snapshot; post-processing, including authorization, runs on every call.
"""
import logging
from typing import List, Optional

from .config.settings import KeycloakIdentitySettings
from .core.entities import Group, Tenant, User
from .features.authorization import AuthorizationContext, PermissiveAuthorizationContext
from .features.cache import create_query_cache
from .features.identity import KeycloakEntityTransformer, KeycloakIdentifierResolver
from .features.queries import (
    CacheableGroupQuery,
    CacheableTenantQuery,
    CacheableUserQuery,
    GroupQuery,
    TenantQuery,
    UserQuery,
)
from .features.services import KeycloakGroupService, KeycloakTenantService, KeycloakUserService
from .integrations.keycloak import KeycloakRestClient
from .integrations.keycloak.protocols import KeycloakTransportProtocol

logger = logging.getLogger(__name__)


class KeycloakIdentityProvider:
    """Read-only user, group and tenant provider backed by Keycloak."""

    def __init__(
        self,
        settings: KeycloakIdentitySettings,
        client: Optional[KeycloakTransportProtocol] = None,
        authorization: Optional[AuthorizationContext] = None,
    ):
        self.settings = settings
        self._client = client or KeycloakRestClient(settings)
        authorization = authorization or PermissiveAuthorizationContext()
        resolver = KeycloakIdentifierResolver(settings, self._client)
        transformer = KeycloakEntityTransformer(settings)

        self.user_service = KeycloakUserService(settings, self._client, resolver, transformer, authorization)
        self.group_service = KeycloakGroupService(settings, self._client, resolver, transformer, authorization)
        self.tenant_service = KeycloakTenantService(settings, self._client, resolver, transformer, authorization)

        self._user_cache = create_query_cache(settings, "user")
        self._group_cache = create_query_cache(settings, "group")
        self._tenant_cache = create_query_cache(settings, "tenant")

    # Query factories

    def create_user_query(self) -> UserQuery:
        return UserQuery(self.find_users)

    def create_group_query(self) -> GroupQuery:
        return GroupQuery(self.find_groups)

    def create_tenant_query(self) -> TenantQuery:
        return TenantQuery(self.find_tenants)

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        return await self.create_user_query().user_id(user_id).single_result()

    async def find_group_by_id(self, group_id: str) -> Optional[Group]:
        return await self.create_group_query().group_id(group_id).single_result()

    async def find_tenant_by_id(self, tenant_id: str) -> Optional[Tenant]:
        return await self.create_tenant_query().tenant_id(tenant_id).single_result()

    # Query execution

    async def find_users(self, query: UserQuery) -> List[User]:
        snapshot = CacheableUserQuery.of(query)
        users = await self._user_cache.get_or_load(snapshot.without_paging(), lambda: self._fetch_users(snapshot))
        return await self.user_service.post_process_results(snapshot, list(users))

    async def _fetch_users(self, snapshot: CacheableUserQuery) -> tuple:
        if snapshot.group_id or snapshot.tenant_id:
            return tuple(await self.user_service.request_users_by_group_id(snapshot))
        return tuple(await self.user_service.request_users_without_group_id(snapshot))

    async def find_groups(self, query: GroupQuery) -> List[Group]:
        snapshot = CacheableGroupQuery.of(query)
        groups = await self._group_cache.get_or_load(snapshot.without_paging(), lambda: self._fetch_groups(snapshot))
        return await self.group_service.post_process_results(snapshot, list(groups))

    async def _fetch_groups(self, snapshot: CacheableGroupQuery) -> tuple:
        if snapshot.user_id:
            return tuple(await self.group_service.request_groups_by_user_id(snapshot))
        return tuple(await self.group_service.request_groups_without_user_id(snapshot))

    async def find_tenants(self, query: TenantQuery) -> List[Tenant]:
        snapshot = CacheableTenantQuery.of(query)
        tenants = await self._tenant_cache.get_or_load(snapshot.without_paging(), lambda: self._fetch_tenants(snapshot))
        return await self.tenant_service.post_process_results(snapshot, list(tenants))

    async def _fetch_tenants(self, snapshot: CacheableTenantQuery) -> tuple:
        if not snapshot.user_id:
            return tuple(await self.tenant_service.request_tenants_without_user_id(snapshot))
        tenants = await self.tenant_service.request_tenants_by_user_id(snapshot)
        if snapshot.group_id:
            # Both memberships must hold
            containing = {tenant.id for tenant in await self.tenant_service.request_tenants_without_user_id(snapshot)}
            tenants = [tenant for tenant in tenants if tenant.id in containing]
        return tuple(tenants)

    # Administrators

    async def resolve_administrator_user_id(self) -> Optional[str]:
        """Engine id of the configured administrator user, if one is configured."""
        if not self.settings.administrator_user_id:
            return None
        admin_id = await self.user_service.get_keycloak_admin_user_id(self.settings.administrator_user_id)
        logger.info(f"Resolved administrator user '{self.settings.administrator_user_id}' to '{admin_id}'")
        return admin_id

    async def resolve_administrator_group_id(self) -> Optional[str]:
        """Engine id of the configured administrator group, if one is configured."""
        if not self.settings.administrator_group_name:
            return None
        admin_id = await self.group_service.get_keycloak_admin_group_id(self.settings.administrator_group_name)
        logger.info(f"Resolved administrator group '{self.settings.administrator_group_name}' to '{admin_id}'")
        return admin_id

    async def get_user_id_by_username(self, username: str) -> Optional[str]:
        return await self.user_service.get_user_id_by_username(username)

    # Lifecycle

    def clear_cache(self) -> None:
        self._user_cache.invalidate_all()
        self._group_cache.invalidate_all()
        self._tenant_cache.invalidate_all()

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> "KeycloakIdentityProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
