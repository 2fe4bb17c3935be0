"""
Tenant queries against the Keycloak admin API.

Tenants are the direct children of the configured tenant root group.
"""
import logging
from typing import Any, Dict, List, Tuple

from .base import KeycloakServiceBase
from ..authorization import Resource
from ..hierarchy import flatten_sub_groups, prune_to_subtree
from ..matching import matches, matches_any, matches_like, strip_wildcards
from ..queries import CacheableTenantQuery, TenantQueryProperty
from ...core.entities import Tenant
from ...core.exceptions import ProviderFault, RemoteNotFound, UserNotFound
from ...core.value_objects import GroupPath
from ...integrations.keycloak import endpoints
from ...integrations.keycloak.json_utils import as_object, as_object_list, get_string

logger = logging.getLogger(__name__)

TENANT_ACCESSORS = {
    TenantQueryProperty.ID: lambda tenant: tenant.id,
    TenantQueryProperty.NAME: lambda tenant: tenant.name,
}


class KeycloakTenantService(KeycloakServiceBase):
    """Executes tenant queries."""

    async def request_tenants_by_user_id(self, query: CacheableTenantQuery) -> List[Tenant]:
        """Tenants whose tenant group the queried user is a direct member of."""
        try:
            keycloak_user_id = await self._resolver.resolve_user_id(query.user_id)
        except UserNotFound as e:
            logger.debug(f"Tenant membership query short-circuits: {e.message}")
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
                f"Unable to query tenants of user '{query.user_id}'",
                context={"user_id": query.user_id, "cause": e.message},
            ) from e

        return self._to_tenants(records)

    async def request_tenants_without_user_id(self, query: CacheableTenantQuery) -> List[Tenant]:
        """Tenants found by id or by group search, optionally containing a group."""
        try:
            if query.id:
                records = await self._request_tenant_by_id(query.id)
                flatten = False
            elif query.ids and len(query.ids) == 1:
                records = await self._request_tenant_by_id(query.ids[0])
                flatten = True
            else:
                payload = await self._get_json(endpoints.groups(), params=self.create_tenant_search_filter(query))
                records = as_object_list(payload, endpoints.groups())
                flatten = True
        except ProviderFault as e:
            raise ProviderFault(
                "Unable to query tenants",
                context={"tenant_id": query.id, "cause": e.message},
            ) from e

        if query.group_id:
            records, found = prune_to_subtree(records, lambda record: self._is_group_id_equal(query.group_id, record))
            if not found:
                logger.debug(f"No tenant contains group '{query.group_id}'")
                return []

        if flatten:
            records = flatten_sub_groups(records)
        return self._to_tenants(records)

    async def _request_tenant_by_id(self, tenant_id: str) -> List[Dict[str, Any]]:
        try:
            if self._settings.use_group_name_as_tenant_id:
                payload = await self._get_json(endpoints.group_by_path(self._resolver.tenant_path_for(tenant_id)))
            else:
                payload = await self._get_json(endpoints.group(tenant_id))
        except RemoteNotFound:
            return []
        return [as_object(payload)]

    def create_tenant_search_filter(self, query: CacheableTenantQuery) -> List[Tuple[str, str]]:
        """Search parameters; Keycloak returns matches inside their full trees."""
        params: List[Tuple[str, str]] = []
        search = query.name or (strip_wildcards(query.name_like) if query.name_like else None)
        if search:
            params.append(("search", search))
        return params

    def _is_group_id_equal(self, group_id: str, record: Dict[str, Any]) -> bool:
        """Check whether a group record is the group addressed by group_id."""
        if not self._settings.use_group_path_as_group_id:
            return get_string(record, "id") == group_id
        if get_string(record, "name") == group_id:
            return True
        relative = GroupPath.parse(get_string(record, "path")).relative_to(
            self._settings.context_root, ignore_case=True
        )
        return str(relative) == self._resolver.canonical_group_id(group_id)

    def _to_tenants(self, records: List[Dict[str, Any]]) -> List[Tenant]:
        tenants = []
        for record in records:
            if not self._transformer.is_tenant_group(record):
                continue
            tenant = self._transformer.to_tenant(record)
            if tenant is not None:
                tenants.append(tenant)
        return tenants

    async def post_process_results(self, query: CacheableTenantQuery, tenants: List[Tenant]) -> List[Tenant]:
        member_is_caller = self.is_authenticated_user(query.user_id)

        async def is_valid(tenant: Tenant) -> bool:
            if not (
                matches(query.id, tenant.id)
                and matches_any(query.ids, tenant.id)
                and matches(query.name, tenant.name)
                and matches_like(query.name_like, tenant.name)
            ):
                return False
            return member_is_caller or await self.is_authorized(Resource.TENANT, tenant.id)

        return await self.post_process(query, tenants, is_valid, TENANT_ACCESSORS)
