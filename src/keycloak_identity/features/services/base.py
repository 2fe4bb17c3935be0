"""
Shared plumbing of the user, group and tenant services.

Each service fetches Keycloak records for a query snapshot and then runs
post-processing: local filtering, authorization, ordering, paging and the
final truncation to the configured maximum result size.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Set, TypeVar

from ..authorization import AuthorizationContext, PermissiveAuthorizationContext, Permission, Resource
from ..hierarchy import collect_sub_group_ids
from ..identity import KeycloakEntityTransformer, KeycloakIdentifierResolver
from ..queries import CacheableQuery, sort_entities
from ...config.settings import KeycloakIdentitySettings
from ...integrations.keycloak import endpoints
from ...integrations.keycloak.json_utils import as_object
from ...integrations.keycloak.protocols import KeycloakTransportProtocol, QueryParams

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeycloakServiceBase:
    """Base class of the Keycloak query services."""

    def __init__(
        self,
        settings: KeycloakIdentitySettings,
        client: KeycloakTransportProtocol,
        resolver: Optional[KeycloakIdentifierResolver] = None,
        transformer: Optional[KeycloakEntityTransformer] = None,
        authorization: Optional[AuthorizationContext] = None,
    ):
        self._settings = settings
        self._client = client
        self._resolver = resolver or KeycloakIdentifierResolver(settings, client)
        self._transformer = transformer or KeycloakEntityTransformer(settings)
        self._authorization = authorization or PermissiveAuthorizationContext()

    @property
    def max_query_result_size(self) -> str:
        """Value of the remote "max" parameter."""
        return str(self._settings.max_result_size)

    async def _get_json(self, path: str, params: Optional[QueryParams] = None) -> Any:
        return await self._client.get_json(path, params=params)

    async def collect_sub_group_ids(self, keycloak_group_id: str) -> Set[str]:
        """Ids of every descendant of a Keycloak group."""
        payload = await self._get_json(endpoints.group(keycloak_group_id))
        return collect_sub_group_ids(as_object(payload, endpoints.group(keycloak_group_id)))

    def is_authenticated_user(self, user_id: Optional[str]) -> bool:
        authenticated = self._authorization.authenticated_user_id
        if user_id is None or authenticated is None:
            return False
        return user_id.casefold() == authenticated.casefold()

    async def is_authorized(self, resource: Resource, resource_id: str) -> bool:
        if not self._settings.authorization_check_enabled:
            return True
        return await self._authorization.is_authorized(Permission.READ, resource, resource_id)

    async def post_process(
        self,
        query: CacheableQuery,
        entities: Iterable[T],
        is_valid: Callable[[T], Awaitable[bool]],
        accessors: Dict[Any, Callable[[T], Any]],
    ) -> List[T]:
        """Filter, order, page and truncate fetched entities."""
        valid = [entity for entity in entities if await is_valid(entity)]
        ordered = sort_entities(valid, query.ordering_properties, accessors)
        if query.is_paged:
            ordered = ordered[query.first_result:query.first_result + query.max_results]
        result = self.truncate(ordered, self._settings.max_result_size)
        logger.debug(f"{type(self).__name__} returns {len(result)} of {len(valid)} valid results")
        return result

    @staticmethod
    def truncate(items: List[T], max_size: int) -> List[T]:
        return items[:max_size]

    @staticmethod
    def common_elements(collections: Iterable[Dict[str, T]]) -> List[T]:
        """Values whose keys occur in every mapping, in first-mapping order."""
        mappings = list(collections)
        if not mappings:
            return []
        shared = set(mappings[0])
        for mapping in mappings[1:]:
            shared &= set(mapping)
        return [value for key, value in mappings[0].items() if key in shared]
