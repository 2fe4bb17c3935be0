"""Tenant queries through KeycloakIdentityProvider."""

import pytest

from keycloak_identity import ProviderFault, Tenant, TransportError

from conftest import RecordingAuthorization


@pytest.fixture
def provider(make_provider, tenant_settings):
    return make_provider(**tenant_settings)


class TestTenantQueries:

    @pytest.mark.asyncio
    async def test_lists_direct_children_of_tenant_root(self, provider):
        tenants = await provider.create_tenant_query().list()

        assert tenants == [Tenant("alpha", "alpha"), Tenant("beta", "beta"), Tenant("gamma", "gamma")]
        assert await provider.create_tenant_query().count() == 3

    @pytest.mark.asyncio
    async def test_paging(self, provider):
        query = provider.create_tenant_query().order_by_tenant_id()

        first = await query.list_page(0, 2)
        second = await query.list_page(2, 2)
        beyond = await query.list_page(2, 4)

        assert [t.id for t in first] == ["alpha", "beta"]
        assert [t.id for t in second] == ["gamma"]
        assert [t.id for t in beyond] == ["gamma"]
        assert not set(first) & set(second)

    @pytest.mark.asyncio
    async def test_by_id(self, provider, fake_keycloak):
        assert await provider.find_tenant_by_id("beta") == Tenant("beta", "beta")
        assert fake_keycloak.request_paths() == ["/group-by-path/tenants/beta"]
        assert await provider.find_tenant_by_id("whatever") is None

    @pytest.mark.asyncio
    async def test_tenant_id_in(self, provider):
        tenants = await provider.create_tenant_query().tenant_id_in("alpha", "gamma").list()

        assert {t.id for t in tenants} == {"alpha", "gamma"}

    @pytest.mark.asyncio
    async def test_tenant_id_in_ignores_unknown_ids(self, provider):
        tenants = await provider.create_tenant_query().tenant_id_in("alpha", "delta", "omega").list()

        assert [t.id for t in tenants] == ["alpha"]

    @pytest.mark.asyncio
    async def test_tenant_id_in_single_id(self, provider):
        assert [t.id for t in await provider.create_tenant_query().tenant_id_in("gamma").list()] == ["gamma"]

    @pytest.mark.asyncio
    async def test_name_filters(self, provider, fake_keycloak):
        by_name = await provider.create_tenant_query().tenant_name("beta").list()
        by_like = await provider.create_tenant_query().tenant_name_like("%amm%").list()
        no_match = await provider.create_tenant_query().tenant_name_like("xxx*").list()

        assert [t.id for t in by_name] == ["beta"]
        assert [t.id for t in by_like] == ["gamma"]
        assert no_match == []
        assert ("/groups", {"search": "amm"}) in fake_keycloak.requests

    @pytest.mark.asyncio
    async def test_user_member(self, provider):
        tenants = await provider.create_tenant_query().user_member("u-dan").list()

        assert tenants == [Tenant("beta", "beta")]

    @pytest.mark.asyncio
    async def test_unknown_email_yields_no_tenants(self, make_provider, tenant_settings):
        provider = make_provider(use_email_as_user_id=True, **tenant_settings)

        assert await provider.create_tenant_query().user_member("x@example.com").list() == []

    @pytest.mark.asyncio
    async def test_group_member_of_child_group(self, provider):
        tenants = await provider.create_tenant_query().group_member("g-alpha-team").list()

        assert tenants == [Tenant("alpha", "alpha")]

    @pytest.mark.asyncio
    async def test_group_member_by_path(self, make_provider, tenant_settings):
        provider = make_provider(use_group_path_as_group_id=True, **tenant_settings)

        assert [t.id for t in await provider.create_tenant_query().group_member("alpha/team").list()] == ["alpha"]
        assert [t.id for t in await provider.create_tenant_query().group_member("team").list()] == ["alpha"]

    @pytest.mark.asyncio
    async def test_group_member_outside_tenants(self, provider):
        assert await provider.create_tenant_query().group_member("g-managers").list() == []

    @pytest.mark.asyncio
    async def test_user_and_group_member_intersect(self, provider):
        both = await provider.create_tenant_query().user_member("u-ann").group_member("g-alpha-team").list()
        neither = await provider.create_tenant_query().user_member("u-dan").group_member("g-alpha-team").list()

        assert [t.id for t in both] == ["alpha"]
        assert neither == []

    @pytest.mark.asyncio
    async def test_ordering(self, provider):
        by_id_desc = await provider.create_tenant_query().order_by_tenant_id().desc().list()
        by_name = await provider.create_tenant_query().order_by_tenant_name().asc().list()

        assert [t.id for t in by_id_desc] == ["gamma", "beta", "alpha"]
        assert [t.name for t in by_name] == ["alpha", "beta", "gamma"]

    @pytest.mark.asyncio
    async def test_internal_tenant_ids(self, make_provider):
        provider = make_provider(tenant_root_group_name="tenants")

        assert [t.id for t in await provider.create_tenant_query().list()] == ["t-alpha", "t-beta", "t-gamma"]
        assert await provider.find_tenant_by_id("t-gamma") == Tenant("t-gamma", "gamma")

    @pytest.mark.asyncio
    async def test_result_size_cap(self, make_provider, tenant_settings):
        provider = make_provider(max_result_size=2, **tenant_settings)

        assert len(await provider.create_tenant_query().list()) == 2

    @pytest.mark.asyncio
    async def test_authorization_filters_results(self, make_provider, tenant_settings):
        authorization = RecordingAuthorization(allowed={"beta"})
        provider = make_provider(authorization=authorization, **tenant_settings)

        assert [t.id for t in await provider.create_tenant_query().list()] == ["beta"]
        assert len(authorization.checks) == 3

    @pytest.mark.asyncio
    async def test_authenticated_user_sees_own_tenants(self, make_provider, tenant_settings):
        authorization = RecordingAuthorization(authenticated_user_id="U-ANN")
        provider = make_provider(authorization=authorization, **tenant_settings)

        assert [t.id for t in await provider.create_tenant_query().user_member("u-ann").list()] == ["alpha"]

    @pytest.mark.asyncio
    async def test_disabled_authorization_check(self, make_provider, tenant_settings):
        provider = make_provider(
            authorization=RecordingAuthorization(),
            authorization_check_enabled=False,
            **tenant_settings,
        )

        assert len(await provider.create_tenant_query().list()) == 3

    @pytest.mark.asyncio
    async def test_transport_failure_is_fatal(self, provider, fake_keycloak):
        fake_keycloak.failures["/groups"] = TransportError("boom", status_code=503)

        with pytest.raises(ProviderFault) as exc_info:
            await provider.create_tenant_query().list()
        assert isinstance(exc_info.value.__cause__, TransportError)
