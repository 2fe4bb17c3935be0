"""Group queries through KeycloakIdentityProvider."""

import pytest

from keycloak_identity import AmbiguousConfiguration, ConfigurationError, Group, GroupType

from conftest import RecordingAuthorization


class TestGroupQueries:

    @pytest.mark.asyncio
    async def test_all_groups_are_flattened(self, make_provider, fake_keycloak):
        groups = await make_provider().create_group_query().list()

        assert [g.id for g in groups] == [
            "g-admin", "g-tenants", "t-alpha", "g-alpha-team", "t-beta", "t-gamma", "g-managers", "g-reviewers",
        ]
        assert fake_keycloak.requests == [("/groups", {"max": "250"})]

    @pytest.mark.asyncio
    async def test_group_types(self, make_provider):
        system = await make_provider().create_group_query().group_type(GroupType.SYSTEM).order_by_group_name().list()

        assert system == [
            Group("g-admin", "camunda-admin", GroupType.SYSTEM),
            Group("g-reviewers", "reviewers", GroupType.SYSTEM),
        ]

    @pytest.mark.asyncio
    async def test_by_id(self, make_provider, fake_keycloak):
        provider = make_provider()

        assert await provider.find_group_by_id("g-managers") == Group("g-managers", "managers", GroupType.WORKFLOW)
        assert fake_keycloak.request_paths() == ["/groups/g-managers"]
        assert await provider.find_group_by_id("g-nope") is None

    @pytest.mark.asyncio
    async def test_name_like(self, make_provider, fake_keycloak):
        groups = await make_provider().create_group_query().group_name_like("man*").list()

        assert [g.id for g in groups] == ["g-managers"]
        assert fake_keycloak.requests == [("/groups", {"search": "man", "max": "250"})]

    @pytest.mark.asyncio
    async def test_search_matches_are_re_validated(self, make_provider):
        groups = await make_provider().create_group_query().group_name("team").list()

        assert [g.id for g in groups] == ["g-alpha-team"]

    @pytest.mark.asyncio
    async def test_group_id_in(self, make_provider):
        groups = await make_provider().create_group_query().group_id_in("g-managers", "t-beta").order_by_group_id().list()

        assert [g.id for g in groups] == ["g-managers", "t-beta"]

    @pytest.mark.asyncio
    async def test_group_member(self, make_provider, fake_keycloak):
        groups = await make_provider().create_group_query().group_member("u-bob").order_by_group_name().list()

        assert [g.name for g in groups] == ["alpha", "managers"]
        assert fake_keycloak.requests == [("/users/u-bob/groups", {"max": "250"})]

    @pytest.mark.asyncio
    async def test_group_member_by_email(self, make_provider):
        provider = make_provider(use_email_as_user_id=True)

        groups = await provider.create_group_query().group_member("ann@example.com").order_by_group_id().list()

        assert [g.id for g in groups] == ["g-admin", "t-alpha"]

    @pytest.mark.asyncio
    async def test_unknown_member_yields_no_groups(self, make_provider):
        provider = make_provider(use_username_as_user_id=True)

        assert await provider.create_group_query().group_member("zed").list() == []

    @pytest.mark.asyncio
    async def test_unknown_internal_member_yields_no_groups(self, make_provider):
        assert await make_provider().create_group_query().group_member("u-zed").list() == []

    @pytest.mark.asyncio
    async def test_member_sees_own_groups(self, make_provider):
        authorization = RecordingAuthorization(authenticated_user_id="u-bob")
        provider = make_provider(authorization=authorization)

        assert len(await provider.create_group_query().group_member("u-bob").list()) == 2
        assert await provider.create_group_query().group_member("u-dan").list() == []
        assert authorization.checks


class TestGroupPathIds:

    @pytest.fixture
    def provider(self, make_provider):
        return make_provider(use_group_path_as_group_id=True, tenant_root_group_name="tenants")

    @pytest.mark.asyncio
    async def test_ids_are_paths(self, provider):
        groups = await provider.create_group_query().group_name_like("%a%").order_by_group_id().list()

        assert [g.id for g in groups] == [
            "camunda-admin", "managers", "tenants", "tenants/alpha", "tenants/alpha/team", "tenants/beta", "tenants/gamma",
        ]

    @pytest.mark.asyncio
    async def test_find_by_relative_path(self, provider, fake_keycloak):
        group = await provider.find_group_by_id("alpha/team")

        assert group == Group("tenants/alpha/team", "team", GroupType.WORKFLOW)
        assert fake_keycloak.request_paths() == ["/group-by-path/tenants/alpha/team"]

    @pytest.mark.asyncio
    async def test_find_by_emitted_id(self, provider):
        assert (await provider.find_group_by_id("tenants/alpha/team")).name == "team"
        assert (await provider.find_group_by_id("camunda-admin")).type == GroupType.SYSTEM

    @pytest.mark.asyncio
    async def test_id_in_with_delimiter(self, provider):
        groups = await provider.create_group_query().group_id_in("alpha ¦ team", "camunda-admin").order_by_group_id().list()

        assert [g.id for g in groups] == ["camunda-admin", "tenants/alpha/team"]


class TestAdministratorGroup:

    @pytest.mark.asyncio
    async def test_top_level_group(self, make_provider, fake_keycloak):
        provider = make_provider(administrator_group_name="managers")

        assert await provider.resolve_administrator_group_id() == "g-managers"
        assert fake_keycloak.request_paths() == ["/group-by-path/managers"]

    @pytest.mark.asyncio
    async def test_nested_group_found_by_name(self, make_provider, fake_keycloak):
        fake_keycloak.add_group("g-approvers", "approvers", parent_id="t-alpha")

        provider = make_provider(administrator_group_name="approvers", use_group_path_as_group_id=True)

        assert await provider.resolve_administrator_group_id() == "tenants/alpha/approvers"

    @pytest.mark.asyncio
    async def test_duplicate_name_is_ambiguous(self, make_provider, fake_keycloak):
        fake_keycloak.add_group("g-approvers-a", "approvers", parent_id="t-alpha")
        fake_keycloak.add_group("g-approvers-b", "approvers", parent_id="t-beta")

        with pytest.raises(AmbiguousConfiguration) as exc_info:
            await make_provider(administrator_group_name="approvers").resolve_administrator_group_id()
        assert exc_info.value.details["paths"] == ["/tenants/alpha/approvers", "/tenants/beta/approvers"]

    @pytest.mark.asyncio
    async def test_missing_group(self, make_provider):
        with pytest.raises(ConfigurationError) as exc_info:
            await make_provider(administrator_group_name="approvers").resolve_administrator_group_id()
        assert not isinstance(exc_info.value, AmbiguousConfiguration)

    @pytest.mark.asyncio
    async def test_not_configured(self, make_provider):
        assert await make_provider().resolve_administrator_group_id() is None
