"""Tests for KeycloakEntityTransformer."""

import pytest

from keycloak_identity import Group, GroupType, Tenant, User
from keycloak_identity.features.identity import KeycloakEntityTransformer

ANN = {
    "id": "u-ann",
    "username": "ann",
    "email": "ann@example.com",
    "firstName": "Ann",
    "lastName": "Archer",
    "attributes": {"LDAP_ID": ["L-100"]},
}


@pytest.fixture
def make_transformer(make_settings):
    def _make(**overrides):
        return KeycloakEntityTransformer(make_settings(**overrides))
    return _make


class TestToUser:

    @pytest.mark.parametrize(
        "flags, expected_id",
        [
            ({}, "u-ann"),
            ({"use_email_as_user_id": True}, "ann@example.com"),
            ({"use_username_as_user_id": True}, "ann"),
            ({"use_custom_attribute_as_user_id": True}, "u-ann"),
        ],
    )
    def test_id_follows_strategy(self, make_transformer, flags, expected_id):
        user = make_transformer(**flags).to_user(ANN)

        assert user == User(id=expected_id, first_name="Ann", last_name="Archer", email="ann@example.com")

    def test_record_without_id_field_is_dropped(self, make_transformer):
        record = {"id": "u-eve", "username": "eve"}

        assert make_transformer(use_email_as_user_id=True).to_user(record) is None
        assert make_transformer().to_user(record) is not None

    def test_username_replaces_blank_names(self, make_transformer):
        user = make_transformer().to_user({"id": "u-cid", "username": "cid", "firstName": " ", "lastName": ""})

        assert user.first_name == "cid"

    def test_one_name_is_enough(self, make_transformer):
        user = make_transformer().to_user({"id": "u-x", "username": "x", "lastName": "Xu"})

        assert user.first_name is None
        assert user.last_name == "Xu"


class TestToGroup:

    def test_internal_id(self, make_transformer):
        group = make_transformer().to_group({"id": "g-1", "name": "managers", "path": "/managers"})

        assert group == Group(id="g-1", name="managers", type=GroupType.WORKFLOW)

    def test_path_id(self, make_transformer):
        transformer = make_transformer(use_group_path_as_group_id=True, context_root_group_name="ctx")

        group = transformer.to_group({"id": "g-1", "name": "team", "path": "/ctx/tenants/alpha/team"})

        assert group.id == "tenants/alpha/team"

    @pytest.mark.parametrize(
        "record",
        [
            {"id": "g", "name": "camunda-admin"},
            {"id": "g", "name": "operators"},
            {"id": "g", "name": "x", "attributes": {"type": ["System"]}},
            {"id": "g", "name": "x", "attributes": {"type": ["other", "SYSTEM"]}},
        ],
    )
    def test_system_groups(self, make_transformer, record):
        transformer = make_transformer(administrator_group_name="operators")

        assert transformer.to_group(record).type == GroupType.SYSTEM

    def test_workflow_group(self, make_transformer):
        record = {"id": "g", "name": "x", "attributes": {"type": ["workflow"]}}

        assert make_transformer().to_group(record).type == GroupType.WORKFLOW


class TestTenants:

    def test_tenant_id_from_name(self, make_transformer, tenant_settings):
        tenant = make_transformer(**tenant_settings).to_tenant({"id": "t-1", "name": "Alpha", "path": "/tenants/alpha"})

        assert tenant == Tenant(id="alpha", name="Alpha")

    def test_tenant_internal_id(self, make_transformer):
        tenant = make_transformer(tenant_root_group_name="tenants").to_tenant(
            {"id": "t-1", "name": "alpha", "path": "/tenants/alpha"}
        )

        assert tenant == Tenant(id="t-1", name="alpha")

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/tenants/alpha", True),
            ("/Tenants/alpha", True),
            ("/tenants", False),
            ("/tenants/alpha/team", False),
            ("/camunda-admin", False),
            ("/other/alpha", False),
        ],
    )
    def test_is_tenant_group(self, make_transformer, path, expected):
        transformer = make_transformer(tenant_root_group_name="tenants")

        assert transformer.is_tenant_group({"id": "x", "path": path}) is expected

    def test_is_tenant_group_below_context_root(self, make_transformer):
        transformer = make_transformer(tenant_root_group_name="tenants", context_root_group_name="ctx")

        assert transformer.is_tenant_group({"path": "/ctx/tenants/alpha"})
        assert not transformer.is_tenant_group({"path": "/tenants/alpha"})

    def test_no_tenant_root_means_no_tenants(self, make_transformer):
        assert not make_transformer().is_tenant_group({"path": "/tenants/alpha"})

    def test_context_root_case_differs(self, make_transformer, tenant_settings):
        transformer = make_transformer(context_root_group_name="Org", **tenant_settings)
        record = {"id": "t-1", "name": "acme", "path": "/org/tenants/acme"}

        assert transformer.is_tenant_group(record)
        assert transformer.to_tenant(record) == Tenant(id="acme", name="acme")

    def test_group_path_id_with_context_root_case_differs(self, make_transformer):
        transformer = make_transformer(context_root_group_name="Org", use_group_path_as_group_id=True)

        group = transformer.to_group({"id": "g-1", "name": "team", "path": "/org/team"})

        assert group.id == "team"
