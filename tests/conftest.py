"""Pytest configuration and fixtures for keycloak-identity-provider tests."""

import copy
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import pytest

from keycloak_identity import KeycloakIdentityProvider, KeycloakIdentitySettings
from keycloak_identity.core.exceptions import RemoteNotFound


class FakeKeycloakAdminApi:
    """In-memory stand-in for the realm admin REST API.

    Implements the read endpoints the provider uses, with Keycloak's
    substring search semantics, and records every request.
    """

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.groups: Dict[str, Dict[str, Any]] = {}
        self.top_level: List[str] = []
        self.members: Dict[str, List[str]] = {}
        self.requests: List[tuple] = []
        self.failures: Dict[str, Exception] = {}

    # Data setup

    def add_user(self, user_id, username, email=None, first_name=None, last_name=None, attributes=None):
        record = {"id": user_id, "username": username, "enabled": True}
        if email is not None:
            record["email"] = email
        if first_name is not None:
            record["firstName"] = first_name
        if last_name is not None:
            record["lastName"] = last_name
        if attributes is not None:
            record["attributes"] = attributes
        self.users[user_id] = record
        return record

    def add_group(self, group_id, name, parent_id=None, attributes=None):
        parent = self.groups[parent_id] if parent_id else None
        record = {
            "id": group_id,
            "name": name,
            "path": f"{parent['path'] if parent else ''}/{name}",
            "attributes": attributes or {},
            "subGroups": [],
        }
        self.groups[group_id] = record
        if parent:
            parent["subGroups"].append(record)
        else:
            self.top_level.append(group_id)
        self.members.setdefault(group_id, [])
        return record

    def add_member(self, group_id, user_id):
        self.members[group_id].append(user_id)

    # Transport protocol

    async def get_json(self, path: str, params=None) -> Any:
        params = dict(params or {})
        self.requests.append((path, params))
        if path in self.failures:
            raise self.failures[path]

        segments = [unquote(segment) for segment in path.strip("/").split("/")]
        head = segments[0]
        if head == "users" and len(segments) == 1:
            return self._search_users(params)
        if head == "users" and len(segments) == 2:
            return copy.deepcopy(self._user(segments[1]))
        if head == "users" and segments[2:] == ["groups"]:
            user_id = self._user(segments[1])["id"]
            return [
                self._without_children(group)
                for group_id, group in self.groups.items()
                if user_id in self.members[group_id]
            ]
        if head == "groups" and len(segments) == 1:
            return self._search_groups(params)
        if head == "groups" and len(segments) == 2:
            return copy.deepcopy(self._group(segments[1]))
        if head == "groups" and segments[2:] == ["members"]:
            group = self._group(segments[1])
            limit = int(params.get("max", 100))
            return [copy.deepcopy(self.users[user_id]) for user_id in self.members[group["id"]]][:limit]
        if head == "group-by-path":
            wanted = "/" + "/".join(segments[1:])
            for group in self.groups.values():
                if group["path"] == wanted:
                    return copy.deepcopy(group)
            raise RemoteNotFound(f"no group at {wanted}")
        raise AssertionError(f"unexpected request {path}")

    async def close(self) -> None:
        pass

    def request_paths(self) -> List[str]:
        return [path for path, _ in self.requests]

    # Helpers

    def _user(self, user_id):
        if user_id not in self.users:
            raise RemoteNotFound(f"no user {user_id}")
        return self.users[user_id]

    def _group(self, group_id):
        if group_id not in self.groups:
            raise RemoteNotFound(f"no group {group_id}")
        return self.groups[group_id]

    @staticmethod
    def _without_children(group):
        return {key: copy.deepcopy(value) for key, value in group.items() if key != "subGroups"}

    def _search_users(self, params):
        def contains(record, key, value):
            return value.casefold() in (record.get(key) or "").casefold()

        results = []
        for record in self.users.values():
            if "q" in params:
                attribute, _, value = params["q"].partition(":")
                if value not in record.get("attributes", {}).get(attribute, []):
                    continue
            if "email" in params and not contains(record, "email", params["email"]):
                continue
            if "username" in params and not contains(record, "username", params["username"]):
                continue
            if "firstName" in params and not contains(record, "firstName", params["firstName"]):
                continue
            if "lastName" in params and not contains(record, "lastName", params["lastName"]):
                continue
            results.append(copy.deepcopy(record))
        return results[: int(params.get("max", 100))]

    def _search_groups(self, params):
        search = params.get("search")
        trees = [copy.deepcopy(self.groups[group_id]) for group_id in self.top_level]
        if search:
            trees = [tree for tree in (self._prune(tree, search.casefold()) for tree in trees) if tree]
        return trees[: int(params.get("max", 100))]

    def _prune(self, group, search) -> Optional[dict]:
        if search in group["name"].casefold():
            return group
        children = [child for child in (self._prune(c, search) for c in group["subGroups"]) if child]
        if not children:
            return None
        return {**group, "subGroups": children}


class RecordingAuthorization:
    """Authorization context that only grants listed resource ids."""

    def __init__(self, allowed=(), authenticated_user_id=None):
        self.allowed = set(allowed)
        self.authenticated_user_id = authenticated_user_id
        self.checks = []

    async def is_authorized(self, permission, resource, resource_id):
        self.checks.append((permission, resource, resource_id))
        return resource_id in self.allowed


@pytest.fixture
def make_settings():
    """Factory for settings that ignore the environment's .env file."""
    def _make(**overrides) -> KeycloakIdentitySettings:
        values = {
            "server_url": "http://keycloak.test/",
            "realm_name": "workflow",
            "client_id": "workflow-identity",
            "client_secret": "secret",
        }
        values.update(overrides)
        return KeycloakIdentitySettings(_env_file=None, **values)
    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def fake_keycloak():
    """Realm with an admin group, three tenants and a few users.

    /camunda-admin
    /tenants/alpha/team
    /tenants/beta
    /tenants/gamma
    /managers
    /reviewers (type SYSTEM)
    """
    api = FakeKeycloakAdminApi()
    api.add_user("u-ann", "ann", "ann@example.com", "Ann", "Archer", attributes={"LDAP_ID": ["L-100"]})
    api.add_user("u-bob", "bob", "bob@example.com", "Bob", "Baker")
    api.add_user("u-cid", "cid", "cid@example.com")
    api.add_user("u-dan", "dan", "dan@example.com", "Dan", "Dole")
    api.add_user("u-eve", "eve", first_name="Eve")
    api.add_user("u-fay", "fay", "fay@example.com", "Fay", "Fox")

    api.add_group("g-admin", "camunda-admin")
    api.add_group("g-tenants", "tenants")
    api.add_group("t-alpha", "alpha", parent_id="g-tenants")
    api.add_group("g-alpha-team", "team", parent_id="t-alpha")
    api.add_group("t-beta", "beta", parent_id="g-tenants")
    api.add_group("t-gamma", "gamma", parent_id="g-tenants")
    api.add_group("g-managers", "managers")
    api.add_group("g-reviewers", "reviewers", attributes={"type": ["system"]})

    for user_id in ("u-ann", "u-bob", "u-cid"):
        api.add_member("t-alpha", user_id)
    for user_id in ("u-eve", "u-fay"):
        api.add_member("g-alpha-team", user_id)
    for user_id in ("u-bob", "u-cid", "u-dan"):
        api.add_member("g-managers", user_id)
    api.add_member("g-admin", "u-ann")
    api.add_member("t-beta", "u-dan")
    return api


@pytest.fixture
def make_provider(make_settings, fake_keycloak):
    """Factory for providers running against the fake realm."""
    def _make(authorization=None, **overrides) -> KeycloakIdentityProvider:
        return KeycloakIdentityProvider(
            make_settings(**overrides),
            client=fake_keycloak,
            authorization=authorization,
        )
    return _make


@pytest.fixture
def tenant_settings():
    """Settings overrides for tenants identified by name below /tenants."""
    return {"tenant_root_group_name": "tenants", "use_group_name_as_tenant_id": True}
