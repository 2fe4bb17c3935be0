"""Admin REST API paths, relative to /admin/realms/<realm>."""

from urllib.parse import quote

from ...core.value_objects import GroupPath


def _segment(value: str) -> str:
    return quote(value, safe="")


def users() -> str:
    return "/users"


def user(user_id: str) -> str:
    return f"/users/{_segment(user_id)}"


def user_groups(user_id: str) -> str:
    return f"/users/{_segment(user_id)}/groups"


def groups() -> str:
    return "/groups"


def group(group_id: str) -> str:
    return f"/groups/{_segment(group_id)}"


def group_members(group_id: str) -> str:
    return f"/groups/{_segment(group_id)}/members"


def group_by_path(path: GroupPath) -> str:
    return f"/group-by-path/{path.to_url_path()}"
