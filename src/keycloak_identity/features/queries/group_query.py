"""Fluent group query."""

from typing import Optional, Tuple

from .base import AbstractQuery, require_value, require_values
from .ordering import GroupQueryProperty
from ...core.entities import Group, GroupType


class GroupQuery(AbstractQuery[Group]):

    def __init__(self, executor=None):
        super().__init__(executor)
        self.id: Optional[str] = None
        self.ids: Optional[Tuple[str, ...]] = None
        self.name: Optional[str] = None
        self.name_like: Optional[str] = None
        self.type: Optional[GroupType] = None
        self.user_id: Optional[str] = None

    def group_id(self, group_id: str) -> "GroupQuery":
        self.id = require_value(group_id, "id")
        return self

    def group_id_in(self, *group_ids: str) -> "GroupQuery":
        self.ids = require_values(group_ids, "ids")
        return self

    def group_name(self, name: str) -> "GroupQuery":
        self.name = require_value(name, "name")
        return self

    def group_name_like(self, name_like: str) -> "GroupQuery":
        self.name_like = require_value(name_like, "name_like")
        return self

    def group_type(self, group_type) -> "GroupQuery":
        self.type = GroupType(require_value(group_type, "type"))
        return self

    def group_member(self, user_id: str) -> "GroupQuery":
        self.user_id = require_value(user_id, "user_id")
        return self

    def order_by_group_id(self) -> "GroupQuery":
        return self.order_by(GroupQueryProperty.ID)

    def order_by_group_name(self) -> "GroupQuery":
        return self.order_by(GroupQueryProperty.NAME)

    def order_by_group_type(self) -> "GroupQuery":
        return self.order_by(GroupQueryProperty.TYPE)
