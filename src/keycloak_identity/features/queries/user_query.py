"""Fluent user query."""

from typing import Optional, Tuple

from .base import AbstractQuery, require_value, require_values
from .ordering import UserQueryProperty
from ...core.entities import User


class UserQuery(AbstractQuery[User]):
    """Query for users, optionally restricted to group or tenant members."""

    def __init__(self, executor=None):
        super().__init__(executor)
        self.id: Optional[str] = None
        self.ids: Optional[Tuple[str, ...]] = None
        self.first_name: Optional[str] = None
        self.first_name_like: Optional[str] = None
        self.last_name: Optional[str] = None
        self.last_name_like: Optional[str] = None
        self.email: Optional[str] = None
        self.email_like: Optional[str] = None
        self.group_id: Optional[str] = None
        self.tenant_id: Optional[str] = None

    def user_id(self, user_id: str) -> "UserQuery":
        self.id = require_value(user_id, "id")
        return self

    def user_id_in(self, *user_ids: str) -> "UserQuery":
        self.ids = require_values(user_ids, "ids")
        return self

    def user_first_name(self, first_name: str) -> "UserQuery":
        self.first_name = first_name
        return self

    def user_first_name_like(self, first_name_like: str) -> "UserQuery":
        self.first_name_like = require_value(first_name_like, "first_name_like")
        return self

    def user_last_name(self, last_name: str) -> "UserQuery":
        self.last_name = last_name
        return self

    def user_last_name_like(self, last_name_like: str) -> "UserQuery":
        self.last_name_like = require_value(last_name_like, "last_name_like")
        return self

    def user_email(self, email: str) -> "UserQuery":
        self.email = email
        return self

    def user_email_like(self, email_like: str) -> "UserQuery":
        self.email_like = require_value(email_like, "email_like")
        return self

    def member_of_group(self, group_id: str) -> "UserQuery":
        self.group_id = require_value(group_id, "group_id")
        return self

    def member_of_tenant(self, tenant_id: str) -> "UserQuery":
        self.tenant_id = require_value(tenant_id, "tenant_id")
        return self

    def order_by_user_id(self) -> "UserQuery":
        return self.order_by(UserQueryProperty.ID)

    def order_by_user_email(self) -> "UserQuery":
        return self.order_by(UserQueryProperty.EMAIL)

    def order_by_user_first_name(self) -> "UserQuery":
        return self.order_by(UserQueryProperty.FIRST_NAME)

    def order_by_user_last_name(self) -> "UserQuery":
        return self.order_by(UserQueryProperty.LAST_NAME)
