"""Fluent tenant query."""

from typing import Optional, Tuple

from .base import AbstractQuery, require_value, require_values
from .ordering import TenantQueryProperty
from ...core.entities import Tenant


class TenantQuery(AbstractQuery[Tenant]):

    def __init__(self, executor=None):
        super().__init__(executor)
        self.id: Optional[str] = None
        self.ids: Optional[Tuple[str, ...]] = None
        self.name: Optional[str] = None
        self.name_like: Optional[str] = None
        self.user_id: Optional[str] = None
        self.group_id: Optional[str] = None

    def tenant_id(self, tenant_id: str) -> "TenantQuery":
        self.id = require_value(tenant_id, "id")
        return self

    def tenant_id_in(self, *tenant_ids: str) -> "TenantQuery":
        self.ids = require_values(tenant_ids, "ids")
        return self

    def tenant_name(self, name: str) -> "TenantQuery":
        self.name = require_value(name, "name")
        return self

    def tenant_name_like(self, name_like: str) -> "TenantQuery":
        self.name_like = require_value(name_like, "name_like")
        return self

    def user_member(self, user_id: str) -> "TenantQuery":
        self.user_id = require_value(user_id, "user_id")
        return self

    def group_member(self, group_id: str) -> "TenantQuery":
        self.group_id = require_value(group_id, "group_id")
        return self

    def order_by_tenant_id(self) -> "TenantQuery":
        return self.order_by(TenantQueryProperty.ID)

    def order_by_tenant_name(self) -> "TenantQuery":
        return self.order_by(TenantQueryProperty.NAME)
