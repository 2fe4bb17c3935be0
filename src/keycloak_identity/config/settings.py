"""
Settings for the Keycloak identity provider.

Values come from keyword arguments, KEYCLOAK_* environment variables or a
.env file. The model is frozen so every component shares one immutable
configuration for the lifetime of the process.
"""
from typing import Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_MAX_RESULT_SIZE, DEFAULT_USER_ID_CUSTOM_ATTRIBUTE
from ..core.value_objects import (
    ByCustomAttribute,
    ByEmail,
    ById,
    ByPath,
    ByUsername,
    ContainerIdStrategy,
    GroupById,
    GroupPath,
    UserIdStrategy,
)


class KeycloakIdentitySettings(BaseSettings):
    """Immutable configuration of the identity provider."""

    model_config = SettingsConfigDict(
        env_prefix="KEYCLOAK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Connection
    server_url: str = Field(description="Keycloak base URL")
    realm_name: str = Field(default="master")
    client_id: str = Field(description="Service account client id")
    client_secret: SecretStr = Field(default=SecretStr(""))

    # User id strategy (at most one flag)
    use_email_as_user_id: bool = Field(default=False)
    use_username_as_user_id: bool = Field(default=False)
    use_custom_attribute_as_user_id: bool = Field(default=False)
    user_id_custom_attribute: str = Field(default=DEFAULT_USER_ID_CUSTOM_ATTRIBUTE)

    # Group and tenant id strategy
    use_group_path_as_group_id: bool = Field(default=False)
    use_group_name_as_tenant_id: bool = Field(default=False)

    # Well known groups and users
    administrator_group_name: Optional[str] = Field(default=None)
    administrator_user_id: Optional[str] = Field(default=None)
    tenant_root_group_name: Optional[str] = Field(default=None)
    context_root_group_name: Optional[str] = Field(default=None)

    authorization_check_enabled: bool = Field(default=True)

    # Transport
    disable_ssl_certificate_validation: bool = Field(default=False)
    max_http_connections: int = Field(default=50, gt=0)
    connection_timeout: float = Field(default=30.0, gt=0)
    proxy_uri: Optional[str] = Field(default=None)
    proxy_user: Optional[str] = Field(default=None)
    proxy_password: Optional[SecretStr] = Field(default=None)

    max_result_size: int = Field(default=DEFAULT_MAX_RESULT_SIZE, gt=0)

    # Query result cache
    cache_enabled: bool = Field(default=False)
    max_cache_size: int = Field(default=500, gt=0)
    cache_expiration_timeout_min: int = Field(default=15, gt=0)

    @field_validator("server_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator(
        "administrator_group_name",
        "administrator_user_id",
        "tenant_root_group_name",
        "context_root_group_name",
        "proxy_uri",
    )
    @classmethod
    def blank_as_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @model_validator(mode="after")
    def check_single_user_id_strategy(self) -> "KeycloakIdentitySettings":
        enabled = [
            name
            for name in (
                "use_email_as_user_id",
                "use_username_as_user_id",
                "use_custom_attribute_as_user_id",
            )
            if getattr(self, name)
        ]
        if len(enabled) > 1:
            raise ValueError(f"Only one user id strategy may be enabled, got: {', '.join(enabled)}")
        return self

    @property
    def admin_url(self) -> str:
        """Base URL of the realm's admin REST API."""
        return f"{self.server_url}/admin/realms/{self.realm_name}"

    @property
    def context_root(self) -> GroupPath:
        return GroupPath.parse(self.context_root_group_name)

    @property
    def tenant_root(self) -> GroupPath:
        return GroupPath.parse(self.tenant_root_group_name)

    @property
    def user_id_strategy(self) -> UserIdStrategy:
        if self.use_email_as_user_id:
            return ByEmail()
        if self.use_username_as_user_id:
            return ByUsername()
        if self.use_custom_attribute_as_user_id:
            return ByCustomAttribute(self.user_id_custom_attribute)
        return ById()

    @property
    def group_id_strategy(self) -> ContainerIdStrategy:
        if self.use_group_path_as_group_id:
            return ByPath(self.context_root)
        return GroupById()

    @property
    def tenant_id_strategy(self) -> ContainerIdStrategy:
        if self.use_group_name_as_tenant_id:
            # Tenant name sits directly below the tenant root
            return ByPath(self.context_root, tenant_level=len(self.tenant_root))
        return GroupById()

    @property
    def cache_expiration_seconds(self) -> float:
        return self.cache_expiration_timeout_min * 60.0
