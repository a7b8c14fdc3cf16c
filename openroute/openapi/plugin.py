"""AI plugin manifest served at ``/.well-known/ai-plugin.json``."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaVersion(StrEnum):
    V1 = "v1"


class AuthType(StrEnum):
    NONE = "none"
    OAUTH = "oauth"
    SERVICE_HTTP = "service_http"
    USER_HTTP = "user_http"


class APIType(StrEnum):
    OPENAPI = "openapi"


class PluginAuth(BaseModel):
    """Authentication declared by the plugin. Only documented, never enforced."""

    model_config = ConfigDict(extra="allow")

    type: AuthType = AuthType.NONE


class PluginApi(BaseModel):
    """Pointer to the OpenAPI document of the plugin.

    A ``url`` that does not start with ``http`` is made absolute with the
    ``Host`` header of the manifest request.
    """

    type: APIType = APIType.OPENAPI
    url: str | None = None
    has_user_authentication: bool = False


class AIPlugin(BaseModel):
    """AI plugin manifest.

    Attributes:
        name_for_human: Display name.
        name_for_model: Name used by the model to reference the plugin.
        description_for_human: Display description.
        description_for_model: Description used by the model.
        logo_url: Plugin logo.
        contact_email: Contact address.
        legal_info_url: Legal information page.
    """

    schema_version: SchemaVersion = SchemaVersion.V1
    name_for_human: str
    name_for_model: str
    description_for_human: str
    description_for_model: str
    logo_url: str
    contact_email: str
    legal_info_url: str
    auth: PluginAuth = Field(default_factory=PluginAuth)
    api: PluginApi = Field(default_factory=PluginApi)


def build_manifest(plugin: AIPlugin, openapi_url: str, host: str | None) -> dict[str, Any]:
    """Render ``plugin`` with an absolute ``api.url``.

    Args:
        plugin: Configured manifest.
        openapi_url: Path of the OpenAPI document, used when ``api.url`` is unset.
        host: ``Host`` header of the current request.

    Returns:
        dict: JSON-ready manifest.
    """
    url = plugin.api.url or openapi_url
    if not url.startswith("http"):
        url = f"https://{host}{url}"
    manifest = plugin.model_dump(mode="json")
    manifest["api"]["url"] = url
    return manifest
