"""Configuration models for sitecore-provisioner."""

import os
from typing import Optional

from pydantic import BaseModel, Field, HttpUrl, field_validator

from sitecore_provisioner.utils.identifiers import format_guid, is_guid

# Built-in Sitecore template identifiers
TEMPLATE_TEMPLATE_ID = "{AB86861A-6030-46C5-B394-E8F99E8B87DB}"
SECTION_TEMPLATE_ID = "{E269FBB5-3750-427A-9149-7AA950B49301}"
FIELD_TEMPLATE_ID = "{455A3E98-A627-4B40-8035-E683A0331AC7}"
RENDERING_TEMPLATE_ID = "{04646A89-996F-4EE7-878A-FFDBF1F0EF0D}"
TEMPLATE_FOLDER_ID = "{0437FEE2-44C9-46A6-ABE9-28858D9FEE8C}"

RENDERING_CONTENTS_RESOLVER_ID = "{3DF775BF-3F56-446F-9D81-43DE64DA4DDA}"
PAGE_TEMPLATE_ID = "{807349B6-97BB-4A7A-B356-3900EBF2A629}"

DEFAULT_TOKEN_ENV = "SITECORE_AUTHORING_API_TOKEN"


def _guid(value: str) -> str:
    if not is_guid(value):
        raise ValueError(f"not a valid item identifier: {value!r}")
    return format_guid(value)


class ParentIds(BaseModel):
    """Content tree locations under which new items are created.

    Attributes:
        templates: Default parent for templates and template folders
        renderings: Default parent for renderings and rendering folders
        data_folders: Parent for every data folder item
        page_data: Parent of the aggregate "Page Data" item
    """

    templates: str
    renderings: str
    data_folders: str
    page_data: str

    @field_validator("templates", "renderings", "data_folders", "page_data")
    @classmethod
    def must_be_guid(cls, v: str) -> str:
        return _guid(v)


class TemplateKindIds(BaseModel):
    """Template identifiers that decide what kind of item gets created."""

    template: str = TEMPLATE_TEMPLATE_ID
    section: str = SECTION_TEMPLATE_ID
    field: str = FIELD_TEMPLATE_ID
    rendering: str = RENDERING_TEMPLATE_ID
    folder: str = TEMPLATE_FOLDER_ID
    page_data: str

    @field_validator("template", "section", "field", "rendering", "folder", "page_data")
    @classmethod
    def must_be_guid(cls, v: str) -> str:
        return _guid(v)


class PageDataSettings(BaseModel):
    """Values written to the aggregate page data item."""

    item_name: str = "Page Data"
    name: str = "Figma To Sitecore Demo"
    template: str = PAGE_TEMPLATE_ID


class ProvisionerConfig(BaseModel):
    """Root configuration model for sitecore-provisioner.

    Attributes:
        endpoint: Authoring GraphQL endpoint URL
        token_env: Environment variable holding the Authoring API bearer token
        verify_tls: Verify TLS certificates (disable only for local instances)
        timeout: Per-request timeout in seconds
        database: Target database for created items
        language: Language version for created items
        parents: Parent item identifiers
        template_kinds: Template identifiers per created item kind
        page: Page data item settings
        rendering_contents_resolver: Contents resolver set on every rendering
        auth_token: Explicit bearer token; takes precedence over token_env
    """

    endpoint: HttpUrl
    token_env: str = DEFAULT_TOKEN_ENV
    verify_tls: bool = True
    timeout: float = Field(default=30.0, gt=0)
    database: str = "master"
    language: str = "en"
    parents: ParentIds
    template_kinds: TemplateKindIds
    page: PageDataSettings = Field(default_factory=PageDataSettings)
    rendering_contents_resolver: str = RENDERING_CONTENTS_RESOLVER_ID
    auth_token: Optional[str] = Field(default=None, repr=False, exclude=True)

    def token(self) -> Optional[str]:
        """Return the bearer token, falling back to the configured environment variable."""
        return self.auth_token or os.getenv(self.token_env) or None
