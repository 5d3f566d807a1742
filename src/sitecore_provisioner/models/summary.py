"""Models for created resources and provisioning summaries."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreatedResource(BaseModel):
    """Handle returned by the Authoring API for a newly created item.

    Attributes:
        id: Item identifier as returned by the API
        name: Item name
        path: Full content tree path (e.g., "/sitecore/templates/Project/Hero")
    """

    id: str
    name: str
    path: str = ""

    @classmethod
    def from_response(cls, item: Dict[str, Any]) -> "CreatedResource":
        """Build from the ``createItem.item`` selection of a GraphQL response."""
        return cls(id=item["itemId"], name=item.get("name") or "", path=item.get("path") or "")


class CreatedField(BaseModel):
    """Name of a field created for a template."""

    name: str


class CreationSummary(BaseModel):
    """Result of provisioning one component definition.

    Attributes:
        component_name: Component name from the definition
        template_id: Identifier of the component template
        rendering_id: Identifier of the component rendering
        data_folder_id: Identifier of the component data folder item
        created_fields: Fields created on the template
        child_summaries: One entry per child component (name only)
        data_source_item_id: Identifier of the sample content item, if created
    """

    model_config = ConfigDict(populate_by_name=True)

    component_name: str = Field(..., alias="componentName")
    template_id: Optional[str] = Field(None, alias="templateId")
    rendering_id: Optional[str] = Field(None, alias="renderingId")
    data_folder_id: Optional[str] = Field(None, alias="dataFolderId")
    created_fields: List[CreatedField] = Field(default_factory=list, alias="createdFields")
    child_summaries: List["CreationSummary"] = Field(default_factory=list, alias="childSummaries")
    data_source_item_id: Optional[str] = Field(None, alias="dataSourceItemId")


class PageDataRecord(BaseModel):
    """Flattened per-component record embedded in the page data item."""

    model_config = ConfigDict(populate_by_name=True)

    component_name: str = Field(..., alias="componentName")
    template_id: Optional[str] = Field(None, alias="templateId")
    rendering_id: Optional[str] = Field(None, alias="renderingId")
    data_folder_id: Optional[str] = Field(None, alias="dataFolderId")
    data_source_item_id: Optional[str] = Field(None, alias="dataSourceItemId")

    @classmethod
    def from_summary(cls, summary: CreationSummary) -> "PageDataRecord":
        return cls(
            component_name=summary.component_name,
            template_id=summary.template_id,
            rendering_id=summary.rendering_id,
            data_folder_id=summary.data_folder_id,
            data_source_item_id=summary.data_source_item_id,
        )
