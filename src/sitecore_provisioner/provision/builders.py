"""Builders for each kind of Sitecore item the provisioner creates.

Each builder fixes the template and field payload for one item kind and
delegates to :meth:`AuthoringClient.create_item`. Every created item is
appended to the run log.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from sitecore_provisioner.config.models import ProvisionerConfig
from sitecore_provisioner.models.definition import Field
from sitecore_provisioner.models.summary import CreatedResource, PageDataRecord
from sitecore_provisioner.provision.run_log import CreatedResourceRecord, ResourceKind, RunLog
from sitecore_provisioner.utils.authoring_client import AuthoringClient

logger = logging.getLogger(__name__)

SECTION_NAME = "Data"
DATA_FOLDER_TEMPLATE_SUFFIX = "Data Folder"

FieldValues = List[Dict[str, str]]


def field_value(name: str, value: str) -> Dict[str, str]:
    return {"name": name, "value": value}


def build_field_payload(field: Field, source: Optional[str] = None) -> FieldValues:
    """Build the field values of a template field item.

    Args:
        field: Field definition
        source: Multilist source; included when not None

    Returns:
        ``Type`` and ``Title`` values, plus ``Source`` when given
    """
    values = [field_value("Type", field.type), field_value("Title", field.display_name)]
    if source is not None:
        values.append(field_value("Source", source))
    return values


def build_sample_payload(fields: Sequence[Field]) -> FieldValues:
    """Build content field values from every field carrying sample data."""
    return [field_value(f.name, f.sample_data or "") for f in fields if f.has_sample_data]


class ResourceBuilder:
    """Creates templates, sections, fields, folders, renderings and content items.

    Attributes:
        client: Authoring API client
        config: Provisioner configuration (parent and template identifiers)
        run_log: Log receiving every created item
    """

    def __init__(
        self,
        client: AuthoringClient,
        config: ProvisionerConfig,
        run_log: Optional[RunLog] = None,
    ):
        self.client = client
        self.config = config
        self.run_log = run_log if run_log is not None else RunLog()

    def _create(
        self,
        kind: ResourceKind,
        name: str,
        parent_id: str,
        template_id: str,
        fields: Optional[FieldValues] = None,
    ) -> CreatedResource:
        created = self.client.create_item(
            name=name,
            parent_id=parent_id,
            template_id=template_id,
            fields=fields or [],
        )
        self.run_log.append(
            CreatedResourceRecord(
                kind=kind,
                id=created.id,
                name=created.name or name,
                path=created.path,
                parent_id=parent_id,
                template_id=template_id,
            )
        )
        return created

    def create_template(
        self, parent_id: str, name: str, template_kind_id: Optional[str] = None
    ) -> CreatedResource:
        """Create a template (or, with another kind id, a template-like item)."""
        return self._create(
            ResourceKind.TEMPLATE,
            name,
            parent_id,
            template_kind_id or self.config.template_kinds.template,
        )

    def create_template_folder(
        self, parent_id: str, name: str, kind: ResourceKind = ResourceKind.TEMPLATE_FOLDER
    ) -> CreatedResource:
        """Create a folder grouping the templates or renderings of one component tree."""
        return self._create(kind, name, parent_id, self.config.template_kinds.folder)

    def create_section(self, template_id: str, name: str = SECTION_NAME) -> CreatedResource:
        return self._create(
            ResourceKind.SECTION, name, template_id, self.config.template_kinds.section
        )

    def create_field(
        self, section_id: str, field: Field, source: Optional[str] = None
    ) -> CreatedResource:
        """Create a template field item under a section.

        Args:
            section_id: Parent section identifier
            field: Field definition
            source: Multilist source, attached to the payload before creation
        """
        return self._create(
            ResourceKind.FIELD,
            field.name,
            section_id,
            self.config.template_kinds.field,
            build_field_payload(field, source),
        )

    def create_data_folder_template(self, parent_id: str, component_name: str) -> CreatedResource:
        """Create the template of a component's data folder."""
        return self._create(
            ResourceKind.DATA_FOLDER_TEMPLATE,
            f"{component_name} {DATA_FOLDER_TEMPLATE_SUFFIX}",
            parent_id,
            self.config.template_kinds.template,
        )

    def create_data_folder_item(
        self,
        parent_id: str,
        name: str,
        folder_template_id: str,
        masters_id: Optional[str] = None,
    ) -> CreatedResource:
        """Create a data folder item.

        Args:
            parent_id: Parent item identifier
            name: Folder name
            folder_template_id: Data folder template the item is based on
            masters_id: Template whose items the folder holds (``__Masters``)
        """
        fields = [field_value("__Masters", masters_id)] if masters_id else []
        return self._create(ResourceKind.DATA_FOLDER, name, parent_id, folder_template_id, fields)

    def create_rendering(
        self,
        parent_id: str,
        name: str,
        external_component_name: str,
        datasource_template_path: str = "",
    ) -> CreatedResource:
        """Create a rendering referencing its datasource template by path."""
        fields = [
            field_value("componentName", external_component_name),
            field_value("Rendering Contents Resolver", self.config.rendering_contents_resolver),
            field_value("Datasource Template", datasource_template_path),
        ]
        return self._create(
            ResourceKind.RENDERING, name, parent_id, self.config.template_kinds.rendering, fields
        )

    def create_content_item(
        self,
        parent_id: str,
        name: str,
        template_id: str,
        field_values: FieldValues,
        kind: ResourceKind = ResourceKind.CONTENT_ITEM,
    ) -> CreatedResource:
        return self._create(kind, name, parent_id, template_id, field_values)

    def create_page_data_item(self, records: Sequence[PageDataRecord]) -> CreatedResource:
        """Create the aggregate page data item listing every provisioned component."""
        components: List[Dict[str, Any]] = [r.model_dump(by_alias=True, exclude_none=True) for r in records]
        page = self.config.page
        return self.create_content_item(
            self.config.parents.page_data,
            page.item_name,
            self.config.template_kinds.page_data,
            [
                field_value("Page Name", page.name),
                field_value("Page Template", page.template),
                field_value("Components", json.dumps(components, ensure_ascii=False)),
            ],
            kind=ResourceKind.PAGE_DATA,
        )
