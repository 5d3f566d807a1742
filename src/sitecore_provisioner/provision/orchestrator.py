"""Provisioning of one component definition tree.

Children are provisioned before their parent: each child's data folder item
becomes a multilist source of the parent, so the parent's fields can only be
created once every child folder exists. Children of children are not visited.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from sitecore_provisioner.config.models import ProvisionerConfig
from sitecore_provisioner.models.definition import ComponentDefinition
from sitecore_provisioner.models.summary import CreatedField, CreatedResource, CreationSummary
from sitecore_provisioner.provision.builders import ResourceBuilder, build_sample_payload
from sitecore_provisioner.provision.run_log import ResourceKind
from sitecore_provisioner.utils.identifiers import format_guid
from sitecore_provisioner.utils.names import sanitize_item_name, title_case_with_spacing

logger = logging.getLogger(__name__)

# Number of sample content items created per child data folder
SAMPLE_ITEM_COUNT = 3

# Field names whose sample value is used to name sample items
SAMPLE_NAME_FIELDS = ("title", "name")


@dataclass
class ComponentFolders:
    """Where the items of one component tree are created."""

    templates: str
    renderings: str
    data_folders: str
    template_folder: Optional[str] = None
    rendering_folder: Optional[str] = None

    @property
    def template_parent(self) -> str:
        return self.template_folder or self.templates

    @property
    def rendering_parent(self) -> str:
        return self.rendering_folder or self.renderings


class MultilistSources:
    """Hands out multilist sources in field declaration order.

    When the fields outnumber the sources, the remaining fields get an empty
    source and the create call is still attempted.
    """

    def __init__(self, component_name: str, source_ids: Sequence[str]):
        self.component_name = component_name
        self._ids: Iterator[str] = iter(list(source_ids))

    def next_source(self, field_name: str) -> str:
        source_id = next(self._ids, None)
        if not source_id:
            logger.warning(
                f"No multilist source left for field '{field_name}' of "
                f"'{self.component_name}'; creating it with an empty Source"
            )
            return ""
        return format_guid(source_id)


def sample_base_name(definition: ComponentDefinition) -> str:
    """Base name for sample items: a title/name sample value, else "<Name> Sample"."""
    title_field = next(
        (f for f in definition.fields if f.name.lower() in SAMPLE_NAME_FIELDS), None
    )
    if title_field is not None and title_field.has_sample_data:
        return (title_field.sample_data or "").strip()
    return f"{title_case_with_spacing(definition.component_name)} Sample"


class TreeOrchestrator:
    """Creates every item of one top-level component definition.

    Attributes:
        builder: Resource builder used for every create call
        config: Provisioner configuration
    """

    def __init__(self, builder: ResourceBuilder, config: ProvisionerConfig):
        self.builder = builder
        self.config = config

    def provision(self, definition: ComponentDefinition) -> CreationSummary:
        """Provision a component and its direct children.

        Args:
            definition: Top-level component definition

        Returns:
            Summary of the created component

        Raises:
            RemoteCreateFailed: If any create call fails; nothing further is created
        """
        logger.info(f"Provisioning component '{definition.component_name}'")
        parents = self.config.parents
        folders = ComponentFolders(
            templates=parents.templates,
            renderings=parents.renderings,
            data_folders=parents.data_folders,
        )

        child_summaries: List[CreationSummary] = []
        collected_source_ids: List[str] = []
        if definition.children:
            folders.template_folder = self.builder.create_template_folder(
                folders.templates, definition.component_name
            ).id
            folders.rendering_folder = self.builder.create_template_folder(
                folders.renderings,
                definition.component_name,
                kind=ResourceKind.RENDERING_FOLDER,
            ).id
            child_summaries, collected_source_ids = self._provision_children(definition, folders)

        # Children must be complete before the parent's multilist fields resolve
        source_ids = list(definition.multilist_source_ids) + collected_source_ids
        template, data_folder = self._create_template_and_data_folder(
            definition, folders, source_ids
        )
        samples = self._create_samples(definition, data_folder, template, count=1, numbered=False)
        rendering = self._create_rendering(definition, folders, template)

        return CreationSummary(
            component_name=definition.component_name,
            template_id=template.id,
            rendering_id=rendering.id,
            data_folder_id=data_folder.id,
            created_fields=[CreatedField(name=f.name) for f in definition.fields],
            child_summaries=child_summaries,
            data_source_item_id=samples[0].id if samples else None,
        )

    def _provision_children(
        self, definition: ComponentDefinition, folders: ComponentFolders
    ) -> Tuple[List[CreationSummary], List[str]]:
        """Provision the direct children of ``definition`` in declaration order.

        Returns:
            Tuple of (child summaries, data folder item ids in child order)
        """
        summaries: List[CreationSummary] = []
        source_ids: List[str] = []

        for child in definition.children:
            logger.info(f"Provisioning child '{child.component_name}' of '{definition.component_name}'")
            if child.children:
                logger.warning(
                    f"Children of '{child.component_name}' are not provisioned "
                    f"(only direct children of a top-level component are)"
                )

            template, data_folder = self._create_template_and_data_folder(
                child, folders, child.multilist_source_ids
            )
            source_ids.append(data_folder.id)
            self._create_rendering(child, folders, template)
            self._create_samples(child, data_folder, template, count=SAMPLE_ITEM_COUNT, numbered=True)

            summaries.append(CreationSummary(component_name=child.component_name))

        return summaries, source_ids

    def _create_template_and_data_folder(
        self,
        definition: ComponentDefinition,
        folders: ComponentFolders,
        source_ids: Sequence[str],
    ) -> Tuple[CreatedResource, CreatedResource]:
        """Create template, Data section, fields and the data folder of a component."""
        template = self.builder.create_template(folders.template_parent, definition.component_name)
        section = self.builder.create_section(template.id)
        self._create_fields(definition, section.id, source_ids)

        folder_template = self.builder.create_data_folder_template(
            folders.template_parent, definition.component_name
        )
        data_folder = self.builder.create_data_folder_item(
            folders.data_folders,
            title_case_with_spacing(definition.component_name),
            folder_template.id,
            masters_id=template.id,
        )
        return template, data_folder

    def _create_fields(
        self, definition: ComponentDefinition, section_id: str, source_ids: Sequence[str]
    ) -> List[CreatedResource]:
        sources = MultilistSources(definition.component_name, source_ids)
        created: List[CreatedResource] = []
        for f in definition.fields:
            source = sources.next_source(f.name) if f.is_multilist else None
            created.append(self.builder.create_field(section_id, f, source))
        return created

    def _create_rendering(
        self,
        definition: ComponentDefinition,
        folders: ComponentFolders,
        template: CreatedResource,
    ) -> CreatedResource:
        return self.builder.create_rendering(
            folders.rendering_parent,
            definition.component_name,
            definition.external_component_name,
            template.path,
        )

    def _create_samples(
        self,
        definition: ComponentDefinition,
        data_folder: CreatedResource,
        template: CreatedResource,
        count: int,
        numbered: bool,
    ) -> List[CreatedResource]:
        payload = build_sample_payload(definition.fields)
        if not payload:
            return []

        base_name = sample_base_name(definition)
        items: List[CreatedResource] = []
        for i in range(count):
            name = f"{base_name} {i + 1}" if numbered else base_name
            items.append(
                self.builder.create_content_item(
                    data_folder.id, sanitize_item_name(name), template.id, payload
                )
            )
        return items
