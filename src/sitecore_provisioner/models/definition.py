"""Component definition model and loader.

Definitions are read from a ``sitecore-template.json`` file holding a JSON
array of components. Keys are camelCase, as produced by the design export;
the older ``nextJsComponentName`` and ``child`` keys are accepted as aliases.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field as PydanticField
from pydantic import ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFINITIONS_FILENAME = "sitecore-template.json"

MULTILIST_TYPE = "multilist"


class InvalidInput(Exception):
    """Raised when component definitions or identifiers are malformed."""

    pass


class Field(BaseModel):
    """A single template field.

    Attributes:
        name: Field item name (e.g., "title")
        type: Sitecore field type (e.g., "Single-Line Text", "Multilist")
        display_name: Title shown to content authors
        sample_data: Example value used to seed sample content items
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = PydanticField(..., min_length=1)
    type: str
    display_name: str = PydanticField(..., alias="displayName")
    sample_data: Optional[str] = PydanticField(None, alias="sampleData")

    @property
    def is_multilist(self) -> bool:
        """True if this field references items in another data folder."""
        return self.type.lower() == MULTILIST_TYPE

    @property
    def has_sample_data(self) -> bool:
        return bool(self.sample_data and self.sample_data.strip())


class ComponentDefinition(BaseModel):
    """Declarative description of one provisionable component.

    Attributes:
        component_name: Name used for the template, rendering and folders
        external_component_name: Front-end component name set on the rendering
        fields: Template fields in declaration order
        children: Child components provisioned before this one
        multilist_source_ids: Pre-seeded multilist sources, consumed before
            the data folders created for ``children``
    """

    model_config = ConfigDict(populate_by_name=True)

    component_name: str = PydanticField(..., alias="componentName", min_length=1)
    external_component_name: str = PydanticField(
        ...,
        validation_alias=AliasChoices(
            "externalComponentName", "nextJsComponentName", "external_component_name"
        ),
    )
    fields: List[Field] = PydanticField(default_factory=list)
    children: List["ComponentDefinition"] = PydanticField(
        default_factory=list,
        validation_alias=AliasChoices("children", "child"),
    )
    multilist_source_ids: List[str] = PydanticField(
        default_factory=list,
        validation_alias=AliasChoices(
            "multilistSourceIds", "multiListSourceIds", "multilist_source_ids"
        ),
    )

    @field_validator("children", "fields", "multilist_source_ids", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """Treat explicit nulls in the export as empty lists."""
        return [] if v is None else v

    @field_validator("multilist_source_ids")
    @classmethod
    def source_ids_are_guids(cls, v: List[str]) -> List[str]:
        """Reject seeded sources that cannot be formatted as item identifiers."""
        from sitecore_provisioner.utils.identifiers import InvalidIdentifierFormat, format_guid

        for source_id in v:
            if not source_id:
                continue
            try:
                format_guid(source_id)
            except InvalidIdentifierFormat as e:
                raise ValueError(f"invalid multilist source id {source_id!r}: {e}") from e
        return v

    @property
    def multilist_fields(self) -> List[Field]:
        return [f for f in self.fields if f.is_multilist]

    @property
    def sample_fields(self) -> List[Field]:
        return [f for f in self.fields if f.has_sample_data]


def parse_definitions(data: Any) -> List[ComponentDefinition]:
    """Validate decoded JSON as a list of component definitions.

    Args:
        data: Decoded JSON content

    Returns:
        List of validated definitions in input order

    Raises:
        InvalidInput: If data is not an array or any definition is invalid
    """
    if not isinstance(data, list):
        raise InvalidInput("Input must be an array of component definitions")

    definitions: List[ComponentDefinition] = []
    for index, item in enumerate(data):
        try:
            definitions.append(ComponentDefinition.model_validate(item))
        except ValidationError as e:
            raise InvalidInput(f"Invalid component definition at index {index}:\n{e}") from e

    return definitions


def load_definitions(source: Union[str, Path]) -> List[ComponentDefinition]:
    """Load component definitions from a directory or a JSON file.

    Args:
        source: Directory containing ``sitecore-template.json``, or the file itself

    Returns:
        List of validated definitions

    Raises:
        InvalidInput: If the file is missing, not valid JSON, or fails validation
    """
    path = Path(source)
    if path.is_dir():
        path = path / DEFINITIONS_FILENAME

    if not path.exists():
        raise InvalidInput(f"File not found at {path}")

    logger.debug(f"Loading component definitions from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise InvalidInput(f"Failed to read {path}: {e}") from e

    return parse_definitions(data)
