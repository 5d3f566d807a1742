"""Data models for sitecore-provisioner."""

from sitecore_provisioner.models.definition import (
    DEFINITIONS_FILENAME,
    ComponentDefinition,
    Field,
    InvalidInput,
    load_definitions,
    parse_definitions,
)
from sitecore_provisioner.models.summary import CreatedResource, CreationSummary, PageDataRecord

__all__ = [
    "DEFINITIONS_FILENAME",
    "ComponentDefinition",
    "Field",
    "InvalidInput",
    "load_definitions",
    "parse_definitions",
    "CreatedResource",
    "CreationSummary",
    "PageDataRecord",
]
