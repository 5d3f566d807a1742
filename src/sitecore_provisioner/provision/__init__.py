"""Provisioning of Sitecore items from component definitions.

Creates, for each component definition:
- a template with a "Data" section and one field item per field
- a data folder template and data folder item
- a rendering referencing the template path
- sample content items when fields carry sample data

followed by a single "Page Data" item listing every provisioned component.
"""

from sitecore_provisioner.provision.aggregator import RunAggregator, provision_components
from sitecore_provisioner.provision.builders import ResourceBuilder
from sitecore_provisioner.provision.orchestrator import SAMPLE_ITEM_COUNT, TreeOrchestrator
from sitecore_provisioner.provision.run_log import CreatedResourceRecord, ResourceKind, RunLog

__all__ = [
    "SAMPLE_ITEM_COUNT",
    "CreatedResourceRecord",
    "ResourceBuilder",
    "ResourceKind",
    "RunAggregator",
    "RunLog",
    "TreeOrchestrator",
    "provision_components",
]
