"""Provisioning of a full list of component definitions."""

import logging
from typing import List, Optional, Sequence

from sitecore_provisioner.config.models import ProvisionerConfig
from sitecore_provisioner.models.definition import ComponentDefinition
from sitecore_provisioner.models.summary import CreationSummary, PageDataRecord
from sitecore_provisioner.provision.builders import ResourceBuilder
from sitecore_provisioner.provision.orchestrator import TreeOrchestrator
from sitecore_provisioner.provision.run_log import RunLog
from sitecore_provisioner.utils.authoring_client import AuthoringClient

logger = logging.getLogger(__name__)


class RunAggregator:
    """Provisions definitions one after another and records the page data item.

    Attributes:
        orchestrator: Orchestrator provisioning each definition tree
        builder: Builder used for the page data item
    """

    def __init__(self, orchestrator: TreeOrchestrator, builder: ResourceBuilder):
        self.orchestrator = orchestrator
        self.builder = builder

    def run(self, definitions: Sequence[ComponentDefinition]) -> List[CreationSummary]:
        """Provision every definition, then create the page data item.

        Definitions are processed strictly in input order. The first failure
        aborts the run; items created before it are left in place.

        Args:
            definitions: Top-level component definitions

        Returns:
            One summary per definition, in input order
        """
        summaries: List[CreationSummary] = []
        records: List[PageDataRecord] = []

        for index, definition in enumerate(definitions, start=1):
            logger.info(f"[{index}/{len(definitions)}] {definition.component_name}")
            summary = self.orchestrator.provision(definition)
            summaries.append(summary)
            records.append(PageDataRecord.from_summary(summary))

        page_data = self.builder.create_page_data_item(records)
        logger.info(f"Created page data item {page_data.id} listing {len(records)} components")

        return summaries


def provision_components(
    definitions: Sequence[ComponentDefinition],
    config: ProvisionerConfig,
    client: Optional[AuthoringClient] = None,
    run_log: Optional[RunLog] = None,
) -> List[CreationSummary]:
    """Provision component definitions in Sitecore.

    Args:
        definitions: Validated top-level component definitions
        config: Provisioner configuration
        client: Authoring API client (created from ``config`` if None)
        run_log: Log receiving every created item (a new one if None)

    Returns:
        One summary per definition, in input order

    Raises:
        RemoteCreateFailed: If any create call fails
    """
    client = client or AuthoringClient.from_config(config)
    builder = ResourceBuilder(client, config, run_log)
    orchestrator = TreeOrchestrator(builder, config)
    return RunAggregator(orchestrator, builder).run(definitions)
