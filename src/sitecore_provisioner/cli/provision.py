"""CLI command for provisioning component definitions in Sitecore."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import click

from sitecore_provisioner.config import (
    ConfigLoadError,
    ProvisionerConfig,
    load_config,
    load_config_from_env,
)
from sitecore_provisioner.models import (
    ComponentDefinition,
    CreationSummary,
    InvalidInput,
    load_definitions,
)
from sitecore_provisioner.provision import SAMPLE_ITEM_COUNT, RunLog, provision_components
from sitecore_provisioner.utils import RemoteCreateFailed

logger = logging.getLogger(__name__)


def _load_config(config_path: str) -> ProvisionerConfig:
    if Path(config_path).exists():
        return load_config(config_path)
    logger.info(f"{config_path} not found, reading configuration from environment")
    return load_config_from_env()


def _echo_plan(definitions: List[ComponentDefinition]) -> None:
    for definition in definitions:
        multilist = len(definition.multilist_fields)
        click.echo(
            f"  {definition.component_name}: {len(definition.fields)} fields"
            f" ({multilist} multilist), {len(definition.children)} children"
        )
        for child in definition.children:
            samples = SAMPLE_ITEM_COUNT if child.sample_fields else 0
            click.echo(
                f"    - {child.component_name}: {len(child.fields)} fields, "
                f"{samples} sample items"
            )


def _echo_summaries(summaries: List[CreationSummary]) -> None:
    for summary in summaries:
        click.echo(f"  {summary.component_name}")
        click.echo(f"    template:    {summary.template_id}")
        click.echo(f"    rendering:   {summary.rendering_id}")
        click.echo(f"    data folder: {summary.data_folder_id}")
        if summary.data_source_item_id:
            click.echo(f"    sample item: {summary.data_source_item_id}")
        if summary.child_summaries:
            names = ", ".join(c.component_name for c in summary.child_summaries)
            click.echo(f"    children:    {names}")


@click.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=True))
@click.option(
    "--dry-run",
    is_flag=True,
    help="Validate definitions and configuration without creating anything",
)
@click.option(
    "--run-log",
    "run_log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the list of created items to this JSON file (also on failure)",
)
@click.option("--json", "as_json", is_flag=True, help="Print summaries as JSON")
@click.pass_context
def provision(
    ctx: click.Context,
    directory: str,
    dry_run: bool,
    run_log_path: Optional[str],
    as_json: bool,
) -> None:
    """Provision components defined in DIRECTORY/sitecore-template.json.

    Items are created one at a time. If a call fails the run stops; items
    created before the failure stay in Sitecore and are listed in the run log.

    \b
    Examples:
        # Provision the export in ./downloads/my-page
        sitecore-provisioner provision downloads/my-page

        # Check the definitions and configuration only
        sitecore-provisioner provision downloads/my-page --dry-run

        # Keep a record of every created item
        sitecore-provisioner provision downloads/my-page --run-log run.json
    """
    config_path = ctx.obj["config"] if ctx.obj else ".sitecore-provisioner/config.yaml"

    try:
        definitions = load_definitions(directory)
        config = _load_config(config_path)
    except (InvalidInput, ConfigLoadError) as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if dry_run:
        click.echo(f"[DRY RUN] Would provision {len(definitions)} components:")
        _echo_plan(definitions)
        return

    click.echo(f"Provisioning {len(definitions)} components...")
    run_log = RunLog()

    try:
        summaries = provision_components(definitions, config, run_log=run_log)
    except (RemoteCreateFailed, InvalidInput) as e:
        logger.error(f"Provisioning failed after creating {len(run_log)} items: {e}")
        click.echo(f"Provisioning failed after creating {len(run_log)} items", err=True)
        raise click.ClickException(str(e)) from e
    finally:
        if run_log_path:
            run_log.write(Path(run_log_path))

    if as_json:
        click.echo(
            json.dumps([s.model_dump(by_alias=True) for s in summaries], indent=2)
        )
        return

    _echo_summaries(summaries)
    click.echo("")
    click.echo("=" * 60)
    click.echo(f"Provisioned: {len(summaries)} components ({len(run_log)} items created)")
