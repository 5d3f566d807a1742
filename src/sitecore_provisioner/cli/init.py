"""Create a starter configuration file."""

from pathlib import Path

import click

from sitecore_provisioner.config import ConfigLoadError, create_example_config


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Write an example configuration file.

    The file is written to the path given by the global --config option.
    Replace the placeholder identifiers with the ids of your template,
    rendering, data folder and page data parents.

    \b
    Examples:
        sitecore-provisioner init
        sitecore-provisioner --config site.yaml init --force
    """
    config_path = Path(ctx.obj["config"])

    if config_path.exists() and not force:
        click.echo(f"Error: {config_path} already exists", err=True)
        click.echo("Use --force to overwrite it", err=True)
        raise click.Abort()

    try:
        create_example_config(str(config_path))
    except ConfigLoadError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Wrote example configuration to {config_path}")
    click.echo("Set SITECORE_AUTHORING_API_TOKEN before running 'sitecore-provisioner provision'.")
