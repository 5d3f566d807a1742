"""Main CLI entry point for sitecore-provisioner."""

import logging
import os
from datetime import datetime
from pathlib import Path

import click

from sitecore_provisioner import __version__
from sitecore_provisioner.cli.init import init as init_cmd
from sitecore_provisioner.cli.provision import provision as provision_cmd
from sitecore_provisioner.config import DEFAULT_CONFIG_PATH

LOG_DIR = Path(".sitecore-provisioner/logs")


@click.group()
@click.version_option(version=__version__, prog_name="sitecore-provisioner")
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    help="Configuration file path (environment variables are used if it does not exist)",
    show_default=True,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging level",
    show_default=True,
)
@click.pass_context
def cli(ctx: click.Context, config: str, log_level: str) -> None:
    """sitecore-provisioner: Create Sitecore templates and renderings from component definitions.

    Reads sitecore-template.json exported alongside a generated front-end and
    creates templates, fields, data folders, renderings and sample content
    through the Sitecore Authoring API.
    """
    # Console handler shows warnings; the log file gets the requested level
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    pid = os.getpid()
    log_file = LOG_DIR / f"{timestamp}-{pid}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(getattr(logging, log_level.upper()))
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    # Keep urllib3 connection chatter out of the log file
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_file"] = str(log_file)


cli.add_command(init_cmd, name="init")
cli.add_command(provision_cmd, name="provision")


if __name__ == "__main__":
    cli()
