"""Configuration loading utilities."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from sitecore_provisioner.config.models import DEFAULT_TOKEN_ENV, ProvisionerConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".sitecore-provisioner/config.yaml"

# Environment variables understood by load_config_from_env
ENV_ENDPOINT = "SITECORE_AUTHORING_API_GRAPHQL_ENDPOINT"
ENV_SKIP_TLS_VERIFY = "SKIP_TLS_VERIFY"
ENV_PARENTS = {
    "templates": "TEMPLATE_PARENT_ID",
    "renderings": "RENDERING_PARENT_ID",
    "data_folders": "DATA_FOLDER_PARENT_ID",
    "page_data": "PAGE_SAMPLE_DATA_PARENT_ID",
}
ENV_PAGE_DATA_TEMPLATE = "PAGE_SAMPLE_DATA_ITEM_TEMPLATE_ID"


class ConfigLoadError(Exception):
    """Raised when configuration cannot be loaded or validated."""

    pass


class MissingConfiguration(ConfigLoadError):
    """Raised when a required endpoint, token or identifier is absent."""

    pass


def _validate(config_data: Dict[str, Any], origin: str) -> ProvisionerConfig:
    try:
        config = ProvisionerConfig(**config_data)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors() if err["type"] == "missing"]
        if missing:
            raise MissingConfiguration(
                f"Missing required configuration in {origin}: {', '.join(missing)}"
            ) from e
        raise ConfigLoadError(f"Configuration validation failed:\n{e}") from e

    if not config.token():
        raise MissingConfiguration(
            f"Environment variable {config.token_env} not set "
            f"(required for the Authoring API at {config.endpoint})"
        )

    if not config.verify_tls:
        logger.warning(f"TLS certificate verification is disabled for {config.endpoint}")

    return config


def load_config(config_path: Optional[str] = None) -> ProvisionerConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. If None, defaults to
                    .sitecore-provisioner/config.yaml in current directory.

    Returns:
        Validated ProvisionerConfig instance

    Raises:
        ConfigLoadError: If file not found, invalid YAML, or validation fails
        MissingConfiguration: If required values or the token are absent
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_file = Path(config_path)

    if not config_file.exists():
        raise ConfigLoadError(
            f"Configuration file not found: {config_path}\n"
            f"Run 'sitecore-provisioner init' to create one."
        )

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigLoadError(f"Failed to read {config_path}: {e}") from e

    if config_data is None:
        raise ConfigLoadError(f"Configuration file is empty: {config_path}")
    if not isinstance(config_data, dict):
        raise ConfigLoadError(f"Configuration must be a mapping: {config_path}")

    return _validate(config_data, config_path)


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> ProvisionerConfig:
    """Build configuration from environment variables.

    Reads ``SITECORE_AUTHORING_API_GRAPHQL_ENDPOINT``, ``SITECORE_AUTHORING_API_TOKEN``,
    ``SKIP_TLS_VERIFY`` and the parent/template identifier variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Validated ProvisionerConfig instance

    Raises:
        MissingConfiguration: If any required variable is unset
    """
    env = os.environ if environ is None else environ

    required = [ENV_ENDPOINT, DEFAULT_TOKEN_ENV, ENV_PAGE_DATA_TEMPLATE, *ENV_PARENTS.values()]
    missing = [name for name in required if not env.get(name)]
    if missing:
        raise MissingConfiguration(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    config_data: Dict[str, Any] = {
        "endpoint": env[ENV_ENDPOINT],
        "token_env": DEFAULT_TOKEN_ENV,
        "verify_tls": env.get(ENV_SKIP_TLS_VERIFY, "").lower() != "true",
        "parents": {key: env[name] for key, name in ENV_PARENTS.items()},
        "template_kinds": {"page_data": env[ENV_PAGE_DATA_TEMPLATE]},
        "auth_token": env[DEFAULT_TOKEN_ENV],
    }

    return _validate(config_data, "environment")


def create_example_config(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Create an example configuration file.

    Args:
        output_path: Where to write the example config

    Raises:
        ConfigLoadError: If file cannot be written
    """
    example_config = {
        "endpoint": "https://xmcloudcm.localhost/sitecore/api/authoring/graphql/v1",
        "token_env": DEFAULT_TOKEN_ENV,
        "verify_tls": True,
        "parents": {
            "templates": "{00000000-0000-0000-0000-000000000001}",
            "renderings": "{00000000-0000-0000-0000-000000000002}",
            "data_folders": "{00000000-0000-0000-0000-000000000003}",
            "page_data": "{00000000-0000-0000-0000-000000000004}",
        },
        "template_kinds": {
            "page_data": "{00000000-0000-0000-0000-000000000005}",
        },
        "page": {
            "name": "Figma To Sitecore Demo",
        },
    }

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(output_file, "w", encoding="utf-8") as f:
            yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigLoadError(f"Failed to write example config to {output_path}: {e}") from e
