"""Configuration module for sitecore-provisioner."""

from sitecore_provisioner.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigLoadError,
    MissingConfiguration,
    create_example_config,
    load_config,
    load_config_from_env,
)
from sitecore_provisioner.config.models import (
    PageDataSettings,
    ParentIds,
    ProvisionerConfig,
    TemplateKindIds,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ProvisionerConfig",
    "ParentIds",
    "TemplateKindIds",
    "PageDataSettings",
    "load_config",
    "load_config_from_env",
    "create_example_config",
    "ConfigLoadError",
    "MissingConfiguration",
]
