"""sitecore-provisioner: Provision Sitecore templates and renderings from component definitions.

This package reads a declarative tree of component definitions and creates the
matching templates, sections, fields, data folders, renderings and sample items
through the Sitecore Authoring GraphQL API.
"""

__version__ = "0.20261019.0"
__license__ = "MIT"

__all__ = ["__version__", "__license__"]
