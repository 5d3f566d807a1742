"""Utility functions and classes for sitecore-provisioner."""

from sitecore_provisioner.utils.authoring_client import AuthoringClient, RemoteCreateFailed
from sitecore_provisioner.utils.identifiers import InvalidIdentifierFormat, format_guid, is_guid
from sitecore_provisioner.utils.names import sanitize_item_name, title_case_with_spacing

__all__ = [
    "AuthoringClient",
    "RemoteCreateFailed",
    "InvalidIdentifierFormat",
    "format_guid",
    "is_guid",
    "sanitize_item_name",
    "title_case_with_spacing",
]
