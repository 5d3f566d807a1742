"""Shared fixtures for sitecore-provisioner tests."""

from typing import Any, Dict, List, Optional

import pytest

from sitecore_provisioner.config import ParentIds, ProvisionerConfig, TemplateKindIds
from sitecore_provisioner.models import CreatedResource
from sitecore_provisioner.utils import RemoteCreateFailed

TEMPLATES_ROOT = "{11111111-1111-1111-1111-111111111111}"
RENDERINGS_ROOT = "{22222222-2222-2222-2222-222222222222}"
DATA_FOLDERS_ROOT = "{33333333-3333-3333-3333-333333333333}"
PAGE_DATA_ROOT = "{44444444-4444-4444-4444-444444444444}"
PAGE_DATA_TEMPLATE = "{55555555-5555-5555-5555-555555555555}"


class RecordingClient:
    """Stand-in for AuthoringClient that records every create call.

    Created items get sequential identifiers ({00000001-...}, {00000002-...})
    and a path under /sitecore/test. Setting ``fail_on_call`` makes that
    call (1-based) raise RemoteCreateFailed.
    """

    def __init__(self, fail_on_call: Optional[int] = None):
        self.calls: List[Dict[str, Any]] = []
        self.fail_on_call = fail_on_call

    def create_item(
        self,
        name: str,
        parent_id: str,
        template_id: str,
        fields: Optional[List[Dict[str, str]]] = None,
        database: Optional[str] = None,
        language: Optional[str] = None,
    ) -> CreatedResource:
        number = len(self.calls) + 1
        if self.fail_on_call == number:
            raise RemoteCreateFailed("GraphQL errors: boom", status_code=200, errors=["boom"])

        self.calls.append(
            {
                "name": name,
                "parent_id": parent_id,
                "template_id": template_id,
                "fields": list(fields or []),
            }
        )
        item_id = f"{number:08x}-0000-0000-0000-000000000000"
        return CreatedResource(id=item_id, name=name, path=f"/sitecore/test/{name}")

    def calls_named(self, name: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["name"] == name]

    def id_of(self, call: Dict[str, Any]) -> str:
        return f"{self.calls.index(call) + 1:08x}-0000-0000-0000-000000000000"


def field_values(call: Dict[str, Any]) -> Dict[str, str]:
    return {f["name"]: f["value"] for f in call["fields"]}


@pytest.fixture
def config() -> ProvisionerConfig:
    return ProvisionerConfig(
        endpoint="https://cm.example.com/sitecore/api/authoring/graphql/v1",
        auth_token="test_token",
        parents=ParentIds(
            templates=TEMPLATES_ROOT,
            renderings=RENDERINGS_ROOT,
            data_folders=DATA_FOLDERS_ROOT,
            page_data=PAGE_DATA_ROOT,
        ),
        template_kinds=TemplateKindIds(page_data=PAGE_DATA_TEMPLATE),
    )


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()
