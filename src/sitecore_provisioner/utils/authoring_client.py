"""Sitecore Authoring GraphQL API client."""

import json
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from sitecore_provisioner.models.summary import CreatedResource

if TYPE_CHECKING:
    from sitecore_provisioner.config.models import ProvisionerConfig

logger = logging.getLogger(__name__)

CREATE_ITEM_MUTATION = """
mutation CreateItem($input: CreateItemInput!) {
  createItem(input: $input) {
    item { itemId name path }
  }
}"""


class RemoteCreateFailed(Exception):
    """Raised when the Authoring API does not create the requested item.

    Attributes:
        status_code: HTTP status of the response, if one was received
        errors: GraphQL error list reported by the API, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


class AuthoringClient:
    """Client for the ``createItem`` mutation of the Sitecore Authoring API.

    Calls are synchronous and never retried; a failed call raises
    :class:`RemoteCreateFailed` immediately.

    Attributes:
        session: Requests session carrying the bearer token
        endpoint: GraphQL endpoint URL
        database: Default database for created items
        language: Default language for created items
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        verify_tls: bool = True,
        timeout: float = 30.0,
        database: str = "master",
        language: str = "en",
    ):
        """Initialize Authoring API client.

        Args:
            endpoint: Authoring GraphQL endpoint URL
            token: Bearer token for the Authoring API
            verify_tls: Verify TLS certificates of the endpoint
            timeout: Request timeout in seconds (default: 30)
            database: Default database for created items
            language: Default language for created items
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.database = database
        self.language = language

        self.session = requests.Session()
        self.session.verify = verify_tls
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {token}",
            }
        )

    @classmethod
    def from_config(cls, config: "ProvisionerConfig") -> "AuthoringClient":
        """Create a client from validated configuration."""
        return cls(
            endpoint=str(config.endpoint),
            token=config.token() or "",
            verify_tls=config.verify_tls,
            timeout=config.timeout,
            database=config.database,
            language=config.language,
        )

    def _post(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Send a GraphQL request and return the decoded body.

        Raises:
            RemoteCreateFailed: On transport errors, non-2xx status or GraphQL errors
        """
        try:
            response = self.session.post(
                self.endpoint,
                json={"query": query, "variables": variables},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise RemoteCreateFailed(f"Authoring API request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            raise RemoteCreateFailed(
                f"HTTP {response.status_code}", status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteCreateFailed(
                f"Invalid JSON from Authoring API: {e}", status_code=response.status_code
            ) from e

        if not isinstance(body, dict):
            raise RemoteCreateFailed(
                f"Invalid GraphQL response: {json.dumps(body)}", status_code=response.status_code
            )

        errors = body.get("errors")
        if errors:
            raise RemoteCreateFailed(
                f"GraphQL errors: {json.dumps(errors)}",
                status_code=response.status_code,
                errors=errors,
            )

        return body

    def create_item(
        self,
        name: str,
        parent_id: str,
        template_id: str,
        fields: Optional[List[Dict[str, str]]] = None,
        database: Optional[str] = None,
        language: Optional[str] = None,
    ) -> CreatedResource:
        """Create an item in the content tree.

        Args:
            name: Item name
            parent_id: Identifier of the parent item
            template_id: Identifier of the template the item is based on
            fields: Field values as ``{"name": ..., "value": ...}`` pairs
            database: Target database (defaults to the client database)
            language: Language version (defaults to the client language)

        Returns:
            Handle of the created item

        Raises:
            RemoteCreateFailed: If the item is not created
        """
        variables = {
            "input": {
                "database": database or self.database,
                "language": language or self.language,
                "name": name,
                "parent": parent_id,
                "templateId": template_id,
                "fields": list(fields or []),
            }
        }

        logger.debug(f"Creating item '{name}' under {parent_id} (template {template_id})")
        body = self._post(CREATE_ITEM_MUTATION, variables)

        data = body.get("data") or {}
        root = data.get("createItem") if isinstance(data, dict) else None
        item = root.get("item") if isinstance(root, dict) else None
        if not isinstance(item, dict) or not item.get("itemId"):
            raise RemoteCreateFailed(f"Invalid GraphQL response: {json.dumps(body)}")

        try:
            created = CreatedResource.from_response(item)
        except ValidationError as e:
            raise RemoteCreateFailed(f"Invalid item in GraphQL response: {json.dumps(item)}") from e

        logger.debug(f"Created item '{created.name}' {created.id} at {created.path}")
        return created
