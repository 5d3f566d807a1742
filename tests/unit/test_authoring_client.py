"""Unit tests for the Authoring API client."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from sitecore_provisioner.config import ProvisionerConfig
from sitecore_provisioner.utils import AuthoringClient, RemoteCreateFailed
from sitecore_provisioner.utils.authoring_client import CREATE_ITEM_MUTATION

ENDPOINT = "https://cm.example.com/sitecore/api/authoring/graphql/v1"


def make_response(status_code: int = 200, body: object = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = body
    return response


def created(item_id: str = "a1b2", name: str = "Hero", path: str = "/sitecore/templates/Hero") -> dict:
    return {"data": {"createItem": {"item": {"itemId": item_id, "name": name, "path": path}}}}


@pytest.mark.unit
class TestAuthoringClient:
    """Tests for AuthoringClient class."""

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_init_sets_headers_and_tls(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        client = AuthoringClient(ENDPOINT, "test_token", verify_tls=False)

        mock_session.headers.update.assert_called_once_with(
            {"Content-Type": "application/json", "Authorization": "Bearer test_token"}
        )
        assert mock_session.verify is False
        assert client.endpoint == ENDPOINT

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_from_config(self, mock_session_class: Mock, config: ProvisionerConfig) -> None:
        mock_session_class.return_value = MagicMock()
        client = AuthoringClient.from_config(config)
        assert client.endpoint == str(config.endpoint)
        assert client.database == "master"
        assert client.timeout == 30.0

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_create_item(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.post.return_value = make_response(body=created())

        client = AuthoringClient(ENDPOINT, "test_token")
        resource = client.create_item(
            "Hero", "{PARENT}", "{TEMPLATE}", [{"name": "Type", "value": "Single-Line Text"}]
        )

        assert resource.id == "a1b2"
        assert resource.name == "Hero"
        assert resource.path == "/sitecore/templates/Hero"

        args, kwargs = mock_session.post.call_args
        assert args == (ENDPOINT,)
        assert kwargs["timeout"] == 30.0
        assert kwargs["json"]["query"] == CREATE_ITEM_MUTATION
        assert kwargs["json"]["variables"] == {
            "input": {
                "database": "master",
                "language": "en",
                "name": "Hero",
                "parent": "{PARENT}",
                "templateId": "{TEMPLATE}",
                "fields": [{"name": "Type", "value": "Single-Line Text"}],
            }
        }

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_create_item_overrides_database_and_language(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.post.return_value = make_response(body=created())

        client = AuthoringClient(ENDPOINT, "test_token")
        client.create_item("Hero", "{P}", "{T}", database="web", language="de-DE")

        variables = mock_session.post.call_args.kwargs["json"]["variables"]["input"]
        assert variables["database"] == "web"
        assert variables["language"] == "de-DE"
        assert variables["fields"] == []

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_http_error_status(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.post.return_value = make_response(status_code=401, body={})

        client = AuthoringClient(ENDPOINT, "bad_token")
        with pytest.raises(RemoteCreateFailed, match="HTTP 401") as exc_info:
            client.create_item("Hero", "{P}", "{T}")
        assert exc_info.value.status_code == 401

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_graphql_errors(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        errors = [{"message": "The item name is not valid"}]
        mock_session.post.return_value = make_response(body={"data": None, "errors": errors})

        client = AuthoringClient(ENDPOINT, "test_token")
        with pytest.raises(RemoteCreateFailed, match="GraphQL errors") as exc_info:
            client.create_item("Bad!", "{P}", "{T}")
        assert exc_info.value.errors == errors

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_transport_error_is_not_retried(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.post.side_effect = requests.exceptions.ConnectionError("refused")

        client = AuthoringClient(ENDPOINT, "test_token")
        with pytest.raises(RemoteCreateFailed, match="request failed"):
            client.create_item("Hero", "{P}", "{T}")
        assert mock_session.post.call_count == 1

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_missing_item_in_response(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.post.return_value = make_response(body={"data": {"createItem": None}})

        client = AuthoringClient(ENDPOINT, "test_token")
        with pytest.raises(RemoteCreateFailed, match="Invalid GraphQL response"):
            client.create_item("Hero", "{P}", "{T}")

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_non_json_body(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_session.post.return_value = response

        client = AuthoringClient(ENDPOINT, "test_token")
        with pytest.raises(RemoteCreateFailed, match="Invalid JSON"):
            client.create_item("Hero", "{P}", "{T}")

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_null_name_in_response(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        body = {"data": {"createItem": {"item": {"itemId": "a1b2", "name": None, "path": None}}}}
        mock_session.post.return_value = make_response(body=body)

        client = AuthoringClient(ENDPOINT, "test_token")
        resource = client.create_item("Hero", "{P}", "{T}")

        assert resource.id == "a1b2"
        assert resource.name == ""
        assert resource.path == ""

    @patch("sitecore_provisioner.utils.authoring_client.requests.Session")
    def test_malformed_item_in_response(self, mock_session_class: Mock) -> None:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        body = {"data": {"createItem": {"item": {"itemId": ["a1b2"], "name": {"x": 1}, "path": "/p"}}}}
        mock_session.post.return_value = make_response(body=body)

        client = AuthoringClient(ENDPOINT, "test_token")
        with pytest.raises(RemoteCreateFailed, match="Invalid item in GraphQL response"):
            client.create_item("Hero", "{P}", "{T}")
