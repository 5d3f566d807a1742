"""Unit tests for the command line interface."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from sitecore_provisioner.cli.main import cli
from sitecore_provisioner.models import DEFINITIONS_FILENAME
from sitecore_provisioner.utils import AuthoringClient
from tests.conftest import RecordingClient

DEFINITIONS: List[Dict[str, Any]] = [
    {
        "componentName": "cardList",
        "externalComponentName": "CardList",
        "fields": [{"name": "cards", "type": "Multilist", "displayName": "Cards"}],
        "children": [
            {
                "componentName": "card",
                "externalComponentName": "Card",
                "fields": [{"name": "title", "type": "Text", "displayName": "Title", "sampleData": "Hi"}],
            }
        ],
    }
]

ENVIRONMENT = {
    "SITECORE_AUTHORING_API_GRAPHQL_ENDPOINT": "https://cm.example.com/graphql",
    "SITECORE_AUTHORING_API_TOKEN": "env_token",
    "TEMPLATE_PARENT_ID": "{11111111-1111-1111-1111-111111111111}",
    "RENDERING_PARENT_ID": "{22222222-2222-2222-2222-222222222222}",
    "DATA_FOLDER_PARENT_ID": "{33333333-3333-3333-3333-333333333333}",
    "PAGE_SAMPLE_DATA_PARENT_ID": "{44444444-4444-4444-4444-444444444444}",
    "PAGE_SAMPLE_DATA_ITEM_TEMPLATE_ID": "{55555555-5555-5555-5555-555555555555}",
}


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop the handlers the CLI group installs on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name, value in ENVIRONMENT.items():
        monkeypatch.setenv(name, value)


def write_definitions(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / DEFINITIONS_FILENAME).write_text(json.dumps(DEFINITIONS), encoding="utf-8")
    return directory


@pytest.mark.unit
class TestInitCommand:
    """Tests for the init command."""

    def test_writes_example_config(self, runner: CliRunner) -> None:
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--config", "site.yaml", "init"])
            assert result.exit_code == 0, result.output
            data = yaml.safe_load(Path("site.yaml").read_text())
            assert "parents" in data
            assert data["token_env"] == "SITECORE_AUTHORING_API_TOKEN"

    def test_refuses_to_overwrite(self, runner: CliRunner) -> None:
        with runner.isolated_filesystem():
            Path("site.yaml").write_text("keep: me\n")
            result = runner.invoke(cli, ["--config", "site.yaml", "init"])
            assert result.exit_code != 0
            assert Path("site.yaml").read_text() == "keep: me\n"


@pytest.mark.unit
class TestProvisionCommand:
    """Tests for the provision command."""

    def test_dry_run_makes_no_calls(self, runner: CliRunner, env: None) -> None:
        with runner.isolated_filesystem():
            write_definitions(Path("export"))
            with patch.object(AuthoringClient, "from_config") as from_config:
                result = runner.invoke(cli, ["provision", "export", "--dry-run"])

            assert result.exit_code == 0, result.output
            assert "[DRY RUN] Would provision 1 components" in result.output
            assert "cardList: 1 fields (1 multilist), 1 children" in result.output
            assert "card: 1 fields, 3 sample items" in result.output
            from_config.assert_not_called()

    def test_provision_from_environment(self, runner: CliRunner, env: None) -> None:
        client = RecordingClient()
        with runner.isolated_filesystem():
            write_definitions(Path("export"))
            with patch.object(AuthoringClient, "from_config", return_value=client):
                result = runner.invoke(
                    cli, ["provision", "export", "--run-log", "run.json"]
                )

            assert result.exit_code == 0, result.output
            assert "Provisioned: 1 components" in result.output
            assert "children:    card" in result.output

            run_log = json.loads(Path("run.json").read_text())
            assert len(run_log["created"]) == len(client.calls)
            assert run_log["created"][-1]["kind"] == "page_data"

    def test_provision_json_output(self, runner: CliRunner, env: None) -> None:
        with runner.isolated_filesystem():
            write_definitions(Path("export"))
            with patch.object(AuthoringClient, "from_config", return_value=RecordingClient()):
                result = runner.invoke(cli, ["provision", "export", "--json"])

            assert result.exit_code == 0, result.output
            summaries = json.loads(result.output[result.output.index("[") :])
            assert summaries[0]["componentName"] == "cardList"
            assert summaries[0]["childSummaries"][0]["componentName"] == "card"

    def test_failure_writes_run_log(self, runner: CliRunner, env: None) -> None:
        with runner.isolated_filesystem():
            write_definitions(Path("export"))
            with patch.object(AuthoringClient, "from_config", return_value=RecordingClient(fail_on_call=4)):
                result = runner.invoke(cli, ["provision", "export", "--run-log", "run.json"])

            assert result.exit_code == 1
            assert "boom" in result.output
            run_log = json.loads(Path("run.json").read_text())
            assert len(run_log["created"]) == 3

    def test_missing_definitions_file(self, runner: CliRunner, env: None) -> None:
        with runner.isolated_filesystem():
            Path("export").mkdir()
            result = runner.invoke(cli, ["provision", "export"])
            assert result.exit_code == 1
            assert "File not found" in result.output

    def test_missing_configuration_fails_before_any_call(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        for name in ENVIRONMENT:
            monkeypatch.delenv(name, raising=False)
        with runner.isolated_filesystem():
            write_definitions(Path("export"))
            with patch.object(AuthoringClient, "from_config") as from_config:
                result = runner.invoke(cli, ["provision", "export"])

            assert result.exit_code == 1
            assert "Missing required environment variables" in result.output
            from_config.assert_not_called()

    def test_invalid_seeded_source_id_fails_before_any_call(self, runner: CliRunner, env: None) -> None:
        definitions = [{**DEFINITIONS[0], "multilistSourceIds": ["not-a-guid"]}]
        with runner.isolated_filesystem():
            Path("export").mkdir()
            (Path("export") / DEFINITIONS_FILENAME).write_text(json.dumps(definitions))
            with patch.object(AuthoringClient, "from_config") as from_config:
                result = runner.invoke(cli, ["provision", "export"])

            assert result.exit_code == 1
            assert "index 0" in result.output
            from_config.assert_not_called()
