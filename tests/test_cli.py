from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

import repobatch.cli as cli_module
from conftest import LABEL_BATCH, FakeCapability
from repobatch.errors import RemoteError


class FakeClient(FakeCapability):
    """Stands in for GitHubClient inside the CLI."""

    instances = []
    login = "octocat"
    fail = None

    def __init__(self, token, base_url=None, timeout=None):
        super().__init__(fail=FakeClient.fail)
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        FakeClient.instances.append(self)

    def authenticated_user(self):
        if self.login is None:
            raise RemoteError("API request failed: 401 Bad credentials", status=401)
        return self.login


@pytest.fixture
def fake_client(monkeypatch):
    FakeClient.instances = []
    FakeClient.login = "octocat"
    FakeClient.fail = None
    monkeypatch.setattr(cli_module, "GitHubClient", FakeClient)
    monkeypatch.setenv("GITHUB_TOKEN", "t0ken")
    monkeypatch.delenv("REPOBATCH_API_URL", raising=False)
    monkeypatch.delenv("REPOBATCH_MAX_WORKERS", raising=False)
    monkeypatch.delenv("REPOBATCH_TIMEOUT", raising=False)
    return FakeClient


@pytest.fixture
def batch_file(tmp_path):
    path = tmp_path / "batch.yml"
    path.write_text(LABEL_BATCH, encoding="utf-8")
    return path


def test_validate_prints_plan(batch_file):
    result = CliRunner().invoke(cli_module.cli, ["validate", "--batch-file", str(batch_file)])

    assert result.exit_code == 0
    assert "Batch: Test (version 1.0)" in result.output
    assert "repositories: me/repo1" in result.output
    assert "- create-label" in result.output


def test_validate_rejects_invalid_document(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text('version: "1"\njobs:\n  - steps: [{runs: [{drop-table: {}}]}]\n', encoding="utf-8")

    result = CliRunner().invoke(cli_module.cli, ["validate", "--batch-file", str(path)])

    assert result.exit_code == 1


def test_validate_missing_file(tmp_path):
    result = CliRunner().invoke(cli_module.cli, ["validate", "--batch-file", str(tmp_path / "none.yml")])

    assert result.exit_code == 1


def test_run_prints_summary(fake_client, batch_file):
    result = CliRunner().invoke(
        cli_module.cli,
        ["run", "--batch-file", str(batch_file), "--api-url", "https://ghe.example.com/api/v3", "--timeout", "7"],
    )

    assert result.exit_code == 0, result.output
    assert "RESULTS" in result.output
    assert "succeeded: 1" in result.output
    (client,) = fake_client.instances
    assert client.token == "t0ken"
    assert client.base_url == "https://ghe.example.com/api/v3"
    assert client.timeout == 7
    assert client.methods() == ["create_label"]


def test_run_json_output(fake_client, batch_file):
    result = CliRunner().invoke(cli_module.cli, ["run", "--batch-file", str(batch_file), "--json"])

    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    outcome = report["jobs"][0]["steps"][0]["runs"][0]["outcomes"][0]
    assert outcome["status"] == "ok"
    assert outcome["response"]["label"]["name"] == "bug"


def test_run_exits_1_when_a_leaf_failed(fake_client, batch_file):
    fake_client.fail = lambda method, kw: True

    result = CliRunner().invoke(cli_module.cli, ["run", "--batch-file", str(batch_file)])

    assert result.exit_code == 1
    assert "failed: 1" in result.output


def test_run_stops_on_bad_credentials(fake_client, batch_file):
    fake_client.login = None

    result = CliRunner().invoke(cli_module.cli, ["run", "--batch-file", str(batch_file)])

    assert result.exit_code == 1
    assert fake_client.instances[0].calls == []


def test_run_prompts_for_token_when_env_is_empty(fake_client, batch_file, monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN")

    result = CliRunner().invoke(cli_module.cli, ["run", "--batch-file", str(batch_file)], input="typed\n")

    assert result.exit_code == 0, result.output
    assert fake_client.instances[0].token == "typed"


def test_run_rejects_invalid_document_before_asking_for_a_token(fake_client, tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN")
    path = tmp_path / "bad.yml"
    path.write_text('version: "1"\njobs:\n  - steps: [{runs: [{drop-table: {}}]}]\n', encoding="utf-8")

    result = CliRunner().invoke(cli_module.cli, ["run", "--batch-file", str(path)])

    assert result.exit_code == 1
    assert "personal access token" not in result.output
    assert fake_client.instances == []
