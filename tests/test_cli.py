"""Tests for CLI commands."""

import json

import pytest
from zap_fakes import FakeZapApi, RecordingPause, make_alert
from typer.testing import CliRunner

from securitytester import cli
from securitytester.modules.zap import Risk, ZapApiError, ZapScanner

runner = CliRunner()


@pytest.fixture
def zap(monkeypatch: pytest.MonkeyPatch, clean_env) -> FakeZapApi:
    """Route CLI scanner and client construction to an in-memory ZAP."""
    api = FakeZapApi(
        alerts=[make_alert(Risk.HIGH, "SQL Injection"), make_alert(Risk.LOW, "Cookie flag")],
    )
    built: list[dict] = []
    clients: list[dict] = []

    def factory(api_key, host, port, with_spider):
        built.append({"api_key": api_key, "host": host, "port": port, "spider": with_spider})
        return ZapScanner(api_key, host, port, with_spider, api=api, pause=RecordingPause())

    def client_factory(api_key, host, port):
        clients.append({"api_key": api_key, "host": host, "port": port})
        return api

    monkeypatch.setattr(cli, "ZapScanner", factory)
    monkeypatch.setattr(cli, "ZapClient", client_factory)
    monkeypatch.setattr(cli, "setup_logging", lambda verbose=False: None)
    api.built = built
    api.clients = clients
    return api


class TestScanCommand:
    def test_json_output_sorted_by_risk(self, zap: FakeZapApi):
        result = runner.invoke(cli.app, ["scan", "http://example.test", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [item["risk"] for item in data] == ["Low", "High"]
        assert data[1]["name"] == "SQL Injection"

    def test_table_output(self, zap: FakeZapApi):
        result = runner.invoke(cli.app, ["scan", "http://example.test"])

        assert result.exit_code == 0
        assert "SQL Injection" in result.stdout
        assert "Total: 2" in result.stdout

    def test_spider_follows_config_and_flag(self, zap: FakeZapApi, monkeypatch):
        monkeypatch.setenv("SECURITYTESTER_ZAP_SPIDER", "false")

        runner.invoke(cli.app, ["scan", "http://example.test"])
        assert "spider_scan" not in zap.names()

        runner.invoke(cli.app, ["scan", "http://example.test", "--spider"])
        assert "spider_scan" in zap.names()
        assert [entry["spider"] for entry in zap.built] == [False, True]

    def test_scheme_is_added(self, zap: FakeZapApi):
        result = runner.invoke(cli.app, ["scan", "example.test", "--no-spider"])

        assert result.exit_code == 0
        assert ("include_in_context", "securitytester", "http://example.test.*") in zap.calls

    def test_policy_and_scope_flags(self, zap: FakeZapApi, monkeypatch):
        monkeypatch.setenv("SECURITYTESTER_SCAN_POLICY", "from-config")

        runner.invoke(cli.app, ["scan", "http://example.test", "--all-urls"])
        runner.invoke(cli.app, ["scan", "http://example.test", "--policy", "strict"])

        launches = [call for call in zap.calls if call[0] == "active_scan"]
        assert launches[0][3:] == (False, "from-config")
        assert launches[1][3:] == (True, "strict")

    def test_passive_flag(self, zap: FakeZapApi):
        runner.invoke(cli.app, ["scan", "http://example.test", "--no-passive"])

        assert "disable_all_passive_scanners" in zap.names()
        assert "set_passive_enabled" not in zap.names()

    def test_host_and_port_override_config(self, zap: FakeZapApi):
        runner.invoke(cli.app, ["scan", "http://example.test", "--host", "zap", "--port", "9000"])

        assert zap.built[0]["host"] == "zap"
        assert zap.built[0]["port"] == "9000"

    def test_bad_port_exits_with_setup_error(self, zap: FakeZapApi):
        result = runner.invoke(cli.app, ["scan", "http://example.test", "--port", "abc"])

        assert result.exit_code == cli.EXIT_SETUP_ERROR
        assert "Configuration error" in result.stdout
        assert zap.calls == []

    def test_setup_failure_exits_with_setup_error(self, zap: FakeZapApi):
        zap.fail_on["new_context"] = ZapApiError("context exists")

        result = runner.invoke(cli.app, ["scan", "http://example.test"])

        assert result.exit_code == cli.EXIT_SETUP_ERROR
        assert "Could not set up ZAP" in result.stdout

    def test_swallowed_scan_error_sets_exit_code(self, zap: FakeZapApi):
        zap.fail_on["enable_all_active_scanners"] = ZapApiError("no such policy")

        result = runner.invoke(cli.app, ["scan", "http://example.test", "--policy", "missing"])

        assert result.exit_code == cli.EXIT_SCAN_ERROR
        assert "No alerts reported." in result.stdout
        assert "no such policy" in result.stdout

    def test_passive_toggle_failure_sets_exit_code(self, zap: FakeZapApi):
        zap.fail_on["set_passive_enabled"] = ZapApiError("pscan refused")

        result = runner.invoke(cli.app, ["scan", "http://example.test", "--passive"])

        assert result.exit_code == cli.EXIT_SCAN_ERROR
        assert "active_scan" in zap.names()
        assert "pscan refused" in result.stdout

    def test_json_output_stays_parseable_with_notes(self, zap: FakeZapApi):
        zap.fail_on["enable_all_active_scanners"] = ZapApiError("no such policy")

        result = runner.invoke(cli.app, ["scan", "example.test", "--json"])

        assert result.exit_code == cli.EXIT_SCAN_ERROR
        assert json.loads(result.stdout) == []
        assert "No scheme provided" in result.stderr
        assert "no such policy" in result.stderr


class TestPassiveCommand:
    def test_enable(self, zap: FakeZapApi):
        result = runner.invoke(cli.app, ["passive", "enable"])

        assert result.exit_code == 0
        assert zap.names() == ["set_passive_enabled", "enable_all_passive_scanners"]
        assert zap.closed

    def test_leaves_session_alone(self, zap: FakeZapApi):
        runner.invoke(cli.app, ["passive", "disable"])

        assert "new_session" not in zap.names()
        assert "new_context" not in zap.names()
        assert zap.built == []

    def test_uses_configured_connection(self, zap: FakeZapApi, monkeypatch):
        monkeypatch.setenv("SECURITYTESTER_ZAP_API_KEY", "key-1")

        runner.invoke(cli.app, ["passive", "enable", "--host", "zap", "--port", "9000"])

        assert zap.clients == [{"api_key": "key-1", "host": "zap", "port": 9000}]

    def test_disable_failure(self, zap: FakeZapApi):
        zap.fail_on["disable_all_passive_scanners"] = ZapApiError("refused")

        result = runner.invoke(cli.app, ["passive", "disable"])

        assert result.exit_code == cli.EXIT_SCAN_ERROR
        assert "refused" in result.stdout

    def test_bad_port_exits_with_setup_error(self, zap: FakeZapApi):
        result = runner.invoke(cli.app, ["passive", "enable", "--port", "abc"])

        assert result.exit_code == cli.EXIT_SETUP_ERROR
        assert zap.clients == []

    def test_unknown_action(self, zap: FakeZapApi):
        result = runner.invoke(cli.app, ["passive", "toggle"])

        assert result.exit_code == cli.EXIT_SETUP_ERROR
        assert zap.calls == []


def test_config_masks_api_key(clean_env, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SECURITYTESTER_ZAP_API_KEY", "abcd1234567890wxyz")

    result = runner.invoke(cli.app, ["config"])

    assert result.exit_code == 0
    assert "abcd...wxyz" in result.stdout
    assert "1234567890" not in result.stdout


def test_version():
    result = runner.invoke(cli.app, ["version"])

    assert result.exit_code == 0
    assert "SecurityTester" in result.stdout
