"""Test configuration and fixtures for SecurityTester."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from zap_fakes import FakeZapApi, RecordingPause

from securitytester.modules.zap import ZapApiError


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_api() -> FakeZapApi:
    return FakeZapApi()


@pytest.fixture
def pause() -> RecordingPause:
    return RecordingPause()


@pytest.fixture
def api_error() -> ZapApiError:
    return ZapApiError("connection refused")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> Path:
    """Isolate config lookups from the real environment and home directory."""
    for key in (
        "SECURITYTESTER_ZAP_API_KEY",
        "SECURITYTESTER_ZAP_HOST",
        "SECURITYTESTER_ZAP_PORT",
        "SECURITYTESTER_ZAP_SPIDER",
        "SECURITYTESTER_SCAN_POLICY",
        "SECURITYTESTER_VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)
    home = temp_dir / "home"
    home.mkdir()
    work = temp_dir / "work"
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    return work
