"""
Pytest configuration and shared fixtures for Server Manager tests.

This file is automatically loaded by pytest and provides shared fixtures
that can be used across all test files.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from server_manager.core.settings import ServerManagerSettings
from server_manager.main import create_app
from server_manager.managers.update_runner import UpdateRunner


def write_script(directory: Path, body: str, name: str = "update-system.sh") -> Path:
    """Write an executable shell script and return its path."""
    path = directory / name
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def make_script(tmp_path):
    """Factory fixture: make_script(body) -> path of an executable script."""
    def _make(body: str, name: str = "update-system.sh") -> Path:
        return write_script(tmp_path, body, name)
    return _make


@pytest.fixture
def make_runner():
    """Factory fixture building a runner that does not escalate privileges."""
    def _make(script, **kwargs) -> UpdateRunner:
        kwargs.setdefault("use_sudo", False)
        return UpdateRunner(update_script=str(script), **kwargs)
    return _make


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a script under tmp_path, without sudo."""
    return ServerManagerSettings(
        update_script=str(tmp_path / "update-system.sh"),
        use_sudo=False,
    )


@pytest.fixture
def make_client(test_settings):
    """Factory fixture: make_client(runner) -> TestClient for a fresh app."""
    def _make(runner: UpdateRunner) -> TestClient:
        return TestClient(create_app(test_settings, runner))
    return _make
