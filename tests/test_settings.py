from server_manager.core.settings import DEFAULT_UPDATE_SCRIPT, ServerManagerSettings


def test_defaults(monkeypatch):
    for var in ("PORT", "SERVER_MANAGER_PORT", "SERVER_MANAGER_UPDATE_SCRIPT",
                "SERVER_MANAGER_USE_SUDO", "SERVER_MANAGER_UPDATE_CONCURRENCY",
                "SERVER_MANAGER_UPDATE_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)

    settings = ServerManagerSettings()
    assert settings.port == 3001
    assert settings.update_script == DEFAULT_UPDATE_SCRIPT
    assert settings.use_sudo is True
    assert settings.update_timeout is None
    assert settings.update_concurrency == "reject"


def test_port_from_env(monkeypatch):
    monkeypatch.delenv("SERVER_MANAGER_PORT", raising=False)
    monkeypatch.setenv("PORT", "8080")
    assert ServerManagerSettings().port == 8080


def test_prefixed_overrides(monkeypatch):
    monkeypatch.setenv("SERVER_MANAGER_UPDATE_SCRIPT", "/opt/update.sh")
    monkeypatch.setenv("SERVER_MANAGER_USE_SUDO", "false")
    monkeypatch.setenv("SERVER_MANAGER_UPDATE_TIMEOUT", "600")
    monkeypatch.setenv("SERVER_MANAGER_UPDATE_CONCURRENCY", "queue")

    settings = ServerManagerSettings()
    assert settings.update_script == "/opt/update.sh"
    assert settings.use_sudo is False
    assert settings.update_timeout == 600
    assert settings.update_concurrency == "queue"
