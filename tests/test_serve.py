"""Tests for handing an app to pounce."""

import sys
import types

import pytest

from paydesk.app import App
from paydesk.config import AppConfig
from paydesk.server.serve import run_server


class _Recorder:
    def __init__(self) -> None:
        self.configs: list[dict] = []
        self.servers: list[tuple] = []


@pytest.fixture
def pounce(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    """Stand-in ``pounce.config`` and ``pounce.server`` modules."""
    seen = _Recorder()

    class ServerConfig:
        def __init__(self, **kwargs: object) -> None:
            seen.configs.append(kwargs)
            self.kwargs = kwargs

    class Server:
        def __init__(self, config: ServerConfig, app: object, *, app_path: str | None) -> None:
            seen.servers.append((config, app, app_path))

        def run(self) -> None:
            pass

    package = types.ModuleType("pounce")
    config_mod = types.ModuleType("pounce.config")
    config_mod.ServerConfig = ServerConfig  # type: ignore[attr-defined]
    server_mod = types.ModuleType("pounce.server")
    server_mod.Server = Server  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "pounce", package)
    monkeypatch.setitem(sys.modules, "pounce.config", config_mod)
    monkeypatch.setitem(sys.modules, "pounce.server", server_mod)
    return seen


class TestRunServer:
    def test_logging_settings_reach_server_config(self, pounce: _Recorder) -> None:
        run_server(object(), "0.0.0.0", 9000, log_level="debug", log_format="text")

        assert pounce.configs == [
            {
                "host": "0.0.0.0",
                "port": 9000,
                "workers": 1,
                "reload": False,
                "log_level": "debug",
                "log_format": "text",
            }
        ]

    def test_reload_forces_one_worker(self, pounce: _Recorder) -> None:
        run_server(object(), "127.0.0.1", 8000, workers=4, reload=True, app_path="m:app")

        assert pounce.configs[0]["workers"] == 1
        assert pounce.servers[0][2] == "m:app"

    def test_app_run_uses_config(self, pounce: _Recorder) -> None:
        app = App(AppConfig(log_level="warning", log_format="text", workers=2))
        app.add_route("/", lambda: "home")
        app.run(port=9100)

        config = pounce.configs[0]
        assert config["port"] == 9100
        assert config["workers"] == 2
        assert (config["log_level"], config["log_format"]) == ("warning", "text")
        assert pounce.servers[0][1] is app
