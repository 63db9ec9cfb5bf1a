"""Tests for roost.cli — ``roost routes`` and ``roost check``."""

import sys
import types
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from roost.app import App
from roost.binding import Raw
from roost.cli import main
from roost.cli._resolve import resolve_app
from roost.data import table


@table("posts")
@dataclass(frozen=True, slots=True)
class Post:
    id: int


def _install(monkeypatch: pytest.MonkeyPatch, name: str, **attrs: object) -> None:
    mod = types.ModuleType(name)
    for key, value in attrs.items():
        setattr(mod, key, value)
    monkeypatch.setitem(sys.modules, name, mod)


@pytest.fixture
def good_app(monkeypatch: pytest.MonkeyPatch) -> App:
    app = App()

    @app.route("/")
    def index():
        return "home"

    @app.route("/api/:version/posts/:post", name="post", bind=(Raw, Post))
    def show(request, version, post):
        return "post"

    _install(monkeypatch, "_cli_good_app", app=app)
    return app


@pytest.fixture
def bad_app(monkeypatch: pytest.MonkeyPatch) -> App:
    app = App()

    @app.route("/posts/:post/:extra", bind=(Post,))
    def show(request, post):
        return "post"

    _install(monkeypatch, "_cli_bad_app", app=app)
    return app


class TestResolve:
    def test_module_and_attribute(self, good_app: App) -> None:
        assert resolve_app("_cli_good_app:app") is good_app

    def test_default_attribute(self, good_app: App) -> None:
        assert resolve_app("_cli_good_app") is good_app

    def test_factory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        app = App()
        _install(monkeypatch, "_cli_factory", create_app=lambda: app)
        assert resolve_app("_cli_factory:create_app") is app

    def test_factory_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken():
            raise RuntimeError("nope")

        _install(monkeypatch, "_cli_broken", create_app=broken)
        with pytest.raises(TypeError, match="nope"):
            resolve_app("_cli_broken:create_app")

    def test_not_an_app(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, "_cli_not_app", app=42)
        with pytest.raises(TypeError, match="not a roost.App"):
            resolve_app("_cli_not_app:app")


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "roost" in capsys.readouterr().out

    def test_invalid_import_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "nonexistent_module_xyz:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestRoutes:
    def test_lists_routes_and_bindings(
        self, good_app: App, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", "_cli_good_app:app"])
        out = capsys.readouterr().out
        assert "METHOD" in out
        assert "BINDS" in out
        assert "/api/:version/posts/:post" in out
        assert "show (post)" in out
        assert "Raw, Post" in out

    def test_lists_broken_app_without_failing(
        self, bad_app: App, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", "_cli_bad_app:app"])
        assert "/posts/:post/:extra" in capsys.readouterr().out

    def test_no_routes(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        _install(monkeypatch, "_cli_empty", app=App())
        main(["routes", "_cli_empty:app"])
        assert "No routes registered." in capsys.readouterr().out


class TestCheck:
    def test_clean(self, good_app: App, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "_cli_good_app:app"])
        out = capsys.readouterr().out
        assert out.startswith("OK:")
        assert "1 bound handler" in out

    def test_problems_exit_one(self, bad_app: App, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_cli_bad_app:app"])
        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "1 problem(s) found" in out
        assert "/posts/:post/:extra" in out


class TestRun:
    def test_run_delegates_to_app(self, good_app: App, monkeypatch: pytest.MonkeyPatch) -> None:
        run = MagicMock()
        monkeypatch.setattr(App, "run", run)
        main(["run", "_cli_good_app:app", "--port", "9000"])
        run.assert_called_once_with(host=None, port=9000)
