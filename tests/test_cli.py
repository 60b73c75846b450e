"""Tests for the command-line entry point."""

import logging

import pytest

from pointy import __version__, cli
from pointy.errors import StoreWriteError


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.setenv("POINTY_FILE", str(tmp_path / "ledger.json"))
    monkeypatch.setenv("POINTY_LOG_FILE", str(tmp_path / "pointy.log"))
    yield tmp_path
    root = logging.getLogger("pointy")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True


class TestCli:
    def test_path_prints_store(self, env, capsys):
        cli.main(["path"])
        assert capsys.readouterr().out.strip() == str(env / "ledger.json")

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            cli.main(["--version"])
        assert info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_launches_tui_with_store_path(self, env, monkeypatch):
        seen = []
        monkeypatch.setattr("pointy.tui.main", seen.append)
        cli.main([])
        assert seen == [str(env / "ledger.json")]

    def test_fatal_error_exits_with_message(self, env, monkeypatch):
        def boom(path):
            raise StoreWriteError("could not save ledger: disk full", path)

        monkeypatch.setattr("pointy.tui.main", boom)
        with pytest.raises(SystemExit) as info:
            cli.main([])
        assert info.value.code == "pointy: could not save ledger: disk full"
        assert "Fatal error" in (env / "pointy.log").read_text(encoding="utf-8")

    def test_unexpected_error_is_logged_and_raised(self, env, monkeypatch):
        def boom(path):
            raise RuntimeError("bad frame")

        monkeypatch.setattr("pointy.tui.main", boom)
        with pytest.raises(RuntimeError):
            cli.main([])
        assert "Unexpected error" in (env / "pointy.log").read_text(encoding="utf-8")
