"""Tests for spaserve.cli — ``spaserve run`` and ``spaserve check``."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from spaserve.app import SPA
from spaserve.cli import main
from spaserve.cli._run import parse_header
from spaserve.errors import ConfigurationError
from spaserve.server.dev import run_dev_server


class TestSpaServeRun:
    @patch("spaserve.server.dev.run_dev_server")
    def test_defaults(self, mock_server: MagicMock, spa_dir) -> None:
        """run binds to the SPAConfig defaults when --host/--port are omitted."""
        main(["run", str(spa_dir)])
        mock_server.assert_called_once()
        args = mock_server.call_args[0]
        assert isinstance(args[0], SPA)
        assert args[1] == "127.0.0.1"
        assert args[2] == 8000
        assert mock_server.call_args[1]["reload"] is False

    @patch("spaserve.server.dev.run_dev_server")
    def test_host_and_port_override(self, mock_server: MagicMock, spa_dir) -> None:
        main(["run", str(spa_dir), "--host", "0.0.0.0", "--port", "3000"])
        args = mock_server.call_args[0]
        assert args[1] == "0.0.0.0"
        assert args[2] == 3000

    @patch("spaserve.server.dev.run_dev_server")
    def test_options_reach_config(self, mock_server: MagicMock, spa_dir) -> None:
        main(
            [
                "run",
                str(spa_dir),
                "--index",
                "shell.html",
                "--asset-header",
                "Cache-Control: public, max-age=600",
                "--follow-symlinks",
                "--log-level",
                "debug",
            ]
        )
        app = mock_server.call_args[0][0]
        assert app.config.index == "shell.html"
        assert app.config.asset_headers == (("Cache-Control", "public, max-age=600"),)
        assert app.config.follow_symlinks is True
        assert app.config.log_level == "debug"
        assert app.router.index == "shell.html"

    @patch("spaserve.server.dev.run_dev_server")
    def test_reload_watches_directory(self, mock_server: MagicMock, spa_dir) -> None:
        main(["run", str(spa_dir), "--reload"])
        kwargs = mock_server.call_args[1]
        assert kwargs["reload"] is True
        assert kwargs["reload_dirs"] == (str(spa_dir),)

    @patch("spaserve.server.dev.run_dev_server")
    def test_missing_directory(self, mock_server: MagicMock, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", str(tmp_path / "nope")])
        assert exc_info.value.code == 1
        assert "is not a directory" in capsys.readouterr().err
        mock_server.assert_not_called()

    @patch("spaserve.server.dev.run_dev_server")
    def test_bad_asset_header(self, mock_server: MagicMock, spa_dir, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", str(spa_dir), "--asset-header", "no-separator"])
        assert exc_info.value.code == 1
        assert "NAME:VALUE" in capsys.readouterr().err
        mock_server.assert_not_called()

    @patch("spaserve.server.dev.run_dev_server")
    def test_bad_index(self, mock_server: MagicMock, spa_dir, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", str(spa_dir), "--index", "a/b.html"])
        assert exc_info.value.code == 1
        mock_server.assert_not_called()

    @patch("spaserve.server.dev.run_dev_server")
    def test_server_unavailable(self, mock_server: MagicMock, spa_dir, capsys) -> None:
        mock_server.side_effect = ConfigurationError("pounce missing")
        with pytest.raises(SystemExit) as exc_info:
            main(["run", str(spa_dir)])
        assert exc_info.value.code == 1
        assert "pounce missing" in capsys.readouterr().err


class TestRunDevServer:
    def test_missing_pounce(self, monkeypatch: pytest.MonkeyPatch, memory_store) -> None:
        monkeypatch.setitem(sys.modules, "pounce", None)
        monkeypatch.setitem(sys.modules, "pounce.config", None)
        with pytest.raises(ConfigurationError, match=r"spaserve\[server\]"):
            run_dev_server(SPA(memory_store), "127.0.0.1", 8000)


class TestParseHeader:
    def test_splits_on_first_colon(self) -> None:
        assert parse_header("Link: <https://cdn.example>; rel=preconnect") == (
            "Link",
            "<https://cdn.example>; rel=preconnect",
        )

    @pytest.mark.parametrize("value", ["Cache-Control", ": value"])
    def test_rejects(self, value: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_header(value)


class TestSpaServeCheck:
    def test_ok(self, spa_dir, capsys) -> None:
        main(["check", str(spa_dir)])
        out = capsys.readouterr().out
        assert "index.html: 11 bytes, ok" in out

    def test_missing_index(self, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "cannot read index.html" in capsys.readouterr().err

    def test_index_is_directory(self, spa_dir, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(spa_dir), "--index", "css"])
        assert exc_info.value.code == 1

    def test_not_a_directory(self, spa_dir) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(spa_dir / "index.html")])
        assert exc_info.value.code == 1


class TestNoCommand:
    def test_prints_help(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "spaserve" in capsys.readouterr().out
