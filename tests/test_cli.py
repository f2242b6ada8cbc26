"""
Tests for CLI commands — check, columns, cache, config, and global options.
"""

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from maccompat.main import cli
from maccompat.core.use_cases import check as check_mod
from tests.helpers import FakeOpener, FakeResponse, feed_bytes, http_error

FEED = feed_bytes(["15.1"], {"Mac14,2": ["15.1"], "MacBookAir8,1": ["14.7"]})


def _patch_opener(*outcomes):
    """Route run_check's network traffic through a FakeOpener."""
    opener = FakeOpener(*outcomes)
    real = check_mod.run_check

    def run_check(settings=None, **kwargs):
        kwargs.setdefault("opener", opener)
        return real(settings, **kwargs)

    return patch("maccompat.core.use_cases.check.run_check", run_check), opener


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "newest macOS" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCheckCommand:
    def _args(self, tmp_path: Path, *extra: str) -> list[str]:
        return [
            "check",
            "--cache-dir", str(tmp_path / "sofa"),
            "--system-version", "15.1",
            *extra,
        ]

    def test_pass_json(self, tmp_path: Path):
        patcher, opener = _patch_opener(FakeResponse(FEED, headers={"ETag": '"e1"'}))
        with patcher:
            result = CliRunner().invoke(cli, self._args(tmp_path, "--model", "Mac14,2", "--json"))
        assert result.exit_code == 0
        row = json.loads(result.stdout)
        assert row["status"] == "Pass"
        assert row["is_compatible"] == 1
        assert (tmp_path / "sofa" / "macos_data_feed.json").is_file()

    def test_fail_table(self, tmp_path: Path):
        patcher, _ = _patch_opener(FakeResponse(FEED))
        with patcher:
            result = CliRunner().invoke(cli, self._args(tmp_path, "--model", "MacBookAir8,1"))
        assert result.exit_code == 0
        assert "Fail" in result.stdout
        assert "latest_compatible_macos" in result.stdout
        assert "14.7" in result.stdout

    def test_error_row_still_exit_zero(self, tmp_path: Path):
        patcher, _ = _patch_opener(http_error(500))
        with patcher:
            result = CliRunner().invoke(cli, self._args(tmp_path, "--model", "Mac14,2", "--json"))
        assert result.exit_code == 0
        row = json.loads(result.stdout)
        assert row["is_compatible"] == -1
        assert row["status"].startswith("Could not obtain data")

    def test_feed_url_override(self, tmp_path: Path):
        patcher, opener = _patch_opener(FakeResponse(FEED))
        with patcher:
            CliRunner().invoke(cli, self._args(
                tmp_path, "--model", "Mac14,2", "--feed-url", "https://mirror.test/f.json",
            ))
        assert opener.last_request.full_url == "https://mirror.test/f.json"

    def test_invalid_override(self, tmp_path: Path):
        result = CliRunner().invoke(cli, self._args(tmp_path, "--feed-url", " "))
        assert result.exit_code == 1

    def test_host_probe_failure(self, tmp_path: Path):
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            result = CliRunner().invoke(
                cli, ["check", "--cache-dir", str(tmp_path / "sofa"), "--json"],
            )
        assert result.exit_code == 0
        row = json.loads(result.stdout)
        assert row["system_version"] == "Unknown"
        assert row["status"].startswith("Error getting system info")


class TestColumnsCommand:
    def test_text(self):
        result = CliRunner().invoke(cli, ["columns"])
        assert result.exit_code == 0
        assert "macos_compatibility" in result.output
        assert "is_compatible" in result.output

    def test_json(self):
        result = CliRunner().invoke(cli, ["columns", "--json"])
        data = json.loads(result.stdout)
        assert data["table"] == "macos_compatibility"
        assert {"name": "is_compatible", "type": "integer"} in data["columns"]
        assert len(data["columns"]) == 7


class TestCacheCommands:
    def _prime(self, cache_dir: Path) -> None:
        cache_dir.mkdir(parents=True)
        (cache_dir / "macos_data_feed.json").write_bytes(FEED)
        (cache_dir / "macos_data_feed_etag.txt").write_text('"e1"\n')

    def test_show_empty(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MACCOMPAT_CACHE_DIR", str(tmp_path / "sofa"))
        result = CliRunner().invoke(cli, ["cache", "show"])
        assert result.exit_code == 0
        assert "No cached feed" in result.output

    def test_show_json(self, tmp_path: Path, monkeypatch):
        self._prime(tmp_path / "sofa")
        monkeypatch.setenv("MACCOMPAT_CACHE_DIR", str(tmp_path / "sofa"))
        result = CliRunner().invoke(cli, ["cache", "show", "--json"])
        data = json.loads(result.stdout)
        assert data["body_exists"] is True
        assert data["body_parses"] is True
        assert data["validation_token"] == '"e1"'

    def test_clear(self, tmp_path: Path, monkeypatch):
        self._prime(tmp_path / "sofa")
        monkeypatch.setenv("MACCOMPAT_CACHE_DIR", str(tmp_path / "sofa"))
        result = CliRunner().invoke(cli, ["cache", "clear"])
        assert result.exit_code == 0
        assert "Removed" in result.output
        assert not (tmp_path / "sofa" / "macos_data_feed.json").exists()
        assert not (tmp_path / "sofa" / "macos_data_feed_etag.txt").exists()

    def test_clear_nothing(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MACCOMPAT_CACHE_DIR", str(tmp_path / "sofa"))
        result = CliRunner().invoke(cli, ["cache", "clear"])
        assert result.exit_code == 0
        assert "Nothing to clear" in result.output


class TestConfigCommands:
    def test_show_defaults_json(self):
        result = CliRunner().invoke(cli, ["config", "show", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["source"] is None
        assert data["settings"]["reference_model"] == "Macmini9,1"

    def test_show_explicit_config(self, tmp_path: Path):
        path = tmp_path / "custom.yml"
        path.write_text("user_agent: custom/1\n")
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "show"])
        assert result.exit_code == 0
        assert "custom/1" in result.output

    def test_show_bad_config(self, tmp_path: Path):
        path = tmp_path / "bad.yml"
        path.write_text("timeout: nope\n")
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "show"])
        assert result.exit_code == 1

    def test_check_valid(self, tmp_path: Path):
        path = tmp_path / "maccompat.yml"
        path.write_text("timeout: 10\n")
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_check_invalid_json(self, tmp_path: Path):
        path = tmp_path / "maccompat.yml"
        path.write_text("feed_url: gopher://old.test/\n")
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "check", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["valid"] is False
