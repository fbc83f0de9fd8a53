"""Tests for CLI main module."""

import json as _json
import pathlib as _pathlib
import typing as _typing

import click.testing as _click_testing
import pytest as _pytest

import strata
import strata.cli as cli
import strata.logs as logs


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_help_shows_all_commands(self, cli_runner: _click_testing.CliRunner) -> None:
        """Help output should list all available commands."""
        result = cli_runner.invoke(cli.cli, ["--help"])
        assert result.exit_code == 0
        for cmd in ["get", "keys", "show", "debug"]:
            assert cmd in result.output, f"Command '{cmd}' missing from help"

    def test_version_shows_current_version(self, cli_runner: _click_testing.CliRunner) -> None:
        """Version flag should show the package version."""
        result = cli_runner.invoke(cli.cli, ["--version"])
        assert result.exit_code == 0
        assert strata.__version__ in result.output


class TestGet:
    """Tests for the get command."""

    def test_get_from_config(
        self, cli_runner: _click_testing.CliRunner, config_dir: _pathlib.Path
    ) -> None:
        """A dotted key is read from the searched config file."""
        result = cli_runner.invoke(cli.cli, ["--path", str(config_dir), "get", "server.port"])
        assert result.exit_code == 0
        assert result.output.strip() == "8080"

    def test_set_beats_config(
        self, cli_runner: _click_testing.CliRunner, config_dir: _pathlib.Path
    ) -> None:
        """--set overrides the loaded file."""
        args = ["--config", str(config_dir / "config.yaml"), "--set", "server.port=9000"]
        result = cli_runner.invoke(cli.cli, [*args, "get", "server.port"])
        assert result.exit_code == 0
        assert result.output.strip() == "9000"

    def test_default_used_without_config(self, cli_runner: _click_testing.CliRunner) -> None:
        """--default values answer when nothing else does."""
        result = cli_runner.invoke(cli.cli, ["--default", "debug=true", "get", "debug"])
        assert result.exit_code == 0
        assert result.output.strip() == "true"

    def test_alias(self, cli_runner: _click_testing.CliRunner) -> None:
        """--alias makes one key readable under another name."""
        args = ["--alias", "loud=verbose", "--set", "verbose=1", "get", "loud"]
        result = cli_runner.invoke(cli.cli, args)
        assert result.exit_code == 0
        assert result.output.strip() == "1"

    def test_mapping_as_json(
        self, cli_runner: _click_testing.CliRunner, config_dir: _pathlib.Path
    ) -> None:
        """--json prints mappings as JSON."""
        result = cli_runner.invoke(cli.cli, ["--path", str(config_dir), "get", "server", "--json"])
        assert result.exit_code == 0
        assert _json.loads(result.output) == {"host": "example.com", "port": 8080}

    def test_unset_key_exits_nonzero(self, cli_runner: _click_testing.CliRunner) -> None:
        """An unset key reports and exits with status 1."""
        result = cli_runner.invoke(cli.cli, ["get", "missing"])
        assert result.exit_code == 1
        assert "missing: not set" in result.output


class TestErrors:
    """Tests for CLI error reporting."""

    def test_missing_config_is_click_error(
        self, cli_runner: _click_testing.CliRunner, tmp_path: _pathlib.Path
    ) -> None:
        """A config search that finds nothing fails cleanly."""
        result = cli_runner.invoke(cli.cli, ["--path", str(tmp_path), "keys"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_bad_assignment(self, cli_runner: _click_testing.CliRunner) -> None:
        """--set requires KEY=VALUE."""
        result = cli_runner.invoke(cli.cli, ["--set", "novalue", "keys"])
        assert result.exit_code == 2
        assert "KEY=VALUE" in result.output


class TestListing:
    """Tests for keys, show and debug."""

    def test_keys_sorted(
        self, cli_runner: _click_testing.CliRunner, config_dir: _pathlib.Path
    ) -> None:
        """keys lists every top-level key in order."""
        result = cli_runner.invoke(cli.cli, ["--path", str(config_dir), "--set", "extra=1", "keys"])
        assert result.exit_code == 0
        assert result.output.split() == ["extra", "name", "server", "tags"]

    def test_show_json(self, cli_runner: _click_testing.CliRunner, config_dir: _pathlib.Path) -> None:
        """show --json prints every resolved setting."""
        result = cli_runner.invoke(cli.cli, ["--path", str(config_dir), "show", "--json"])
        assert result.exit_code == 0
        data = _json.loads(result.output)
        assert data["name"] == "demo"
        assert data["tags"] == ["a", "b"]

    def test_show_yaml(self, cli_runner: _click_testing.CliRunner, config_dir: _pathlib.Path) -> None:
        """show prints YAML by default."""
        result = cli_runner.invoke(cli.cli, ["--path", str(config_dir), "show"])
        assert result.exit_code == 0
        assert "name: demo" in result.output
        assert "  port: 8080" in result.output

    def test_debug_lists_layers(self, cli_runner: _click_testing.CliRunner) -> None:
        """debug prints each layer heading."""
        result = cli_runner.invoke(cli.cli, ["--default", "a=1", "debug"])
        assert result.exit_code == 0
        for heading in ("Aliases:", "Overrides:", "Config:", "Defaults:"):
            assert heading in result.output


class TestVerbose:
    """Tests for --verbose lookup tracing."""

    @_pytest.fixture(autouse=True)
    def quiet_afterwards(self) -> _typing.Iterator[None]:
        """Start and finish without the stderr trace handler."""
        logs.set_verbosity(False)
        yield
        logs.set_verbosity(False)

    def test_verbose_traces_lookups(self, cli_runner: _click_testing.CliRunner) -> None:
        """The layer that answered is reported alongside the value."""
        result = cli_runner.invoke(cli.cli, ["--verbose", "--set", "a=1", "get", "a"])
        assert result.exit_code == 0
        assert "found in overrides" in result.output
        assert "1" in result.output

    def test_quiet_by_default(self, cli_runner: _click_testing.CliRunner) -> None:
        """Without --verbose only the value is printed."""
        result = cli_runner.invoke(cli.cli, ["--set", "a=1", "get", "a"])
        assert result.exit_code == 0
        assert result.output == "1\n"
