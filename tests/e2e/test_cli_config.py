"""
End-to-end tests for the strata CLI against real config files.

Each test writes a config file in one format and reads it back through
the command line, layering defaults and overrides on top.
"""

import json as _json
import pathlib as _pathlib

import click.testing as _click_testing
import pytest as _pytest

import strata.cli as cli


@_pytest.mark.e2e
@_pytest.mark.parametrize(
    ("filename", "content"),
    [
        ("app.yaml", "db:\n  host: db.local\n  port: 5432\n"),
        ("app.toml", "[db]\nhost = 'db.local'\nport = 5432\n"),
        ("app.json", '{"db": {"host": "db.local", "port": 5432}}'),
    ],
)
def test_every_format_reads_the_same(
    cli_runner: _click_testing.CliRunner,
    tmp_path: _pathlib.Path,
    filename: str,
    content: str,
) -> None:
    """YAML, TOML and JSON files resolve to the same settings."""
    (tmp_path / filename).write_text(content)

    result = cli_runner.invoke(
        cli.cli, ["--path", str(tmp_path), "--name", "app", "show", "--json"]
    )

    assert result.exit_code == 0
    assert _json.loads(result.output) == {"db": {"host": "db.local", "port": 5432}}


@_pytest.mark.e2e
def test_layers_combine(
    cli_runner: _click_testing.CliRunner,
    tmp_path: _pathlib.Path,
) -> None:
    """Defaults fill gaps, the file wins over defaults, --set wins over both."""
    path = tmp_path / "service.yml"
    path.write_text("workers: 4\nlog:\n  level: info\n")

    args = [
        "--config", str(path),
        "--default", "workers=1",
        "--default", "timeout=30s",
        "--set", "log.level=debug",
        "show", "--json",
    ]
    result = cli_runner.invoke(cli.cli, args)

    assert result.exit_code == 0
    data = _json.loads(result.output)
    assert data["workers"] == 4
    assert data["timeout"] == "30s"
    assert data["log.level"] == "debug"
    assert data["log"] == {"level": "info"}


@_pytest.mark.e2e
def test_explicit_type_for_unknown_extension(
    cli_runner: _click_testing.CliRunner,
    tmp_path: _pathlib.Path,
) -> None:
    """--type parses a file whose extension says nothing."""
    path = tmp_path / "settings.conf"
    path.write_text("retries = 3\n")

    result = cli_runner.invoke(cli.cli, ["--config", str(path), "--type", "toml", "get", "retries"])

    assert result.exit_code == 0
    assert result.output.strip() == "3"
