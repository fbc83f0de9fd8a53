"""
Shared pytest fixtures for Strata tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import click.testing as _click_testing
import pytest as _pytest

import strata
import strata.store as store_mod


@_pytest.fixture(autouse=True)
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove STRATA_* variables so store options come from defaults only."""
    for key in list(_os.environ):
        if key.startswith("STRATA_"):
            monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def store() -> store_mod.Store:
    """Fresh, empty Store."""
    return store_mod.Store()


@_pytest.fixture
def nested_store(store: store_mod.Store) -> store_mod.Store:
    """Store whose config layer holds a three-level nested mapping."""
    store.replace_config({"a": {"b": {"c": 5}}, "name": "app"})
    return store


@_pytest.fixture
def default_store() -> _typing.Iterator[store_mod.Store]:
    """Reset the process-wide store before and after the test."""
    fresh = strata.reset()
    yield fresh
    strata.reset()


@_pytest.fixture
def config_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """Directory holding config.yaml with a few nested values."""
    (tmp_path / "config.yaml").write_text(
        "name: demo\n"
        "server:\n"
        "  host: example.com\n"
        "  port: 8080\n"
        "tags:\n"
        "  - a\n"
        "  - b\n"
    )
    return tmp_path


@_pytest.fixture
def cli_runner() -> _click_testing.CliRunner:
    """Click CLI test runner."""
    return _click_testing.CliRunner()
