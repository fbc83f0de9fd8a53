"""Tests for the package logging controls."""

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest
import rich.logging as _rich_logging

import strata.logs as logs
import strata.store as store_mod


@_pytest.fixture
def package_logger() -> _typing.Iterator[_logging.Logger]:
    """The strata logger, restored to its original level and handlers afterwards."""
    logger = logs.get_package_logger()
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


class TestVerbosity:
    """Tests for set_verbosity."""

    def test_toggle(self, package_logger: _logging.Logger) -> None:
        """Verbose means DEBUG, otherwise WARNING."""
        logs.set_verbosity(True)
        assert package_logger.level == _logging.DEBUG
        logs.set_verbosity(False)
        assert package_logger.level == _logging.WARNING

    def test_verbose_attaches_one_stderr_handler(self, package_logger: _logging.Logger) -> None:
        """Repeated verbose calls keep a single rich handler; quiet removes it."""
        logs.set_verbosity(True)
        logs.set_verbosity(True)
        console = [h for h in package_logger.handlers if isinstance(h, _rich_logging.RichHandler)]
        assert len(console) == 1
        assert console[0].console.stderr is True

        logs.set_verbosity(False)
        assert not any(isinstance(h, _rich_logging.RichHandler) for h in package_logger.handlers)

    def test_lookups_traced(
        self,
        package_logger: _logging.Logger,
        store: store_mod.Store,
        caplog: _pytest.LogCaptureFixture,
    ) -> None:
        """Verbose stores log which layer answered a lookup."""
        store.set_verbosity(True)
        store.set_default("k", 1)
        with caplog.at_level(_logging.DEBUG, logger="strata"):
            store.get("k")
        assert "k found in defaults" in caplog.text

    def test_circular_alias_warning(
        self,
        package_logger: _logging.Logger,
        store: store_mod.Store,
        caplog: _pytest.LogCaptureFixture,
    ) -> None:
        """Rejected circular aliases are logged as warnings."""
        store.register_alias("a", "b")
        with caplog.at_level(_logging.WARNING, logger="strata"):
            store.register_alias("b", "a")
        assert "circular reference alias" in caplog.text


class TestLogFile:
    """Tests for set_log_file."""

    def test_writes_records(self, package_logger: _logging.Logger, tmp_path: _pathlib.Path) -> None:
        """Records from strata modules land in the file."""
        path = tmp_path / "strata.log"
        handler = logs.set_log_file(path)
        logs.set_verbosity(True)
        store_mod.Store().add_config_path(str(tmp_path))
        handler.flush()
        assert "Adding" in path.read_text()

    def test_replaces_previous_handler(
        self, package_logger: _logging.Logger, tmp_path: _pathlib.Path
    ) -> None:
        """Only one log file handler is installed at a time."""
        first = logs.set_log_file(tmp_path / "one.log")
        second = logs.set_log_file(tmp_path / "two.log")
        assert first not in package_logger.handlers
        assert second in package_logger.handlers
