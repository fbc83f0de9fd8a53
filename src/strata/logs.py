"""
Logging controls for the strata package logger.

Strata never installs handlers on import. These helpers adjust the
"strata" logger for applications that want its output: verbosity sends
lookup tracing to stderr through rich, and a log file can be attached on
top of that.
"""

import logging as _logging
import pathlib as _pathlib

import rich.console as _rich_console
import rich.logging as _rich_logging

PACKAGE_LOGGER = "strata"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_package_logger() -> _logging.Logger:
    """Return the parent logger of every strata module."""
    return _logging.getLogger(PACKAGE_LOGGER)


def _remove_handlers(logger: _logging.Logger, flag: str) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, flag, False):
            logger.removeHandler(handler)
            handler.close()


def set_verbosity(verbose: bool) -> None:
    """
    Trace lookups at DEBUG on stderr when verbose, otherwise only warnings.

    A single stderr handler is attached while verbose and removed again
    when verbosity is turned off.
    """
    logger = get_package_logger()
    if not verbose:
        logger.setLevel(_logging.WARNING)
        _remove_handlers(logger, "_strata_console")
        return

    logger.setLevel(_logging.DEBUG)
    if any(getattr(h, "_strata_console", False) for h in logger.handlers):
        return
    handler = _rich_logging.RichHandler(
        console=_rich_console.Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler._strata_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def set_log_file(path: str | _pathlib.Path) -> _logging.FileHandler:
    """
    Send the strata log to a file.

    A handler installed by an earlier call is removed and closed first.
    The file's directory must already exist.

    Args:
        path: File to append log records to.

    Returns:
        The installed handler.
    """
    logger = get_package_logger()
    _remove_handlers(logger, "_strata_log_file")

    handler = _logging.FileHandler(_pathlib.Path(path), encoding="utf-8")
    handler.setFormatter(_logging.Formatter(_LOG_FORMAT))
    handler._strata_log_file = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return handler
