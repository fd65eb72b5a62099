"""
Logging for dev-env processes.

The CLI configures logging once, in the root click group, before any
command opens the workspace:

    level = resolve_level(debug=..., verbose=..., quiet=...)
    setup_logging(level, log_file=resolve_log_file(config_dir))

Console output stays terse by default because most commands print their
own result lines; ``-v`` adds timestamps and logger names, ``--debug``
adds source locations. A log file, when configured, lives next to the
registry in the config directory unless an absolute path is given.

``devenv web`` additionally calls ``set_request_logging`` so Flask's
per-request access lines only show up when asked for.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

ENV_LOG_LEVEL = "DEVENV_LOG_LEVEL"
ENV_LOG_FILE = "DEVENV_LOG_FILE"
ENV_LOG_FILE_LEVEL = "DEVENV_LOG_FILE_LEVEL"

PACKAGE_LOGGER = "devenv"
REQUEST_LOGGER = "werkzeug"

_CONSOLE_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%Y-%m-%d %H:%M:%S")

# File handlers opened here, closed when logging is reconfigured
_open_files: list[logging.Handler] = []


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """``--debug`` > ``--verbose`` > ``--quiet`` > DEVENV_LOG_LEVEL > WARNING."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LOG_LEVEL) or "WARNING"


def resolve_log_file(config_dir: Path, value: str | None = None) -> Path | None:
    """Where file logging goes, or None when it is off.

    Args:
        config_dir: The dev-env config directory (holds config.json).
        value: Explicit setting; defaults to DEVENV_LOG_FILE. A relative
            name is placed inside *config_dir*.
    """
    value = value if value is not None else os.environ.get(ENV_LOG_FILE)
    if not value:
        return None
    path = Path(value).expanduser()
    return path if path.is_absolute() else Path(config_dir) / path


def setup_logging(
    level: str = "WARNING",
    log_file: Path | str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler and, optionally, the file handler.

    Safe to call more than once: previous handlers are replaced.

    Args:
        level: Console level name.
        log_file: File to append to (parent directories are created).
        log_file_level: File level name; defaults to DEVENV_LOG_FILE_LEVEL,
            then to *level*.
    """
    console_level = _parse_level(level)
    fmt, datefmt = _CONSOLE_FORMATS.get(
        logging.DEBUG if console_level <= logging.DEBUG else console_level,
        ("%(message)s", None),
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    while _open_files:
        _open_files.pop().close()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level or os.environ.get(ENV_LOG_FILE_LEVEL) or level)
        handler = _file_handler(Path(log_file), file_level)
        if handler is not None:
            root.addHandler(handler)
            _open_files.append(handler)
            root_level = min(root_level, file_level)

    root.setLevel(root_level)
    # Requests stay quiet until the web command opts in
    set_request_logging(False)
    if console_level <= logging.DEBUG:
        logging.getLogger(REQUEST_LOGGER).setLevel(logging.NOTSET)
    logging.raiseExceptions = False


def set_request_logging(enabled: bool) -> None:
    """Show or hide Flask's per-request access lines.

    When enabled the lines go straight to stderr, whatever the console
    level, so ``devenv web --access-log`` works without ``-v``.
    """
    requests = logging.getLogger(REQUEST_LOGGER)
    for handler in list(requests.handlers):
        requests.removeHandler(handler)

    if not enabled:
        requests.setLevel(logging.WARNING)
        requests.propagate = True
        return

    access = logging.StreamHandler(sys.stderr)
    access.setFormatter(logging.Formatter("%(message)s"))
    requests.addHandler(access)
    requests.setLevel(logging.INFO)
    requests.propagate = False


def _file_handler(path: Path, level: int) -> logging.Handler | None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        # Losing the log file must not stop the command itself
        logging.getLogger(PACKAGE_LOGGER).warning("Cannot open log file %s: %s", path, e)
        return None
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT[0], datefmt=_FILE_FORMAT[1]))
    return handler


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
