"""Diagnostics on stderr and the JSON file writer.

Follows `clig.dev <https://clig.dev/>`_ conventions: the converted document
goes to a file, and everything meant for a human (progress, warnings,
errors) goes to stderr, so nothing is ever printed to stdout.

The module exposes three layers:

1. :class:`OutputManager` -- holds the Rich stderr console. Created once per
   CLI invocation in :func:`~swagger_convert.app.convert_command` and
   installed via :func:`set_output`.
2. Module-level convenience functions (:func:`info`, :func:`error`,
   :func:`warning`, :func:`success`) that delegate to the global
   ``OutputManager`` instance so callers do not need to pass the manager
   around.
3. :func:`forward_logging`, which routes the converter's warnings through
   the same manager while a conversion runs.

:func:`write_json` writes the output document and never overwrites an
existing file.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.markup import escape

from swagger_convert.exceptions import FileAccessError


class OutputManager:
    """Central manager for diagnostics on stderr.

    Colour is disabled when ``NO_COLOR`` is set or ``TERM=dumb``. Messages
    are escaped before printing, so square brackets in paths or parse
    errors are shown literally instead of being read as Rich markup.
    """

    def __init__(self) -> None:
        self._no_color = _should_disable_color()
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            soft_wrap=True,
        )

    def info(self, message: str) -> None:
        """Print an informational message to stderr."""
        if self._no_color:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(escape(message))

    def success(self, message: str) -> None:
        """Print a green success message to stderr."""
        if self._no_color:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        """Print a yellow warning to stderr."""
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


def write_json(path: Path, data: Any) -> None:
    """Write *data* to a new file at *path* as 2-space indented JSON.

    The file is opened in exclusive-create mode: an existing file is never
    overwritten.

    Raises:
        FileAccessError: If *path* already exists or cannot be written. The
            message names the path and the underlying error.
    """
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError as exc:
        raise FileAccessError(
            f"Refusing to overwrite existing file {path}: {exc}"
        ) from exc
    except OSError as exc:
        raise FileAccessError(f"Failed to write {path}: {exc}") from exc


# ------------------------------------------------------------------ #
# Global output instance (set during command startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


def info(message: str) -> None:
    """Print info message to stderr via the global OutputManager."""
    get_output().info(message)


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def success(message: str) -> None:
    """Print success message to stderr via the global OutputManager."""
    get_output().success(message)


def warning(message: str) -> None:
    """Print warning to stderr via the global OutputManager."""
    get_output().warning(message)


# ------------------------------------------------------------------ #
# Logging bridge
# ------------------------------------------------------------------ #

LOGGER_NAME = "swagger_convert"


class OutputHandler(logging.Handler):
    """Logging handler that prints records through the global OutputManager.

    Errors get the ``Error:`` prefix and everything else the ``Warning:``
    prefix. The handler level defaults to ``WARNING``.
    """

    def __init__(self, level: int = logging.WARNING) -> None:
        super().__init__(level)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        if record.levelno >= logging.ERROR:
            error(message)
        else:
            warning(message)


@contextmanager
def forward_logging() -> Iterator[OutputHandler]:
    """Route ``swagger_convert`` warnings to the global OutputManager.

    The handler is attached to the package logger for the duration of the
    ``with`` block and removed afterwards.
    """
    logger = logging.getLogger(LOGGER_NAME)
    handler = OutputHandler()
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
