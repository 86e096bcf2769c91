"""GitHub Actions runtime helpers.

Reads step inputs from ``INPUT_*`` environment variables, writes step outputs
to ``$GITHUB_OUTPUT`` and renders log records as workflow commands
(``::warning::``, ``::error::``) so they show up as annotations.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1

_COMMAND_BY_LEVEL: dict[int, str] = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def input_env_name(name: str) -> str:
    """Map an action input name to its environment variable (``github-token`` -> ``INPUT_GITHUB-TOKEN``)."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str) -> str:
    """Return the stripped value of an action input, or ``""`` if it is not set."""
    return os.environ.get(input_env_name(name), "").strip()


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_output(name: str, value: str) -> None:
    """Set a step output.

    Appends a delimited ``name<<DELIM`` block to the file named by
    ``GITHUB_OUTPUT``. Outside a runner (no ``GITHUB_OUTPUT``) the legacy
    ``::set-output`` command is printed instead so the value is still visible.
    """
    output_file = os.environ.get("GITHUB_OUTPUT", "")
    if not output_file:
        print(f"::set-output name={name}::{escape_data(value)}")  # noqa: T201
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with Path(output_file).open("a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    logger.debug("Set output %s", name)


def set_failed(message: str) -> int:
    """Report a failed run and return the process exit code to use."""
    logger.error(message)
    return EXIT_FAILURE


def is_debug() -> bool:
    """Whether step debug logging is enabled (``RUNNER_DEBUG=1``)."""
    return os.environ.get("RUNNER_DEBUG", "") == "1"


class WorkflowCommandHandler(logging.Handler):
    """Render log records as GitHub Actions workflow commands.

    INFO records are written as plain lines; DEBUG, WARNING and ERROR records
    become ``::debug::``, ``::warning::`` and ``::error::`` commands.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            command = _COMMAND_BY_LEVEL.get(record.levelno)
            line = f"::{command}::{escape_data(message)}" if command else message
            stream = self.stream or sys.stdout
            stream.write(line + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def configure_logging(*, debug: bool | None = None) -> None:
    """Route the package's log records through :class:`WorkflowCommandHandler`."""
    if debug is None:
        debug = is_debug()
    root = logging.getLogger("reviewroulette")
    for handler in list(root.handlers):
        if isinstance(handler, WorkflowCommandHandler):
            root.removeHandler(handler)
    root.addHandler(WorkflowCommandHandler())
    root.setLevel(logging.DEBUG if debug else logging.INFO)
