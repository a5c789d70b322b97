"""ta_sdk.errors

Two error kinds cross the provider/runtime boundary:

- :class:`UsageError` for bad command lines. The CLI prints the message with
  usage text and exits normally.
- :class:`TAError` for failures while producing output (provider returned no
  data, collection not found, IO failures). The run aborts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class UsageError(ValueError):
    """Invalid command line input."""


class UnsupportedCommandError(UsageError):
    """No command in the grammar matches the command line."""


class TAError(Exception):
    """A stage of the data collector failed."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
