"""pipeline.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables
- configure logging
- build the provider registry and the pipeline facade

Keeping this wiring in one place prevents configuration and dependency setup
from being duplicated across entrypoints (CLI, scripts, tests).
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from pipeline.pipeline import DataCollectorPipeline
from pipeline.providers import PROVIDER_GROUP, ProviderRegistry

ENV_FILE = ".env"

OUTPUT_DIR_VAR = "TA_OUTPUT_DIR"
LOG_LEVEL_VAR = "TA_LOG_LEVEL"
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_dotenv_if_present(dotenv_path: Optional[Path] = None) -> None:
    """Load ``.env`` (default: in the working directory) into ``os.environ``.

    Variables already set in the environment win.
    """
    dotenv_path = dotenv_path or Path.cwd() / ENV_FILE
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once, to stderr."""
    name = (level or os.getenv(LOG_LEVEL_VAR) or DEFAULT_LOG_LEVEL).strip().upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(level=numeric, format=LOG_FORMAT, stream=sys.stderr)


def output_dir_from_env() -> Path:
    return Path(os.getenv(OUTPUT_DIR_VAR) or DEFAULT_OUTPUT_DIR)


def build_registry(group: str = PROVIDER_GROUP) -> ProviderRegistry:
    return ProviderRegistry.from_entry_points(group)


def build_pipeline(
    output_dir: Optional[Union[str, Path]] = None,
    *,
    load_env: bool = True,
) -> DataCollectorPipeline:
    """Build the high-level pipeline facade.

    ``output_dir`` overrides ``TA_OUTPUT_DIR``; the default is ``./output``.
    """
    if load_env:
        load_dotenv_if_present()

    root = Path(output_dir) if output_dir is not None else output_dir_from_env()
    return DataCollectorPipeline(root)
