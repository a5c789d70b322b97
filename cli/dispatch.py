"""cli.dispatch

Turn a raw argument vector into one pipeline stage run.

Exit code policy
----------------
- ``0``: the command completed, help was printed, or the command line was
  unusable (the message is followed by the base help text)
- ``1``: a stage failed with a :class:`~ta_sdk.errors.TAError`
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from cli.help import base_help, command_help, middleware_help
from cli.resolver import is_flag, resolve, resolve_help_chain
from pipeline.pipeline import DataCollectorPipeline
from pipeline.providers import ProviderRegistry, provider_commands
from pipeline.wiring import build_pipeline, build_registry, configure_logging, load_dotenv_if_present
from ta_sdk.errors import TAError, UnsupportedCommandError, UsageError

logger = logging.getLogger(__name__)

HELP_COMMAND = "help"
HELP_FLAGS = ("--help", "-h")


def run_command(
    middleware: str,
    tokens: Sequence[str],
    *,
    registry: ProviderRegistry,
    pipeline: DataCollectorPipeline,
) -> str:
    """Run one middleware command and return the text to print.

    Raises :class:`UsageError` for command lines that cannot be run and lets
    :class:`TAError` from the stages propagate.
    """
    provider = registry.find_provider(middleware)
    if provider is None:
        raise UsageError(f"No plug-in provider found for middleware:{middleware}.")
    try:
        valid = provider.validate_json_files()
    except ValueError as exc:
        raise TAError(f"Invalid resources in plug-in provider for middleware {middleware}: {exc}") from exc
    if not valid:
        logger.warning("Resources of plug-in provider %s failed schema validation", middleware)

    logger.debug("cliArguments: %r", list(tokens))
    if not tokens:
        raise UsageError("No command was specified.")

    commands = provider_commands(provider)

    if tokens[0] == HELP_COMMAND:
        return middleware_help(middleware, commands)

    if any(t in HELP_FLAGS for t in tokens):
        chain = resolve_help_chain(tokens, commands)
        if not chain:
            raise UsageError("Cannot display help for command. Option is not supported for the command.")
        return command_help(middleware, chain)

    invocation = resolve(tokens, commands)
    if invocation is None:
        raise UnsupportedCommandError(f"Command is not supported for middleware: {middleware}.")

    logger.info("Running %s for middleware %s", " ".join(invocation.path), middleware)
    pipeline.execute(provider, invocation)
    return f"Command '{invocation.verb}' completed successfully."


def main(
    argv: Optional[List[str]] = None,
    *,
    registry: Optional[ProviderRegistry] = None,
    pipeline: Optional[DataCollectorPipeline] = None,
) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    load_dotenv_if_present()
    configure_logging()
    if registry is None:
        registry = build_registry()
    if pipeline is None:
        pipeline = build_pipeline(load_env=False)

    names = registry.middleware_names()
    if not args or is_flag(args[0]):
        print(base_help(names))
        return 0

    middleware, tokens = args[0], args[1:]
    try:
        print(run_command(middleware, tokens, registry=registry, pipeline=pipeline))
    except UsageError as exc:
        print(f"{exc}\n\n{base_help(names)}")
        return 0
    except TAError as exc:
        logger.debug("Stage failed", exc_info=True)
        print(f"ERROR: {exc}")
        return 1
    return 0
