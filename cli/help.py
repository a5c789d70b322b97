"""cli.help

Usage text for the collector CLI.

Three levels of help exist:

- base help (no arguments): lists the registered middleware
- middleware help (``<middleware> help``): lists the middleware's commands
- command help (``--help`` / ``-h``): usage of the deepest matched command
"""

from __future__ import annotations

from typing import List, Sequence

from ta_sdk.commands import CommandNode

PROG = "TADataCollector"
HELP_USAGE_PREFIX = f"Usage: {PROG}"
BASE_HELP_USAGE = f"{HELP_USAGE_PREFIX} MIDDLEWARE COMMAND [OPTIONS]"
COMMAND_HELP = f"Run '{PROG} MIDDLEWARE COMMAND --help' for more information on a command."

_COLUMN = 15


def base_help(middleware_names: Sequence[str]) -> str:
    lines = [
        BASE_HELP_USAGE,
        "",
        "Middleware:",
        f"  Plug-ins available for these middleware [ {' | '.join(middleware_names)} ]",
        "",
        "Commands:",
        f"  {'help':<{_COLUMN}}Get information on the commands and options available for a middleware",
    ]
    return "\n".join(lines)


def middleware_help(middleware: str, commands: Sequence[CommandNode]) -> str:
    lines = [f"{HELP_USAGE_PREFIX} {middleware} COMMAND [OPTIONS]", "", "Commands:"]
    for command in commands:
        lines.append(f"  {command.name:<{_COLUMN}}{command.description}")
    lines.extend(["", "", COMMAND_HELP])
    return "\n".join(lines)


def command_usage(chain: Sequence[CommandNode]) -> str:
    """Usage block for the last node in ``chain``."""
    command = chain[-1]
    head: List[str] = [c.name for c in chain]
    if command.commands:
        head.append("COMMAND")
    if command.options:
        head.append("[OPTIONS]")
    head.extend(command.argument_names)

    lines = [" ".join(head)]
    if command.description:
        lines.extend(["", command.description])
    if command.options:
        lines.extend(["", "Options:"])
        for opt in command.options:
            lines.append(f"  {opt.flags():<{_COLUMN}}{opt.description}")
    if command.commands:
        lines.extend(["", "Commands:"])
        for sub in command.commands:
            lines.append(f"  {sub.name:<{_COLUMN}}{sub.description}")
    return "\n".join(lines)


def command_help(middleware: str, chain: Sequence[CommandNode]) -> str:
    return f"{HELP_USAGE_PREFIX} {middleware} {command_usage(chain)}\n\n{COMMAND_HELP}"
