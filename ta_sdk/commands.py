"""ta_sdk.commands

Command grammar declared by a provider.

A provider describes its command line as a small tree:

  collect [OPTIONS] ARGS...
  assess  [OPTIONS] ARGS...
  report  <subcommand> [OPTIONS] ARGS...

Each :class:`CommandNode` carries its options, its children and the display
names of its positional arguments. The runtime matches the real argument vector
against the tree (see :mod:`cli.resolver`) and hands the provider a
:class:`ResolvedInvocation`: the leaf command that was selected, the options
that were given for it and the positional arguments.

The four top-level verbs are fixed. ``run`` is never declared by a provider; it
is synthesized from the ``assess`` command (:func:`build_run_command`).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

CMD_COLLECT = "collect"
CMD_ASSESS = "assess"
CMD_REPORT = "report"
CMD_RUN = "run"

CMD_COLLECT_DESC = "Collects data about the middleware installation"
CMD_ASSESS_DESC = "Collects data and generates recommendations for each assessment unit"
CMD_REPORT_DESC = "Generates reports for the assessments in the output directory"
CMD_RUN_DESC = "Runs collect, assess and report in sequence"

RESERVED_COMMANDS: Tuple[str, ...] = (CMD_COLLECT, CMD_ASSESS, CMD_REPORT, CMD_RUN)

TARGET_OPTION_SHORT = "t"
TARGET_OPTION_LONG = "target"
TARGET_OPTION_DESC = "Semicolon separated list of target ids to include in the recommendations"
TARGET_SEPARATOR = ";"


@dataclass(frozen=True)
class CliOption:
    """One flag of a command.

    ``short`` is a single character (``-a``), ``long`` a word (``--all``).
    ``value`` is ``None`` for a toggle, or the token bound to the flag once the
    command line has been resolved.
    """

    short: Optional[str] = None
    long: Optional[str] = None
    description: str = ""
    value: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.short and not self.long:
            raise ValueError("An option needs a short or a long flag")
        if self.short is not None and len(self.short) != 1:
            raise ValueError(f"Short flag must be a single character: {self.short!r}")
        if self.long is not None and len(self.long) <= 1:
            raise ValueError(f"Long flag must be more than one character: {self.long!r}")

    def matches(self, name: str) -> bool:
        return name == self.short or name == self.long

    @property
    def key(self) -> str:
        return self.long or self.short or ""

    def bind(self, value: Optional[str]) -> "CliOption":
        return replace(self, value=value)

    def flags(self) -> str:
        """Display form, e.g. ``-a, --all``."""
        parts: List[str] = []
        if self.short:
            parts.append(f"-{self.short}")
        if self.long:
            parts.append(f"--{self.long}")
        return ", ".join(parts)


def _as_tuple(items: Optional[Iterable]) -> tuple:
    if items is None:
        return ()
    return tuple(items)


@dataclass(frozen=True)
class CommandNode:
    """A command or subcommand in the grammar."""

    name: str
    description: str = ""
    options: Tuple[CliOption, ...] = ()
    commands: Tuple["CommandNode", ...] = ()
    argument_names: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _as_tuple(self.options))
        object.__setattr__(self, "commands", _as_tuple(self.commands))
        object.__setattr__(self, "argument_names", _as_tuple(self.argument_names))

        if not self.name or self.name.startswith("-"):
            raise ValueError(f"Invalid command name: {self.name!r}")

        seen = set()
        for child in self.commands:
            if child.name in seen:
                raise ValueError(f"Duplicate subcommand {child.name!r} under {self.name!r}")
            seen.add(child.name)

        if self.commands and self.argument_names:
            raise ValueError(
                f"Command {self.name!r} has subcommands and cannot declare arguments of its own"
            )

    def find_option(self, name: str) -> Optional[CliOption]:
        for opt in self.options:
            if opt.matches(name):
                return opt
        return None


@dataclass(frozen=True)
class ResolvedInvocation:
    """The outcome of matching a command line against the grammar.

    ``path`` holds the matched command names, top-level verb first;
    ``command`` is the leaf node (``path[-1]``).
    """

    path: Tuple[str, ...]
    command: CommandNode
    options: Tuple[CliOption, ...] = ()
    arguments: Tuple[str, ...] = ()

    @property
    def verb(self) -> str:
        return self.path[0]

    def find_option(self, name: str) -> Optional[CliOption]:
        for opt in self.options:
            if opt.matches(name):
                return opt
        return None

    def has_option(self, name: str) -> bool:
        return self.find_option(name) is not None

    def option_value(self, name: str, default: Optional[str] = None) -> Optional[str]:
        opt = self.find_option(name)
        if opt is None or opt.value is None:
            return default
        return opt.value

    def named_arguments(self) -> Dict[str, str]:
        return dict(zip(self.command.argument_names, self.arguments))

    def argument(self, display_name: str) -> Optional[str]:
        return self.named_arguments().get(display_name)


def target_option() -> CliOption:
    return CliOption(TARGET_OPTION_SHORT, TARGET_OPTION_LONG, TARGET_OPTION_DESC)


def build_collect_command(
    options: Optional[Sequence[CliOption]] = None,
    commands: Optional[Sequence[CommandNode]] = None,
    argument_names: Optional[Sequence[str]] = None,
    *,
    description: str = CMD_COLLECT_DESC,
) -> CommandNode:
    return CommandNode(CMD_COLLECT, description, options, commands, argument_names)


def build_assess_command(
    options: Optional[Sequence[CliOption]] = None,
    commands: Optional[Sequence[CommandNode]] = None,
    argument_names: Optional[Sequence[str]] = None,
    *,
    description: str = CMD_ASSESS_DESC,
) -> CommandNode:
    """Build the ``assess`` command.

    The ``-t/--target`` option is appended unless the provider already
    declares one; the coordinator uses it to filter recommendation targets.
    """
    opts = list(options or [])
    if not any(o.matches(TARGET_OPTION_LONG) or o.matches(TARGET_OPTION_SHORT) for o in opts):
        opts.append(target_option())
    return CommandNode(CMD_ASSESS, description, opts, commands, argument_names)


def build_report_command(
    options: Optional[Sequence[CliOption]] = None,
    commands: Optional[Sequence[CommandNode]] = None,
    argument_names: Optional[Sequence[str]] = None,
    *,
    description: str = CMD_REPORT_DESC,
) -> CommandNode:
    return CommandNode(CMD_REPORT, description, options, commands, argument_names)


def build_run_command(assess: CommandNode) -> CommandNode:
    """``run`` shares the options, subcommands and arguments of ``assess``."""
    return CommandNode(
        CMD_RUN,
        CMD_RUN_DESC,
        assess.options,
        assess.commands,
        assess.argument_names,
    )


def parse_target_ids(value: Optional[str]) -> frozenset[str]:
    """Split a ``--target`` value into ids; blanks are dropped."""
    if not value:
        return frozenset()
    return frozenset(t.strip() for t in value.split(TARGET_SEPARATOR) if t.strip())
