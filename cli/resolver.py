"""cli.resolver

Match a command line against a provider's command grammar.

Matching walks the grammar from the top-level verbs down:

1. compare the token at the cursor with each node name, in declared order
   (the first equal name wins)
2. on a match, advance the cursor and try the node's children
3. when no child matches (or there are none) the node is the leaf: every
   remaining token is either a flag, a flag value or a positional argument

The token sequence is never mutated; each step returns the advanced cursor
instead. Callers can reuse the same argument list for help lookups and
resolution.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ta_sdk.commands import CliOption, CommandNode, ResolvedInvocation
from ta_sdk.errors import UsageError

logger = logging.getLogger(__name__)

_USAGE_HINT = "Use the help command to get usage information."


def is_flag(token: str) -> bool:
    return token.startswith("-")


def parse_flag(token: str) -> str:
    """Return the flag name of ``--name`` or ``-n``.

    Long flags need more than one character, short flags exactly one.
    """
    if token.startswith("--"):
        name = token[2:]
        if len(name) <= 1:
            raise UsageError(f"Invalid argument '--{name}'. {_USAGE_HINT}")
        return name
    name = token[1:]
    if len(name) != 1:
        raise UsageError(f"Invalid argument '-{name}'. {_USAGE_HINT}")
    return name


def extract_options(
    tokens: Sequence[str],
    command: CommandNode,
) -> Tuple[Tuple[CliOption, ...], Tuple[str, ...]]:
    """Split leaf tokens into bound options and positional arguments.

    A flag takes the next token as its value unless that token is itself a
    flag. Flags the command does not declare are consumed and ignored.
    """
    bound: dict[str, CliOption] = {}
    arguments: List[str] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not is_flag(token):
            arguments.append(token)
            i += 1
            continue

        name = parse_flag(token)
        value: Optional[str] = None
        if i + 1 < len(tokens) and not is_flag(tokens[i + 1]):
            value = tokens[i + 1]
            i += 1

        declared = command.find_option(name)
        if declared is None:
            logger.debug("Ignoring option %r not declared by command %r", token, command.name)
        else:
            bound[declared.key] = declared.bind(value)
        i += 1

    return tuple(bound.values()), tuple(arguments)


def _match(
    tokens: Sequence[str],
    pos: int,
    nodes: Sequence[CommandNode],
    path: Tuple[str, ...],
) -> Tuple[Optional[ResolvedInvocation], int]:
    if pos >= len(tokens) or is_flag(tokens[pos]):
        return None, pos

    token = tokens[pos]
    for node in nodes:
        if node.name != token:
            continue

        node_pos = pos + 1
        node_path = path + (node.name,)
        if node.commands:
            sub, sub_pos = _match(tokens, node_pos, node.commands, node_path)
            logger.debug("Matched subcommand under %r: %r", node.name, sub and sub.command.name)
            if sub is not None:
                return sub, sub_pos

        options, arguments = extract_options(tokens[node_pos:], node)
        logger.debug("Leaf %r options=%r arguments=%r", node.name, options, arguments)
        return ResolvedInvocation(node_path, node, options, arguments), len(tokens)

    return None, pos


def resolve(
    tokens: Sequence[str],
    roots: Sequence[CommandNode],
) -> Optional[ResolvedInvocation]:
    """Resolve ``tokens`` to a single invocation, or ``None`` if no command matches."""
    logger.debug("Resolving tokens %r", list(tokens))
    invocation, _ = _match(tuple(tokens), 0, roots, ())
    return invocation


def resolve_help_chain(
    tokens: Sequence[str],
    roots: Sequence[CommandNode],
) -> List[CommandNode]:
    """Nodes matched by ``tokens``, top-level first; empty if none match."""
    chain: List[CommandNode] = []
    nodes: Sequence[CommandNode] = roots
    for token in tokens:
        if is_flag(token):
            break
        node = next((n for n in nodes if n.name == token), None)
        if node is None:
            break
        chain.append(node)
        if not node.commands:
            break
        nodes = node.commands
    return chain


def resolve_for_help(
    tokens: Sequence[str],
    roots: Sequence[CommandNode],
) -> Optional[CommandNode]:
    """Deepest command matched by ``tokens``, used to print contextual usage."""
    chain = resolve_help_chain(tokens, roots)
    return chain[-1] if chain else None
