"""pipeline.providers

Registry of installed middleware providers.

Why this exists
---------------
The CLI, the help text and the tests need to agree on the same provider facts:

- which middleware names are available (base help)
- which provider answers for a middleware token (dispatch)
- which commands a provider supports, including the synthesized ``run``

This module defines those facts once. Providers are discovered through the
``ta_data_collector.providers`` entry point group; tests build a registry from
provider instances directly.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Dict, Iterable, List, Optional

from ta_sdk.commands import CommandNode, build_run_command
from ta_sdk.provider import PluginProvider

logger = logging.getLogger(__name__)

PROVIDER_GROUP = "ta_data_collector.providers"


def provider_commands(provider: PluginProvider) -> List[CommandNode]:
    """Top-level commands of ``provider`` in help order.

    ``run`` is never declared by a provider: it exists whenever ``assess``
    does and shares its options, subcommands and arguments.
    """
    assess = provider.get_assess_command()
    candidates = [
        provider.get_collect_command(),
        assess,
        provider.get_report_command(),
        build_run_command(assess) if assess is not None else None,
    ]
    return [c for c in candidates if c is not None]


class ProviderRegistry:
    """Middleware name -> provider, in registration order."""

    def __init__(self, providers: Iterable[PluginProvider] = ()) -> None:
        self._providers: Dict[str, PluginProvider] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: PluginProvider) -> None:
        name = (provider.middleware or "").strip()
        if not name:
            raise ValueError(f"Provider {type(provider).__name__} does not declare a middleware name")
        if name in self._providers:
            raise ValueError(f"Duplicate provider for middleware: {name}")
        self._providers[name] = provider

    def list_providers(self) -> List[PluginProvider]:
        return list(self._providers.values())

    def middleware_names(self) -> List[str]:
        return list(self._providers)

    def find_provider(self, name: str) -> Optional[PluginProvider]:
        return self._providers.get(name)

    @classmethod
    def from_entry_points(cls, group: str = PROVIDER_GROUP) -> "ProviderRegistry":
        """Load every provider advertised under ``group``.

        An entry point may name a :class:`PluginProvider` subclass (instantiated
        with no arguments) or a ready provider instance.
        """
        registry = cls()
        for ep in sorted(entry_points(group=group), key=lambda e: e.name):
            try:
                obj = ep.load()
                provider = obj() if isinstance(obj, type) else obj
            except Exception as exc:
                logger.warning("Skipping provider entry point %s: %s", ep.name, exc)
                continue
            if not isinstance(provider, PluginProvider):
                logger.warning("Skipping entry point %s: not a PluginProvider", ep.name)
                continue
            logger.debug("Loaded provider %s from %s", provider.middleware, ep.value)
            registry.register(provider)
        return registry
