"""pipeline.pipeline

One high-level object for the collector's stages.

Why this exists
---------------
The stage functions live in :mod:`pipeline.orchestrator` and all need the same
output root. Callers (CLI, scripts, tests) should not have to thread that root
through every call or know which function backs which verb.

:class:`DataCollectorPipeline` keeps the output root and exposes one method per
verb, plus :meth:`DataCollectorPipeline.execute` which dispatches on the verb
of a resolved invocation.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Dict, List, Union

from pipeline.orchestrator import run_assess, run_collect, run_report, run_run
from ta_sdk.commands import CMD_ASSESS, CMD_COLLECT, CMD_REPORT, CMD_RUN, ResolvedInvocation
from ta_sdk.domain import DataCollection
from ta_sdk.errors import UnsupportedCommandError
from ta_sdk.provider import PluginProvider

StageFn = Callable[..., object]


class DataCollectorPipeline:
    """High-level facade over the collector stages.

    Build it via :func:`pipeline.wiring.build_pipeline` rather than importing
    the stage functions directly.
    """

    def __init__(self, output_root: Union[str, Path]) -> None:
        self.output_root = Path(output_root)
        self._stages: Dict[str, StageFn] = {
            CMD_COLLECT: self.collect,
            CMD_ASSESS: self.assess,
            CMD_REPORT: self.report,
            CMD_RUN: self.run,
        }

    def collect(self, provider: PluginProvider, invocation: ResolvedInvocation) -> List[DataCollection]:
        return run_collect(provider, invocation, output_root=self.output_root)

    def assess(self, provider: PluginProvider, invocation: ResolvedInvocation) -> List[Path]:
        """Collect, then write recommendations and archives. Returns the archives."""
        return run_assess(provider, invocation, output_root=self.output_root)

    def report(self, provider: PluginProvider, invocation: ResolvedInvocation) -> List[Path]:
        """Write reports for existing assessments. Returns the report files."""
        return run_report(provider, invocation, output_root=self.output_root)

    def run(self, provider: PluginProvider, invocation: ResolvedInvocation) -> List[Path]:
        return run_run(provider, invocation, output_root=self.output_root)

    def execute(self, provider: PluginProvider, invocation: ResolvedInvocation) -> object:
        stage = self._stages.get(invocation.verb)
        if stage is None:
            raise UnsupportedCommandError(
                f"Command is not supported for middleware: {provider.middleware}."
            )
        return stage(provider, invocation)
