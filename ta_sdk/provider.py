"""ta_sdk.provider

The interface a middleware plug-in implements.

A provider never parses the command line and never touches the output
directory. It declares its commands, then answers three questions for a
:class:`~ta_sdk.commands.ResolvedInvocation`:

- ``get_collection``: which assessments and assessment units exist?
- ``get_recommendation``: what is recommended for each assessment?
- ``get_report``: which rendered reports belong to an assessment?

Returning an empty list from ``get_collection`` or ``get_recommendation`` fails
the stage. Returning ``None`` from a ``get_*_command`` method marks that verb
as unsupported for the middleware.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ta_sdk.commands import CommandNode, ResolvedInvocation
from ta_sdk.domain import DataCollection, Recommendation, Report
from ta_sdk.validation import (
    COMPLEXITY_SCHEMA,
    ISSUE_SCHEMA,
    RECOMMENDATION_SCHEMA,
    TARGET_SCHEMA,
    validate_complexity,
    validate_issue,
    validate_recommendation,
    validate_target,
)

_VALIDATORS = {
    ISSUE_SCHEMA: validate_issue,
    TARGET_SCHEMA: validate_target,
    COMPLEXITY_SCHEMA: validate_complexity,
    RECOMMENDATION_SCHEMA: validate_recommendation,
}


class PluginProvider(ABC):
    #: Middleware name used as the first CLI token.
    middleware: str = ""
    description: str = ""

    def get_collect_command(self) -> Optional[CommandNode]:
        return None

    def get_assess_command(self) -> Optional[CommandNode]:
        return None

    def get_report_command(self) -> Optional[CommandNode]:
        return None

    @abstractmethod
    def get_collection(self, invocation: ResolvedInvocation) -> List[DataCollection]:
        ...

    def get_recommendation(self, invocation: ResolvedInvocation) -> List[Recommendation]:
        return []

    def get_report(self, assessment_name: str, invocation: ResolvedInvocation) -> List[Report]:
        return []

    def json_files(self) -> List[Tuple[str, str]]:
        """Provider resource files to validate, as (schema, path) pairs."""
        return []

    def validate_json_files(self) -> bool:
        """Validate every resource from :meth:`json_files`; called on provider lookup."""
        ok = True
        for schema, path in self.json_files():
            validator = _VALIDATORS.get(schema)
            if validator is None:
                raise ValueError(f"Unknown schema: {schema}")
            ok = validator(path) and ok
        return ok
