"""ta_sdk.domain.collection

What a provider returns from ``collect``.

A :class:`DataCollection` is one assessment: an :class:`Environment` plus the
assessment units found in it. Each :class:`AssessmentUnit` owns an opaque
assessment-data document, the configuration files to copy into the output and
the :class:`ContentMask` rules to redact those copies.

Ownership notes
---------------
- ``AssessmentUnit.config_files`` is mutable on purpose: once the runtime has
  copied the files it replaces the list with the copied locations, so the
  provider's ``get_recommendation`` reads the copies rather than the live
  installation.
- Masks are matched against the *source* path of each file, so rules are
  written against the installation tree, never the output tree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .environment import Environment

LineTransform = Callable[[List[str]], List[str]]

DC_VERSION = "2.1.3"


@dataclass(frozen=True)
class ContentMask:
    """Redaction rule for copied configuration files.

    ``files`` are regular expressions matched (full match) against a file's
    source path in posix form. ``transform`` receives every line of a matching
    file (without line endings) and returns the lines to write instead.
    """

    files: Tuple[str, ...]
    transform: LineTransform

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))

    def matches(self, source_path: str) -> bool:
        return any(re.fullmatch(p, source_path) for p in self.files)

    def mask(self, lines: List[str]) -> List[str]:
        return list(self.transform(list(lines)))

    @classmethod
    def substitutions(
        cls,
        files: Sequence[str],
        rules: Sequence[Tuple[str, str]],
    ) -> "ContentMask":
        """Mask that applies ``re.sub(pattern, replacement)`` to every line."""
        compiled = [(re.compile(p), r) for p, r in rules]

        def _transform(lines: List[str]) -> List[str]:
            out = []
            for line in lines:
                for rx, repl in compiled:
                    line = rx.sub(repl, line)
                out.append(line)
            return out

        return cls(tuple(files), _transform)


@dataclass
class AssessmentUnit:
    name: str
    assessment_data: Mapping[str, Any] = field(default_factory=dict)
    config_files: List[Path] = field(default_factory=list)
    content_masks: List[ContentMask] = field(default_factory=list)


@dataclass
class DataCollection:
    environment: Environment
    assessment_units: List[AssessmentUnit] = field(default_factory=list)

    @property
    def assessment_name(self) -> str:
        return self.environment.assessment_name


@dataclass
class AssessmentUnitMetadata:
    """Metadata document describing one assessment unit.

    Providers usually embed this in their assessment data so downstream
    tooling can identify the unit without reading ``environment.json``.
    """

    domain: Optional[str]
    middleware: Optional[str]
    host: Optional[str]
    assessment_unit_name: str
    archive_type: Optional[str] = None
    archive_name: Optional[str] = None
    dc_version: str = DC_VERSION
    identifier: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.identifier.setdefault("assessmentUnitName", self.assessment_unit_name)

    @classmethod
    def for_environment(cls, env: Environment, assessment_unit_name: str) -> "AssessmentUnitMetadata":
        return cls(
            domain=env.domain,
            middleware=env.middleware_name,
            host=env.hostname,
            assessment_unit_name=assessment_unit_name,
            archive_type=env.execution_context_type,
            archive_name=env.execution_context_name,
        )

    def add_identifier(self, key: str, value: Any) -> None:
        self.identifier[key] = value

    def to_json(self) -> Dict[str, Any]:
        doc = {
            "domain": self.domain,
            "middleware": self.middleware,
            "dcVersion": self.dc_version,
            "host": self.host,
            "assessmentUnitName": self.assessment_unit_name,
            "archiveType": self.archive_type,
            "archiveName": self.archive_name,
            "identifier": dict(self.identifier),
        }
        return {k: v for k, v in doc.items() if v is not None}
