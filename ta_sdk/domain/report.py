"""ta_sdk.domain.report

Rendered reports returned by a provider during ``report``.

Each report belongs to one assessment unit and one migration target. The
runtime writes it under the unit's directory as::

  recommendations_<target.location>_<target.platform>.<report_type>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ReportType(str, Enum):
    JSON = "json"
    HTML = "html"
    PDF = "pdf"
    CSV = "csv"
    TEXT = "txt"


@dataclass(frozen=True)
class Target:
    location: str
    platform: str
    id: Optional[str] = None


@dataclass(frozen=True)
class Report:
    assessment_unit_name: str
    target: Target
    report_type: ReportType
    content: Union[str, bytes]

    def file_name(self) -> str:
        return report_file_name(self.target, self.report_type)

    def content_bytes(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")


REPORT_FILE_PREFIX = "recommendations_"


def report_file_name(target: Target, report_type: ReportType) -> str:
    suffix = ReportType(report_type).value.lower()
    return f"{REPORT_FILE_PREFIX}{target.location}_{target.platform}.{suffix}"
