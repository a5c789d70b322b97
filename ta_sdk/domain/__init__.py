"""ta_sdk.domain

Documents exchanged between a provider and the runtime.

The provider is the only source of truth for their content; the runtime only
persists and packages them.
"""

from __future__ import annotations

from .collection import AssessmentUnit, AssessmentUnitMetadata, ContentMask, DataCollection
from .environment import Environment, environment_from_json, environment_to_json
from .recommendation import (
    AssessmentUnitRecommendation,
    Recommendation,
    build_recommendation_document,
    filter_targets,
)
from .report import Report, ReportType, Target, report_file_name

__all__ = [
    "AssessmentUnit",
    "AssessmentUnitMetadata",
    "AssessmentUnitRecommendation",
    "ContentMask",
    "DataCollection",
    "Environment",
    "Recommendation",
    "Report",
    "ReportType",
    "Target",
    "build_recommendation_document",
    "environment_from_json",
    "environment_to_json",
    "filter_targets",
    "report_file_name",
]
