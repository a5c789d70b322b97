"""ta_sdk.validation

JSON schema validation hook for provider documents.

No schema contract ships with the collector yet, so every document is reported
valid. Providers call these from ``validate_json_files`` so that a real
validator can be dropped in without touching them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

ISSUE_SCHEMA = "schema/issue.schema.json"
TARGET_SCHEMA = "schema/target.schema.json"
COMPLEXITY_SCHEMA = "schema/complexity.schema.json"
RECOMMENDATION_SCHEMA = "schema/recommendation.schema.json"


def validate_json_by_schema(schema_path: str, json_path: Union[str, Path]) -> bool:
    logger.debug("Schema validation skipped for %s (schema %s)", json_path, schema_path)
    return True


def validate_issue(json_path: Union[str, Path]) -> bool:
    return validate_json_by_schema(ISSUE_SCHEMA, json_path)


def validate_target(json_path: Union[str, Path]) -> bool:
    return validate_json_by_schema(TARGET_SCHEMA, json_path)


def validate_complexity(json_path: Union[str, Path]) -> bool:
    return validate_json_by_schema(COMPLEXITY_SCHEMA, json_path)


def validate_recommendation(json_path: Union[str, Path]) -> bool:
    return validate_json_by_schema(RECOMMENDATION_SCHEMA, json_path)
