"""ta_sdk.domain.environment

The host / middleware / assessment a collection describes.

A provider builds one :class:`Environment` per data collection. The runtime
serializes it once per collection as ``environment.json``; the document uses
camelCase keys and embeds the two metadata mappings as JSON strings:

  {
    "domain": "...",
    "operatingSystem": "...",
    "hostName": "...",
    "middlewareName": "...",
    "middlewareVersion": "...",
    "middlewareInstallPath": "...",
    "middlewareDataPath": "...",
    "middlewareMetadata": "{\\"feature\\":\\"drilling\\"}",
    "assessmentName": "...",
    "assessmentType": "...",
    "assessmentMetadata": "{\\"test\\":\\"value\\"}"
  }

Fields that are ``None`` are left out of the document.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# (attribute, document key) for the plain string fields, in document order.
_STRING_FIELDS = (
    ("domain", "domain"),
    ("operating_system", "operatingSystem"),
    ("hostname", "hostName"),
    ("middleware_name", "middlewareName"),
    ("middleware_version", "middlewareVersion"),
    ("middleware_install_path", "middlewareInstallPath"),
    ("middleware_data_path", "middlewareDataPath"),
)


@dataclass(frozen=True)
class Environment:
    domain: Optional[str] = None
    operating_system: Optional[str] = None
    hostname: Optional[str] = None
    middleware_name: Optional[str] = None
    middleware_version: Optional[str] = None
    middleware_install_path: Optional[str] = None
    middleware_data_path: Optional[str] = None
    middleware_metadata: Optional[Mapping[str, Any]] = None
    assessment_name: str = ""
    assessment_type: Optional[str] = None
    assessment_metadata: Optional[Mapping[str, Any]] = None

    # Not part of environment.json; copied into the assessment unit metadata.
    execution_context_type: Optional[str] = None
    execution_context_name: Optional[str] = None


def _embed(metadata: Optional[Mapping[str, Any]]) -> Optional[str]:
    if metadata is None:
        return None
    return json.dumps(dict(metadata), separators=(",", ":"))


def _unembed(raw: Any) -> Optional[Dict[str, Any]]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, Mapping):
        return dict(raw)
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Embedded metadata is not a JSON object: {raw!r}")
    return data


def environment_to_json(env: Environment) -> Dict[str, Any]:
    """Build the ``environment.json`` document."""
    doc: Dict[str, Any] = {}
    for attr, key in _STRING_FIELDS:
        doc[key] = getattr(env, attr)
    doc["middlewareMetadata"] = _embed(env.middleware_metadata)
    doc["assessmentName"] = env.assessment_name
    doc["assessmentType"] = env.assessment_type
    doc["assessmentMetadata"] = _embed(env.assessment_metadata)
    return {k: v for k, v in doc.items() if v is not None}


def environment_from_json(doc: Mapping[str, Any]) -> Environment:
    """Read an ``environment.json`` document back into an :class:`Environment`."""
    kwargs: Dict[str, Any] = {attr: doc.get(key) for attr, key in _STRING_FIELDS}
    return Environment(
        middleware_metadata=_unembed(doc.get("middlewareMetadata")),
        assessment_name=str(doc.get("assessmentName") or ""),
        assessment_type=doc.get("assessmentType"),
        assessment_metadata=_unembed(doc.get("assessmentMetadata")),
        **kwargs,
    )
