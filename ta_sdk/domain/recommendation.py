"""ta_sdk.domain.recommendation

Recommendations produced by a provider during ``assess``.

A :class:`Recommendation` is keyed by assessment name. The runtime combines it
with the matching collection (environment + assessment units) into the
``recommendations.json`` document:

  {
    "domain": ..., "middleware": ..., "version": ..., "host": ...,
    "operatingSystem": ..., "assessmentName": ..., "assessmentType": ...,
    <provider top-level fields>,
    "assessmentUnits": [
      {"name": "NewYork", <provider unit fields>,
       "targets": [{"id": "WAS_LIBERTY", ...}],
       "configFiles": ["NewYork/opt/app/server.xml"]}
    ]
  }

Target selection
----------------
``assess --target "A;B"`` keeps only the targets whose ``id`` is listed. An
absent or empty selection keeps everything; a unit left with no targets loses
the ``targets`` key altogether.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Any, Dict, List, Mapping, Optional, Sequence

from .collection import AssessmentUnit
from .environment import Environment


@dataclass
class AssessmentUnitRecommendation:
    name: str
    targets: List[Mapping[str, Any]] = field(default_factory=list)
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class Recommendation:
    assessment_name: str
    assessment_units: List[AssessmentUnitRecommendation] = field(default_factory=list)
    fields: Mapping[str, Any] = field(default_factory=dict)


def filter_targets(
    targets: Sequence[Mapping[str, Any]],
    target_ids: AbstractSet[str],
) -> List[Dict[str, Any]]:
    if not target_ids:
        return [dict(t) for t in targets]
    return [dict(t) for t in targets if str(t.get("id")) in target_ids]


def _relative_config_files(unit: AssessmentUnit, assessment_dir: Optional[Path]) -> List[str]:
    out: List[str] = []
    for p in unit.config_files:
        path = Path(p)
        if assessment_dir is not None:
            try:
                path = path.resolve().relative_to(assessment_dir.resolve())
            except ValueError:
                pass
        out.append(path.as_posix())
    return out


def build_recommendation_document(
    rec: Recommendation,
    env: Environment,
    units: Sequence[AssessmentUnit],
    *,
    target_ids: AbstractSet[str] = frozenset(),
    assessment_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Combine a recommendation with its collection into one document."""
    doc: Dict[str, Any] = {
        "domain": env.domain,
        "middleware": env.middleware_name,
        "version": env.middleware_version,
        "host": env.hostname,
        "operatingSystem": env.operating_system,
        "assessmentName": env.assessment_name,
        "assessmentType": env.assessment_type,
    }
    doc = {k: v for k, v in doc.items() if v is not None}
    for k, v in rec.fields.items():
        if k != "assessmentUnits":
            doc[k] = v

    collected = {u.name: u for u in units}
    au_docs: List[Dict[str, Any]] = []
    for au in rec.assessment_units:
        au_doc: Dict[str, Any] = {"name": au.name}
        for k, v in au.data.items():
            if k not in ("name", "targets"):
                au_doc[k] = v

        targets = filter_targets(au.targets, target_ids)
        if targets:
            au_doc["targets"] = targets

        unit = collected.get(au.name)
        if unit is not None and unit.config_files:
            au_doc["configFiles"] = _relative_config_files(unit, assessment_dir)
        au_docs.append(au_doc)

    doc["assessmentUnits"] = au_docs
    return doc
