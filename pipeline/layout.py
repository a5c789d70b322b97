"""pipeline.layout

Output directory layout for assessments.

The layout is a public contract: downstream tooling unpacks the archives and
reads the documents by path.

  <output_root>/
    <assessment>/
      environment.json
      recommendations.json
      <unit>/
        <unit>.json
        <copied config files, source structure preserved>
        recommendations_<location>_<platform>.<type>
    <assessment>.tar.gz

Directory names under the output root *are* the assessment names: ``report``
has no other record of which assessments exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from ta_sdk.errors import TAError

ENVIRONMENT_JSON = "environment.json"
RECOMMENDATIONS_JSON = "recommendations.json"
ARCHIVE_SUFFIX = ".tar.gz"


@dataclass(frozen=True)
class AssessmentPaths:
    output_root: Path
    assessment_name: str
    assessment_dir: Path
    environment_path: Path
    recommendations_path: Path
    archive_path: Path

    def unit_dir(self, unit_name: str) -> Path:
        return self.assessment_dir / check_dir_name(unit_name, "assessment unit")

    def unit_document_path(self, unit_name: str) -> Path:
        unit_dir = self.unit_dir(unit_name)
        return unit_dir / f"{unit_dir.name}.json"


def archive_path_for(assessment_dir: Path) -> Path:
    """``<parent>/<name>.tar.gz`` for an assessment directory."""
    return assessment_dir.parent / f"{assessment_dir.name}{ARCHIVE_SUFFIX}"


def check_dir_name(name: str, kind: str) -> str:
    """Return ``name`` stripped, or raise if it cannot be a single directory level."""
    cleaned = (name or "").strip()
    if not cleaned or cleaned in (".", "..") or "/" in cleaned or "\\" in cleaned:
        raise TAError(f"Invalid {kind} name: {name!r}")
    return cleaned


def get_assessment_paths(output_root: Union[str, Path], assessment_name: str) -> AssessmentPaths:
    """Compute filesystem paths for one assessment."""
    name = check_dir_name(assessment_name, "assessment")

    root = Path(output_root).expanduser().resolve()
    assessment_dir = root / name
    return AssessmentPaths(
        output_root=root,
        assessment_name=name,
        assessment_dir=assessment_dir,
        environment_path=assessment_dir / ENVIRONMENT_JSON,
        recommendations_path=assessment_dir / RECOMMENDATIONS_JSON,
        archive_path=archive_path_for(assessment_dir),
    )


def ensure_assessment_dir(paths: AssessmentPaths) -> None:
    try:
        paths.assessment_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise TAError(f"Error creating directory: {paths.assessment_dir}", path=paths.assessment_dir) from exc


def ensure_unit_dir(paths: AssessmentPaths, unit_name: str) -> Path:
    unit_dir = paths.unit_dir(unit_name)
    try:
        unit_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise TAError(f"Error creating directory: {unit_dir}", path=unit_dir) from exc
    return unit_dir


def discover_assessment_names(output_root: Union[str, Path]) -> List[str]:
    """Immediate subdirectories of the output root, sorted by name."""
    root = Path(output_root).expanduser()
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir())
