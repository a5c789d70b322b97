"""pipeline.orchestrator

The four collector stages: collect, assess, report and run.

Design principles
-----------------
- The provider is the only source of domain data. Stages persist and package
  what it returns; they never invent documents.
- Filesystem naming lives in :mod:`pipeline.layout`; document writing in
  :mod:`ta_sdk.io.fs`.
- Stages process collections, units and reports strictly in provider order.
  A failure aborts the stage with a :class:`~ta_sdk.errors.TAError`; output
  already written for earlier collections stays on disk.
- Re-running a stage is the recovery path: documents are deleted and
  rewritten, archives are rebuilt from scratch.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Sequence, Union

from pipeline.archive import archive_assessment
from pipeline.layout import (
    AssessmentPaths,
    discover_assessment_names,
    ensure_assessment_dir,
    ensure_unit_dir,
    get_assessment_paths,
)
from pipeline.masking import CopiedFile, apply_masks
from ta_sdk.commands import TARGET_OPTION_LONG, ResolvedInvocation, parse_target_ids
from ta_sdk.domain import (
    AssessmentUnit,
    DataCollection,
    ReportType,
    build_recommendation_document,
    environment_to_json,
)
from ta_sdk.domain.report import REPORT_FILE_PREFIX
from ta_sdk.errors import TAError
from ta_sdk.io.fs import iter_files, replace_file, write_json_document
from ta_sdk.provider import PluginProvider

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Config file copies
# ---------------------------------------------------------------------------


def relative_destination(source: Path) -> Path:
    """Path of ``source`` inside a unit directory.

    Absolute sources lose their anchor (``/opt/app/x.xml`` -> ``opt/app/x.xml``);
    ``.`` and ``..`` segments are dropped so copies never escape the unit dir.
    """
    p = Path(source)
    parts = [part for part in p.parts if part not in (p.anchor, ".", "..")]
    if not parts:
        raise TAError(f"Cannot copy config file: {source}", path=p)
    return Path(*parts)


def _copy_one(src: Path, dest: Path, source_label: str) -> CopiedFile:
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
    except OSError as exc:
        raise TAError(f"Error copying file: {src}", path=src) from exc
    return CopiedFile(source=source_label, dest=dest)


def copy_config_files(config_files: Sequence[PathLike], unit_dir: Path) -> List[CopiedFile]:
    """Copy files, and every file under declared directories, into ``unit_dir``."""
    copies: List[CopiedFile] = []
    for declared in config_files:
        src = Path(declared)
        dest = unit_dir / relative_destination(src)
        if src.is_dir():
            for f in iter_files(src):
                inner = f.relative_to(src)
                copies.append(_copy_one(f, dest / inner, (src / inner).as_posix()))
        else:
            copies.append(_copy_one(src, dest, src.as_posix()))
    return copies


# ---------------------------------------------------------------------------
# Collect
# ---------------------------------------------------------------------------


def write_environment(paths: AssessmentPaths, collection: DataCollection) -> None:
    logger.debug("Writing env file: %s", paths.environment_path)
    write_json_document(paths.environment_path, environment_to_json(collection.environment))


def collect_assessment_unit(paths: AssessmentPaths, unit: AssessmentUnit) -> List[CopiedFile]:
    """Write one unit's directory and point its config files at the copies."""
    unit_dir = ensure_unit_dir(paths, unit.name)

    doc_path = paths.unit_document_path(unit.name)
    logger.debug("Writing assessment unit json file: %s", doc_path)
    write_json_document(doc_path, dict(unit.assessment_data))

    copies = copy_config_files(unit.config_files, unit_dir)
    masked = apply_masks(copies, unit.content_masks)
    if masked:
        logger.info("Masked %d file(s) for assessment unit %s", masked, unit.name)

    unit.config_files[:] = [c.dest for c in copies]
    return copies


def collect_one(output_root: PathLike, collection: DataCollection) -> AssessmentPaths:
    paths = get_assessment_paths(output_root, collection.assessment_name)
    ensure_assessment_dir(paths)
    write_environment(paths, collection)
    for unit in collection.assessment_units:
        collect_assessment_unit(paths, unit)
    logger.info("Collected assessment %s into %s", paths.assessment_name, paths.assessment_dir)
    return paths


def run_collect(
    provider: PluginProvider,
    invocation: ResolvedInvocation,
    *,
    output_root: PathLike,
) -> List[DataCollection]:
    collections = provider.get_collection(invocation)
    if not collections:
        raise TAError("Collect failed. No data collections generated by plugin provider.")

    for collection in collections:
        collect_one(output_root, collection)
    return list(collections)


# ---------------------------------------------------------------------------
# Assess
# ---------------------------------------------------------------------------


def run_assess(
    provider: PluginProvider,
    invocation: ResolvedInvocation,
    *,
    output_root: PathLike,
) -> List[Path]:
    """Collect, write ``recommendations.json`` per assessment and archive it."""
    collections = run_collect(provider, invocation, output_root=output_root)

    recommendations = provider.get_recommendation(invocation)
    if not recommendations:
        raise TAError("Assessment failed. No recommendations generated by plugin provider.")

    target_ids = parse_target_ids(invocation.option_value(TARGET_OPTION_LONG))
    if target_ids:
        logger.info("Selecting targets: %s", ", ".join(sorted(target_ids)))

    archives: List[Path] = []
    for rec in recommendations:
        collection = next(
            (c for c in collections if c.assessment_name == rec.assessment_name),
            None,
        )
        if collection is None:
            raise TAError(f"Collection not found for assessment: {rec.assessment_name}")

        paths = get_assessment_paths(output_root, rec.assessment_name)
        doc = build_recommendation_document(
            rec,
            collection.environment,
            collection.assessment_units,
            target_ids=target_ids,
            assessment_dir=paths.assessment_dir,
        )
        write_json_document(paths.recommendations_path, doc)
        archives.append(archive_assessment(paths.assessment_dir))
    return archives


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

_REPORT_SUFFIXES = {f".{t.value}" for t in ReportType}


def clear_previous_reports(paths: AssessmentPaths) -> int:
    """Remove report files written by an earlier ``report`` run."""
    removed = 0
    for unit_dir in sorted(p for p in paths.assessment_dir.iterdir() if p.is_dir()):
        for f in unit_dir.glob(f"{REPORT_FILE_PREFIX}*"):
            if f.is_file() and f.suffix.lower() in _REPORT_SUFFIXES:
                try:
                    f.unlink()
                except OSError as exc:
                    raise TAError(f"Error removing report: {f}", path=f) from exc
                removed += 1
    return removed


def run_report(
    provider: PluginProvider,
    invocation: ResolvedInvocation,
    *,
    output_root: PathLike,
) -> List[Path]:
    """Write provider reports for every assessment found in the output root.

    Every assessment is re-archived, even when the provider returned no
    reports for it, so the archive never keeps reports removed from disk.
    """
    assessment_names = discover_assessment_names(output_root)
    if not assessment_names:
        raise TAError(f"Report failed. No assessments found in output directory: {output_root}")
    logger.debug("Generating reports for assessments: %s", assessment_names)

    written: List[Path] = []
    for name in assessment_names:
        paths = get_assessment_paths(output_root, name)
        clear_previous_reports(paths)

        reports = provider.get_report(name, invocation)
        for report in reports:
            dest = paths.unit_dir(report.assessment_unit_name) / report.file_name()
            logger.info("Writing report: %s", dest)
            replace_file(dest, report.content_bytes())
            written.append(dest)

        archive_assessment(paths.assessment_dir)
    return written


def run_run(
    provider: PluginProvider,
    invocation: ResolvedInvocation,
    *,
    output_root: PathLike,
) -> List[Path]:
    """Assess, then report. A failed assess never reaches report."""
    run_assess(provider, invocation, output_root=output_root)
    return run_report(provider, invocation, output_root=output_root)
