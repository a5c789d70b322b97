"""pipeline.archive

Snapshot an assessment directory as ``<assessment>.tar.gz``.

The archive sits next to the assessment directory and is rebuilt from scratch
every time: an existing archive is removed first, never appended to, so a
re-run never leaves stale members behind.
"""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

from pipeline.layout import archive_path_for
from ta_sdk.errors import TAError

logger = logging.getLogger(__name__)


def _entries(root: Path) -> list[Path]:
    entries = list(root.rglob("*"))
    entries.sort(key=lambda p: p.relative_to(root).as_posix())
    return entries


def archive_assessment(assessment_dir: Path) -> Path:
    """Write ``<parent>/<name>.tar.gz`` for ``assessment_dir`` and return its path."""
    src = Path(assessment_dir)
    out = archive_path_for(src)
    if not src.is_dir():
        raise TAError(f"Assessment directory not found: {src}", path=src)

    try:
        if out.exists():
            out.unlink()
        with tarfile.open(out, "w:gz") as archive:
            for entry in [src, *_entries(src)]:
                rel = entry.relative_to(src).as_posix()
                arcname = src.name if rel == "." else f"{src.name}/{rel}"
                info = archive.gettarinfo(str(entry), arcname=arcname)
                info.uid = 0
                info.gid = 0
                info.uname = ""
                info.gname = ""
                if entry.is_dir():
                    archive.addfile(info)
                    continue
                with entry.open("rb") as f:
                    archive.addfile(info, f)
    except (OSError, tarfile.TarError) as exc:
        raise TAError(f"Error creating archive: {out}", path=out) from exc

    logger.info("Wrote archive: %s", out)
    return out
