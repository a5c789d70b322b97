"""pipeline.masking

Redact copied configuration files.

A file is masked at most once: the first :class:`~ta_sdk.domain.ContentMask`
(in provider order) with a pattern matching the file's *source* path is
applied and the remaining masks are skipped. Files no mask matches are left as
the byte-identical copy.

Masked files are rewritten as text with ``\\n`` line endings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ta_sdk.domain import ContentMask
from ta_sdk.errors import TAError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopiedFile:
    """A config file copy: where it came from and where it now lives."""

    source: str  # posix form of the source path, used for mask matching
    dest: Path


def find_mask(source: str, masks: Sequence[ContentMask]) -> Optional[ContentMask]:
    for mask in masks:
        logger.debug("Comparing file %s to mask patterns %s", source, mask.files)
        if mask.matches(source):
            return mask
    return None


def split_lines(text: str) -> List[str]:
    """Split on ``\\n``, ``\\r\\n`` and ``\\r`` only; a final terminator adds no empty line."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def mask_lines(lines: List[str], source: str, masks: Sequence[ContentMask]) -> List[str]:
    """Apply the first matching mask to ``lines``; unchanged if none match."""
    mask = find_mask(source, masks)
    if mask is None:
        return lines
    return mask.mask(lines)


def mask_file(copy: CopiedFile, masks: Sequence[ContentMask]) -> bool:
    """Mask one copied file in place. Returns True if a mask was applied."""
    mask = find_mask(copy.source, masks)
    if mask is None:
        return False

    logger.info("Applying mask to file: %s", copy.dest)
    try:
        lines = split_lines(copy.dest.read_bytes().decode("utf-8"))
        masked = mask.mask(lines)
        text = "".join(f"{line}\n" for line in masked)
        copy.dest.write_text(text, encoding="utf-8", newline="\n")
    except (OSError, UnicodeDecodeError) as exc:
        raise TAError(f"Error applying content mask to file: {copy.dest}", path=copy.dest) from exc
    return True


def apply_masks(copies: Sequence[CopiedFile], masks: Sequence[ContentMask]) -> int:
    """Mask every copy; returns how many files were masked."""
    if not masks:
        return 0
    logger.debug("Applying content masks")
    return sum(1 for c in copies if mask_file(c, masks))
