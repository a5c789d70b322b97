"""ta_sdk.io.fs

Filesystem writers for collector documents.

Why this module exists
----------------------
Every document the collector produces (``environment.json``, ``<unit>.json``,
``recommendations.json``, rendered reports) follows the same rules:

- an existing file is deleted first, then the new content is written
- JSON is pretty-printed with a stable 2-space indent, keys in insertion order
- an ``OSError`` is surfaced as a :class:`~ta_sdk.errors.TAError` carrying the
  failing path

Keeping those rules here means every stage writes documents the same way.

Writes are not transactional: a crash between the delete and the write leaves
the document missing. Re-running the command recreates it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator, Union

from ta_sdk.errors import TAError


def to_json_str(data: Any, *, indent: int = 2) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False)


def replace_file(path: Path, content: Union[str, bytes], *, encoding: str = "utf-8") -> None:
    """Delete ``path`` if present, then write ``content``."""
    p = Path(path)
    payload = content.encode(encoding) if isinstance(content, str) else content
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        if p.exists():
            p.unlink()
        p.write_bytes(payload)
    except OSError as exc:
        raise TAError(f"Error writing file: {p.resolve()}", path=p) from exc


def write_json_document(path: Path, data: Any) -> None:
    try:
        text = to_json_str(data)
    except (TypeError, ValueError) as exc:
        raise TAError(f"Error serializing document: {path}", path=Path(path)) from exc
    replace_file(path, text + "\n")


def read_json(path: Path, *, encoding: str = "utf-8") -> Any:
    """Read JSON from disk."""

    with Path(path).open("r", encoding=encoding) as f:
        return json.load(f)


def iter_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under ``root`` in sorted order."""
    for p in sorted(Path(root).rglob("*")):
        if p.is_file():
            yield p
