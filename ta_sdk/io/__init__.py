"""ta_sdk.io

IO helpers shared by the collector stages.
"""

from __future__ import annotations

from .fs import iter_files, read_json, replace_file, to_json_str, write_json_document

__all__ = [
    "iter_files",
    "read_json",
    "replace_file",
    "to_json_str",
    "write_json_document",
]
