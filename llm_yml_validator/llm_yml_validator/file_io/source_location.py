from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

_INDEXED_PATH_RE = re.compile(r"\[(\d+)\]")


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def to_pointer(path: Optional[str]) -> Optional[str]:
    """Normalize a result path to a JSON pointer.

    Violations already use pointers ("/quick_usage/0"); warnings use the
    index-qualified form ("quick_usage[0]").
    """
    if path is None:
        return None
    if path.startswith("/"):
        return path
    return "/" + _INDEXED_PATH_RE.sub(r"/\1", path)


def lookup_source(source_map: Optional[Dict[str, Dict[str, int]]], path: Optional[str]) -> SourceLocation:
    pointer = to_pointer(path)
    if not source_map or not pointer:
        return SourceLocation(path=path)

    entry = source_map.get(pointer)
    if not entry:
        return SourceLocation(path=path)

    return SourceLocation(
        path=path,
        line=entry.get("line"),
        column=entry.get("column"),
    )


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    if loc.file_path is not None:
        if loc.line is not None and loc.column is not None:
            return f"{loc.file_path}:{loc.line}:{loc.column}"
        if loc.line is not None:
            return f"{loc.file_path}:{loc.line}"
        return str(loc.file_path)

    if loc.line is not None:
        return f"line {loc.line}" + (f", column {loc.column}" if loc.column is not None else "")

    return ""
