"""diffreview core: shared data models."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Tuple, Dict, Any, Optional, Mapping

Span = Tuple[int, int]  # half-open [start, end)

RE_HUNK_HEADER = re.compile(r"^@@\s+-(\d+)(?:,(\S*))?\s+\+(\d+)(?:,(\S*))?\s+@@(.*)$")

class LineKind(Enum):
    HUNK_HEADER = "hunk_header"
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"

class GutterChangeKind(Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"  # marker at the new-file line where content was removed

def _count_or_default(raw: Optional[str]) -> int:
    if raw is None:
        return 1
    try:
        return int(raw)
    except ValueError:
        return 1

def parse_hunk_header(header: str) -> Tuple[int, int, int, int]:
    """
    Parse "@@ -o[,oc] +n[,nc] @@" into (old_start, old_count, new_start, new_count).
    Omitted or non-numeric counts default to 1; an unrecognisable header yields (1, 1, 1, 1).
    """
    m = RE_HUNK_HEADER.match(header)
    if not m:
        return 1, 1, 1, 1
    return (
        int(m.group(1)),
        _count_or_default(m.group(2)),
        int(m.group(3)),
        _count_or_default(m.group(4)),
    )

def hunk_header_context(header: str) -> str:
    """Free text after the closing "@@" of a hunk header (usually the enclosing symbol)."""
    m = RE_HUNK_HEADER.match(header)
    if m:
        return (m.group(5) or "").strip()
    idx = header.rfind("@@")
    if idx <= 0:
        return ""
    return header[idx + 2:].strip()

@dataclass
class DiffLine:
    id: int
    kind: LineKind
    text: str
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None
    # None: not computed. []: computed, nothing to highlight.
    inline_highlights: Optional[List[Span]] = None
    # followed by "\ No newline at end of file" in the diff
    no_newline: bool = False

    @property
    def is_change(self) -> bool:
        return self.kind in (LineKind.ADDITION, LineKind.DELETION)

@dataclass
class Hunk:
    id: int
    header: str
    lines: List[DiffLine] = field(default_factory=list)

    @property
    def old_start(self) -> int:
        return parse_hunk_header(self.header)[0]

    @property
    def old_count(self) -> int:
        return parse_hunk_header(self.header)[1]

    @property
    def new_start(self) -> int:
        return parse_hunk_header(self.header)[2]

    @property
    def new_count(self) -> int:
        return parse_hunk_header(self.header)[3]

    @property
    def context(self) -> str:
        return hunk_header_context(self.header)

    @property
    def body(self) -> List[DiffLine]:
        return [ln for ln in self.lines if ln.kind != LineKind.HUNK_HEADER]

    @property
    def additions(self) -> int:
        return sum(1 for ln in self.lines if ln.kind == LineKind.ADDITION)

    @property
    def deletions(self) -> int:
        return sum(1 for ln in self.lines if ln.kind == LineKind.DELETION)

@dataclass
class FileDiff:
    id: str
    old_path: str
    new_path: str
    hunks: List[Hunk] = field(default_factory=list)
    operation: str = "modify"  # create/modify/delete/rename
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def addition_count(self) -> int:
        return sum(h.additions for h in self.hunks)

    @property
    def deletion_count(self) -> int:
        return sum(h.deletions for h in self.hunks)

    @property
    def is_rename(self) -> bool:
        return self.operation == "rename"

    def with_hunks(self, hunks: List[Hunk]) -> "FileDiff":
        return FileDiff(
            id=self.id,
            old_path=self.old_path,
            new_path=self.new_path,
            hunks=list(hunks),
            operation=self.operation,
            metadata=dict(self.metadata),
        )

@dataclass
class Row:
    id: int
    left: Optional[DiffLine] = None
    right: Optional[DiffLine] = None

@dataclass(frozen=True)
class Token:
    text: str
    span: Span

@dataclass
class ChangeRegion:
    hunk: Hunk
    deleted_lines: List[str]
    added_lines: List[str]
    new_line_range: Tuple[int, int]  # inclusive

@dataclass(frozen=True)
class Snapshot:
    id: str
    label: str
    captured_at: float = field(default_factory=time.time)
    fingerprints: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {path: tuple(fps) for path, fps in self.fingerprints.items()}
        object.__setattr__(self, "fingerprints", MappingProxyType(frozen))

    def paths(self) -> List[str]:
        return list(self.fingerprints.keys())

    def total_hunks(self) -> int:
        return sum(len(fps) for fps in self.fingerprints.values())
