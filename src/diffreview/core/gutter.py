"""diffreview core: per-line change markers for the source-view gutter."""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from .models import ChangeRegion, DiffLine, FileDiff, GutterChangeKind, Hunk, LineKind

def _change_runs(lines: List[DiffLine]) -> List[Tuple[int, int]]:
    """[start, end) index ranges of maximal consecutive deletion/addition runs."""
    runs: List[Tuple[int, int]] = []
    i = 0
    while i < len(lines):
        if not lines[i].is_change:
            i += 1
            continue
        start = i
        while i < len(lines) and lines[i].is_change:
            i += 1
        runs.append((start, i))
    return runs

def _next_new_line_number(file_diff: FileDiff, hunk_index: int, line_index: int) -> Optional[int]:
    """New-file line number of the first line at or after the position, across later hunks too."""
    for h_idx in range(hunk_index, len(file_diff.hunks)):
        lines = file_diff.hunks[h_idx].lines
        start = line_index if h_idx == hunk_index else 0
        for ln in lines[start:]:
            if ln.new_line_number is not None:
                return ln.new_line_number
    return None

def gutter_changes(file_diff: FileDiff) -> Dict[int, GutterChangeKind]:
    """
    Map new-file line numbers to gutter markers.

    In each change run the first min(d, a) additions are MODIFIED, the rest
    ADDED. Surplus deletions leave one DELETED marker on the next new-file line
    after the run; a run with nothing after it in the file gets no marker.
    ADDED/MODIFIED always win over a DELETED marker on the same line.
    """
    result: Dict[int, GutterChangeKind] = {}

    for h_idx, hunk in enumerate(file_diff.hunks):
        lines = hunk.lines
        for start, end in _change_runs(lines):
            run = lines[start:end]
            deletions = [ln for ln in run if ln.kind == LineKind.DELETION]
            additions = [ln for ln in run if ln.kind == LineKind.ADDITION]
            paired = min(len(deletions), len(additions))

            for pos, ln in enumerate(additions):
                if ln.new_line_number is None:
                    continue
                result[ln.new_line_number] = GutterChangeKind.MODIFIED if pos < paired else GutterChangeKind.ADDED

            if len(deletions) > len(additions):
                marker = _next_new_line_number(file_diff, h_idx, end)
                if marker is not None and marker not in result:
                    result[marker] = GutterChangeKind.DELETED

    return result

def change_region_for_line(file_diff: FileDiff, line_number: int) -> Optional[ChangeRegion]:
    """The contiguous change region covering a new-file line number, if any."""
    for h_idx, hunk in enumerate(file_diff.hunks):
        lines = hunk.lines
        for start, end in _change_runs(lines):
            run = lines[start:end]
            deleted = [ln.text for ln in run if ln.kind == LineKind.DELETION]
            added = [ln.text for ln in run if ln.kind == LineKind.ADDITION]
            numbers = [ln.new_line_number for ln in run
                       if ln.kind == LineKind.ADDITION and ln.new_line_number is not None]

            if numbers:
                if line_number in numbers:
                    return ChangeRegion(hunk=hunk, deleted_lines=deleted, added_lines=added,
                                        new_line_range=(min(numbers), max(numbers)))
                continue

            marker = _next_new_line_number(file_diff, h_idx, end)
            if marker is not None and marker == line_number:
                return ChangeRegion(hunk=hunk, deleted_lines=deleted, added_lines=[],
                                    new_line_range=(marker, marker))
    return None

def old_line_range(hunk: Hunk) -> Optional[Tuple[int, int]]:
    """Inclusive old-file range covered by the hunk's context and deletion lines."""
    old_count = sum(1 for ln in hunk.lines if ln.kind in (LineKind.CONTEXT, LineKind.DELETION))
    if old_count == 0:
        return None
    start = hunk.old_start
    return start, start + old_count - 1

def staged_hunk_ids(combined: FileDiff, staged: FileDiff) -> Set[int]:
    """
    Ids of hunks in `combined` overlapping any hunk of `staged` in old-file lines.
    Both diffs must share the same base (HEAD) for old line numbers to compare.
    """
    staged_ranges = [r for r in (old_line_range(h) for h in staged.hunks) if r is not None]
    if not staged_ranges:
        return set()

    result: Set[int] = set()
    for hunk in combined.hunks:
        rng = old_line_range(hunk)
        if rng is None:
            continue
        lo, hi = rng
        if any(s_lo <= hi and lo <= s_hi for s_lo, s_hi in staged_ranges):
            result.add(hunk.id)
    return result
