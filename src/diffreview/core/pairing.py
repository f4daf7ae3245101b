"""diffreview core: side-by-side row alignment."""

from __future__ import annotations

from typing import List

from .models import DiffLine, Hunk, LineKind, Row

class DiffRowPairer:
    """
    Aligned rows for a split view:
      - hunk headers and context lines mirror the same line into both columns
      - deletions go left, additions go right; a block of changes between two
        context lines is zipped positionally, the longer side spilling into
        one-sided rows
    Row ids count up across the whole call, so rows of different hunks never collide.
    """

    def pair_lines(self, hunks: List[Hunk]) -> List[Row]:
        rows: List[Row] = []
        del_buf: List[DiffLine] = []
        add_buf: List[DiffLine] = []

        def emit(left, right) -> None:
            rows.append(Row(id=len(rows), left=left, right=right))

        def flush_change() -> None:
            if not del_buf and not add_buf:
                return
            m = max(len(del_buf), len(add_buf))
            for i in range(m):
                d = del_buf[i] if i < len(del_buf) else None
                a = add_buf[i] if i < len(add_buf) else None
                emit(d, a)
            del_buf.clear()
            add_buf.clear()

        for hunk in hunks:
            for line in hunk.lines:
                if line.kind in (LineKind.HUNK_HEADER, LineKind.CONTEXT):
                    flush_change()
                    emit(line, line)
                elif line.kind == LineKind.DELETION:
                    del_buf.append(line)
                elif line.kind == LineKind.ADDITION:
                    add_buf.append(line)
            flush_change()

        return rows

def pair_lines(hunks: List[Hunk]) -> List[Row]:
    return DiffRowPairer().pair_lines(hunks)
