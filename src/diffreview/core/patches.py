"""diffreview core: single-hunk patch reconstruction for `git apply`."""

from __future__ import annotations

from typing import List, Optional

from .models import FileDiff, Hunk, LineKind

DEV_NULL = "/dev/null"
NO_NEWLINE = "\\ No newline at end of file"

MARKERS = {
    LineKind.CONTEXT: " ",
    LineKind.DELETION: "-",
    LineKind.ADDITION: "+",
}

def _file_header(fd: FileDiff) -> List[str]:
    out = [f"diff --git a/{fd.old_path if fd.old_path != DEV_NULL else fd.new_path} "
           f"b/{fd.new_path if fd.new_path != DEV_NULL else fd.old_path}"]
    if fd.old_path == DEV_NULL:
        out.append(fd.metadata.get("new_file_mode") or "new file mode 100644")
        out.append(f"--- {DEV_NULL}")
    else:
        if fd.new_path == DEV_NULL:
            out.append(fd.metadata.get("deleted_file_mode") or "deleted file mode 100644")
        out.append(f"--- a/{fd.old_path}")
    out.append(f"+++ {DEV_NULL}" if fd.new_path == DEV_NULL else f"+++ b/{fd.new_path}")
    return out

def _hunk_body(hunk: Hunk) -> List[str]:
    out = [hunk.header]
    for line in hunk.lines:
        marker = MARKERS.get(line.kind)
        if marker is None:
            # the header line already went out as hunk.header
            continue
        out.append(marker + line.text)
        if line.no_newline:
            out.append(NO_NEWLINE)
    return out

def reconstruct_patch(file_diff: FileDiff, hunk: Hunk) -> str:
    """
    Standalone unified diff holding exactly `hunk` of `file_diff`.

    Parsing the result yields one file with one hunk whose lines match the
    source hunk in kind, text and line numbers.
    """
    out = _file_header(file_diff) + _hunk_body(hunk)
    return "\n".join(out) + "\n"

def reconstruct_file_patch(file_diff: FileDiff, hunks: Optional[List[Hunk]] = None) -> str:
    """Like reconstruct_patch, for a chosen subset (default: all) of a file's hunks, in order."""
    chosen = file_diff.hunks if hunks is None else hunks
    out = _file_header(file_diff)
    for h in chosen:
        out.extend(_hunk_body(h))
    return "\n".join(out) + "\n"
