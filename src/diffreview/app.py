"""diffreview command-line entrypoint (summary views + CLI selftest)."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.gutter import gutter_changes
from .core.models import DiffLine, FileDiff
from .core.pairing import DiffRowPairer
from .core.parser import UnifiedDiffParser
from .core.selftests import DiffReviewSelfTests
from .core.snapshots import is_significant_hunk

USAGE = "usage: diffreview [--selftest] [--side-by-side] [--gutter] [--no-inline] [--verbose] [PATH|-]"

def _run_selftests_cli() -> int:
    ok, report = DiffReviewSelfTests.run()
    print(report)
    return 0 if ok else 2

def _cell(line: Optional[DiffLine], old: bool, width: int = 48) -> str:
    if line is None:
        return " " * (6 + width)
    num = line.old_line_number if old else line.new_line_number
    no = "" if num is None else str(num)
    text = line.text if len(line.text) <= width else line.text[: width - 1] + "…"
    return f"{no:>5} {text:<{width}}"

def _print_file(fd: FileDiff, side_by_side: bool, gutter: bool) -> None:
    significant = sum(1 for h in fd.hunks if is_significant_hunk(h))
    path = f"{fd.old_path} -> {fd.new_path}" if fd.is_rename else fd.id
    print(f"{path}  [{fd.operation}]  +{fd.addition_count} -{fd.deletion_count}  "
          f"{len(fd.hunks)} hunk(s), {significant} with context")

    if side_by_side:
        for row in DiffRowPairer().pair_lines(fd.hunks):
            print(f"  {_cell(row.left, old=True)} | {_cell(row.right, old=False)}")

    if gutter:
        for line_no, kind in sorted(gutter_changes(fd).items()):
            print(f"  {line_no:>5} {kind.value}")

def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if "--verbose" in argv else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if "--selftest" in argv:
        return _run_selftests_cli()
    if "-h" in argv or "--help" in argv:
        print(USAGE)
        return 0

    positional = [a for a in argv if not a.startswith("--")]
    source = positional[0] if positional else "-"
    try:
        if source == "-":
            text = sys.stdin.read()
        else:
            text = Path(source).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        print(f"Could not read diff: {e}", file=sys.stderr)
        return 1

    parser = UnifiedDiffParser({"inline_highlights": "--no-inline" not in argv})
    files = parser.parse(text)
    for fd in files:
        _print_file(fd, side_by_side="--side-by-side" in argv, gutter="--gutter" in argv)

    adds = sum(fd.addition_count for fd in files)
    dels = sum(fd.deletion_count for fd in files)
    print(f"{len(files)} file(s) changed, {adds} insertion(s)(+), {dels} deletion(s)(-)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
