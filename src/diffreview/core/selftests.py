"""diffreview core: in-process self tests."""

from __future__ import annotations

from typing import Tuple

from .gutter import gutter_changes
from .highlighter import compute_char_diff
from .models import GutterChangeKind, LineKind
from .pairing import DiffRowPairer
from .parser import UnifiedDiffParser, hunk_line_counts
from .patches import reconstruct_patch
from .snapshots import SnapshotStore, hunk_fingerprint

class DiffReviewSelfTests:
    """
    In-process self tests over embedded diff strings; no file system access.
    """

    @staticmethod
    def run() -> Tuple[bool, str]:
        parser = UnifiedDiffParser()
        pairer = DiffRowPairer()

        report_lines = []
        ok = True

        def fail(msg: str) -> None:
            nonlocal ok
            ok = False
            report_lines.append("FAIL: " + msg)

        def pass_(msg: str) -> None:
            report_lines.append("OK: " + msg)

        # 1) Basic git diff
        patch1 = (
            "diff --git a/hello.txt b/hello.txt\n"
            "index 83db48f..bf269f4 100644\n"
            "--- a/hello.txt\n"
            "+++ b/hello.txt\n"
            "@@ -1,3 +1,4 @@\n"
            " line one\n"
            "-line two\n"
            "+line two modified\n"
            "+line three new\n"
            " line four\n"
        )
        files = parser.parse(patch1)
        if len(files) != 1 or len(files[0].hunks) != 1:
            fail("Git diff parsing counts incorrect.")
        else:
            fd = files[0]
            if (fd.old_path, fd.new_path) != ("hello.txt", "hello.txt"):
                fail("Git diff paths incorrect.")
            elif (fd.addition_count, fd.deletion_count) != (2, 1):
                fail("Addition/deletion counts incorrect.")
            elif hunk_line_counts(fd.hunks[0]) != (3, 4):
                fail("Hunk body does not match header counts.")
            else:
                pass_("Git diff parsing.")

            added = fd.hunks[0].lines[3]
            if added.inline_highlights != [(9, 17)]:
                fail("Inline highlight for paired addition incorrect.")
            else:
                pass_("Inline highlight on replacement pair.")

        # 2) Word-level highlighter
        if compute_char_diff("abc", "xyz") != ([], []):
            fail("Disjoint lines should not be highlighted.")
        elif compute_char_diff("let userId = guid()", "let userID = guid()") != ([(4, 10)], [(4, 10)]):
            fail("Changed token range incorrect.")
        else:
            pass_("Word-level highlighter.")

        # 3) Side-by-side pairing: 3 deletions then 1 addition
        patch3 = (
            "diff --git a/a.py b/a.py\n"
            "--- a/a.py\n"
            "+++ b/a.py\n"
            "@@ -1,3 +1,1 @@\n"
            "-x = 1\n"
            "-y = 2\n"
            "-z = 3\n"
            "+xyz = 6\n"
        )
        files3 = parser.parse(patch3)
        rows = pairer.pair_lines(files3[0].hunks) if files3 else []
        body = rows[1:]
        if len(body) != 3 or body[0].right is None or any(r.right is not None for r in body[1:]):
            fail("Row pairing of uneven change block incorrect.")
        else:
            pass_("Row pairing.")

        # 4) Gutter markers
        gutter = gutter_changes(files[0]) if files else {}
        if gutter.get(2) != GutterChangeKind.MODIFIED or gutter.get(3) != GutterChangeKind.ADDED:
            fail("Gutter classification incorrect.")
        else:
            pass_("Gutter classification.")

        # 5) Single-hunk reconstruction round-trip
        if files:
            fd = files[0]
            again = parser.parse(reconstruct_patch(fd, fd.hunks[0]))
            src = [(ln.kind, ln.text, ln.old_line_number, ln.new_line_number) for ln in fd.hunks[0].lines]
            dst = [(ln.kind, ln.text, ln.old_line_number, ln.new_line_number)
                   for ln in (again[0].hunks[0].lines if again and again[0].hunks else [])]
            if len(again) != 1 or len(again[0].hunks) != 1 or src != dst:
                fail("Reconstructed hunk does not round-trip.")
            else:
                pass_("Hunk reconstruction round-trip.")

        # 6) Snapshot delta
        store = SnapshotStore()
        if store.delta(files) != files:
            fail("Delta without snapshot should return everything.")
        store.take_snapshot(files)
        if store.delta(parser.parse(patch1)):
            fail("Delta right after snapshot should be empty.")
        else:
            reparsed = parser.parse(patch1.replace("line three new", "line three newer"))
            changed = store.delta(reparsed)
            if len(changed) != 1 or hunk_fingerprint(changed[0].hunks[0]) == hunk_fingerprint(files[0].hunks[0]):
                fail("Delta did not surface the changed hunk.")
            else:
                pass_("Snapshot delta.")

        # 7) Malformed input degrades, never raises
        junk = (
            "diff --git a/bin.dat b/bin.dat\n"
            "Binary files a/bin.dat and b/bin.dat differ\n"
            "diff --git a/ok.txt b/ok.txt\n"
            "--- a/ok.txt\n"
            "+++ b/ok.txt\n"
            "@@ -x,y +1 @@\n"
            "+only\n"
        )
        files7 = parser.parse(junk)
        if len(files7) != 1 or files7[0].hunks[0].lines[1].kind != LineKind.ADDITION:
            fail("Malformed sections were not skipped cleanly.")
        elif parser.parse("") != []:
            fail("Empty input should parse to an empty list.")
        else:
            pass_("Malformed input handling.")

        return ok, "\n".join(report_lines)
