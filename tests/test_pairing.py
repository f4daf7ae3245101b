"""Tests for diffreview.core.pairing."""

from diffreview.core.models import DiffLine, Hunk, LineKind
from diffreview.core.pairing import DiffRowPairer, pair_lines
from diffreview.core.parser import parse_diff


def _hunk(hid, body):
    lines = [DiffLine(id=0, kind=LineKind.HUNK_HEADER, text="@@ -1 +1 @@")]
    for i, (kind, text) in enumerate(body, start=1):
        lines.append(DiffLine(id=i, kind=kind, text=text))
    return Hunk(id=hid, header="@@ -1 +1 @@", lines=lines)


C, D, A = LineKind.CONTEXT, LineKind.DELETION, LineKind.ADDITION


class TestPairLines:
    """Side-by-side row construction."""

    def test_context_only_mirrors_every_line(self):
        hunk = _hunk(0, [(C, "a"), (C, "b")])
        rows = pair_lines([hunk])
        assert len(rows) == 3
        for row, line in zip(rows, hunk.lines):
            assert row.left is line
            assert row.right is line

    def test_three_deletions_one_addition(self):
        hunk = _hunk(0, [(D, "x"), (D, "y"), (D, "z"), (A, "xyz")])
        rows = pair_lines([hunk])[1:]
        assert len(rows) == 3
        assert (rows[0].left.text, rows[0].right.text) == ("x", "xyz")
        assert [r.left.text for r in rows[1:]] == ["y", "z"]
        assert all(r.right is None for r in rows[1:])

    def test_more_additions_spill_right(self):
        hunk = _hunk(0, [(D, "x"), (A, "1"), (A, "2"), (A, "3")])
        rows = pair_lines([hunk])[1:]
        assert [(r.left.text if r.left else None, r.right.text) for r in rows] == [
            ("x", "1"), (None, "2"), (None, "3"),
        ]

    def test_additions_only(self):
        hunk = _hunk(0, [(C, "a"), (A, "b"), (A, "c"), (C, "d")])
        rows = pair_lines([hunk])
        middle = rows[2:4]
        assert all(r.left is None for r in middle)
        assert [r.right.text for r in middle] == ["b", "c"]

    def test_interleaved_changes_buffer_until_context(self):
        hunk = _hunk(0, [(A, "new1"), (D, "old1"), (A, "new2"), (C, "ctx")])
        rows = pair_lines([hunk])[1:]
        assert (rows[0].left.text, rows[0].right.text) == ("old1", "new1")
        assert (rows[1].left, rows[1].right.text) == (None, "new2")
        assert rows[2].left.text == "ctx"

    def test_context_flushes_pending_block(self):
        hunk = _hunk(0, [(D, "a"), (C, "ctx"), (A, "b")])
        rows = pair_lines([hunk])[1:]
        assert (rows[0].left.text, rows[0].right) == ("a", None)
        assert rows[1].left is rows[1].right
        assert (rows[2].left, rows[2].right.text) == (None, "b")

    def test_every_row_has_a_side(self):
        hunk = _hunk(0, [(D, "a"), (D, "b"), (A, "c"), (C, "d"), (A, "e")])
        assert all(r.left is not None or r.right is not None for r in pair_lines([hunk]))

    def test_row_ids_unique_across_hunks(self, multi_file_diff):
        fd = parse_diff(multi_file_diff)[0]
        rows = DiffRowPairer().pair_lines(fd.hunks)
        ids = [r.id for r in rows]
        assert ids == sorted(set(ids))
        assert ids == list(range(len(rows)))

    def test_block_does_not_leak_into_next_hunk(self):
        h1 = _hunk(0, [(D, "tail")])
        h2 = _hunk(1, [(A, "head")])
        rows = pair_lines([h1, h2])
        assert [(r.left.text if r.left else None, r.right.text if r.right else None) for r in rows] == [
            ("@@ -1 +1 @@", "@@ -1 +1 @@"),
            ("tail", None),
            ("@@ -1 +1 @@", "@@ -1 +1 @@"),
            (None, "head"),
        ]

    def test_no_hunks(self):
        assert pair_lines([]) == []
