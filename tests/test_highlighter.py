"""Tests for diffreview.core.highlighter."""

from diffreview.core.highlighter import (
    apply_inline_highlights,
    compute_char_diff,
    lcs_token_indices,
    tokenize,
    unmatched_ranges,
)
from diffreview.core.models import DiffLine, LineKind, Token


# ============================================================================
# tokenize()
# ============================================================================


class TestTokenize:
    """Whitespace tokenizer keeps character spans."""

    def test_spans(self):
        assert tokenize("let  x =1") == [
            Token("let", (0, 3)),
            Token("x", (5, 6)),
            Token("=1", (7, 9)),
        ]

    def test_leading_and_trailing_whitespace(self):
        assert tokenize("\t  foo  ") == [Token("foo", (3, 6))]

    def test_empty_and_blank(self):
        assert tokenize("") == []
        assert tokenize("   \t ") == []


# ============================================================================
# lcs_token_indices()
# ============================================================================


class TestLcs:
    """LCS pairs over token texts."""

    def test_identical(self):
        assert lcs_token_indices(["a", "b", "c"], ["a", "b", "c"]) == [(0, 0), (1, 1), (2, 2)]

    def test_empty_side(self):
        assert lcs_token_indices([], ["a"]) == []
        assert lcs_token_indices(["a"], []) == []

    def test_disjoint(self):
        assert lcs_token_indices(["a", "b"], ["c", "d"]) == []

    def test_insertion_in_middle(self):
        assert lcs_token_indices(["a", "c"], ["a", "b", "c"]) == [(0, 0), (1, 2)]

    def test_pairs_strictly_increasing(self):
        pairs = lcs_token_indices(["x", "a", "y", "a", "z"], ["a", "q", "a", "z"])
        assert len(pairs) == 3
        assert all(p[0] < q[0] and p[1] < q[1] for p, q in zip(pairs, pairs[1:]))

    def test_repeated_token_tie_break(self):
        # one "a" against two: the match lands on the earliest possible new index
        assert lcs_token_indices(["a"], ["a", "a"]) == [(0, 0)]


# ============================================================================
# unmatched_ranges()
# ============================================================================


class TestUnmatchedRanges:
    """Consecutive unmatched tokens merge into one range."""

    def test_merges_adjacent_tokens_across_whitespace(self):
        tokens = tokenize("a b c d")
        assert unmatched_ranges(tokens, {0, 3}) == [(2, 5)]

    def test_separate_runs(self):
        tokens = tokenize("a b c d e")
        assert unmatched_ranges(tokens, {0, 2, 4}) == [(2, 3), (6, 7)]

    def test_all_matched(self):
        tokens = tokenize("a b")
        assert unmatched_ranges(tokens, {0, 1}) == []


# ============================================================================
# compute_char_diff()
# ============================================================================


class TestComputeCharDiff:
    """Changed ranges on both sides of a replacement pair."""

    def test_disjoint_lines_not_highlighted(self):
        assert compute_char_diff("abc", "xyz") == ([], [])

    def test_single_token_change(self):
        assert compute_char_diff("let userId = guid()", "let userID = guid()") == ([(4, 10)], [(4, 10)])

    def test_appended_suffix(self):
        assert compute_char_diff("line two", "line two modified") == ([], [(9, 17)])

    def test_identical_lines(self):
        assert compute_char_diff("same text", "same text") == ([], [])

    def test_whitespace_only_change(self):
        assert compute_char_diff("a  b", "a b") == ([], [])

    def test_empty_inputs(self):
        assert compute_char_diff("", "") == ([], [])
        assert compute_char_diff("", "new") == ([], [])
        assert compute_char_diff("   ", "x") == ([], [])

    def test_ranges_never_cover_matched_token(self):
        old = "a one b two c"
        new = "a ONE b TWO c"
        old_ranges, new_ranges = compute_char_diff(old, new)
        assert old_ranges == [(2, 5), (8, 11)]
        assert new_ranges == [(2, 5), (8, 11)]

    def test_ranges_ascending(self):
        _, new_ranges = compute_char_diff("x = f(a)", "y = g(a) + 1")
        assert new_ranges == sorted(new_ranges)


# ============================================================================
# apply_inline_highlights()
# ============================================================================


def _line(i, kind, text):
    return DiffLine(id=i, kind=kind, text=text)


class TestApplyInlineHighlights:
    """Pairs deletions with the additions that immediately follow them."""

    def test_one_to_one(self):
        lines = [
            _line(0, LineKind.DELETION, "value = 1"),
            _line(1, LineKind.ADDITION, "value = 2"),
        ]
        assert apply_inline_highlights(lines) == 1
        assert lines[0].inline_highlights == [(8, 9)]
        assert lines[1].inline_highlights == [(8, 9)]

    def test_surplus_lines_left_uncomputed(self):
        lines = [
            _line(0, LineKind.DELETION, "a 1"),
            _line(1, LineKind.DELETION, "b 2"),
            _line(2, LineKind.ADDITION, "a 9"),
        ]
        assert apply_inline_highlights(lines) == 1
        assert lines[0].inline_highlights == [(2, 3)]
        assert lines[1].inline_highlights is None
        assert lines[2].inline_highlights == [(2, 3)]

    def test_addition_before_deletion_not_paired(self):
        lines = [
            _line(0, LineKind.ADDITION, "x 1"),
            _line(1, LineKind.DELETION, "x 2"),
            _line(2, LineKind.CONTEXT, "ctx"),
        ]
        assert apply_inline_highlights(lines) == 0
        assert all(ln.inline_highlights is None for ln in lines)

    def test_context_breaks_pairing(self):
        lines = [
            _line(0, LineKind.DELETION, "x 1"),
            _line(1, LineKind.CONTEXT, "ctx"),
            _line(2, LineKind.ADDITION, "x 2"),
        ]
        assert apply_inline_highlights(lines) == 0

    def test_disabled(self):
        lines = [
            _line(0, LineKind.DELETION, "x 1"),
            _line(1, LineKind.ADDITION, "x 2"),
        ]
        assert apply_inline_highlights(lines, enabled=False) == 0
        assert lines[0].inline_highlights is None
