"""diffreview core: word-level intra-line change highlighting."""

from __future__ import annotations

import re
from typing import List, Sequence, Set, Tuple

from .models import DiffLine, LineKind, Span, Token

_TOKEN_RE = re.compile(r"\S+")

def tokenize(text: str) -> List[Token]:
    """Split on whitespace runs, keeping each token's character span in `text`."""
    return [Token(text=m.group(0), span=(m.start(), m.end())) for m in _TOKEN_RE.finditer(text)]

def lcs_token_indices(old: Sequence[str], new: Sequence[str]) -> List[Tuple[int, int]]:
    """
    Returns (old_index, new_index) pairs forming the longest common subsequence
    of two token-text sequences, in ascending order.
    """
    m, n = len(old), len(new)
    if m == 0 or n == 0:
        return []

    # dp[i][j] = LCS length of old[i:] and new[j:]
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m - 1, -1, -1):
        oi = old[i]
        row, below = dp[i], dp[i + 1]
        for j in range(n - 1, -1, -1):
            if oi == new[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    # Walk forward: diagonal first, so ties resolve to the earliest alignment.
    pairs: List[Tuple[int, int]] = []
    i, j = 0, 0
    while i < m and j < n:
        if old[i] == new[j]:
            pairs.append((i, j))
            i += 1
            j += 1
        elif dp[i + 1][j] >= dp[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs

def unmatched_ranges(tokens: Sequence[Token], matched: Set[int]) -> List[Span]:
    """Merge runs of consecutive unmatched tokens into one character range each."""
    ranges: List[Span] = []
    run_start = None
    run_end = 0
    for idx, tok in enumerate(tokens):
        if idx not in matched:
            if run_start is None:
                run_start = tok.span[0]
            run_end = tok.span[1]
        elif run_start is not None:
            ranges.append((run_start, run_end))
            run_start = None
    if run_start is not None:
        ranges.append((run_start, run_end))
    return ranges

def compute_char_diff(old: str, new: str) -> Tuple[List[Span], List[Span]]:
    """
    Changed character ranges on each side of an old/new line pair.

    Lines sharing no token at all yield two empty lists: the line-level
    deletion/addition colouring already says everything there is to say.
    """
    old_tokens = tokenize(old)
    new_tokens = tokenize(new)

    pairs = lcs_token_indices([t.text for t in old_tokens], [t.text for t in new_tokens])
    if not pairs:
        return [], []

    old_matched = {p[0] for p in pairs}
    new_matched = {p[1] for p in pairs}
    return unmatched_ranges(old_tokens, old_matched), unmatched_ranges(new_tokens, new_matched)

def apply_inline_highlights(lines: List[DiffLine], enabled: bool = True) -> int:
    """
    Attach inline highlights to deletion -> addition pairs of one hunk.

    Each run of deletions immediately followed by a run of additions is paired
    positionally; the first min(d, a) pairs are highlighted, the rest are left
    with `inline_highlights = None`. Returns the number of pairs highlighted.
    """
    if not enabled:
        return 0

    paired = 0
    i = 0
    while i < len(lines):
        if lines[i].kind != LineKind.DELETION:
            i += 1
            continue

        deletions: List[DiffLine] = []
        while i < len(lines) and lines[i].kind == LineKind.DELETION:
            deletions.append(lines[i])
            i += 1

        additions: List[DiffLine] = []
        while i < len(lines) and lines[i].kind == LineKind.ADDITION:
            additions.append(lines[i])
            i += 1

        for d, a in zip(deletions, additions):
            d.inline_highlights, a.inline_highlights = compute_char_diff(d.text, a.text)
            paired += 1
    return paired
