from .normalizer import DiffInputNormalizer
from .models import (
    LineKind, GutterChangeKind, DiffLine, Hunk, FileDiff, Row, Token,
    ChangeRegion, Snapshot, parse_hunk_header,
)
from .highlighter import tokenize, lcs_token_indices, compute_char_diff, apply_inline_highlights
from .parser import UnifiedDiffParser, parse_diff, parse_single_file
from .gutter import gutter_changes, change_region_for_line, staged_hunk_ids
from .pairing import DiffRowPairer, pair_lines
from .patches import reconstruct_patch, reconstruct_file_patch
from .snapshots import (
    SnapshotStore, UnknownSnapshotError, hunk_fingerprint, delta, is_significant_hunk,
)
from .selftests import DiffReviewSelfTests

__all__ = [
    "DiffInputNormalizer",
    "LineKind", "GutterChangeKind", "DiffLine", "Hunk", "FileDiff", "Row", "Token",
    "ChangeRegion", "Snapshot", "parse_hunk_header",
    "tokenize", "lcs_token_indices", "compute_char_diff", "apply_inline_highlights",
    "UnifiedDiffParser", "parse_diff", "parse_single_file",
    "gutter_changes", "change_region_for_line", "staged_hunk_ids",
    "DiffRowPairer", "pair_lines",
    "reconstruct_patch", "reconstruct_file_patch",
    "SnapshotStore", "UnknownSnapshotError", "hunk_fingerprint", "delta", "is_significant_hunk",
    "DiffReviewSelfTests",
]
