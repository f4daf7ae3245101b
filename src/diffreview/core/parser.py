"""diffreview core: unified diff parsing (git dialect)."""

from __future__ import annotations

import logging
from typing import List, Optional, Dict, Any, Tuple

from .highlighter import apply_inline_highlights
from .models import RE_HUNK_HEADER, DiffLine, FileDiff, Hunk, LineKind, parse_hunk_header
from .normalizer import DiffInputNormalizer

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"

class UnifiedDiffParser:
    """
    Parses `git diff` / `git show` output into FileDiff/Hunk/DiffLine.

    Malformed input never raises: sections without ---/+++ markers or without
    hunks are skipped, unreadable hunk counts default to 1.
    """

    RE_HUNK = RE_HUNK_HEADER

    DEFAULT_OPTIONS: Dict[str, Any] = {
        "inline_highlights": True,
    }

    METADATA_PREFIXES = (
        ("index ", "index"),
        ("old mode ", "old_mode"),
        ("new mode ", "new_mode"),
        ("new file mode ", "new_file_mode"),
        ("deleted file mode ", "deleted_file_mode"),
        ("similarity index ", "similarity_index"),
        ("dissimilarity index ", "dissimilarity_index"),
        ("copy from ", "copy_from"),
        ("copy to ", "copy_to"),
    )

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = dict(self.DEFAULT_OPTIONS)
        if options:
            self.options.update(options)
        self.normalizer = DiffInputNormalizer()

    def parse(self, text: str) -> List[FileDiff]:
        if not text:
            return []

        _, blocks = self.normalizer.normalize(text)
        files: List[FileDiff] = []
        for block in blocks:
            fd = self._parse_git_block(block["lines"])
            if fd is None:
                logger.debug("Skipped diff section at line %d: %s", block["start_line"] + 1, block["header"])
                continue
            files.append(fd)

        logger.debug("Parsed %d file diff(s) from %d section(s)", len(files), len(blocks))
        return files

    def _strip_prefix_ab(self, p: str) -> str:
        p = p.strip()
        if p.startswith("a/") and len(p) > 2:
            return p[2:]
        if p.startswith("b/") and len(p) > 2:
            return p[2:]
        return p

    def _parse_path_from_header_line(self, line: str, prefix: str) -> str:
        # line starts with prefix ("--- " or "+++ ")
        rest = line[len(prefix):]
        # Path ends at first TAB if present; otherwise full remainder (trimmed)
        if "\t" in rest:
            return rest.split("\t", 1)[0].strip()
        return rest.strip()

    def _infer_operation(self, old_path: str, new_path: str, metadata: Dict[str, Any]) -> str:
        if metadata.get("new_file_mode") or old_path == DEV_NULL:
            return "create"
        if metadata.get("deleted_file_mode") or new_path == DEV_NULL:
            return "delete"
        if metadata.get("rename_from") or metadata.get("rename_to"):
            return "rename"
        if old_path != new_path:
            return "rename"
        return "modify"

    def _parse_git_block(self, lines: List[str]) -> Optional[FileDiff]:
        metadata: Dict[str, Any] = {"diff_git": lines[0]}
        old_hdr: Optional[str] = None
        new_hdr: Optional[str] = None

        # Extended header: everything up to the first hunk
        i = 1
        while i < len(lines) and not lines[i].startswith("@@"):
            ln = lines[i]
            if ln.startswith("--- ") and old_hdr is None:
                old_hdr = self._parse_path_from_header_line(ln, "--- ")
            elif ln.startswith("+++ ") and old_hdr is not None and new_hdr is None:
                new_hdr = self._parse_path_from_header_line(ln, "+++ ")
            elif ln.startswith("rename from "):
                metadata["rename_from"] = ln[len("rename from "):].strip()
            elif ln.startswith("rename to "):
                metadata["rename_to"] = ln[len("rename to "):].strip()
            else:
                for prefix, key in self.METADATA_PREFIXES:
                    if ln.startswith(prefix):
                        metadata[key] = ln.strip()
                        break
            i += 1

        if old_hdr is None or new_hdr is None:
            return None

        old_path = self._strip_prefix_ab(old_hdr) if old_hdr != DEV_NULL else DEV_NULL
        new_path = self._strip_prefix_ab(new_hdr) if new_hdr != DEV_NULL else DEV_NULL
        if metadata.get("rename_from"):
            old_path = metadata["rename_from"]
        if metadata.get("rename_to"):
            new_path = metadata["rename_to"]

        hunks = self._parse_hunks_from(lines[i:])
        if not hunks:
            return None

        op = self._infer_operation(old_path, new_path, metadata)
        display = new_path if new_path != DEV_NULL else old_path
        return FileDiff(
            id=display,
            old_path=old_path,
            new_path=new_path,
            hunks=hunks,
            operation=op,
            metadata=metadata,
        )

    def _parse_hunks_from(self, lines: List[str]) -> List[Hunk]:
        hunks: List[Hunk] = []
        line_id = 0
        i = 0

        while i < len(lines):
            header = lines[i]
            if not header.startswith("@@"):
                i += 1
                continue

            if not self.RE_HUNK.match(header):
                logger.debug("Unrecognised hunk header, defaulting to 1/1: %r", header)
            old_line, old_left, new_line, new_left = parse_hunk_header(header)

            current = Hunk(id=len(hunks), header=header, lines=[])
            current.lines.append(DiffLine(id=line_id, kind=LineKind.HUNK_HEADER, text=header))
            line_id += 1
            i += 1

            while i < len(lines) and not lines[i].startswith("@@"):
                ln = lines[i]
                tag = ln[:1]
                if tag == "\\":
                    # "\ No newline at end of file" qualifies the line before it
                    if len(current.lines) > 1:
                        current.lines[-1].no_newline = True
                    i += 1
                    continue
                if ln == "":
                    if old_left <= 0 or new_left <= 0:
                        break
                    # whitespace-stripped empty context line
                    tag, ln = " ", " "

                if tag == " ":
                    current.lines.append(DiffLine(
                        id=line_id, kind=LineKind.CONTEXT, text=ln[1:],
                        old_line_number=old_line, new_line_number=new_line,
                    ))
                    old_line += 1
                    new_line += 1
                    old_left -= 1
                    new_left -= 1
                elif tag == "-":
                    current.lines.append(DiffLine(
                        id=line_id, kind=LineKind.DELETION, text=ln[1:],
                        old_line_number=old_line,
                    ))
                    old_line += 1
                    old_left -= 1
                elif tag == "+":
                    current.lines.append(DiffLine(
                        id=line_id, kind=LineKind.ADDITION, text=ln[1:],
                        new_line_number=new_line,
                    ))
                    new_line += 1
                    new_left -= 1
                else:
                    break
                line_id += 1
                i += 1

            apply_inline_highlights(current.lines, enabled=bool(self.options.get("inline_highlights", True)))
            hunks.append(current)

        return hunks

def parse_diff(text: str, options: Optional[Dict[str, Any]] = None) -> List[FileDiff]:
    return UnifiedDiffParser(options).parse(text)

def parse_single_file(text: str, options: Optional[Dict[str, Any]] = None) -> Optional[FileDiff]:
    """Parse the output of `git diff -- <file>`; None when nothing parseable is present."""
    diffs = parse_diff(text, options)
    return diffs[0] if diffs else None

def hunk_line_counts(hunk: Hunk) -> Tuple[int, int]:
    """(old, new) line counts implied by the hunk body, for checking against the header."""
    old = sum(1 for ln in hunk.lines if ln.kind in (LineKind.CONTEXT, LineKind.DELETION))
    new = sum(1 for ln in hunk.lines if ln.kind in (LineKind.CONTEXT, LineKind.ADDITION))
    return old, new
