"""diffreview core: diff text normalization & per-file block splitting."""

from __future__ import annotations

from typing import List, Tuple, Dict, Any

class DiffInputNormalizer:
    """
    Responsibilities:
      - Normalize line endings to \n internally.
      - Strip UTF-8 BOM if present.
      - Split git-style output into one block per "diff --git" section.
    """

    SECTION_PREFIX = "diff --git "

    def normalize(self, raw_text: str) -> Tuple[str, List[Dict[str, Any]]]:
        """
        Returns: (normalized_text, file_blocks)
          file_blocks: list of dicts:
            {
              "header": "diff --git a/... b/...",
              "lines": [...],          # block lines, header first
              "start_line": int,       # 0-based index of the header in the input
            }
        """
        if raw_text.startswith("\ufeff"):
            raw_text = raw_text.lstrip("\ufeff")

        raw_text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
        return raw_text, self._split_git_blocks(raw_text)

    def _split_git_blocks(self, text: str) -> List[Dict[str, Any]]:
        blocks: List[Dict[str, Any]] = []
        cur: List[str] = []
        start = 0
        lines = text.split("\n")
        if lines and lines[-1] == "":
            # terminator of the final line, not a line of its own
            lines.pop()
        for idx, line in enumerate(lines):
            if line.startswith(self.SECTION_PREFIX):
                if cur:
                    blocks.append({"header": cur[0], "lines": cur, "start_line": start})
                cur = [line]
                start = idx
            elif cur:
                cur.append(line)
            # preamble before the first section is ignored
        if cur:
            blocks.append({"header": cur[0], "lines": cur, "start_line": start})
        return blocks
