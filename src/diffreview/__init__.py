"""Unified diff processing: parsing, inline highlights, side-by-side rows, hunk patches, review snapshots."""

__version__ = "0.1.0"
