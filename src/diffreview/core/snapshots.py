"""diffreview core: hunk fingerprints, review snapshots and "changed since" deltas."""

from __future__ import annotations

import hashlib
import logging
import uuid
from typing import Dict, Iterable, List, Optional, Tuple

from .models import FileDiff, Hunk, Snapshot, hunk_header_context

logger = logging.getLogger(__name__)

class UnknownSnapshotError(KeyError):
    """Raised when selecting a snapshot id the store does not hold."""

def hunk_fingerprint(hunk: Hunk) -> str:
    """
    SHA-256 over the hunk's ordered (kind, text) pairs, header line included.
    Ids and line numbers do not take part, so re-parsing the same text matches.
    """
    h = hashlib.sha256()
    for line in hunk.lines:
        data = line.text.encode("utf-8", errors="surrogatepass")
        h.update(line.kind.value.encode("ascii"))
        h.update(b"\x00")
        h.update(str(len(data)).encode("ascii"))
        h.update(b":")
        h.update(data)
    return h.hexdigest()

def take_fingerprints(file_diffs: Iterable[FileDiff]) -> Dict[str, Tuple[str, ...]]:
    return {fd.id: tuple(hunk_fingerprint(h) for h in fd.hunks) for fd in file_diffs}

def is_significant_hunk(hunk: Hunk) -> bool:
    """True when the header carries context text (e.g. the enclosing function) after "@@ ... @@"."""
    return bool(hunk_header_context(hunk.header))

def delta(file_diffs: List[FileDiff], snapshot: Optional[Snapshot]) -> List[FileDiff]:
    """
    Files and hunks that are new or changed relative to `snapshot`.

    No snapshot: everything. A path the snapshot never saw: the whole file.
    Otherwise only hunks whose fingerprint the snapshot did not record; files
    left with no hunks are dropped. Order of files and hunks is preserved.
    """
    if snapshot is None:
        return list(file_diffs)

    out: List[FileDiff] = []
    for fd in file_diffs:
        recorded = snapshot.fingerprints.get(fd.id)
        if recorded is None:
            out.append(fd)
            continue
        seen = set(recorded)
        fresh = [h for h in fd.hunks if hunk_fingerprint(h) not in seen]
        if fresh:
            out.append(fd.with_hunks(fresh))
    return out

class SnapshotStore:
    """
    Ordered review snapshots plus an "active" pointer.

    `active_snapshot_id = None` means "the latest snapshot". Not synchronised:
    keep writes (take_snapshot/select) on one owner, or guard externally.
    """

    def __init__(self, label_prefix: str = "Snapshot"):
        self.label_prefix = label_prefix
        self._snapshots: List[Snapshot] = []
        self.active_snapshot_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def snapshots(self) -> Tuple[Snapshot, ...]:
        return tuple(self._snapshots)

    @property
    def active_snapshot(self) -> Optional[Snapshot]:
        if self.active_snapshot_id is None:
            return self._snapshots[-1] if self._snapshots else None
        for snap in self._snapshots:
            if snap.id == self.active_snapshot_id:
                return snap
        return None

    def get(self, snapshot_id: str) -> Optional[Snapshot]:
        for snap in self._snapshots:
            if snap.id == snapshot_id:
                return snap
        return None

    def take_snapshot(self, file_diffs: Iterable[FileDiff], label: Optional[str] = None) -> Snapshot:
        snap = Snapshot(
            id=uuid.uuid4().hex,
            label=label or f"{self.label_prefix} {len(self._snapshots) + 1}",
            fingerprints=take_fingerprints(file_diffs),
        )
        self._snapshots.append(snap)
        self.active_snapshot_id = snap.id
        logger.debug("Took snapshot %s (%s): %d file(s), %d hunk(s)",
                     snap.id, snap.label, len(snap.fingerprints), snap.total_hunks())
        return snap

    def select(self, snapshot_id: Optional[str]) -> Optional[Snapshot]:
        """Make a stored snapshot active; None falls back to the latest."""
        if snapshot_id is None:
            self.active_snapshot_id = None
            return self.active_snapshot
        snap = self.get(snapshot_id)
        if snap is None:
            raise UnknownSnapshotError(snapshot_id)
        self.active_snapshot_id = snap.id
        return snap

    def delta(self, file_diffs: List[FileDiff]) -> List[FileDiff]:
        return delta(file_diffs, self.active_snapshot)
