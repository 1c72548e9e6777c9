"""Metadata describing one loaded sales snapshot.

Snapshots are rebuilt from scratch on every fetch cycle and only live in
memory, so this metadata is never written to disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

logger = logging.getLogger(__name__)

SOURCE_SHEET = "sheet"
SOURCE_SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class SnapshotMetadata:
    """Metadata for a loaded snapshot.

    Attributes:
        source: "sheet" for the published sheet, "synthetic" for demo data.
        row_count: Number of orders in the snapshot.
        version: Version string for the parsing logic.
        last_run: ISO timestamp of when the snapshot was built.
        status: "ok" or "empty".
    """

    source: str
    row_count: int
    version: str
    last_run: str
    status: str


def build_metadata(source: str, row_count: int, version: str = "parse_v1") -> SnapshotMetadata:
    """Create metadata for a snapshot built right now."""
    metadata = SnapshotMetadata(
        source=source,
        row_count=row_count,
        version=version,
        last_run=datetime.now().isoformat(),
        status="ok" if row_count else "empty",
    )
    logger.debug("Snapshot metadata: %s", metadata)
    return metadata
