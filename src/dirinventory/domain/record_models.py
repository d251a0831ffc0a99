from __future__ import annotations

"""
Directory Record Data Models.

Defines the immutable record emitted for every discovered directory, the
bookkeeping entries for subtrees the traverser had to skip, and the
aggregate report returned by a scan.
"""

import os
import stat
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

# Canonical column order shared by the CSV and JSON writers
RECORD_FIELDS: Tuple[str, ...] = (
    "id",
    "name",
    "relative_path",
    "absolute_path",
    "last_accessed",
    "last_modified",
    "owner",
    "group",
    "permissions",
)

# Owner/group value on platforms without numeric uid/gid
UNKNOWN_ID = -1

SKIP_REASON_CYCLE = "cycle"
SKIP_REASON_ERROR = "error"

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryRecord:
    """
    Metadata snapshot of a single directory.

    Attributes:
        id: Random v4 UUID, unique within a run.
        name: Base name of the directory entry.
        relative_path: Path from the scan root to `absolute_path`.
        absolute_path: Canonical path; the link target for symlinked dirs.
        last_accessed: ISO-8601 UTC access time.
        last_modified: ISO-8601 UTC modification time.
        owner: Numeric uid, or UNKNOWN_ID.
        group: Numeric gid, or UNKNOWN_ID.
        permissions: Octal string of the low nine mode bits.
    """
    id: str
    name: str
    relative_path: str
    absolute_path: str
    last_accessed: str
    last_modified: str
    owner: int
    group: int
    permissions: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the record as a dict ordered like RECORD_FIELDS."""
        return {name: getattr(self, name) for name in RECORD_FIELDS}

    def to_row(self) -> List[Any]:
        """Return the record values in RECORD_FIELDS order."""
        return [getattr(self, name) for name in RECORD_FIELDS]


@dataclass(frozen=True)
class SkippedDirectory:
    """
    A subtree the traverser refused or failed to descend into.

    Attributes:
        path: Path of the offending directory.
        reason: SKIP_REASON_CYCLE or SKIP_REASON_ERROR.
        detail: Human readable explanation.
    """
    path: str
    reason: str
    detail: str = ""


@dataclass
class ScanReport:
    """Result of a full traversal."""
    root: str
    records: List[DirectoryRecord] = field(default_factory=list)
    skipped: List[SkippedDirectory] = field(default_factory=list)
    duplicates: int = 0

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def format_stat_time(epoch_seconds: float) -> str:
    """Render a POSIX timestamp as ISO-8601 UTC with millisecond precision."""
    moment = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds")


def format_permissions(mode: int) -> str:
    """Render the owner/group/other rwx bits of `mode` in octal."""
    return format(stat.S_IMODE(mode) & 0o777, "o")


def create_record(
        name: str,
        absolute_path: str,
        root: str,
        st: os.stat_result,
) -> DirectoryRecord:
    """
    Build a DirectoryRecord from a stat result.

    Args:
        name: Entry name as listed in the parent directory.
        absolute_path: Resolved absolute path of the directory.
        root: Fixed scan root used for relativization.
        st: Stat result of the resolved directory.

    Returns:
        DirectoryRecord: Fresh record with a new random identifier.
    """
    if os.name == "nt":
        owner, group = UNKNOWN_ID, UNKNOWN_ID
    else:
        owner = getattr(st, "st_uid", UNKNOWN_ID)
        group = getattr(st, "st_gid", UNKNOWN_ID)

    return DirectoryRecord(
        id=str(uuid.uuid4()),
        name=name,
        relative_path=os.path.relpath(absolute_path, root),
        absolute_path=absolute_path,
        last_accessed=format_stat_time(st.st_atime),
        last_modified=format_stat_time(st.st_mtime),
        owner=owner,
        group=group,
        permissions=format_permissions(st.st_mode),
    )
