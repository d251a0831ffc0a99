from __future__ import annotations

"""
Output Persistence and Formatting.

Serializes a completed record collection into a CSV file and a JSON file
that share the same run timestamp. Artifacts are opened in exclusive-create
mode, so an existing file is never overwritten.
"""

import csv
import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from dirinventory.domain.record_models import RECORD_FIELDS, DirectoryRecord, SkippedDirectory

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "directories"
JSON_INDENT = 2

# -----------------------------------------------------------------------------
# NAMING
# -----------------------------------------------------------------------------

def format_run_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Render a run timestamp that is safe to embed in file names.

    ISO-8601 UTC instant with millisecond precision and a 'Z' suffix, with
    every ':' replaced by '-' (e.g. '2026-10-19T10-00-00.123Z').

    Args:
        moment: Instant to render; defaults to now.

    Returns:
        str: Filesystem-safe timestamp.
    """
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    iso = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z").replace(":", "-")


def get_output_paths(output_dir: str, timestamp: str) -> Dict[str, str]:
    """
    Compute the artifact paths of a run.

    Returns:
        Dict[str, str]: Paths keyed by 'csv', 'json' and 'skipped'.
    """
    base = os.path.join(output_dir, f"{OUTPUT_PREFIX}_{timestamp}")
    return {
        "csv": f"{base}.csv",
        "json": f"{base}.json",
        "skipped": f"{base}_skipped.txt",
    }

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def ensure_output_dir(path: str) -> None:
    """
    Create the output directory if it is missing.

    Raises:
        OSError: If the directory cannot be created.
    """
    os.makedirs(path, exist_ok=True)


def write_csv(path: str, records: Iterable[DirectoryRecord]) -> int:
    """
    Write a header row plus one quoted row per record.

    Fields containing the delimiter, quotes or newlines are quoted by the
    csv module, so names and paths round-trip intact.

    Args:
        path: Target file; must not exist yet.
        records: Records to serialize.

    Returns:
        int: Number of data rows written.

    Raises:
        FileExistsError: If `path` already exists.
        OSError: On any other write failure.
    """
    rows = 0
    with open(path, "x", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(RECORD_FIELDS)
        for record in records:
            writer.writerow(record.to_row())
            rows += 1

    logger.debug(f"CSV written: {path} ({rows} rows)")
    return rows


def write_json(path: str, records: Iterable[DirectoryRecord]) -> int:
    """
    Write the records as a pretty-printed JSON array.

    Args:
        path: Target file; must not exist yet.
        records: Records to serialize.

    Returns:
        int: Number of objects written.

    Raises:
        FileExistsError: If `path` already exists.
        OSError: On any other write failure.
    """
    payload = [record.to_dict() for record in records]
    with open(path, "x", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=JSON_INDENT)
        f.write("\n")

    logger.debug(f"JSON written: {path} ({len(payload)} objects)")
    return len(payload)


def write_records(
        records: List[DirectoryRecord],
        output_dir: str,
        timestamp: str,
) -> Dict[str, str]:
    """
    Persist the full record collection as a CSV/JSON pair.

    The CSV is written first, then the JSON. If either write fails, every
    file this call created is removed before the error propagates, so no
    partial or unpaired artifact is left behind. Files that already existed
    (FileExistsError) are never touched.

    Args:
        records: Complete record collection of a run.
        output_dir: Destination directory (created when missing).
        timestamp: Filesystem-safe run timestamp.

    Returns:
        Dict[str, str]: Generated paths keyed by 'csv' and 'json'.

    Raises:
        OSError: If the directory cannot be created or a write fails.
    """
    ensure_output_dir(output_dir)
    paths = get_output_paths(output_dir, timestamp)

    created: List[str] = []
    try:
        for key, write in (("csv", write_csv), ("json", write_json)):
            try:
                write(paths[key], records)
            except FileExistsError:
                raise
            except OSError:
                # Exclusive-create mode: anything at this path now is ours.
                created.append(paths[key])
                raise
            created.append(paths[key])
    except OSError:
        _remove_created(created)
        raise

    logger.info(f"Wrote {len(records)} records to {paths['csv']} and {paths['json']}")
    return {"csv": paths["csv"], "json": paths["json"]}


def write_skipped_report(path: str, skipped: List[SkippedDirectory]) -> str:
    """
    Persist the list of skipped subtrees to a text report.

    Args:
        path: Target report path.
        skipped: Subtrees the traverser did not descend into.

    Returns:
        str: The report path, or an empty string if there was nothing to write.
    """
    if not skipped:
        return ""

    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write("SKIPPED DIRECTORIES REPORT:\n")
            f.write("=" * 80 + "\n")
            for item in skipped:
                f.write(f"PATH: {item.path}\n")
                f.write(f"REASON: {item.reason}\n")
                if item.detail:
                    f.write(f"DETAIL: {item.detail}\n")
                f.write("-" * 80 + "\n")
    except OSError as e:
        logger.error(f"Failed to persist skipped report to '{path}': {e}")
        return ""

    return path


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _remove_created(paths: List[str]) -> None:
    """Delete artifacts left by a failed pair write."""
    for path in paths:
        if os.path.exists(path):
            logger.error(f"Pair write failed, removing partial artifact: {path}")
            os.remove(path)
