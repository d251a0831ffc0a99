from __future__ import annotations

"""
Directory Discovery Service.

Walks a directory tree with an explicit work stack and emits one
DirectoryRecord per unique directory. Symlinked directories are resolved to
their target, re-entering an ancestor is reported as a cycle, and subtrees
that cannot be read are recorded and skipped instead of aborting the scan.
"""

import logging
import os
import stat
from collections import deque
from typing import Callable, Deque, FrozenSet, Iterator, List, Optional, Set, Tuple

from dirinventory.domain.config import ScanConfig
from dirinventory.domain.record_models import (
    SKIP_REASON_CYCLE,
    SKIP_REASON_ERROR,
    ScanReport,
    SkippedDirectory,
    create_record,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

# (entry name, resolved absolute path, stat of the resolved directory, via link)
_Child = Tuple[str, str, os.stat_result, bool]
_WorkItem = Tuple[_Child, FrozenSet[str]]


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def scan_directories(
        config: ScanConfig,
        on_progress: Optional[ProgressCallback] = None,
) -> ScanReport:
    """
    Collect metadata for every directory below the scan root.

    The root itself never gets a record. Real directories arrive in
    depth-first pre-order with siblings sorted by name. Directories reached
    only through a symlink follow afterwards, in the order their links were
    found, so a link never takes over the record of a directory that is
    also reachable by its own path.

    Args:
        config: Scan settings (root, ignore set, hidden/symlink policy).
        on_progress: Optional callback receiving (records so far, expected
                     total). Enabling it costs an extra counting pass.

    Returns:
        ScanReport: Records, skipped subtrees and duplicate count.

    Raises:
        OSError: If the scan root itself cannot be listed.
    """
    root = os.path.realpath(config.root)
    report = ScanReport(root=root)

    total = count_directories(config) if on_progress else 0

    logger.info(f"Scanning directories under: {root}")
    for name, path, st in _walk(root, config, report):
        report.records.append(create_record(name, path, root, st))
        if on_progress:
            on_progress(len(report.records), total)

    logger.info(
        f"Scan finished: {len(report.records)} directories, "
        f"{len(report.skipped)} skipped, {report.duplicates} duplicate links."
    )
    return report


def count_directories(config: ScanConfig) -> int:
    """
    Count the directories a scan with the same settings would record.

    Args:
        config: Scan settings.

    Returns:
        int: Number of unique directories below the root.
    """
    root = os.path.realpath(config.root)
    scratch = ScanReport(root=root)
    return sum(1 for _ in _walk(root, config, scratch))


def calculate_percentage(done: int, total: int) -> float:
    """Percentage of `done` over `total`, rounded to two decimals."""
    if total <= 0:
        return 0.0
    return round(done / total * 100, 2)


# ==============================================================================
# PRIVATE HELPERS (TRAVERSAL)
# ==============================================================================

def _walk(
        root: str,
        config: ScanConfig,
        report: ScanReport,
) -> Iterator[Tuple[str, str, os.stat_result]]:
    """
    Yield each unique directory below `root` exactly once.

    Work items carry the resolved paths of their ancestor chain so that a
    link pointing back into it is detected as a cycle. Symlinked entries
    are queued until the stack of real entries is drained, so a directory
    reachable by its own path is always recorded under its own name and a
    link to it only counts as a duplicate. Skips and duplicate counts are
    accumulated on `report`.
    """
    stack: List[_WorkItem] = []
    links: Deque[_WorkItem] = deque()

    def push(children: List[_Child], chain: FrozenSet[str]) -> None:
        stack.extend((child, chain) for child in reversed(children) if not child[3])
        links.extend((child, chain) for child in children if child[3])

    # Listing the root is not guarded: an unreadable root aborts the scan.
    push(_list_child_directories(root, config, report), frozenset([root]))
    seen: Set[str] = {root}

    while stack or links:
        if not stack:
            stack.append(links.popleft())
        (name, path, st, _), ancestors = stack.pop()

        if path in ancestors:
            logger.warning(f"Cycle detected, subtree skipped: {path}")
            report.skipped.append(SkippedDirectory(
                path=path,
                reason=SKIP_REASON_CYCLE,
                detail=f"'{name}' resolves to an ancestor directory",
            ))
            continue

        if path in seen:
            logger.debug(f"Already recorded, ignoring duplicate link: {path}")
            report.duplicates += 1
            continue

        seen.add(path)
        yield name, path, st

        try:
            children = _list_child_directories(path, config, report)
        except OSError as e:
            logger.warning(f"Cannot read directory, subtree skipped: {path} ({e})")
            report.skipped.append(SkippedDirectory(
                path=path, reason=SKIP_REASON_ERROR, detail=str(e)
            ))
            continue

        push(children, ancestors | {path})


def _list_child_directories(
        directory: str,
        config: ScanConfig,
        report: ScanReport,
) -> List[_Child]:
    """
    List the subdirectories of `directory` that survive the exclusion rules.

    Raises:
        OSError: If `directory` itself cannot be listed.
    """
    children: List[_Child] = []

    for name in sorted(os.listdir(directory)):
        if config.is_excluded(name):
            continue

        entry_path = os.path.join(directory, name)
        try:
            resolved = _resolve_directory(entry_path, config)
        except OSError as e:
            logger.warning(f"Cannot stat entry, skipped: {entry_path} ({e})")
            report.skipped.append(SkippedDirectory(
                path=entry_path, reason=SKIP_REASON_ERROR, detail=str(e)
            ))
            continue

        if resolved is not None:
            children.append((name,) + resolved)

    return children


def _resolve_directory(
        entry_path: str,
        config: ScanConfig,
) -> Optional[Tuple[str, os.stat_result, bool]]:
    """
    Classify an entry using a link-aware stat.

    Returns:
        Optional[Tuple[str, os.stat_result, bool]]: Resolved path, stat of the
        directory and whether it was reached through a link, or None for
        files, dangling links and (when symlinks are not followed) links.

    Raises:
        OSError: If the entry itself cannot be stat'ed.
    """
    lst = os.lstat(entry_path)

    if stat.S_ISDIR(lst.st_mode):
        return entry_path, lst, False

    if not stat.S_ISLNK(lst.st_mode) or not config.follow_symlinks:
        return None

    target = os.path.realpath(entry_path)
    try:
        st = os.stat(target)
    except OSError as e:
        logger.debug(f"Ignoring unresolvable link {entry_path}: {e}")
        return None

    if not stat.S_ISDIR(st.st_mode):
        return None
    return target, st, True
