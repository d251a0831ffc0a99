from __future__ import annotations

"""
Pipeline Domain Data Models.

Result object exchanged between the pipeline engine and the CLI, plus the
factory functions that build success and error instances.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dirinventory.domain.record_models import SkippedDirectory

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete inventory run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        root: Normalized scan root.
        output_dir: Directory receiving the artifacts.
        timestamp: Filesystem-safe run timestamp embedded in file names.
        record_count: Number of directory records collected.
        csv_path: Path of the CSV artifact ("" if not written).
        json_path: Path of the JSON artifact ("" if not written).
        skipped_report_path: Path of the skipped-subtree report, if any.
        skipped: Subtrees that were not descended into.
        existing_files: Paths that caused naming collisions.
        summary: Execution statistics.
    """
    ok: bool
    error: str

    root: str
    output_dir: str
    timestamp: str

    record_count: int = 0
    csv_path: str = ""
    json_path: str = ""
    skipped_report_path: str = ""

    skipped: List[SkippedDirectory] = field(default_factory=list)
    existing_files: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        timestamp: str = "",
        existing_files: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        timestamp: Run timestamp, when already computed.
        existing_files: Files that caused collision aborts.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        root=cfg.get("root", ""),
        output_dir=cfg.get("output_dir", ""),
        timestamp=timestamp,
        existing_files=existing_files or [],
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        timestamp: str,
        record_count: int,
        generated: Dict[str, str],
        skipped: List[SkippedDirectory],
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        cfg: Final configuration used during execution.
        timestamp: Run timestamp embedded in the artifact names.
        record_count: Number of collected records.
        generated: Artifact paths keyed by 'csv', 'json' and 'skipped'.
        skipped: Subtrees that were not descended into.
        summary_extra: Final execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    return PipelineResult(
        ok=True,
        error="",
        root=cfg.get("root", ""),
        output_dir=cfg.get("output_dir", ""),
        timestamp=timestamp,
        record_count=record_count,
        csv_path=generated.get("csv", ""),
        json_path=generated.get("json", ""),
        skipped_report_path=generated.get("skipped", ""),
        skipped=list(skipped),
        summary=summary_extra or {},
    )
