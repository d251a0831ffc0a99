from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates a single inventory run:
1. Validates configuration and the scan root.
2. Computes the run timestamp and checks for output collisions.
3. Scans the tree into memory.
4. Writes the CSV/JSON pair and the optional skipped-subtree report.
"""

import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from dirinventory.core.pipeline.components.writer import (
    format_run_timestamp,
    get_output_paths,
    write_records,
    write_skipped_report,
)
from dirinventory.core.pipeline.stages.validator import validate_config
from dirinventory.core.services.scanner import calculate_percentage, scan_directories
from dirinventory.domain.config import ScanConfig
from dirinventory.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from dirinventory.domain.record_models import SKIP_REASON_CYCLE
from dirinventory.infra.fs import check_existing_output_files

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
        moment: Optional[datetime] = None,
        report_progress: bool = False,
) -> PipelineResult:
    """
    Execute a full scan-and-write run.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, scan but do not create directories or files.
        moment: Instant used for the run timestamp; defaults to now.
        report_progress: Log traversal progress at DEBUG level. Costs a
                         counting pass over the tree.

    Returns:
        PipelineResult: Object containing status, artifact paths and summary.
    """
    logger.info("Inventory run started.")

    # -------------------------------------------------------------------------
    # 1) Config & Root Validation
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config if config is not None else {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    root = cfg["root"]
    if not os.path.isdir(root):
        msg = f"Invalid scan root: {root}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    scan_config = ScanConfig.from_dict(cfg)

    # -------------------------------------------------------------------------
    # 2) Naming & Collision Check
    # -------------------------------------------------------------------------
    timestamp = format_run_timestamp(moment)
    paths = get_output_paths(cfg["output_dir"], timestamp)
    names = [os.path.basename(paths["csv"]), os.path.basename(paths["json"])]

    existing_files = check_existing_output_files(cfg["output_dir"], names)
    if existing_files:
        msg = "Output files for this timestamp already exist. Aborting."
        logger.warning(f"{msg} Files: {existing_files}")
        return create_error_result(
            msg, cfg, timestamp, existing_files,
            summary_extra={"existing_files": list(existing_files)}
        )

    # -------------------------------------------------------------------------
    # 3) Traversal
    # -------------------------------------------------------------------------
    def _log_progress(done: int, total: int) -> None:
        logger.debug(f"Traversed {calculate_percentage(done, total):.2f}% of directories")

    try:
        report = scan_directories(
            scan_config, on_progress=_log_progress if report_progress else None
        )
    except OSError as e:
        msg = f"Failed to scan {root}: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, timestamp)

    summary: Dict[str, Any] = {
        "root": report.root,
        "records": len(report.records),
        "skipped": len(report.skipped),
        "cycles": sum(1 for s in report.skipped if s.reason == SKIP_REASON_CYCLE),
        "duplicates": report.duplicates,
        "dry_run": dry_run,
    }

    # -------------------------------------------------------------------------
    # 4) Persistence
    # -------------------------------------------------------------------------
    if dry_run:
        will_generate: List[str] = [paths["csv"], paths["json"]]
        if cfg["save_skipped_report"] and report.skipped:
            will_generate.append(paths["skipped"])
        summary["will_generate"] = will_generate
        summary["generated_files"] = {}
        logger.info("Dry run: skipping artifact creation.")
        return create_success_result(
            cfg, timestamp, len(report.records), {}, report.skipped, summary
        )

    try:
        generated = write_records(report.records, cfg["output_dir"], timestamp)
    except OSError as e:
        msg = f"Failed to write output to {cfg['output_dir']}: {e}"
        logger.critical(msg)
        return create_error_result(msg, cfg, timestamp, summary_extra=summary)

    if cfg["save_skipped_report"]:
        skipped_path = write_skipped_report(paths["skipped"], report.skipped)
        if skipped_path:
            generated["skipped"] = skipped_path

    summary["generated_files"] = dict(generated)

    logger.info("Inventory run completed successfully.")
    return create_success_result(
        cfg, timestamp, len(report.records), generated, report.skipped, summary
    )
