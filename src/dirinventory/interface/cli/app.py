from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, optional JSON file, flags), pipeline execution and result
rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from dirinventory.core.pipeline.engine import run_pipeline
from dirinventory.core.pipeline.stages.validator import validate_config
from dirinventory.domain.config import get_default_config, load_config_file
from dirinventory.domain.pipeline_models import PipelineResult
from dirinventory.infra.logging import LoggingConfig, configure_logging, get_logger
from dirinventory.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 1. Base configuration (defaults, then optional file)
    base_conf = get_default_config()
    if args.config_file:
        try:
            base_conf = _merge_config(base_conf, load_config_file(args.config_file))
        except (OSError, ValueError) as e:
            msg = f"Cannot load config file '{args.config_file}': {e}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return EXIT_INVALID_INPUT

    # 2. Command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)
    extra_ignore = overrides.get("also_ignore") or []
    if extra_ignore:
        raw_conf["ignore"] = list(raw_conf.get("ignore") or []) + extra_ignore

    # 3. Validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight root verification
    root = clean_conf["root"]
    if not os.path.isdir(root):
        msg = f"Scan root does not exist or is not a directory: {root}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # 5. Pipeline execution
    logger.info(f"Targeting scan root: {root}")
    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run), report_progress=args.debug)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = f"Inventory run failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Output rendering
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only keys known to the default configuration are merged; None values
    mean "not provided" and leave the base untouched.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult) -> None:
    """Print the execution result as a short terminal report."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        for path in result.existing_files:
            print(f"  - exists: {path}", file=sys.stderr)
        return

    summary = result.summary

    print("Inventory completed.")
    print(f"Scan root: {result.root}")
    print(f"Directories recorded: {result.record_count}")
    print(f"Subtrees skipped: {summary.get('skipped', 0)} (cycles: {summary.get('cycles', 0)})")
    print(f"Duplicate links: {summary.get('duplicates', 0)}")

    if summary.get("dry_run"):
        print("Dry run: no files written. Would generate:")
        for path in summary.get("will_generate", []):
            print(f"  - {path}")
        return

    gen_files = summary.get("generated_files", {})
    if gen_files:
        print("\nGenerated files:")
        for k, v in gen_files.items():
            print(f"  - {k}: {v}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
