from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed argparse
namespace into configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dirinventory CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dirinventory",
        description=(
            "Walk a directory tree and write per-directory metadata "
            "(id, paths, timestamps, ownership, permissions) to CSV and JSON."
        ),
    )

    # --- Path Management ---
    p.add_argument(
        "-r", "--root",
        dest="root",
        default=None,
        help="Directory to scan (default: ~/Documents).",
    )
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Destination for the generated files (default: ./data).",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        metavar="FILE",
        help="JSON file with configuration values; flags take precedence.",
    )

    # --- Traversal Rules ---
    p.add_argument(
        "--ignore",
        dest="ignore",
        default=None,
        help="Comma-separated directory names to skip, replacing the defaults.",
    )
    p.add_argument(
        "--also-ignore",
        dest="also_ignore",
        default=None,
        help="Comma-separated directory names to skip in addition to the ignore set.",
    )
    p.add_argument(
        "--include-hidden",
        action="store_true",
        help="Descend into directories whose name starts with a dot.",
    )
    p.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Do not treat symbolic links to directories as directories.",
    )

    # --- Runtime Behaviour ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Scan and report without writing any file.",
    )
    p.add_argument(
        "--no-skipped-report",
        action="store_true",
        help="Do not write the report of skipped subtrees.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )

    # --- Diagnostics & Format ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        metavar="FILE",
        help="Also write logs to a rotating file.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    `also_ignore` is returned as a separate key; it extends whatever
    ignore set results from merging the other sources.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["root"] = args.root
    overrides["output_dir"] = args.output_dir

    if args.ignore is not None:
        overrides["ignore"] = _split_csv(args.ignore)
    if args.also_ignore:
        overrides["also_ignore"] = _split_csv(args.also_ignore)

    if args.include_hidden:
        overrides["include_hidden"] = True
    if args.no_follow_symlinks:
        overrides["follow_symlinks"] = False
    if args.no_skipped_report:
        overrides["save_skipped_report"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of trimmed strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
