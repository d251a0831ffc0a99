from __future__ import annotations

"""
Configuration Domain Management.

Default settings, optional JSON config files and the immutable ScanConfig
value handed to the traverser and writer. Nothing here is resolved at
import time: defaults depend on HOME and the working directory of the call.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List

from dirinventory.infra.fs import get_default_output_dir, get_documents_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_IGNORED_DIRECTORIES: List[str] = [".git", ".vscode", "node_modules"]
HIDDEN_PREFIX = "."


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "root": get_documents_dir(),
        "output_dir": get_default_output_dir(),
        "ignore": list(DEFAULT_IGNORED_DIRECTORIES),
        "include_hidden": False,
        "follow_symlinks": True,
        "save_skipped_report": True,
    }


def load_config_file(path: str) -> Dict[str, Any]:
    """
    Read a JSON configuration file.

    Args:
        path: Location of a JSON document holding a single object.

    Returns:
        Dict[str, Any]: The raw (unvalidated) configuration values.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not a JSON object.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(
            f"Config file '{path}' must contain a JSON object, found {type(data).__name__}."
        )

    logger.debug(f"Loaded {len(data)} configuration keys from {path}")
    return data

# -----------------------------------------------------------------------------
# Configuration Model
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanConfig:
    """
    Immutable settings for a single scan.

    Attributes:
        root: Directory the traversal starts from.
        output_dir: Destination directory for the artifacts.
        ignore: Directory base names excluded at any depth.
        include_hidden: Descend into names starting with a dot.
        follow_symlinks: Treat symlinks to directories as directories.
    """
    root: str
    output_dir: str = field(default_factory=get_default_output_dir)
    ignore: FrozenSet[str] = frozenset(DEFAULT_IGNORED_DIRECTORIES)
    include_hidden: bool = False
    follow_symlinks: bool = True

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "ScanConfig":
        """Build a ScanConfig from a validated configuration dict."""
        return cls(
            root=cfg["root"],
            output_dir=cfg["output_dir"],
            ignore=frozenset(cfg.get("ignore", DEFAULT_IGNORED_DIRECTORIES)),
            include_hidden=bool(cfg.get("include_hidden", False)),
            follow_symlinks=bool(cfg.get("follow_symlinks", True)),
        )

    def is_excluded(self, name: str) -> bool:
        """Whether a directory entry name is pruned from the walk."""
        if name in self.ignore:
            return True
        return not self.include_hidden and name.startswith(HIDDEN_PREFIX)
