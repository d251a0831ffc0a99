from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Path manipulation so the 'src' directory is importable without install.
2. Shared fixtures: a sample directory tree and a matching config dict.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def documents_tree(tmp_path: Path) -> Path:
    """
    Create the reference tree used across tests.

    Documents/
    ├── A/
    │   └── B/
    ├── .git/
    │   └── objects/
    └── note.txt
    """
    root = tmp_path / "Documents"
    (root / "A" / "B").mkdir(parents=True)
    (root / ".git" / "objects").mkdir(parents=True)
    (root / "note.txt").write_text("hello", encoding="utf-8")
    return root


@pytest.fixture
def config_dict(documents_tree: Path, tmp_path: Path) -> Dict[str, Any]:
    """Return a complete configuration dictionary pointing at the sample tree."""
    return {
        "root": str(documents_tree),
        "output_dir": str(tmp_path / "data"),
        "ignore": [".git", ".vscode", "node_modules"],
        "include_hidden": False,
        "follow_symlinks": True,
        "save_skipped_report": True,
    }
