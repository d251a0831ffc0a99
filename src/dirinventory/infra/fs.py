from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path resolution for the default scan root and output location, path
normalization for user input, and output collision checks. Defaults are
resolved at call time so tests can redirect HOME and the working directory.
"""

import os
from typing import List, Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

DOCUMENTS_DIR_NAME = "Documents"
DEFAULT_OUTPUT_SUBDIR = "data"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_documents_dir() -> str:
    """
    Resolve the current user's "Documents" directory.

    Returns:
        str: Absolute path to ~/Documents (it may not exist).
    """
    home = os.path.expanduser("~")
    return os.path.abspath(os.path.join(home, DOCUMENTS_DIR_NAME))


def get_default_output_dir() -> str:
    """Return the `data` subdirectory of the current working directory."""
    return os.path.join(os.getcwd(), DEFAULT_OUTPUT_SUBDIR)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Expands environment variables ($VAR/%VAR%) and the user home
    shortcut (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def check_existing_output_files(output_dir: str, names: List[str]) -> List[str]:
    """
    Identify naming collisions in the target output directory.

    Args:
        output_dir: Directory to inspect.
        names: List of filenames to check for existence.

    Returns:
        List[str]: Absolute paths of files that already exist.
    """
    existing: List[str] = []
    for n in names:
        full = os.path.join(output_dir, n)
        if os.path.exists(full):
            existing.append(full)
    return existing
