from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates default path resolution, path normalization and naming
collision detection.
"""

import os
from pathlib import Path
from unittest.mock import patch

from dirinventory.infra.fs import (
    check_existing_output_files,
    get_default_output_dir,
    get_documents_dir,
    normalize_path,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_documents_dir_uses_home() -> None:
    mock_home = "/home/testuser"
    with patch("os.path.expanduser", return_value=mock_home):
        path = get_documents_dir()

    assert path.replace("\\", "/").endswith("/home/testuser/Documents")


def test_get_default_output_dir_follows_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert get_default_output_dir() == os.path.join(os.getcwd(), "data")


def test_normalize_path_expansion() -> None:
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

        with patch("os.path.expanduser", side_effect=lambda p: p.replace("~", "/home/user")):
            path = normalize_path("~/code", fallback=".")
            assert "code" in Path(path).parts


def test_normalize_path_fallback(tmp_path: Path) -> None:
    assert normalize_path("   ", fallback=str(tmp_path)) == str(tmp_path)
    assert normalize_path(None, fallback=str(tmp_path)) == str(tmp_path)

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS TESTS
# -----------------------------------------------------------------------------

def test_check_existing_output_files(tmp_path: Path) -> None:
    (tmp_path / "directories_a.csv").write_text("exists")
    (tmp_path / "directories_a.json").write_text("exists")

    names = ["directories_a.csv", "directories_a.json", "directories_b.csv"]
    existing = check_existing_output_files(str(tmp_path), names)

    assert len(existing) == 2
    assert not any(e.endswith("directories_b.csv") for e in existing)
