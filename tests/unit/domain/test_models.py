from __future__ import annotations

"""
Unit tests for the domain models.

Verifies record construction from stat results, field ordering and the
immutable ScanConfig value.
"""

import dataclasses
import os
import stat
import uuid
from pathlib import Path
from unittest.mock import patch

import pytest

from dirinventory.domain.config import ScanConfig, get_default_config, load_config_file
from dirinventory.domain.record_models import (
    RECORD_FIELDS,
    UNKNOWN_ID,
    create_record,
    format_permissions,
    format_stat_time,
)


def test_record_fields_order() -> None:
    assert RECORD_FIELDS == (
        "id", "name", "relative_path", "absolute_path", "last_accessed",
        "last_modified", "owner", "group", "permissions",
    )


def test_create_record_from_stat(tmp_path: Path) -> None:
    target = tmp_path / "root" / "A" / "B"
    target.mkdir(parents=True)

    record = create_record("B", str(target), str(tmp_path / "root"), os.stat(target))

    assert uuid.UUID(record.id).version == 4
    assert record.name == "B"
    assert record.relative_path == os.path.join("A", "B")
    assert record.absolute_path == str(target)
    assert list(record.to_dict()) == list(RECORD_FIELDS)
    assert record.to_row()[1:4] == ["B", os.path.join("A", "B"), str(target)]


def test_records_are_immutable(tmp_path: Path) -> None:
    record = create_record("x", str(tmp_path), str(tmp_path.parent), os.stat(tmp_path))

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "y"  # type: ignore[misc]


def test_record_ids_are_unique(tmp_path: Path) -> None:
    st = os.stat(tmp_path)
    ids = {create_record("x", str(tmp_path), str(tmp_path), st).id for _ in range(200)}

    assert len(ids) == 200


def test_windows_uses_sentinel_owner(tmp_path: Path) -> None:
    with patch("dirinventory.domain.record_models.os.name", "nt"):
        record = create_record("x", str(tmp_path), str(tmp_path.parent), os.stat(tmp_path))

    assert record.owner == UNKNOWN_ID
    assert record.group == UNKNOWN_ID


def test_format_stat_time_is_utc_iso() -> None:
    assert format_stat_time(0) == "1970-01-01T00:00:00.000+00:00"
    assert format_stat_time(1.5) == "1970-01-01T00:00:01.500+00:00"


@pytest.mark.parametrize(
    "mode,expected",
    [
        (stat.S_IFDIR | 0o755, "755"),
        (stat.S_IFDIR | 0o700, "700"),
        (stat.S_IFDIR | 0o1777, "777"),
        (stat.S_IFDIR | 0o044, "44"),
    ],
)
def test_format_permissions(mode: int, expected: str) -> None:
    assert format_permissions(mode) == expected


# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------

def test_default_config_is_resolved_at_call_time(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    cfg = get_default_config()

    assert cfg["root"] == os.path.join(str(tmp_path), "Documents")
    assert cfg["output_dir"] == os.path.join(str(tmp_path), "data")
    assert cfg["ignore"] == [".git", ".vscode", "node_modules"]
    assert cfg["include_hidden"] is False


def test_scan_config_exclusion_rules() -> None:
    config = ScanConfig(root="/tmp")

    assert config.is_excluded("node_modules")
    assert config.is_excluded(".git")
    assert config.is_excluded(".cache")
    assert not config.is_excluded("src")

    hidden_ok = ScanConfig(root="/tmp", include_hidden=True, ignore=frozenset({".git"}))
    assert not hidden_ok.is_excluded(".cache")
    assert hidden_ok.is_excluded(".git")


def test_scan_config_from_dict() -> None:
    config = ScanConfig.from_dict({
        "root": "/r",
        "output_dir": "/o",
        "ignore": ["x", "y"],
        "include_hidden": True,
        "follow_symlinks": False,
    })

    assert config.ignore == frozenset({"x", "y"})
    assert config.include_hidden is True
    assert config.follow_symlinks is False


def test_load_config_file(tmp_path: Path) -> None:
    good = tmp_path / "good.json"
    good.write_text('{"root": "/somewhere", "include_hidden": true}', encoding="utf-8")
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")

    assert load_config_file(str(good)) == {"root": "/somewhere", "include_hidden": True}
    with pytest.raises(ValueError):
        load_config_file(str(bad))
    with pytest.raises(OSError):
        load_config_file(str(tmp_path / "missing.json"))
