"""Tests for the family index builder."""

from pathlib import Path

import pytest

from syntenybook.errors import CannotOpenFileError
from syntenybook.families import FAMILY_ID_ORIGIN, build, build_family_index


@pytest.fixture
def family_dir(tmp_path: Path) -> Path:
    """Directory with two family files, listed out of creation order."""
    families = tmp_path / "families"
    families.mkdir()
    (families / "B.txt").write_text("g3\n")
    (families / "A.txt").write_text("g1 g2\n")
    (families / "nested").mkdir()
    (families / "nested" / "C.txt").write_text("g9\n")
    return families


def test_two_family_files(tmp_path: Path):
    """File A lists g1 g2, file B lists g3."""
    a = tmp_path / "A.txt"
    b = tmp_path / "B.txt"
    a.write_text("g1 g2\n")
    b.write_text("g3\n")

    id2family, family_count = build([a, b])

    assert id2family == {"g1": 0, "g2": 0, "g3": 1}
    assert family_count == 2


def test_origin_is_zero():
    assert FAMILY_ID_ORIGIN == 0


def test_members_on_several_lines_and_mixed_whitespace(tmp_path: Path):
    path = tmp_path / "fam.txt"
    path.write_text("g1\tg2\n\n  g3   g4\n")

    index = build_family_index([path])

    assert index.id2family == {"g1": 0, "g2": 0, "g3": 0, "g4": 0}
    assert index.families[0].size == 4


def test_directory_expanded_in_name_order(family_dir: Path):
    index = build_family_index([family_dir])

    assert index.id2family == {"g1": 0, "g2": 0, "g3": 1}
    assert [f.source.name for f in index.families] == ["A.txt", "B.txt"]


def test_subdirectories_are_not_expanded(family_dir: Path):
    index = build_family_index([family_dir])

    assert "g9" not in index


def test_last_family_wins_for_duplicate_members(tmp_path: Path):
    a = tmp_path / "A.txt"
    b = tmp_path / "B.txt"
    a.write_text("g1 shared\n")
    b.write_text("shared g2\n")

    index = build_family_index([a, b])

    assert index.lookup("shared") == 1
    assert index.lookup("g1") == 0
    assert index.overwritten == 1


def test_build_is_idempotent(family_dir: Path):
    first = build_family_index([family_dir])
    second = build_family_index([family_dir])

    assert first.id2family == second.id2family
    assert first.family_count == second.family_count


def test_family_names(tmp_path: Path):
    path = tmp_path / "OG0000012.txt"
    path.write_text("g1\n")

    named = build_family_index([path], name_families=True)
    unnamed = build_family_index([path])

    assert named.families[0].name == "OG0000012"
    assert unnamed.families[0].name is None


def test_empty_family_file_still_consumes_an_id(tmp_path: Path):
    empty = tmp_path / "A.txt"
    other = tmp_path / "B.txt"
    empty.write_text("")
    other.write_text("g1\n")

    index = build_family_index([empty, other])

    assert index.family_count == 2
    assert index.lookup("g1") == 1


def test_missing_family_file(tmp_path: Path):
    with pytest.raises(CannotOpenFileError) as exc_info:
        build_family_index([tmp_path / "missing.txt"])

    assert "missing.txt" in str(exc_info.value)
