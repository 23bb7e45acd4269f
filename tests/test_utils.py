"""Tests for address and staging directory helpers."""

import pytest
from component_installer.utils import address_hash
from component_installer.utils import extract_repository_name
from component_installer.utils import is_remote_source
from component_installer.utils import is_valid_repository_name
from component_installer.utils import select_staging_dir
from component_installer.utils import staging_dir_candidates
from component_installer.utils import write_source_marker

ADDRESS = "https://github.com/org/repo"


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("https://github.com/org/repo", "repo"),
        ("https://github.com/org/repo/", "repo"),
        ("https://github.com/org/repo.git", "repo"),
        ("repo", "repo"),
    ],
)
def test_extract_repository_name(address, expected):
    assert extract_repository_name(address) == expected


def test_is_remote_source():
    prefixes = ["https://github.com/"]

    assert is_remote_source(ADDRESS, prefixes)
    assert not is_remote_source("https://gitlab.com/org/repo", prefixes)
    assert not is_remote_source("file:///repo", prefixes)
    assert not is_remote_source(ADDRESS, [])


def test_address_hash_is_stable():
    assert address_hash(ADDRESS) == address_hash(ADDRESS)
    assert address_hash(ADDRESS) != address_hash("https://github.com/other/repo")
    assert len(address_hash(ADDRESS)) == 8


def test_candidates_are_bounded(tmp_path):
    """Two candidates, neither grows with repeated installs."""
    candidates = staging_dir_candidates(tmp_path, ADDRESS)

    assert [c.name for c in candidates] == ["repo", f"repo-{address_hash(ADDRESS)}"]


def test_select_fresh_directory(tmp_path):
    assert select_staging_dir(tmp_path, ADDRESS) == (tmp_path / "repo", False)


def test_select_owned_directory_is_reused(tmp_path):
    (tmp_path / "repo").mkdir()
    write_source_marker(tmp_path / "repo", ADDRESS)

    assert select_staging_dir(tmp_path, ADDRESS) == (tmp_path / "repo", True)


def test_select_skips_directory_of_other_source(tmp_path):
    (tmp_path / "repo").mkdir()
    write_source_marker(tmp_path / "repo", "https://github.com/other/repo")

    directory, reuse = select_staging_dir(tmp_path, ADDRESS)

    assert directory.name == f"repo-{address_hash(ADDRESS)}"
    assert reuse is False


def test_select_returns_none_when_all_taken(tmp_path):
    for candidate in staging_dir_candidates(tmp_path, ADDRESS):
        candidate.mkdir()

    assert select_staging_dir(tmp_path, ADDRESS) is None


@pytest.mark.parametrize("name", ["", ".", ".."])
def test_unusable_repository_names(name):
    assert not is_valid_repository_name(name)


@pytest.mark.parametrize("address", ["https://github.com/org/.git", "https://github.com/org/..", "https://github.com/org/repo/."])
def test_select_rejects_address_without_repository_name(tmp_path, address):
    """The staging root itself is never selected."""
    assert select_staging_dir(tmp_path / "specs", address) is None
