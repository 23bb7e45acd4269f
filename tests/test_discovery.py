"""Tests for source file discovery."""

from component_installer import discover_source_files


def test_discovers_immediate_source_files(tmp_path):
    """Only immediate files with the extension are returned, sorted."""
    (tmp_path / "b.scs").write_text("")
    (tmp_path / "a.scs").write_text("")
    (tmp_path / "README.md").write_text("")
    (tmp_path / "dir.scs").mkdir()
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "c.scs").write_text("")

    files = discover_source_files(tmp_path, ".scs")

    assert [f.name for f in files] == ["a.scs", "b.scs"]


def test_custom_extension(tmp_path):
    """Extension is configurable."""
    (tmp_path / "a.scs").write_text("")
    (tmp_path / "a.gwf").write_text("")

    assert [f.name for f in discover_source_files(tmp_path, ".gwf")] == ["a.gwf"]


def test_missing_directory(tmp_path):
    """Missing directory yields no files."""
    assert discover_source_files(tmp_path / "missing", ".scs") == []
