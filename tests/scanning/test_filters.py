"""Tests for walker exclusion predicates."""

import pytest

from workpulse.scanning.filters import (
    FilterPolicy,
    extension_of,
    is_archive_temp_name,
    is_compressed_name,
    is_vcs_name,
)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("main.PY", ".py"),
        ("archive.tar.gz", ".gz"),
        ("Makefile", "(none)"),
        (".bashrc", "(none)"),
        ("trailing.", "(none)"),
    ],
)
def test_extension_of(name, expected):
    assert extension_of(name) == expected


@pytest.mark.parametrize("name", [".git", ".svn", ".hg", ".bzr", "_darcs", "CVS"])
def test_vcs_names(name):
    assert is_vcs_name(name)


def test_vcs_is_exact_match():
    assert not is_vcs_name("git")
    assert not is_vcs_name(".github")


@pytest.mark.parametrize("name", ["a.zip", "B.7Z", "x.tar", "y.gz", "z.rar"])
def test_compressed(name):
    assert is_compressed_name(name)


@pytest.mark.parametrize(
    "name", ["archive", "Archive", "_archive_2020", "tmp", "TEMP", "x.tmp", "file~", "~$doc.docx", "a.swp", "b.bak"]
)
def test_archive_temp(name):
    assert is_archive_temp_name(name)


@pytest.mark.parametrize("name", ["src", "template.html", "temperature.py", "archiver.py"])
def test_not_archive_temp(name):
    assert not is_archive_temp_name(name)


def test_policy_dirs_and_files():
    policy = FilterPolicy()
    assert policy.excludes_dir(".git")
    assert policy.excludes_dir("tmp")
    assert not policy.excludes_dir("src")
    assert policy.excludes_file("x.zip")
    assert not policy.excludes_file("x.py")


class TestOldPrefix:
    def test_source_file_kept(self):
        policy = FilterPolicy()
        assert not is_archive_temp_name("old_parser.py")
        assert not policy.excludes_file("old_parser.py")

    def test_directory_excluded(self):
        policy = FilterPolicy()
        assert is_archive_temp_name("Old_Releases", is_dir=True)
        assert policy.excludes_dir("old_releases")
        assert not FilterPolicy(include_archive_temp=True).excludes_dir("old_releases")
