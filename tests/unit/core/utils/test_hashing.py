"""Unit tests for core/utils/hashing.py"""

from patchpub.core.utils.hashing import ZERO_HASH, git_blob_hash


def test_empty_blob_matches_git():
    assert git_blob_hash(b"") == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"


def test_blob_matches_git():
    assert git_blob_hash(b"hello world\n") == "3b18e512dba79e4c8300dd08aeb37f8e728b8dad"


def test_zero_hash_shape():
    assert ZERO_HASH == "0" * 40
    assert len(git_blob_hash(b"x")) == len(ZERO_HASH)
