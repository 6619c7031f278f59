"""Shared fixtures for core unit tests"""

import pytest

from patchpub.core.models import Chunk, FileDescriptor, Operation


OLD_HASH = "1" * 40
NEW_HASH = "2" * 40


@pytest.fixture(name="abcd_chunks")
def abcd_chunks_fixture():
    """a,b,c,d -> a,B,c,d"""
    return [
        Chunk.from_text(Operation.equal, "a\n"),
        Chunk.from_text(Operation.delete, "b\n"),
        Chunk.from_text(Operation.add, "B\n"),
        Chunk.from_text(Operation.equal, "c\nd\n"),
    ]


@pytest.fixture(name="old_file")
def old_file_fixture():
    return FileDescriptor(path="src/app.py", hash=OLD_HASH)


@pytest.fixture(name="new_file")
def new_file_fixture():
    return FileDescriptor(path="src/app.py", hash=NEW_HASH)
