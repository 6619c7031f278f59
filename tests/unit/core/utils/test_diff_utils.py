"""Unit tests for core/utils/diff.py"""

from patchpub.core.models import Operation, join_lines
from patchpub.core.utils.diff import chunks_from_texts, diff_summary


def _shape(chunks) -> list[tuple[str, list[str]]]:
    return [(c.op.value, [line.text for line in c.lines]) for c in chunks]


def test_replace_becomes_delete_then_add():
    chunks = chunks_from_texts("a\nb\nc\nd\n", "a\nB\nc\nd\n")
    assert _shape(chunks) == [
        ("equal", ["a"]),
        ("delete", ["b"]),
        ("add", ["B"]),
        ("equal", ["c", "d"]),
    ]


def test_identical_texts_are_one_equal_chunk():
    assert _shape(chunks_from_texts("a\nb\n", "a\nb\n")) == [("equal", ["a", "b"])]


def test_new_file_is_single_add():
    assert _shape(chunks_from_texts("", "x\ny\n")) == [("add", ["x", "y"])]


def test_missing_final_newline_is_a_change():
    chunks = chunks_from_texts("a\nb\n", "a\nb")
    assert _shape(chunks) == [("equal", ["a"]), ("delete", ["b"]), ("add", ["b"])]
    assert chunks[-1].lines[-1].terminated is False


def test_chunks_cover_both_sides():
    old, new = "1\n2\n3\n4\n5\n", "1\n3\n4\nx\n5\ny"
    chunks = chunks_from_texts(old, new)
    from_side = [line for c in chunks if c.op is not Operation.add for line in c.lines]
    to_side = [line for c in chunks if c.op is not Operation.delete for line in c.lines]
    assert join_lines(from_side) == old
    assert join_lines(to_side) == new


def test_diff_summary_counts():
    chunks = chunks_from_texts("a\nb\nc\n", "a\nB\nc\nd\n")
    assert diff_summary(chunks) == {"added": 2, "deleted": 1, "unchanged": 2}


def test_diff_summary_empty():
    assert diff_summary([]) == {"added": 0, "deleted": 0, "unchanged": 0}
