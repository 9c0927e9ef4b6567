from __future__ import annotations

import pytest

from ed_engine.buffer import Buffer
from ed_engine.errors import InvalidDestination, RangeError


def make_buffer(count: int = 3, *, dot: int | None = None) -> Buffer:
    buffer = Buffer.from_lines([f"line {n}" for n in range(1, count + 1)])
    if dot is not None:
        buffer.set_dot(dot)
    return buffer


def test_new_buffer_is_empty() -> None:
    buffer = Buffer()

    assert buffer.line_count() == 0
    assert buffer.dot == 0
    assert buffer.last == 0
    assert buffer.filename() is None
    assert buffer.modified is False


def test_from_lines_puts_dot_on_last_line() -> None:
    buffer = make_buffer(4)

    assert buffer.dot == 4
    assert buffer.last == 4
    assert buffer.modified is False


@pytest.mark.parametrize("start,end", [(1, 1), (1, 5), (2, 4), (5, 5)])
def test_get_range_returns_ascending_entries(start: int, end: int) -> None:
    buffer = make_buffer(5)

    entries = buffer.get_range(start, end)

    assert len(entries) == end - start + 1
    assert [number for number, _ in entries] == list(range(start, end + 1))
    assert entries[0] == (start, f"line {start}")


@pytest.mark.parametrize("start,end", [(0, 1), (1, 4), (3, 2), (0, 0)])
def test_get_range_rejects_invalid_bounds(start: int, end: int) -> None:
    buffer = make_buffer(3)

    with pytest.raises(RangeError):
        buffer.get_range(start, end)


def test_get_range_zero_on_empty_buffer_is_empty() -> None:
    assert Buffer().get_range(0, 0) == []


def test_insert_after_zero_on_empty_buffer() -> None:
    buffer = Buffer()

    buffer.insert_after(0, ["Hello"])

    assert buffer.line_count() == 1
    assert buffer.dot == 1
    assert buffer.modified is True


def test_insert_after_shifts_following_lines() -> None:
    buffer = make_buffer(3)

    buffer.insert_after(1, ["a", "b"])

    assert list(buffer.lines) == ["line 1", "a", "b", "line 2", "line 3"]
    assert buffer.dot == 3


@pytest.mark.parametrize("index,expected", [(0, 1), (2, 2)])
def test_insert_nothing_keeps_dot_on_a_line(index: int, expected: int) -> None:
    buffer = make_buffer(3)

    buffer.insert_after(index, [])

    assert buffer.dot == expected
    assert buffer.modified is False


def test_insert_nothing_into_empty_buffer_leaves_dot_zero() -> None:
    buffer = Buffer()

    buffer.insert_after(0, [])

    assert buffer.dot == 0


def test_insert_after_rejects_out_of_range_index() -> None:
    buffer = make_buffer(2)

    with pytest.raises(RangeError):
        buffer.insert_after(3, ["x"])
    assert buffer.line_count() == 2
    assert buffer.modified is False


def test_delete_range_moves_dot_to_following_line() -> None:
    buffer = make_buffer(5)

    buffer.delete_range(2, 3)

    assert list(buffer.lines) == ["line 1", "line 4", "line 5"]
    assert buffer.dot == 2
    assert buffer.modified is True


def test_delete_range_at_end_moves_dot_to_new_last_line() -> None:
    buffer = make_buffer(5)

    buffer.delete_range(4, 5)

    assert buffer.dot == 3
    assert buffer.last == 3


def test_delete_everything_leaves_dot_zero() -> None:
    buffer = make_buffer(3)

    buffer.delete_range(1, 3)

    assert buffer.line_count() == 0
    assert buffer.dot == 0


def test_replace_range_puts_dot_on_last_inserted_line() -> None:
    buffer = make_buffer(4)

    buffer.replace_range(2, 3, ["x", "y", "z"])

    assert list(buffer.lines) == ["line 1", "x", "y", "z", "line 4"]
    assert buffer.dot == 4


def test_replace_range_with_nothing_leaves_dot_before_block() -> None:
    buffer = make_buffer(4)

    buffer.replace_range(3, 4, [])

    assert list(buffer.lines) == ["line 1", "line 2"]
    assert buffer.dot == 2


def test_replace_range_with_nothing_at_start_clamps_dot() -> None:
    buffer = make_buffer(3)

    buffer.replace_range(1, 1, [])

    assert list(buffer.lines) == ["line 2", "line 3"]
    assert buffer.dot == 1


def test_replace_whole_buffer_with_nothing() -> None:
    buffer = make_buffer(2)

    buffer.replace_range(1, 2, [])

    assert buffer.line_count() == 0
    assert buffer.dot == 0


def test_move_range_to_start() -> None:
    buffer = Buffer.from_lines(["one", "two", "three"])
    buffer.set_dot(2)

    buffer.move_range(2, 3, 0)

    assert list(buffer.lines) == ["two", "three", "one"]
    assert buffer.dot == 2


def test_move_range_forward_uses_pre_removal_numbering() -> None:
    buffer = make_buffer(5)

    buffer.move_range(1, 2, 4)

    assert list(buffer.lines) == ["line 3", "line 4", "line 1", "line 2", "line 5"]
    assert buffer.dot == 4


@pytest.mark.parametrize("dest", [2, 3, 4])
def test_move_range_into_itself_fails_and_changes_nothing(dest: int) -> None:
    buffer = make_buffer(5, dot=1)

    with pytest.raises(InvalidDestination):
        buffer.move_range(2, 4, dest)

    assert list(buffer.lines) == [f"line {n}" for n in range(1, 6)]
    assert buffer.dot == 1
    assert buffer.modified is False


def test_replace_all_resets_state() -> None:
    buffer = make_buffer(3)
    buffer.delete_range(1, 1)

    buffer.replace_all(["a", "b", "c", "d"])

    assert buffer.dot == 4
    assert buffer.last == 4
    assert buffer.modified is False


def test_set_dot_validates_line() -> None:
    buffer = make_buffer(3)

    with pytest.raises(RangeError):
        buffer.set_dot(4)
    assert buffer.dot == 3


def test_data_size_counts_newlines_and_utf8() -> None:
    buffer = Buffer.from_lines(["abc", "é"])

    assert buffer.data_size() == 4 + 3


def test_mirror_snapshots_state() -> None:
    buffer = Buffer.from_lines(["a", "b"], filename="notes.txt")

    mirror = buffer.mirror()

    assert mirror.lines == ("a", "b")
    assert mirror.text == "a\nb"
    assert mirror.dot == 2
    assert mirror.filename == "notes.txt"
