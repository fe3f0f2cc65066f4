from __future__ import annotations

from notevim.buffer.selection import (
    SelectionRect,
    block_delete,
    block_erase,
    block_insert,
    block_yank,
    char_delete,
    char_yank,
)


def test_block_yank_over_short_rows_never_fails() -> None:
    lines = ["abcdef", "ab", "", "abcdefgh"]
    rect = SelectionRect.from_points((0, 2), (3, 4))

    yanked = block_yank(lines, rect)

    assert yanked == ["cde", "", "", "cde"]
    assert all(len(part) <= rect.width for part in yanked)


def test_block_yank_truncates_partial_rows() -> None:
    rect = SelectionRect.from_points((1, 3), (0, 1))

    assert block_yank(["abcdef", "abc"], rect) == ["bcd", "bc"]


def test_block_delete_moves_cursor_to_top_left() -> None:
    lines = ["abcdef", "abc", "abcdef"]
    rect = SelectionRect.from_points((0, 1), (2, 3))

    updated, cursor = block_delete(lines, rect)

    assert updated == ["aef", "a", "aef"]
    assert cursor == (0, 1)


def test_char_delete_across_rows_collapses_span() -> None:
    lines = ["first line", "middle", "third line", "tail"]

    updated, cursor = char_delete(lines, (2, 5), (0, 1))

    assert updated == [lines[0][:1] + lines[2][5:], "tail"]
    assert cursor == (0, 1)


def test_char_yank_single_row_uses_smaller_column() -> None:
    assert char_yank(["hello world"], (0, 8), (0, 2)) == ["llo wo"]


def test_char_yank_multi_row() -> None:
    lines = ["alpha", "beta", "gamma"]

    assert char_yank(lines, (0, 2), (2, 3)) == ["pha", "beta", "gam"]


def test_block_insert_pads_short_rows() -> None:
    lines = ["abcdef", "abcdef", "ab"]

    updated = block_insert(lines, 0, 2, 4, "X")

    assert updated == ["abcdXef", "abcdXef", "ab  X"]
    assert {row.index("X") for row in updated} == {4}


def test_block_erase_skips_rows_without_that_column() -> None:
    assert block_erase(["abX", "a"], 0, 1, 2) == ["ab", "a"]
