from __future__ import annotations

import pytest

from brainfuck import BrainfuckProgram, UnbalancedLoop, load


def test_load_discards_comments():
    assert load("a+b-c>d<e.f,g[h]i 0 9 !").code == "+-><.,[]"


def test_load_ignores_whitespace():
    assert load("  +\t+\n\n-  . ").code == "++-."


def test_load_empty_and_comment_only():
    assert load("").code == ""
    assert load("just a comment\n\twith 123 digits").code == ""
    assert len(load("nothing here")) == 0


def test_pairs_nested():
    program = BrainfuckProgram("+[>[-]<]")
    assert program.pairs == {1: 7, 7: 1, 3: 5, 5: 3}
    assert program.is_balanced


@pytest.mark.parametrize("code, position, bracket", [
    ("[", 0, "["),
    ("]", 0, "]"),
    ("+[[]", 1, "["),
    ("[]]", 2, "]"),
])
def test_pairs_unbalanced(code, position, bracket):
    program = BrainfuckProgram(code)
    assert not program.is_balanced
    with pytest.raises(UnbalancedLoop) as info:
        program.pairs
    assert info.value.position == position
    assert info.value.bracket == bracket


def test_unbalanced_loop_is_value_error():
    with pytest.raises(ValueError):
        BrainfuckProgram("[").pairs
