import random

import pytest

from samegame.components.board import Board
from samegame.errors import InvalidConfiguration
from samegame.systems import board_ops


def test_generate_fills_rectangular_board_with_valid_colors():
    board = Board()
    columns = board_ops.generate(board, 7, 5, 4, rng=random.Random(3))
    assert columns is board.columns
    assert len(board.columns) == 7
    assert all(len(column) == 5 for column in board.columns)
    for x in range(7):
        for y in range(5):
            value = board_ops.get_value(board, x, y)
            assert value is not None and 0 <= value < 4
    assert (board.width, board.height, board.nb_colors) == (7, 5, 4)


def test_generate_is_deterministic_for_seeded_rng():
    first = board_ops.generate(Board(), 6, 6, 5, rng=random.Random(99))
    second = board_ops.generate(Board(), 6, 6, 5, rng=random.Random(99))
    assert first == second


def test_generate_replaces_previous_state():
    board = Board()
    board_ops.generate(board, 4, 4, 3, rng=random.Random(1))
    board_ops.apply_removal(board, {(0, 0), (1, 1)})
    board_ops.generate(board, 2, 3, 2, rng=random.Random(1))
    assert len(board.columns) == 2
    assert board_ops.tile_count(board) == 6


def test_generate_zero_sized_board():
    board = Board()
    board_ops.generate(board, 0, 0, 1)
    assert board.columns == []
    board_ops.generate(board, 3, 0, 1)
    assert board.columns == [[], [], []]


@pytest.mark.parametrize(
    "width,height,nb_colors",
    [(-1, 4, 3), (4, -2, 3), (4, 4, 0), (4, 4, -5), (2.5, 4, 3), (4, 4, True)],
)
def test_generate_rejects_invalid_parameters(width, height, nb_colors):
    board = Board(columns=[[0]])
    with pytest.raises(InvalidConfiguration):
        board_ops.generate(board, width, height, nb_colors)
    assert board.columns == [[0]], "Board should be untouched after a rejected generation"


def test_single_color_board_uses_only_color_zero():
    board = Board()
    board_ops.generate(board, 3, 3, 1)
    assert {value for column in board.columns for value in column} == {0}
