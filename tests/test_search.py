from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from tictactoe_engine.board import DRAW, Symbol, empty_grid, empty_indices, parse_grid, place, winner
from tictactoe_engine.search import best_move, minimax, terminal_score


def test_full_board_fails_loudly():
    with pytest.raises(ValueError):
        minimax(parse_grid("121212212"), Symbol.X)


def test_won_board_fails_loudly():
    grid = parse_grid("111220000")
    assert empty_indices(grid)
    with pytest.raises(ValueError):
        minimax(grid, Symbol.O)
    with pytest.raises(ValueError):
        best_move(grid, Symbol.X)


def test_empty_board_opening_is_corner_or_center():
    score, idx = minimax(empty_grid(), Symbol.X)
    assert score == 0
    assert idx in (0, 2, 4, 6, 8)


def test_takes_immediate_win():
    # O to move with two in the top row
    grid = parse_grid("220110100")
    assert winner(grid) is None
    score, idx = minimax(grid, Symbol.O)
    # X threatens 3-4-5 and 2-4-6, so the win must come now
    assert idx == 2
    assert score == 9


def test_blocks_opponent_win():
    # X threatens 0-1-2; O must block at 2
    grid = parse_grid("110020000")
    assert best_move(grid, Symbol.O) == 2


def test_prefers_faster_win():
    # X can win now at 2 (row) or later; immediate win scores 9
    grid = parse_grid("110220000")
    score, idx = minimax(grid, Symbol.X)
    assert idx == 2
    assert score == 9


def test_lost_position_delays_loss():
    # X has a fork (0-1-2 and 0-3-6 both open); O cannot stop both
    grid = parse_grid("110120002")
    score, idx = minimax(grid, Symbol.O)
    assert score < 0
    assert idx in empty_indices(grid)


def test_terminal_scores():
    x_row = parse_grid("111220000")
    assert terminal_score(x_row, Symbol.X, 3) == 7
    assert terminal_score(x_row, Symbol.O, 3) == -7
    assert terminal_score(parse_grid("121121212"), Symbol.X, 2) == 0
    assert terminal_score(empty_grid(), Symbol.X, 0) is None


def test_self_play_from_empty_board_is_draw():
    grid = empty_grid()
    turn = Symbol.X
    while winner(grid) is None:
        idx = best_move(grid, turn)
        grid = place(grid, idx, turn)
        turn = turn.opposite()
    assert winner(grid) == DRAW


@settings(max_examples=60, deadline=None)
@given(st.permutations(list(range(9))), st.integers(min_value=0, max_value=8))
def test_search_never_picks_occupied_cell(order: List[int], n: int):
    grid = empty_grid()
    turn = Symbol.X
    for idx in order[:n]:
        if winner(grid) is not None:
            break
        grid = place(grid, idx, turn)
        turn = turn.opposite()
    if winner(grid) is not None:
        return
    idx = best_move(grid, turn)
    assert grid[idx] is None
