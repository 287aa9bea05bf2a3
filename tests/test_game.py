"""Unit tests for Emoji Tic-Tac-Toe game logic."""

import random

import pytest

from emojittt.game import (
    DRAWN,
    EMPTY,
    IN_PROGRESS,
    PLAYER_A,
    PLAYER_B,
    WINNING_LINES,
    WON,
    EmojiTicTacToe,
    InvalidCellError,
    compute_status,
    find_winning_line,
    is_draw,
)


def play(game, *moves):
    for index in moves:
        game.submit_move(index)
    return game.snapshot()


def test_initial_state():
    game = EmojiTicTacToe()
    snap = game.snapshot()
    assert snap.board == (EMPTY,) * 9
    assert snap.active_player == PLAYER_A
    assert snap.status == IN_PROGRESS
    assert snap.winner is None
    assert snap.winning_line is None
    assert game.available_moves() == list(range(9))


def test_move_toggles_active_player():
    game = EmojiTicTacToe()
    snap = game.submit_move(4)
    assert snap.board[4] == PLAYER_A
    assert snap.active_player == PLAYER_B
    assert game.submit_move(0).active_player == PLAYER_A


def test_row_win_scenario():
    game = EmojiTicTacToe()
    snap = play(game, 0, 4, 1, 5, 2)
    assert snap.board[:3] == (PLAYER_A, PLAYER_A, PLAYER_A)
    assert snap.status == WON
    assert snap.winner == PLAYER_A
    assert snap.winning_line == (0, 1, 2)
    # The winning move keeps the turn with the winner
    assert snap.active_player == PLAYER_A
    assert game.available_moves() == []


@pytest.mark.parametrize("line", WINNING_LINES)
def test_every_line_wins(line):
    cells = [EMPTY] * 9
    for index in line:
        cells[index] = PLAYER_B
    game = EmojiTicTacToe(cells=cells)
    assert game.status == WON
    assert game.winner == PLAYER_B
    assert game.winning_line == line


def test_occupied_cell_is_ignored():
    game = EmojiTicTacToe()
    first = game.submit_move(3)
    second = game.submit_move(3)
    assert second == first
    assert second.board[3] == PLAYER_A
    assert second.active_player == PLAYER_B


def test_draw_scenario():
    game = EmojiTicTacToe()
    # B: X cells, A: O cells of X,O,X / O,X,O / O,X,O
    snap = play(game, 1, 0, 3, 2, 5, 4, 6, 7, 8)
    assert snap.board == (
        PLAYER_B, PLAYER_A, PLAYER_B,
        PLAYER_A, PLAYER_B, PLAYER_A,
        PLAYER_A, PLAYER_B, PLAYER_A,
    )
    assert snap.status == DRAWN
    assert snap.winner is None
    assert snap.winning_line is None


def test_win_on_full_board_is_not_a_draw():
    game = EmojiTicTacToe()
    snap = play(game, 0, 3, 1, 4, 5, 7, 6, 8, 2)
    assert EMPTY not in snap.board
    assert snap.status == WON
    assert snap.winner == PLAYER_A
    assert snap.winning_line == (0, 1, 2)


def test_terminal_board_is_locked():
    game = EmojiTicTacToe()
    won = play(game, 0, 4, 1, 5, 2)
    for index in range(9):
        assert game.submit_move(index) == won


def test_drawn_board_is_locked():
    game = EmojiTicTacToe()
    drawn = play(game, 1, 0, 3, 2, 5, 4, 6, 7, 8)
    assert game.submit_move(0) == drawn


def test_reset_clears_finished_game():
    game = EmojiTicTacToe()
    play(game, 0, 4, 1, 5, 2)
    snap = game.reset()
    assert snap.board == (EMPTY,) * 9
    assert snap.status == IN_PROGRESS
    assert snap.winner is None
    assert snap.winning_line is None
    assert snap.active_player == PLAYER_A


def test_reset_uses_configured_starting_player():
    game = EmojiTicTacToe(starting_player=PLAYER_B)
    game.submit_move(0)
    assert game.reset().active_player == PLAYER_B


def test_reset_with_seeded_rng_is_deterministic():
    first = [EmojiTicTacToe().reset(random.Random(seed)).active_player for seed in range(20)]
    second = [EmojiTicTacToe().reset(random.Random(seed)).active_player for seed in range(20)]
    assert first == second
    assert set(first) == {PLAYER_A, PLAYER_B}


@pytest.mark.parametrize("index", [-1, 9, 100])
def test_out_of_range_index_raises(index):
    game = EmojiTicTacToe()
    before = game.snapshot()
    with pytest.raises(InvalidCellError):
        game.submit_move(index)
    assert game.snapshot() == before


@pytest.mark.parametrize("index", [True, "4", 4.0, None])
def test_non_integer_index_raises(index):
    game = EmojiTicTacToe()
    with pytest.raises(InvalidCellError):
        game.submit_move(index)


def test_out_of_range_raises_even_after_game_over():
    game = EmojiTicTacToe()
    play(game, 0, 4, 1, 5, 2)
    with pytest.raises(InvalidCellError):
        game.submit_move(9)


def test_first_line_in_order_is_reported():
    A, _ = PLAYER_A, EMPTY
    # Both the top row and the left column are complete
    cells = [
        A, A, A,
        A, PLAYER_B, _,
        A, PLAYER_B, PLAYER_B,
    ]
    assert find_winning_line(cells) == (0, 1, 2)
    assert compute_status(cells) == (WON, PLAYER_A, (0, 1, 2))


def test_pure_checks_on_partial_board():
    cells = [PLAYER_A, PLAYER_B] + [EMPTY] * 7
    assert find_winning_line(cells) is None
    assert not is_draw(cells)
    assert compute_status(cells) == (IN_PROGRESS, None, None)


def test_is_draw_false_when_full_board_has_winner():
    A, B = PLAYER_A, PLAYER_B
    cells = [A, A, A, B, B, A, A, B, B]
    assert not is_draw(cells)


def test_token_counts_stay_balanced():
    rng = random.Random(1234)
    for _ in range(200):
        game = EmojiTicTacToe()
        while not game.is_over:
            game.submit_move(rng.randrange(9))
            a = game.cells.count(PLAYER_A)
            b = game.cells.count(PLAYER_B)
            assert abs(a - b) <= 1
        assert game.status in (WON, DRAWN)


def test_invalid_board_rejected():
    with pytest.raises(ValueError):
        EmojiTicTacToe(cells=[EMPTY] * 8)
    with pytest.raises(ValueError):
        EmojiTicTacToe(cells=["X"] + [EMPTY] * 8)
    with pytest.raises(ValueError):
        EmojiTicTacToe(active_player="C")


def test_games_do_not_share_state():
    first = EmojiTicTacToe()
    second = EmojiTicTacToe()
    first.submit_move(0)
    assert second.cells == [EMPTY] * 9


def test_status_follows_board_written_directly():
    game = EmojiTicTacToe()
    game.cells[0] = game.cells[1] = game.cells[2] = PLAYER_B
    assert game.status == WON
    assert game.winner == PLAYER_B
    assert game.winning_line == (0, 1, 2)
    assert game.snapshot().status == WON
    assert game.available_moves() == []

    game.cells[2] = EMPTY
    assert game.status == IN_PROGRESS
    assert game.winning_line is None


def test_compute_status_agrees_with_is_draw():
    rng = random.Random(99)
    for _ in range(200):
        cells = [rng.choice((EMPTY, PLAYER_A, PLAYER_B)) for _ in range(9)]
        status, _, _ = compute_status(cells)
        assert (status == DRAWN) == is_draw(cells)
