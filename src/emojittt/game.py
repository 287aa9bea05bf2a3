"""Core rules for Emoji Tic-Tac-Toe (Cat vs Dog on a 3x3 grid)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import random

Player = str  # "A" or "B"
Status = str  # "in-progress", "won" or "drawn"

PLAYER_A: Player = "A"
PLAYER_B: Player = "B"
PLAYERS: Tuple[Player, Player] = (PLAYER_A, PLAYER_B)

TOKENS: Dict[Player, str] = {PLAYER_A: "\U0001F63A", PLAYER_B: "\U0001F436"}
LABELS: Dict[Player, str] = {PLAYER_A: "Cat", PLAYER_B: "Dog"}

EMPTY = " "
BOARD_CELLS = 9

IN_PROGRESS: Status = "in-progress"
WON: Status = "won"
DRAWN: Status = "drawn"

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class InvalidCellError(ValueError):
    """Raised when a move targets an index outside the board."""


def other_player(player: Player) -> Player:
    return PLAYER_B if player == PLAYER_A else PLAYER_A


# ---------- Pure board checks ----------


def find_winning_line(cells: Sequence[str]) -> Optional[Tuple[int, int, int]]:
    """Return the first completed line in enumeration order, if any."""
    for a, b, c in WINNING_LINES:
        v = cells[a]
        if v != EMPTY and v == cells[b] == cells[c]:
            return (a, b, c)
    return None


def is_draw(cells: Sequence[str]) -> bool:
    if find_winning_line(cells) is not None:
        return False
    return all(c != EMPTY for c in cells)


def compute_status(
    cells: Sequence[str],
) -> Tuple[Status, Optional[Player], Optional[Tuple[int, int, int]]]:
    """
    Derive ``(status, winner, winning_line)`` from a full board.

    A win is checked before a draw, so a board filled by a winning move
    reports ``"won"``.
    """
    line = find_winning_line(cells)
    if line is not None:
        return WON, cells[line[0]], line
    if is_draw(cells):
        return DRAWN, None, None
    return IN_PROGRESS, None, None


# ---------- Snapshot ----------


@dataclass(frozen=True)
class Snapshot:
    board: Tuple[str, ...]
    active_player: Player
    status: Status
    winner: Optional[Player] = None
    winning_line: Optional[Tuple[int, int, int]] = None


# ---------- Game ----------


@dataclass
class EmojiTicTacToe:
    # 'A', 'B', or ' ' (space) for empty
    cells: List[str] = field(default_factory=lambda: [EMPTY] * BOARD_CELLS)
    active_player: Player = PLAYER_A
    # Used by reset() when no random source is supplied
    starting_player: Player = PLAYER_A

    def __post_init__(self) -> None:
        if len(self.cells) != BOARD_CELLS:
            raise ValueError(f"Board must have {BOARD_CELLS} cells")
        if any(c not in (EMPTY, PLAYER_A, PLAYER_B) for c in self.cells):
            raise ValueError("Board cells must be 'A', 'B' or empty")
        for player in (self.active_player, self.starting_player):
            if player not in PLAYERS:
                raise ValueError(f"Unknown player {player!r}")
        self.cells = list(self.cells)

    # ---- derived state, recomputed from the board on every read ----

    @property
    def status(self) -> Status:
        return compute_status(self.cells)[0]

    @property
    def winner(self) -> Optional[Player]:
        return compute_status(self.cells)[1]

    @property
    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return compute_status(self.cells)[2]

    @property
    def is_over(self) -> bool:
        return self.status != IN_PROGRESS

    # ---- API used by the UI ----

    def available_moves(self) -> List[int]:
        """Empty cells that would accept a move; none once the game is over."""
        if self.is_over:
            return []
        return [i for i, c in enumerate(self.cells) if c == EMPTY]

    def submit_move(self, index: int) -> Snapshot:
        """
        Place the active player's token at ``index``.

        Moves on an occupied cell or after the game has ended are ignored and
        the unchanged snapshot is returned. An index outside 0-8 raises
        :class:`InvalidCellError`.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidCellError(f"Cell index must be an integer, got {index!r}")
        if not 0 <= index < BOARD_CELLS:
            raise InvalidCellError(f"Cell index {index} is outside the board")

        if self.is_over or self.cells[index] != EMPTY:
            return self.snapshot()

        self.cells[index] = self.active_player
        # The winner keeps the turn; the board is locked anyway
        if not self.is_over:
            self.active_player = other_player(self.active_player)
        return self.snapshot()

    def reset(self, rng: Optional[random.Random] = None) -> Snapshot:
        """Clear the board; pick the first player from ``rng`` when given."""
        self.cells = [EMPTY] * BOARD_CELLS
        if rng is None:
            self.active_player = self.starting_player
        else:
            self.active_player = rng.choice(PLAYERS)
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        status, winner, line = compute_status(self.cells)
        return Snapshot(
            board=tuple(self.cells),
            active_player=self.active_player,
            status=status,
            winner=winner,
            winning_line=line,
        )
