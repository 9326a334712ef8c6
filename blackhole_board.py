# blackhole_board.py
#
# Board engine for Black Hole: two players alternately drop numbered tiles on a
# triangular board of 2*NUM_TURNS + 1 cells. When exactly one cell is left
# empty the game is over and the score is the sum of the tiles touching it.
#
# The board is stored as a flat list. Cell i lives at (col, row) with
# 0 <= col <= row, rows filled left to right, top to bottom:
#
#              0
#            1   2
#          3   4   5
#        6   7   8   9
#     10  11  12  13  14
#   15  16  17  18  19  20

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# The number of turns each player takes.
NUM_TURNS = 10
# Each player fills NUM_TURNS cells and one cell is left over.
BOARD_SIZE = NUM_TURNS * 2 + 1
# (dcol, drow) of the six neighbors on the triangular grid, in scoring order.
NEIGHBORS: Tuple[Tuple[int, int], ...] = ((-1, -1), (0, -1), (-1, 0), (1, 0), (0, 1), (1, 1))
# Playouts per pick_move() call.
NUM_GAMES_TO_SIMULATE = 2000

_LOG_EVERY = 500


# -------------------------------
# Errors
# -------------------------------

class BlackHoleError(Exception):
    """Base class for engine precondition failures."""


class IndexOutOfRange(BlackHoleError, IndexError):
    pass


class CellOccupied(BlackHoleError, ValueError):
    pass


class NoEmptyCells(BlackHoleError, ValueError):
    pass


# -------------------------------
# Values
# -------------------------------

@dataclass(frozen=True)
class Tile:
    owner: int   # 0 or 1
    value: int   # the owner's move number when the tile was placed (1-based)


class Coordinates(NamedTuple):
    col: int
    row: int


def index_of(col: int, row: int) -> int:
    """Flat index of (col, row). Requires 0 <= col <= row."""
    if row < 0 or col < 0 or col > row:
        raise IndexOutOfRange(f"Invalid coordinates: {(col, row)}")
    return col + row * (row + 1) // 2


def coords_of(i: int) -> Coordinates:
    """Inverse of index_of().

    The row is the triangular root of i,
    floor((sqrt(8i + 1) - 1) / 2), computed with an integer square root so it
    is exact for every index. The column is whatever is left after the cells
    of the previous rows.
    """
    if i < 0:
        raise IndexOutOfRange(f"Negative cell index: {i}")
    row = (math.isqrt(8 * i + 1) - 1) // 2
    col = i - row * (row + 1) // 2
    return Coordinates(col, row)


# -------------------------------
# Board
# -------------------------------

class BlackHoleBoard:
    """
    State of one game: the cells, whose turn it is and the value each player
    will place next. Player 0 moves first.
    """

    def __init__(self, num_turns: int = NUM_TURNS):
        if num_turns <= 0:
            raise ValueError("Number of turns must be a positive integer.")
        self.num_turns = num_turns
        self.board_size = num_turns * 2 + 1
        self._cells: List[Optional[Tile]] = [None] * self.board_size
        self._current_player = 0
        self._next_move = [1, 1]

    def __repr__(self) -> str:
        return (f"BlackHoleBoard(num_turns={self.num_turns}, "
                f"current_player={self._current_player}, "
                f"empty={len(self.empty_cells())})")

    # ---- plumbing ----

    def reset(self) -> None:
        """Clear the board so the instance can be reused for a new game."""
        self._current_player = 0
        self._next_move[0] = 1
        self._next_move[1] = 1
        for i in range(self.board_size):
            self._cells[i] = None

    def copy_state_from(self, other: "BlackHoleBoard") -> None:
        """
        Overwrite this board with the state of `other`.

        Tiles are immutable, so copying the cell list is enough to make the
        two boards independent. Used to rewind a scratch board between
        playouts without allocating a new one.
        """
        self.num_turns = other.num_turns
        self.board_size = other.board_size
        self._cells[:] = other._cells
        self._current_player = other._current_player
        self._next_move[:] = other._next_move

    # ---- queries ----

    @property
    def tiles(self) -> Tuple[Optional[Tile], ...]:
        return tuple(self._cells)

    def current_player(self) -> int:
        return self._current_player

    def current_player_value(self) -> int:
        """The value the current player would place if they moved now."""
        return self._next_move[self._current_player]

    def empty_cells(self) -> List[int]:
        return [i for i, t in enumerate(self._cells) if t is None]

    def game_over(self) -> bool:
        """True iff exactly one cell is empty."""
        empty = 0
        for t in self._cells:
            if t is None:
                empty += 1
                if empty > 1:
                    return False
        return empty == 1

    def tile_at(self, col: int, row: int) -> Optional[Tile]:
        """Tile at (col, row), or None if the cell is empty or off the board."""
        if row < 0 or col < 0 or col > row:
            return None
        idx = index_of(col, row)
        if idx >= self.board_size:
            return None
        return self._cells[idx]

    def neighbors(self, coords: Tuple[int, int]) -> List[Tile]:
        """Occupied cells around `coords`, in NEIGHBORS order."""
        col, row = coords
        result: List[Tile] = []
        for dc, dr in NEIGHBORS:
            t = self.tile_at(col + dc, row + dr)
            if t is not None:
                result.append(t)
        return result

    def score(self) -> int:
        """
        Sum of the values of every tile around the last empty cell.
        Tiles of both players count positively. Returns 0 while the game
        is still running.
        """
        if not self.game_over():
            return 0
        empty_idx = self._cells.index(None)
        return sum(t.value for t in self.neighbors(coords_of(empty_idx)))

    def to_array(self) -> np.ndarray:
        """2 x board_size int array: [owner + 1 (0 = empty), tile value]."""
        a = np.zeros((2, self.board_size), dtype=np.int64)
        for i, t in enumerate(self._cells):
            if t is not None:
                a[0, i] = t.owner + 1
                a[1, i] = t.value
        return a

    # ---- mutation ----

    def set_value(self, i: int) -> None:
        """Play the current player's next tile at cell i and pass the turn."""
        if not 0 <= i < self.board_size:
            raise IndexOutOfRange(f"Cell {i} is outside the board (size {self.board_size}).")
        if self._cells[i] is not None:
            raise CellOccupied(f"Cell {i} is already occupied by {self._cells[i]}.")
        p = self._current_player
        self._cells[i] = Tile(p, self._next_move[p])
        self._next_move[p] += 1
        self._current_player = (p + 1) % 2

    # ---- players ----

    def pick_random_move(self, rng: Optional[random.Random] = None) -> int:
        """Uniformly random empty cell."""
        if rng is None:
            rng = random.Random()
        available = self.empty_cells()
        if not available:
            raise NoEmptyCells("Board is full - no empty cells remain.")
        return rng.choice(available)

    def pick_move(
        self,
        rng: Optional[random.Random] = None,
        num_games: int = NUM_GAMES_TO_SIMULATE,
    ) -> int:
        """
        Monte Carlo move choice for the current player.

        Plays `num_games` random games from the current position and returns
        the first move whose playouts have the highest mean final score
        (integer mean, truncated toward zero). Ties go to the lowest index.
        On a finished board the only empty cell is returned.
        """
        if rng is None:
            rng = random.Random()
        if self.game_over():
            return self.empty_cells()[0]

        stats = simulate(self, rng, num_games)
        best_move, best_avg = stats.best()
        logger.debug("pick_move: player %d plays %d (mean score %d over %d playouts)",
                     self._current_player, best_move, best_avg, int(stats.counts[best_move]))
        return best_move


# -------------------------------
# Monte Carlo playouts
# -------------------------------

@dataclass
class PlayoutStats:
    """Score totals of finished playouts, indexed by each playout's first move."""
    sums: np.ndarray
    counts: np.ndarray

    def candidates(self) -> List[int]:
        return [int(i) for i in np.flatnonzero(self.counts)]

    def mean(self, move: int) -> int:
        s, n = int(self.sums[move]), int(self.counts[move])
        q = abs(s) // n
        return q if s >= 0 else -q

    def best(self) -> Tuple[int, int]:
        """(move, mean) with the strictly greatest mean; earliest index wins ties."""
        best_move = -1
        best_avg = -math.inf
        for move in self.candidates():
            avg = self.mean(move)
            if avg > best_avg:
                best_avg = avg
                best_move = move
        if best_move < 0:
            raise NoEmptyCells("No playout made a move.")
        return best_move, int(best_avg)


def simulate(board: BlackHoleBoard, rng: random.Random, num_games: int) -> PlayoutStats:
    """
    Run `num_games` uniformly random playouts from `board` to the end of the
    game and total their final scores per first move. `board` is only read.
    """
    if num_games <= 0:
        raise ValueError("Number of simulations is not positive.")

    sums = np.zeros(board.board_size, dtype=np.int64)
    counts = np.zeros(board.board_size, dtype=np.int64)

    # one scratch board, rewound from `board` after every playout
    scratch = BlackHoleBoard(board.num_turns)
    scratch.copy_state_from(board)
    for rep in range(num_games):
        if rep % _LOG_EVERY == 0:
            logger.debug("Running sim #%d", rep)
        first_move: Optional[int] = None
        while not scratch.game_over():
            move = scratch.pick_random_move(rng)
            if first_move is None:
                first_move = move
            scratch.set_value(move)

        if first_move is not None:
            sums[first_move] += scratch.score()
            counts[first_move] += 1

        scratch.copy_state_from(board)

    return PlayoutStats(sums, counts)
