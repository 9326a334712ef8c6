"""
Shared pytest fixtures for the Black Hole tests.

The engine is a set of top-level modules, so the repository root is put on
sys.path for runs that have not installed the project.
"""

import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blackhole_board import BlackHoleBoard  # noqa: E402


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def board() -> BlackHoleBoard:
    return BlackHoleBoard()


@pytest.fixture
def small_board() -> BlackHoleBoard:
    """Five-cell board (two turns each)."""
    return BlackHoleBoard(num_turns=2)


@pytest.fixture
def play():
    """play(board, moves) applies the moves in order and returns the board."""
    def _play(board: BlackHoleBoard, moves) -> BlackHoleBoard:
        for i in moves:
            board.set_value(i)
        return board
    return _play
