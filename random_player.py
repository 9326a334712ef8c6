# random_player.py
# A minimal Black Hole "AI": choose_move(board, rng) -> cell index

import random

from blackhole_board import BlackHoleBoard


def choose_move(board: BlackHoleBoard, rng: random.Random | None = None) -> int:
    """Return a random empty cell.
    Parameters
    ----------
    board  : position to move from (not modified)
    rng    : optional random.Random instance for reproducibility
    """
    return board.pick_random_move(rng)
