# monte_carlo_player.py
#
# Strategy:
#   1. Play m random games to the end from the current position.
#   2. Group the final scores by the first move of each game.
#   3. Play the first move with the highest mean final score.
#
# m defaults to BLACKHOLE_MC_SIMS from the environment (2000 if unset).

import os
import random

from blackhole_board import NUM_GAMES_TO_SIMULATE, BlackHoleBoard

_SIMS = int(os.environ.get("BLACKHOLE_MC_SIMS", str(NUM_GAMES_TO_SIMULATE)))


def choose_move(board: BlackHoleBoard, rng: random.Random | None = None, sims: int | None = None) -> int:
    """
    Parameters
    ----------
    board  : position to move from (not modified)
    rng    : optional random.Random instance supplied by the arena
    sims   : playouts to run; falls back to BLACKHOLE_MC_SIMS
    """
    if sims is None:
        sims = _SIMS
    if sims <= 0:
        raise ValueError("Number of simulations is not positive.")
    return board.pick_move(rng, num_games=sims)
