# blackhole_arena.py

import argparse
import csv
import importlib
import inspect
import logging
import random
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Dict, List, Optional

from blackhole_board import NUM_TURNS, BlackHoleBoard

logger = logging.getLogger(__name__)

CSV_FIELDS = ["game", "player0", "player1", "empty_cell", "score", "forfeit"]


def load_player(module_name: str) -> ModuleType:
    """Dynamically import a player module by name."""
    try:
        mod = importlib.import_module(module_name)
    except ImportError as e:
        raise SystemExit(f"Cannot import player module '{module_name}': {e}")
    if not hasattr(mod, "choose_move"):
        raise SystemExit(f"Player module '{module_name}' lacks a choose_move() function.")
    return mod


def _call_choose_move(mod: ModuleType, board: BlackHoleBoard, rng: random.Random, sims: Optional[int]) -> int:
    """
    Call mod.choose_move with compatible args.
    (board, rng) always go positionally; sims only if the function accepts it.
    """
    fn = mod.choose_move
    kwargs: Dict[str, Any] = {}
    if sims is not None and "sims" in inspect.signature(fn).parameters:
        kwargs["sims"] = sims
    return fn(board, rng, **kwargs)


@dataclass
class GameResult:
    empty_cell: Optional[int]   # None when the game was forfeited
    score: Optional[int]
    forfeit: Optional[int]      # seat (0/1) that forfeited, or None


# -----------------------------------------------------------
# One complete game between two black-box player mods
# -----------------------------------------------------------

def play_single_game(
    board: BlackHoleBoard,
    seat_mods: List[ModuleType],
    rng: random.Random,
    sims: Optional[int] = None,
) -> GameResult:
    """Play `board` from its reset state to the end. seat_mods[0] moves first."""
    board.reset()
    view = BlackHoleBoard(board.num_turns)

    while not board.game_over():
        seat = board.current_player()
        view.copy_state_from(board)     # players get a copy, never the real board
        try:
            move = _call_choose_move(seat_mods[seat], view, rng, sims)
        except Exception as err:        # crash = forfeit
            print(f"⚠️  seat {seat} program raised {err.__class__.__name__}: {err}")
            return GameResult(None, None, seat)

        # basic legality check
        if not isinstance(move, int) or not 0 <= move < board.board_size or board.tiles[move] is not None:
            print(f"⚠️  seat {seat} played illegal move {move!r}. Game forfeited.")
            return GameResult(None, None, seat)

        board.set_value(move)

    empty = board.empty_cells()[0]
    return GameResult(empty, board.score(), None)


# -----------------------------------------------------------
# Match runner
# -----------------------------------------------------------

def run_match(
    games: int,
    player1_mod: ModuleType,
    player2_mod: ModuleType,
    mode: str,
    seed: int,
    num_turns: int = NUM_TURNS,
    sims: Optional[int] = None,
    csv_path: Optional[str] = None,
) -> Dict[str, Any]:
    rng = random.Random(seed)
    board = BlackHoleBoard(num_turns)

    # score totals per player per seat; forfeits per player
    totals = {"p1": [0, 0], "p2": [0, 0]}
    played = {"p1": [0, 0], "p2": [0, 0]}
    forfeits = {"p1": 0, "p2": 0}

    writer = None
    fh = None
    if csv_path:
        fh = open(csv_path, "w", newline="")
        writer = csv.DictWriter(fh, fieldnames=CSV_FIELDS)
        writer.writeheader()

    try:
        for g in range(1, games + 1):
            # decide seats
            if mode == "p1_first":
                p1_seat = 0
            elif mode == "p2_first":
                p1_seat = 1
            elif mode == "alternate":
                p1_seat = 0 if g % 2 == 1 else 1
            else:
                raise ValueError("mode must be one of: p1_first, p2_first, alternate")
            names = ["p1", "p2"] if p1_seat == 0 else ["p2", "p1"]
            mods = [player1_mod, player2_mod] if p1_seat == 0 else [player2_mod, player1_mod]

            result = play_single_game(board, mods, rng, sims)
            logger.debug("game %d: %s", g, result)

            # bookkeeping
            if result.forfeit is not None:
                forfeits[names[result.forfeit]] += 1
            else:
                for seat, name in enumerate(names):
                    totals[name][seat] += result.score
                    played[name][seat] += 1

            if writer is not None:
                writer.writerow({
                    "game": g,
                    "player0": player1_mod.__name__ if p1_seat == 0 else player2_mod.__name__,
                    "player1": player2_mod.__name__ if p1_seat == 0 else player1_mod.__name__,
                    "empty_cell": "" if result.empty_cell is None else result.empty_cell,
                    "score": "" if result.score is None else result.score,
                    "forfeit": "" if result.forfeit is None else result.forfeit,
                })
    finally:
        if fh is not None:
            fh.close()

    def mean(name: str, seat: int) -> Optional[float]:
        n = played[name][seat]
        return totals[name][seat] / n if n else None

    summary = {
        "games": games,
        "forfeits": forfeits,
        "played": played,
        "mean_score": {name: [mean(name, 0), mean(name, 1)] for name in ("p1", "p2")},
    }

    # ------------------  report  ------------------
    def fmt(x: Optional[float]) -> str:
        return "-" if x is None else f"{x:.2f}"

    print("\n=== Results ===")
    print(f"Total games          : {games}")
    print(f"Forfeits             : p1 {forfeits['p1']}, p2 {forfeits['p2']}")
    print("----- mean final score by seat -----")
    print(f"Player1 moving first : {fmt(mean('p1', 0))} over {played['p1'][0]}")
    print(f"Player1 moving second: {fmt(mean('p1', 1))} over {played['p1'][1]}")
    print(f"Player2 moving first : {fmt(mean('p2', 0))} over {played['p2'][0]}")
    print(f"Player2 moving second: {fmt(mean('p2', 1))} over {played['p2'][1]}")
    if csv_path:
        print(f"Wrote: {csv_path}")

    return summary


# -----------------------------------------------------------
# Command-line interface
# -----------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Black Hole arena: pit two black-box players against each other")
    ap.add_argument("--player1", required=True, help="module name for player 1 (importable)")
    ap.add_argument("--player2", required=True, help="module name for player 2 (importable)")
    ap.add_argument("--turns", type=int, default=NUM_TURNS, help="turns per player (board has 2*turns+1 cells)")
    ap.add_argument("--games", type=int, default=100, help="number of games to play")
    ap.add_argument("--mode", choices=["p1_first", "p2_first", "alternate"],
                    default="alternate", help="who moves first")
    ap.add_argument("--sims", type=int, default=None, help="playouts per move for players that take 'sims'")
    ap.add_argument("--seed", type=int, default=42, help="RNG seed for reproducibility")
    ap.add_argument("--csv", default=None, help="write one row per game to this file")
    ap.add_argument("--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    p1 = load_player(args.player1)
    p2 = load_player(args.player2)

    run_match(
        games=args.games,
        player1_mod=p1,
        player2_mod=p2,
        mode=args.mode,
        seed=args.seed,
        num_turns=args.turns,
        sims=args.sims,
        csv_path=args.csv,
    )


if __name__ == "__main__":
    main()

# run with: python3 blackhole_arena.py --player1 random_player --player2 monte_carlo_player --games 20 --sims 200 --seed 42
