# blackhole_tester.py

import argparse
import logging
import random
from typing import Dict, List, Optional, Tuple

from blackhole_board import NEIGHBORS, NUM_TURNS, BlackHoleBoard, coords_of, index_of

Coord = Tuple[int, int]


# ----------------------------------------
# Independent geometry (brute force)
# ----------------------------------------

def cell_coords(board_size: int) -> List[Coord]:
    """(col, row) of every cell, built by walking rows instead of inverting i."""
    out: List[Coord] = []
    row = 0
    while len(out) < board_size:
        for col in range(row + 1):
            if len(out) == board_size:
                break
            out.append((col, row))
        row += 1
    return out


def adjacency_bruteforce(board_size: int) -> Dict[int, List[int]]:
    """Compare every pair of cells: j is next to i iff their offset is in NEIGHBORS."""
    coords = cell_coords(board_size)
    offsets = set(NEIGHBORS)
    adj: Dict[int, List[int]] = {i: [] for i in range(board_size)}
    for i, (ci, ri) in enumerate(coords):
        for j, (cj, rj) in enumerate(coords):
            if (cj - ci, rj - ri) in offsets:
                adj[i].append(j)
    return adj


def reference_score(board_size: int, moves: List[int]) -> Optional[int]:
    """
    Replay `moves` without the engine and score the result.
    Returns None unless exactly one cell is left empty.
    """
    values: Dict[int, int] = {}
    next_value = [1, 1]
    for k, i in enumerate(moves):
        if not 0 <= i < board_size or i in values:
            raise ValueError(f"Invalid move {k + 1}: {i}")
        p = k % 2
        values[i] = next_value[p]
        next_value[p] += 1

    empty = [i for i in range(board_size) if i not in values]
    if len(empty) != 1:
        return None
    return sum(values[j] for j in adjacency_bruteforce(board_size)[empty[0]] if j in values)


# -------------------------------------------------------
# Generators
# -------------------------------------------------------

def generate_full_game(board_size: int, rng: random.Random) -> List[int]:
    """A random order of all cells but one."""
    cells = list(range(board_size))
    rng.shuffle(cells)
    return cells[:-1]


def generate_partial_game(board_size: int, rng: random.Random) -> List[int]:
    """A random game stopped with at least two cells still empty."""
    cells = list(range(board_size))
    rng.shuffle(cells)
    return cells[:rng.randrange(0, board_size - 1)]


# -----------------------------------------
# Batch runner with cross-verification
# -----------------------------------------

def check_round_trip(board_size: int) -> int:
    bad = 0
    walked = cell_coords(board_size)
    for i in range(board_size):
        c = coords_of(i)
        if index_of(c.col, c.row) != i or (c.col, c.row) != walked[i]:
            print(f"[RoundTrip] MISMATCH  i={i}  coords={c}")
            bad += 1
    return bad


def run_suite(
    num_turns: int,
    count_full: int,
    count_partial: int,
    seed: Optional[int] = None,
) -> int:
    """Returns the number of mismatches."""
    rng = random.Random(seed)
    board = BlackHoleBoard(num_turns)
    total = 0
    mismatches = check_round_trip(board.board_size)

    def check_case(label: str, moves: List[int]) -> None:
        nonlocal total, mismatches
        total += 1
        board.reset()
        for i in moves:
            board.set_value(i)
        bb = board.score() if board.game_over() else None
        ref = reference_score(board.board_size, moves)
        ok = bb == ref

        status = "OK" if ok else "MISMATCH"
        print(f"[{label}] {status}  moves={len(moves)}  engine={bb}  ref={ref}")
        if not ok:
            mismatches += 1
            print("  Moves:", moves)

    for _ in range(count_full):
        check_case("Full", generate_full_game(board.board_size, rng))

    for _ in range(count_partial):
        check_case("Partial", generate_partial_game(board.board_size, rng))

    print(f"\nSummary: {total} cases, {mismatches} mismatches.")
    return mismatches


# ------------------------
# CLI entry point
# ------------------------

def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(description="Black Hole score verifier")
    p.add_argument("--turns", type=int, default=NUM_TURNS, help=f"Turns per player (default: {NUM_TURNS})")
    p.add_argument("--full", type=int, default=20, help="# finished games (default: 20)")
    p.add_argument("--partial", type=int, default=5, help="# unfinished games (default: 5)")
    p.add_argument("--seed", type=int, default=42, help="RNG seed for reproducibility (default: 42)")
    p.add_argument("--verbose", action="store_true", help="debug logging")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if run_suite(args.turns, args.full, args.partial, args.seed) > 0:
        raise SystemExit(1)


if __name__ == "__main__":
    main()

# run with: python3 blackhole_tester.py --turns 10 --full 50 --partial 10 --seed 123
