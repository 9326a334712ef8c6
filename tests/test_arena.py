import csv
import random
import types

import pytest

import monte_carlo_player
import random_player
from blackhole_arena import load_player, main, play_single_game, run_match
from blackhole_board import BlackHoleBoard


def _module(name, fn):
    mod = types.ModuleType(name)
    mod.choose_move = fn
    return mod


def test_players_return_empty_cells(small_board, play, rng):
    play(small_board, [0, 2])
    assert random_player.choose_move(small_board, rng) in {1, 3, 4}
    assert monte_carlo_player.choose_move(small_board, rng, sims=30) in {1, 3, 4}
    assert small_board.empty_cells() == [1, 3, 4]


def test_monte_carlo_player_rejects_bad_sims(small_board, rng):
    with pytest.raises(ValueError):
        monte_carlo_player.choose_move(small_board, rng, sims=0)


def test_play_single_game_finishes(rng):
    board = BlackHoleBoard()
    result = play_single_game(board, [random_player, random_player], rng)
    assert result.forfeit is None
    assert board.game_over()
    assert result.empty_cell == board.empty_cells()[0]
    assert result.score == board.score() > 0


def test_illegal_move_forfeits(rng, capsys):
    cheat = _module("cheat", lambda board, rng=None: 0)
    board = BlackHoleBoard(num_turns=2)
    result = play_single_game(board, [random_player, cheat], rng)
    # seat 1 plays cell 0 at the latest on its second turn, then repeats it
    assert result.forfeit == 1
    assert "illegal move" in capsys.readouterr().out


def test_out_of_range_move_forfeits(rng, capsys):
    wild = _module("wild", lambda board, rng=None: board.board_size)
    result = play_single_game(BlackHoleBoard(num_turns=2), [wild, random_player], rng)
    assert result.forfeit == 0
    assert result.score is None
    assert "illegal move" in capsys.readouterr().out


def test_crashing_player_forfeits(rng, capsys):
    def boom(board, rng=None):
        raise RuntimeError("boom")

    result = play_single_game(BlackHoleBoard(num_turns=2), [random_player, _module("boom", boom)], rng)
    assert result.forfeit == 1
    assert "RuntimeError" in capsys.readouterr().out


def test_players_cannot_touch_the_real_board(rng):
    def vandal(board, rng=None):
        move = board.pick_random_move(rng)
        board.reset()
        return move

    board = BlackHoleBoard(num_turns=2)
    result = play_single_game(board, [_module("vandal", vandal), random_player], rng)
    assert result.forfeit is None
    assert board.game_over()


def test_run_match_summary(tmp_path, capsys):
    out = tmp_path / "games.csv"
    summary = run_match(
        games=6,
        player1_mod=random_player,
        player2_mod=monte_carlo_player,
        mode="alternate",
        seed=3,
        num_turns=2,
        sims=20,
        csv_path=str(out),
    )
    assert summary["games"] == 6
    assert summary["forfeits"] == {"p1": 0, "p2": 0}
    assert summary["played"] == {"p1": [3, 3], "p2": [3, 3]}
    assert "=== Results ===" in capsys.readouterr().out

    with open(out, newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 6
    assert rows[0]["player0"] == "random_player"
    assert rows[1]["player0"] == "monte_carlo_player"
    assert all(int(r["score"]) > 0 for r in rows)


def test_run_match_is_reproducible():
    a = run_match(4, random_player, random_player, "p1_first", seed=11, num_turns=3)
    b = run_match(4, random_player, random_player, "p1_first", seed=11, num_turns=3)
    assert a == b
    assert a["played"]["p1"] == [4, 0]


def test_run_match_rejects_unknown_mode():
    with pytest.raises(ValueError):
        run_match(1, random_player, random_player, "coin_flip", seed=0)


def test_load_player():
    assert load_player("random_player") is random_player
    with pytest.raises(SystemExit):
        load_player("no_such_player_module")
    with pytest.raises(SystemExit):
        load_player("blackhole_tester")


def test_main_runs(capsys):
    main(["--player1", "random_player", "--player2", "random_player",
          "--games", "2", "--turns", "2", "--seed", "5"])
    assert "Total games          : 2" in capsys.readouterr().out


def test_random_player_draws_only_from_given_rng():
    r1, r2 = random.Random(9), random.Random(9)
    b = BlackHoleBoard()
    assert random_player.choose_move(b, r1) == random_player.choose_move(b, r2)
