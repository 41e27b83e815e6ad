"""Tests for the match driver and results logging."""

import csv

import numpy as np
import pytest

from connectfour.agents import AlphaBetaAgent, BaseAgent, GreedyAgent, RandomAgent
from connectfour.games.connect4 import MARK_A, Grid, Outcome
from connectfour.utils import MatchResult, MetricsLogger, play_game, play_match


class _ScriptedAgent(BaseAgent):
    def __init__(self, columns):
        self.columns = list(columns)
        self.resets = 0

    def reset(self) -> None:
        self.resets += 1

    def choose(self, grid, mark):
        return self.columns.pop(0)


def test_play_game_alternates_and_stops_on_win():
    agent1 = _ScriptedAgent([0, 1, 2, 3])
    agent2 = _ScriptedAgent([0, 1, 2])
    record = play_game(agent1, agent2)

    assert record.outcome is Outcome.WIN_A
    assert record.moves == [0, 0, 1, 1, 2, 2, 3]
    assert record.grid.query(0, 3) == MARK_A
    assert agent1.resets == 1
    assert agent2.resets == 1


def test_play_game_random_agents_reach_terminal_state():
    rng = np.random.default_rng(0)
    record = play_game(RandomAgent(rng=rng), RandomAgent(rng=rng))
    assert record.outcome.is_terminal
    assert len(record.moves) == int(record.grid.heights.sum())


def test_play_game_calls_render_after_each_move():
    seen = []
    play_game(_ScriptedAgent([0, 1, 2, 3]), _ScriptedAgent([0, 1, 2]), render=lambda grid: seen.append(grid.copy()))
    assert len(seen) == 7
    assert int(seen[0].heights.sum()) == 1


def test_match_tallies_every_game():
    rng = np.random.default_rng(1)
    result = play_match(GreedyAgent(rng=rng), RandomAgent(rng=rng), num_games=12)
    assert result.games == 12
    assert result.wins + result.losses + result.draws == 12
    assert result.elapsed_ms >= 0.0


def test_search_beats_random():
    rng = np.random.default_rng(2)
    result = play_match(AlphaBetaAgent(depth=3, rng=rng), RandomAgent(rng=rng), num_games=4)
    assert result.wins >= 3


def test_draw_counted_once(almost_draw_grid):
    rng = np.random.default_rng(3)
    result = play_match(
        RandomAgent(rng=rng),
        RandomAgent(rng=rng),
        num_games=1,
        grid_factory=almost_draw_grid.copy,
    )
    assert (result.wins, result.losses, result.draws) == (0, 0, 1)
    assert result.summary() == "0 0 1"


def test_match_result_rejects_unfinished_game():
    with pytest.raises(ValueError):
        MatchResult().record(Outcome.IN_PROGRESS)


def test_match_requires_games():
    with pytest.raises(ValueError):
        play_match(RandomAgent(), RandomAgent(), num_games=0)


def test_render_prints_boards_and_tally(capsys):
    play_match(_ScriptedAgent([0, 1, 2, 3]), _ScriptedAgent([0, 1, 2]), num_games=1, render=True)
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "1 0 0"
    assert out[-3] == "oooo..."
    # Each board is six rows followed by a blank line.
    assert len(out) == 7 * 7 + 1


def test_metrics_logger_writes_one_row_per_game(tmp_path):
    rng = np.random.default_rng(4)
    with MetricsLogger(str(tmp_path)) as metrics:
        result = play_match(GreedyAgent(rng=rng), GreedyAgent(rng=rng), num_games=3, metrics=metrics)

    with open(metrics.csv_path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [int(row["step"]) for row in rows] == [0, 1, 2]
    last = rows[-1]
    assert (int(last["wins"]), int(last["losses"]), int(last["draws"])) == (
        result.wins,
        result.losses,
        result.draws,
    )
    assert len(metrics.get_metric("outcome")) == 3
    assert metrics.current_episode == 3


def test_metrics_logger_rejects_unknown_field(tmp_path):
    with MetricsLogger(str(tmp_path)) as metrics:
        with pytest.raises(KeyError):
            metrics.log_dict({"elo": 1200})
