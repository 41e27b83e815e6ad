"""Tests for negamax and alpha-beta search."""

import logging

import numpy as np
import pytest

from connectfour.agents import AlphaBetaAgent, NegamaxAgent
from connectfour.errors import InvalidConfigurationError
from connectfour.games.connect4 import MARK_A, MARK_B, Grid
from connectfour.search import minimax_policy
from connectfour.search import (
    INF,
    AlphaBetaPolicy,
    NegamaxPolicy,
    SearchConfig,
    center_out_order,
    is_terminal_score,
)

SEARCH_AGENTS = [NegamaxAgent, AlphaBetaAgent]


def _random_position(rng: np.random.Generator, max_moves: int = 14) -> Grid:
    """Random non-terminal position reached by legal play."""
    while True:
        grid = Grid()
        mark = MARK_A
        for _ in range(int(rng.integers(0, max_moves))):
            grid.place(int(rng.choice(grid.legal_columns())), mark)
            mark = -mark
            if grid.terminal_status().is_terminal:
                break
        if not grid.terminal_status().is_terminal:
            return grid


def _side_to_move(grid: Grid) -> int:
    return MARK_A if int(grid.heights.sum()) % 2 == 0 else MARK_B


@pytest.mark.parametrize("agent_cls", SEARCH_AGENTS)
def test_depth_one_prefers_center_on_empty_board(agent_cls):
    for seed in range(5):
        agent = agent_cls(depth=1, rng=np.random.default_rng(seed))
        assert agent.choose(Grid(), MARK_A) == 3


def test_depth_one_counts_one_node_per_column():
    agent = NegamaxAgent(depth=1, rng=np.random.default_rng(0))
    agent.choose(Grid(), MARK_A)
    assert agent.nodes == 7


@pytest.mark.parametrize("agent_cls", SEARCH_AGENTS)
@pytest.mark.parametrize("depth", [1, 3])
def test_takes_immediate_win(agent_cls, depth):
    grid = Grid.from_moves([0, 0, 1, 1, 2, 2])
    agent = agent_cls(depth=depth, rng=np.random.default_rng(1))
    assert agent.choose(grid, MARK_A) == 3


@pytest.mark.parametrize("agent_cls", SEARCH_AGENTS)
def test_takes_immediate_win_as_mark_b(agent_cls):
    grid = Grid.from_moves([0, 0, 1, 1, 2, 2], first=MARK_B)
    agent = agent_cls(depth=2, rng=np.random.default_rng(1))
    assert agent.choose(grid, MARK_B) == 3


@pytest.mark.parametrize("agent_cls", SEARCH_AGENTS)
def test_blocks_opponent_threat(agent_cls):
    # MARK_B holds the bottom of columns 0-2; MARK_A must take column 3.
    grid = Grid.from_moves([6, 0, 6, 1, 5, 2])
    agent = agent_cls(depth=2, rng=np.random.default_rng(2))
    assert agent.choose(grid, MARK_A) == 3


@pytest.mark.parametrize("agent_cls", SEARCH_AGENTS)
@pytest.mark.parametrize("depth", [1, 2, 3])
def test_search_leaves_grid_unchanged(agent_cls, depth):
    rng = np.random.default_rng(depth)
    for _ in range(5):
        grid = _random_position(rng)
        before = grid.copy()
        mark = _side_to_move(grid)
        col = agent_cls(depth=depth, rng=rng).choose(grid, mark)
        assert grid == before
        assert grid.is_legal(col)


def test_alphabeta_matches_negamax_score():
    rng = np.random.default_rng(11)
    for _ in range(10):
        grid = _random_position(rng)
        mark = _side_to_move(grid)
        for depth in (1, 2, 3):
            plain = NegamaxPolicy(SearchConfig(depth=depth)).search_score(grid, mark)
            pruned = AlphaBetaPolicy(SearchConfig(depth=depth)).search_score(grid, mark)
            assert np.sign(plain) == np.sign(pruned)
            assert is_terminal_score(plain) == is_terminal_score(pruned)


def test_alphabeta_visits_fewer_nodes():
    plain = NegamaxAgent(depth=4, rng=np.random.default_rng(0))
    pruned = AlphaBetaAgent(depth=4, rng=np.random.default_rng(0))
    plain.choose(Grid(), MARK_A)
    pruned.choose(Grid(), MARK_A)
    assert 0 < pruned.nodes < plain.nodes


def test_nodes_accumulate_and_reset():
    policy = NegamaxPolicy(SearchConfig(depth=1))
    policy.select_column(Grid(), MARK_A)
    policy.select_column(Grid(), MARK_B)
    assert policy.nodes == 14
    policy.reset_nodes()
    assert policy.nodes == 0


def test_center_out_order():
    assert center_out_order(7) == [3, 2, 4, 1, 5, 0, 6]
    assert center_out_order(6) == [2, 3, 1, 4, 0, 5]


def test_beta_cutoff_keeps_scored_column():
    # A window no score can stay inside: the first column scored triggers the cut.
    policy = AlphaBetaPolicy(SearchConfig(depth=1))
    scores = policy._scan(Grid(), 1, alpha=-4 * INF, beta=-4 * INF)
    assert scores == {3: 7}
    assert policy.nodes == 1


def test_prefers_faster_win():
    # MARK_A can win now in column 3, or later; depth 3 must still pick the immediate win.
    grid = Grid.from_moves([0, 0, 1, 1, 2, 2])
    policy = NegamaxPolicy(SearchConfig(depth=3), rng=np.random.default_rng(0))
    assert policy.search_score(grid, MARK_A) == INF + 35


@pytest.mark.parametrize("agent_cls", SEARCH_AGENTS)
def test_invalid_depth(agent_cls):
    with pytest.raises(InvalidConfigurationError):
        agent_cls(depth=0)
    with pytest.raises(InvalidConfigurationError):
        agent_cls(depth=-2)


@pytest.mark.parametrize("agent_cls", SEARCH_AGENTS)
def test_full_board_has_no_move(agent_cls, draw_grid):
    with pytest.raises(ValueError):
        agent_cls(depth=2).choose(draw_grid, MARK_A)


@pytest.mark.parametrize("policy_cls", [NegamaxPolicy, AlphaBetaPolicy])
def test_search_restores_grid_on_error(policy_cls, monkeypatch):
    # Fail at the first leaf of a MARK_B search: board flipped, three pieces placed.
    grid = Grid.from_moves([3, 3, 2])
    before = grid.copy()
    leaf_height = int(before.heights.sum()) + 3
    real_evaluate = minimax_policy.evaluate
    calls = []

    def failing_evaluate(g):
        calls.append(int(g.heights.sum()))
        if calls[-1] == leaf_height:
            raise RuntimeError("evaluation failed")
        return real_evaluate(g)

    monkeypatch.setattr(minimax_policy, "evaluate", failing_evaluate)
    with pytest.raises(RuntimeError):
        policy_cls(SearchConfig(depth=3)).select_column(grid, MARK_B)

    assert calls[-1] == leaf_height
    assert grid == before
    assert np.array_equal(grid.board, before.board)
    assert np.array_equal(grid.heights, before.heights)


def test_search_rejects_invalid_mark():
    grid = Grid.from_moves([3, 3, 2])
    before = grid.copy()
    with pytest.raises(ValueError):
        NegamaxPolicy(SearchConfig(depth=2)).select_column(grid, 0)
    assert grid == before


def test_root_scores_logged_at_debug(caplog):
    grid = Grid.from_moves([0, 0, 1, 1, 2, 2])
    with caplog.at_level(logging.DEBUG, logger="connectfour.search.minimax_policy"):
        assert NegamaxPolicy(SearchConfig(depth=1)).select_column(grid, MARK_A) == 3
    assert f"3: {INF + 35}" in caplog.text
    assert "best [3]" in caplog.text
