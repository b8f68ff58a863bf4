import pytest

from hidden_car.agents import (
    EvaderSignal,
    RandomEvaderPolicy,
    RandomSearcherAgent,
    build_evader_policy,
    evader_moves_from,
)
from hidden_car.board import Board
from hidden_car.config import GameConfig
from hidden_car.engine import TurnEngine
from hidden_car.types import CellKind, Status

from tests.helpers import build_engine, build_state

BOARD = Board(9)


def test_random_evader_seed_reproducible():
    snapshot = build_state(status=Status.EVADER_TURN, evader=(4, 4), trail=[((4, 4), 1)]).snapshot()
    policy1 = RandomEvaderPolicy(seed=123)
    policy2 = RandomEvaderPolicy(seed=123)

    assert policy1.choose_move(snapshot, BOARD) == policy2.choose_move(snapshot, BOARD)


def test_random_evader_places_on_building():
    snapshot = build_state(status=Status.EVADER_TURN).snapshot()
    for seed in range(10):
        choice = RandomEvaderPolicy(seed=seed).choose_move(snapshot, BOARD)
        assert BOARD.classify(choice) is CellKind.BUILDING


def test_random_evader_moves_are_legal():
    trail = [((2, 4), 1), ((4, 4), 2)]
    snapshot = build_state(status=Status.EVADER_TURN, evader=(4, 4), trail=trail).snapshot()
    legal = evader_moves_from(BOARD, snapshot)
    assert sorted(legal) == [(4, 2), (4, 6), (6, 4)]
    for seed in range(20):
        assert RandomEvaderPolicy(seed=seed).choose_move(snapshot, BOARD) in legal


def test_random_evader_reports_encircled():
    trail = [((0, 2), 1), ((2, 2), 2), ((2, 0), 3), ((0, 0), 4)]
    snapshot = build_state(status=Status.EVADER_TURN, evader=(0, 0), trail=trail).snapshot()
    assert RandomEvaderPolicy(seed=0).choose_move(snapshot, BOARD) is EvaderSignal.ENCIRCLED


def test_build_evader_policy():
    policy = build_evader_policy("random", GameConfig(seed=5))
    assert isinstance(policy, RandomEvaderPolicy)
    with pytest.raises(ValueError):
        build_evader_policy("minimax")


def test_searcher_agent_places_on_free_intersections():
    engine = TurnEngine()
    engine.start_game(GameConfig())
    engine.place_searcher((1, 1))
    action = RandomSearcherAgent(seed=3).choose_action(engine)
    assert action.kind == "place"
    assert action.unit_id == 1
    assert engine.board.classify(action.position) is CellKind.INTERSECTION
    assert action.position != (1, 1)


def test_searcher_agent_picks_first_unacted_unit_and_legal_target():
    engine = build_engine(evader=(4, 4), trail=[((4, 4), 1)], acted={0})
    for seed in range(10):
        action = RandomSearcherAgent(seed=seed).choose_action(engine)
        assert action.unit_id == 1
        if action.kind == "move":
            assert action.position in engine.legal_searcher_moves(1)
        else:
            assert action.kind == "search"
            assert action.position in engine.searchable_buildings(1)


def test_searcher_agent_search_bias_extremes():
    engine = build_engine(evader=(4, 4), trail=[((4, 4), 1)])
    assert RandomSearcherAgent(seed=1, search_bias=1.0).choose_action(engine).kind == "search"
    assert RandomSearcherAgent(seed=1, search_bias=0.0).choose_action(engine).kind == "move"


def test_searcher_agent_rejects_evader_turn():
    engine = build_engine(status=Status.EVADER_TURN, evader=(4, 4), trail=[((4, 4), 1)])
    with pytest.raises(ValueError):
        RandomSearcherAgent(seed=1).choose_action(engine)
    with pytest.raises(ValueError):
        RandomSearcherAgent(search_bias=1.5)
