from hidden_car.config import FREE, GameConfig, preset_config
from hidden_car.engine import TurnEngine
from hidden_car.events import LogCategory, LogEvent, StateChanged
from hidden_car.types import Phase, Reason, Role, Status

from tests.helpers import accepted, rejection


def test_new_engine_is_idle_and_rejects_commands():
    engine = TurnEngine()
    assert engine.status is Status.IDLE
    assert rejection(engine.place_searcher((1, 1))) is Reason.WRONG_PHASE_OR_ROLE
    assert rejection(engine.place_evader((0, 0))) is Reason.WRONG_PHASE_OR_ROLE
    assert rejection(engine.select_searcher(0)) is Reason.WRONG_PHASE_OR_ROLE


def test_start_with_searchers_first_enters_setup():
    engine = TurnEngine()
    events = engine.start_game(GameConfig())
    assert isinstance(events[-1], StateChanged)
    state = engine.state
    assert state.status is Status.SETTING_UP
    assert state.phase is Phase.SETUP
    assert state.active_role is Role.SEARCHERS
    assert state.round == 1
    assert state.searchers == (None, None, None)
    assert state.evader is None


def test_setup_places_units_in_index_order():
    engine = TurnEngine()
    engine.start_game(GameConfig())

    assert accepted(engine.place_searcher((1, 1)))
    assert engine.state.searchers == ((1, 1), None, None)
    assert rejection(engine.place_searcher((3, 3), unit_id=2)) is Reason.WRONG_PHASE_OR_ROLE
    assert accepted(engine.place_searcher((7, 1), unit_id=1))
    assert engine.state.status is Status.SETTING_UP

    assert accepted(engine.place_searcher((1, 7)))
    state = engine.state
    assert state.searchers == ((1, 1), (7, 1), (1, 7))
    assert state.phase is Phase.PLAY
    assert state.status is Status.EVADER_TURN
    assert state.active_role is Role.EVADER
    assert state.selected == 0


def test_setup_rejects_building_and_occupied_cells():
    engine = TurnEngine()
    engine.start_game(GameConfig())
    before = engine.state

    assert rejection(engine.place_searcher((2, 2))) is Reason.WRONG_CELL_KIND
    assert engine.state == before

    engine.place_searcher((1, 1))
    assert rejection(engine.place_searcher((1, 1))) is Reason.OCCUPIED
    assert rejection(engine.place_searcher((1, 9))) is Reason.OUT_OF_RANGE


def test_free_placement_order_uses_selected_unit():
    engine = TurnEngine()
    engine.start_game(GameConfig(placement_order=FREE))
    engine.select_searcher(2)
    assert accepted(engine.place_searcher((5, 5)))
    assert engine.state.searchers == (None, None, (5, 5))
    assert accepted(engine.place_searcher((3, 3), unit_id=0))
    assert rejection(engine.place_searcher((7, 7), unit_id=0)) is Reason.UNIT_ALREADY_ACTED


def test_evader_first_has_no_setup_phase():
    engine = TurnEngine()
    engine.start_game(preset_config("classic"))
    state = engine.state
    assert state.status is Status.EVADER_TURN
    assert state.phase is Phase.PLAY
    assert state.searchers == ((1, 1), (7, 1), (1, 7))
    assert rejection(engine.place_searcher((3, 3))) is Reason.WRONG_PHASE_OR_ROLE


def test_start_game_logs_in_configured_language():
    engine = TurnEngine()
    events = engine.start_game(GameConfig(lang="ja"))
    logs = [e for e in events if isinstance(e, LogEvent)]
    assert logs[0].message == "ゲーム開始!"
    assert logs[0].category is LogCategory.SUCCESS


def test_reset_returns_to_idle():
    engine = TurnEngine()
    engine.start_game(GameConfig())
    engine.place_searcher((1, 1))
    engine.reset()
    state = engine.state
    assert state.status is Status.IDLE
    assert state.searchers == (None, None, None)
    assert state.trail == ()


def test_listeners_receive_events_in_order():
    engine = TurnEngine()
    seen = []
    engine.subscribe(seen.append)
    events = engine.start_game(GameConfig())
    assert seen == events
    engine.unsubscribe(seen.append)
    engine.place_searcher((1, 1))
    assert seen == events
