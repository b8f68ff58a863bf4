from hidden_car.config import GameConfig
from hidden_car.engine import TurnEngine
from hidden_car.events import GameEnded, LogCategory, LogEvent, StateChanged
from hidden_car.types import GameState, Phase, Role, Status

DEFAULT_SEARCHERS = ((1, 1), (7, 1), (1, 7))


def build_state(
    evader=None,
    trail=(),
    searchers=DEFAULT_SEARCHERS,
    status=Status.SEARCHERS_TURN,
    round_no=1,
    acted=(),
    discovered=(),
    selected=0,
) -> GameState:
    """Build a play-phase state. ``trail`` lists (position, round) pairs."""

    state = GameState(status=status, phase=Phase.PLAY)
    state.active_role = Role.EVADER if status is Status.EVADER_TURN else Role.SEARCHERS
    for pos, visited_round in trail:
        state.round = visited_round
        state.add_trail(pos)
    state.round = round_no
    state.evader = evader
    for unit, pos in zip(state.searchers, searchers):
        unit.position = pos
    state.acted = set(acted)
    state.discovered = list(discovered)
    state.selected = selected
    return state


def build_engine(config=None, **kwargs) -> TurnEngine:
    return TurnEngine.from_state(build_state(**kwargs), config or GameConfig())


def rejection(events):
    """Return the reason of a rejected command, asserting it changed nothing."""

    assert len(events) == 1
    event = events[0]
    assert isinstance(event, LogEvent)
    assert event.category is LogCategory.ERROR
    return event.reason


def accepted(events):
    return any(isinstance(e, StateChanged) for e in events)


def game_ended(events):
    return [e for e in events if isinstance(e, GameEnded)]
