import pytest

from hidden_car import runner
from hidden_car.board import Board
from hidden_car.config import GameConfig, preset_config
from hidden_car.types import EndReason, Role

from tests.helpers import build_state


def test_play_game_is_reproducible():
    first = runner.play_game(GameConfig(seed=42))
    second = runner.play_game(GameConfig(seed=42))
    assert first == second
    assert first.winner in (Role.EVADER, Role.SEARCHERS)
    assert isinstance(first.reason, EndReason)
    assert 1 <= first.rounds <= 11
    assert first.discovered <= first.trail_length


def test_play_game_on_classic_rules():
    summary = runner.play_game(preset_config("classic").with_overrides(seed=7, round_limit=3))
    assert summary.rounds <= 3
    if summary.winner is Role.EVADER:
        assert summary.reason is EndReason.ROUND_LIMIT_EXCEEDED


def test_format_board_hides_evader_unless_revealed():
    state = build_state(evader=(2, 2), trail=[((0, 0), 1), ((2, 2), 2)], discovered=[(0, 0)])
    snapshot = state.snapshot()
    board = Board(9)

    hidden = runner.format_board(snapshot, board)
    assert "EV" not in hidden
    assert "t2" not in hidden
    assert "H1" in hidden and "H2" in hidden and "H3" in hidden
    assert hidden.splitlines()[1].split()[1] == "1"

    shown = runner.format_board(snapshot, board, reveal=True)
    assert "EV" in shown


def test_main_prints_score(capsys):
    runner.main(["--games", "2", "--seed", "3", "--preset", "hop"])
    out = capsys.readouterr().out
    assert "Game 1:" in out
    assert "Game 2:" in out
    assert out.strip().splitlines()[-1].startswith("Evader ")


def test_main_rejects_bad_configuration(capsys):
    with pytest.raises(SystemExit) as exc:
        runner.main(["--size", "8"])
    assert exc.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().out
