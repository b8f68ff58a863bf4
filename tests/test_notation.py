import pytest

from hidden_car.notation import from_square, parse_command_text, to_square


def test_square_conversion():
    assert to_square((0, 0)) == "A1"
    assert to_square((2, 4)) == "C5"
    assert from_square("c5") == (2, 4)
    assert from_square(" H2 ") == (7, 1)
    assert from_square(to_square((8, 8)), size=9) == (8, 8)


@pytest.mark.parametrize("bad", ["", "1A", "A0", "AA1", "A123", "?3"])
def test_invalid_squares(bad):
    with pytest.raises(ValueError):
        from_square(bad)


def test_square_outside_grid():
    with pytest.raises(ValueError):
        from_square("J1", size=9)
    with pytest.raises(ValueError):
        from_square("A10", size=9)
    with pytest.raises(ValueError):
        to_square((-1, 0))


def test_parse_commands():
    cmd = parse_command_text("place 2 d4")
    assert (cmd.verb, cmd.unit, cmd.square) == ("PLACE", 1, "D4")

    cmd = parse_command_text("PLACE B2")
    assert (cmd.verb, cmd.unit, cmd.square) == ("PLACE", None, "B2")

    cmd = parse_command_text("select 3")
    assert (cmd.verb, cmd.unit, cmd.square) == ("SELECT", 2, None)

    assert parse_command_text("move b4").square == "B4"
    assert parse_command_text("search C5").verb == "SEARCH"
    assert parse_command_text("evader A1").verb == "EVADER"


@pytest.mark.parametrize(
    "bad",
    ["", "jump B2", "select", "select B2", "move", "move 1 B4", "place 0 B2", "search B2 C3"],
)
def test_parse_rejects_bad_text(bad):
    with pytest.raises(ValueError):
        parse_command_text(bad)
