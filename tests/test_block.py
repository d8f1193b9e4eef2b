import pytest

from gridroute.errors import ConfigurationError, DiagramError
from gridroute.layout_components import BlockConstraint, BlockDisplay, Position, Side, Size, size_block
from gridroute.spec import BlockSpec, Coloring


def sized(text, width=20):
    return size_block(BlockSpec("b", Coloring.RED, text), BlockConstraint(min_limited_width=width))


def test_short_text_is_single_line():
    display = sized("hi")
    assert display.size == Size(6, 3)
    assert display.lines == ["hi"]
    assert display.color == Coloring.RED
    assert display.name == "b"
    assert not display.placed


def test_text_exactly_at_limit_stays_single_line():
    display = sized("x" * 16)
    assert display.lines == ["x" * 16]
    assert display.size == Size(20, 3)


def test_long_text_wraps_vertically():
    text = " ".join(["word"] * 20)
    assert len(text) > 90
    display = sized(text)
    assert display.size.height > 3
    assert display.size.height == len(display.lines) + 2
    assert all(len(line) <= 20 for line in display.lines)
    assert display.size.width == max(len(line) for line in display.lines) + 4
    assert " ".join(display.lines) == text


def test_hundred_character_spaced_string():
    text = ("abcd " * 20).strip()
    display = sized(text)
    assert display.size.height > 3
    assert all(len(line) <= 20 for line in display.lines)


def test_overlong_word_is_split():
    display = sized("a" * 40)
    assert all(len(line) <= 16 for line in display.lines)
    assert "".join(display.lines) == "a" * 40


def test_wide_characters_measured_by_cell_width():
    display = sized("日本")
    assert display.size == Size(8, 3)


def test_geometry_helpers():
    display = BlockDisplay("b", Coloring.DEFAULT, [], Size(30, 30), Position(20, 20))
    assert display.center() == Position(35, 35)
    assert list(display.corners()) == [
        Position(20, 20),
        Position(49, 20),
        Position(20, 49),
        Position(49, 49),
    ]
    assert display.distance_to_position(Position(25, 25)) == 0
    assert display.distance_to_position(Position(20, 20)) == 0
    assert display.distance_to_position(Position(17, 25)) == 3
    assert display.distance_to_position(Position(52, 53)) == 7
    assert display.edge_midpoint(Side.TOP) == Position(35, 20)
    assert display.edge_midpoint(Side.RIGHT) == Position(49, 35)
    assert display.side_of(Position(20, 30)) == Side.LEFT
    assert display.side_of(Position(40, 49)) == Side.BOTTOM
    assert display.side_of(Position(20, 20)) is None


def test_place_only_once():
    display = sized("hi")
    display.place(Position(3, 4))
    assert display.position == Position(3, 4)
    with pytest.raises(DiagramError):
        display.place(Position(0, 0))


def test_constraint_helpers_and_validation():
    constraint = BlockConstraint(min_limited_width=20, max_width_per_height=10, max_height_per_width=1)
    assert constraint.max_width_for_height(1) == 20
    assert constraint.max_width_for_height(5) == 50
    assert constraint.max_height_for_width(12) == 12
    with pytest.raises(ConfigurationError):
        BlockConstraint(min_limited_width=2)
    with pytest.raises(ConfigurationError):
        BlockConstraint(inter_block_distance=-1)
