import pytest

from gridroute.layout_components import (
    BlockConstraint,
    ConnectivityPlacement,
    Graph,
    Position,
    VerticalStackPlacement,
    size_block,
)
from gridroute.spec import BlockSpec, Coloring, ConnectionSpec


def blocks_for(*texts):
    constraint = BlockConstraint(min_limited_width=20)
    return [
        size_block(BlockSpec(f"b{i}", Coloring.DEFAULT, text), constraint)
        for i, text in enumerate(texts)
    ]


def test_vertical_stack_centers_and_spaces_blocks():
    blocks = blocks_for("A", "a longer title here and more", "BB")
    placed = VerticalStackPlacement(screen_width=50, spacing=5).apply(blocks)

    assert placed == blocks
    assert blocks[0].position == Position(25 - 5 // 2, 0)
    assert blocks[1].position.y == 3 + 5
    assert blocks[2].position.y == blocks[1].position.y + blocks[1].size.height + 5
    for block in blocks:
        assert block.position.x == 25 - block.size.width // 2


def test_vertical_stack_never_goes_negative():
    blocks = blocks_for("a very long block that is wider than the screen")
    VerticalStackPlacement(screen_width=4, spacing=1).apply(blocks)
    assert blocks[0].position == Position(0, 0)


def test_invalid_arguments():
    with pytest.raises(ValueError):
        VerticalStackPlacement(screen_width=0, spacing=1)
    with pytest.raises(ValueError):
        VerticalStackPlacement(screen_width=10, spacing=-1)


def test_connectivity_placement_puts_busiest_block_first():
    specs = [
        BlockSpec("b0", Coloring.DEFAULT, "A"),
        BlockSpec("b1", Coloring.DEFAULT, "B"),
        BlockSpec("b2", Coloring.DEFAULT, "C"),
        ConnectionSpec("b0", "b2"),
        ConnectionSpec("b1", "b2"),
    ]
    graph = Graph.from_specs(specs)
    blocks = blocks_for("A", "B", "C")
    placed = ConnectivityPlacement(40, 2, graph).apply(blocks)

    assert [b.name for b in placed] == ["b0", "b1", "b2"]
    assert blocks[2].position.y == 0
    assert blocks[0].position.y == 5
    assert blocks[1].position.y == 10
