import pytest

from gridroute.cli import main, parse_args


@pytest.fixture
def diagram(tmp_path):
    path = tmp_path / "diagram.txt"
    path.write_text(
        "box text a color red\nAlpha\nbox text b\nBeta\nsingular connection a b\n",
        encoding="utf-8",
    )
    return path


def test_defaults():
    args = parse_args(["diagram.txt"])
    assert args.policy == "strict"
    assert args.placement == "vertical"
    assert args.height == 200
    assert args.block_width == 20
    assert args.spacing == 5
    assert args.clearance == 2
    assert args.max_attempts is None
    assert args.box_style == "ascii"


def test_renders_diagram(diagram, capsys):
    assert main([str(diagram), "--width", "40", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "| Alpha |" in out
    assert "| Beta |" in out
    assert "v" in out


def test_permissive_with_square_boxes(diagram, capsys):
    code = main([str(diagram), "--width", "40", "--policy", "permissive", "--box-style", "square", "--no-color"])
    assert code == 0
    assert "┌" in capsys.readouterr().out


def test_missing_block_is_reported(tmp_path, capsys):
    path = tmp_path / "broken.txt"
    path.write_text("box text a\nAlpha\nconnection a ghost\nconnection nobody a\n", encoding="utf-8")

    assert main([str(path), "--width", "40"]) == 1
    err = capsys.readouterr().err
    assert "Block ghost does not exist" in err
    assert "Block nobody does not exist" in err


def test_unreadable_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "Could not read" in capsys.readouterr().err


def test_invalid_block_width(diagram, capsys):
    assert main([str(diagram), "--block-width", "2"]) == 1
    assert "min_limited_width" in capsys.readouterr().err
