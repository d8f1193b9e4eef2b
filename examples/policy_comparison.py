from pathlib import Path

from gridroute import render_text

SOURCE = (Path(__file__).parent / "pipeline.txt").read_text(encoding="utf-8")


def main() -> None:
    # Strict routing backtracks until no two connections share a cell;
    # permissive routing takes one pass and may cross earlier paths.
    for policy in ("strict", "permissive"):
        print(f"{policy}:")
        print(render_text(SOURCE, screen_width=60, policy=policy))
        print()


if __name__ == "__main__":
    main()
