from rich import print

from gridroute import BlockSpec, Coloring, ConnectionKind, ConnectionSpec, LayoutEngine, render_layout
from gridroute.layout_components import BoxChars


def main() -> None:
    specs = [
        BlockSpec("api", Coloring.CYAN, "API Gateway"),
        BlockSpec("auth", Coloring.YELLOW, "Auth Service"),
        BlockSpec("db", Coloring.GREEN, "Primary database with read replicas"),
        ConnectionSpec("api", "auth", ConnectionKind.DUAL, Coloring.MAGENTA),
        ConnectionSpec("auth", "db", ConnectionKind.SINGULAR),
        ConnectionSpec("api", "db", color=Coloring.BLUE),
    ]

    layout = LayoutEngine(screen_width=60).build(specs)
    print(render_layout(layout, chars=BoxChars.for_style("rounded"), include_markup=True))


if __name__ == "__main__":
    main()
