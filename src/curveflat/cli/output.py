"""Rich console output helpers for the CLI.

This module provides user-friendly console output using the Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from curveflat.domain import CurvePiece, Point, SegmentChain
from curveflat.utils.logging import SubdivisionStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def _fmt_point(point: Point) -> str:
    return f"({_fmt(point.x)}, {_fmt(point.y)})"


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]curveflat[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_curve(kind: str, points: tuple[Point, ...]) -> None:
    """Print the input curve on one line."""
    line = Text("  ")
    line.append(kind, style="bold")
    line.append(" " + " ".join(_fmt_point(p) for p in points))
    console.print(line)


def print_pieces(chain: SegmentChain, title: str) -> None:
    """Print the pieces of a chain as a table.

    Args:
        chain: Chain of curve pieces
        title: Table title
    """
    table = Table(title=title, title_justify="left", show_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("t start", justify="right")
    table.add_column("t end", justify="right")
    table.add_column("points")

    piece: CurvePiece
    for index, piece in enumerate(chain):
        table.add_row(
            str(index),
            _fmt(piece.t_start),
            _fmt(piece.t_end),
            " ".join(_fmt_point(p) for p in piece.curve.points),
        )

    console.print(table)


def print_polyline(points: list[Point]) -> None:
    """Print polyline vertices, one per line."""
    console.print(f"\n[bold]Polyline[/bold] ({len(points)} points)")
    for point in points:
        console.print(f"  {_fmt_point(point)}")


def print_stats(stats: SubdivisionStats) -> None:
    """Print the summary line of a subdivision run."""
    console.print(
        f"\n[bold green]{SYM_OK}[/bold green] {stats.piece_count} pieces {SYM_DOT} "
        f"max depth {stats.max_depth_reached}"
    )
    if stats.depth_limit_hit:
        console.print(
            f"  [yellow]{stats.depth_limited_pieces} pieces emitted at the depth limit[/yellow]"
        )


def print_inflections(inflections: list[tuple[float, Point]]) -> None:
    """Print inflection parameters and points.

    Args:
        inflections: (t, point) pairs in increasing t
    """
    if not inflections:
        console.print("  No inflection points")
        return

    table = Table(show_edge=False)
    table.add_column("t", justify="right")
    table.add_column("point")
    for t, point in inflections:
        table.add_row(_fmt(t), _fmt_point(point))
    console.print(table)


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_glyph_summary(glyph_name: str, counts: dict[str, dict[str, int]]) -> None:
    """Print segment counts of a glyph outline before and after conversion.

    Args:
        glyph_name: Name of the glyph
        counts: Outline name mapped to segment-type counts
    """
    table = Table(title=f"Glyph '{glyph_name}'", title_justify="left", show_edge=False)
    table.add_column("outline")
    table.add_column("lines", justify="right")
    table.add_column("quadratics", justify="right")
    table.add_column("cubics", justify="right")
    for outline, by_type in counts.items():
        table.add_row(
            outline,
            str(by_type.get("lineTo", 0)),
            str(by_type.get("qCurveTo", 0)),
            str(by_type.get("curveTo", 0)),
        )
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
