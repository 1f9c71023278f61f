"""CLI application entry point for curveflat.

This module provides the main CLI interface using Typer. Curves are given as
raw coordinates: 6 numbers for a quadratic, 8 for a cubic. Use `--` before
the coordinates when any of them is negative.
"""

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

import structlog
import typer
from fontTools.pens.recordingPen import RecordingPen
from pydantic import ValidationError

from curveflat import __version__
from curveflat.cli.output import (
    console,
    print_curve,
    print_error,
    print_font_info,
    print_glyph_summary,
    print_header,
    print_inflections,
    print_pieces,
    print_polyline,
    print_stats,
    print_step,
)
from curveflat.config import (
    CombineStrategy,
    DegreeReductionConfig,
    DistanceMetric,
    FlatnessAlgorithmType,
    FlatteningConfig,
    LoggingConfig,
)
from curveflat.core import (
    adaptive_degree_reduction_list,
    adaptive_halving_degree_reduction_list,
    adaptive_halving_list,
    compute_inflections,
    criterion_from_config,
    point_on_curve,
)
from curveflat.domain import CubicCurve, Curve, QuadraticCurve
from curveflat.exceptions import CurveflatError, FontLoadError, InvalidCurveError
from curveflat.io import FlatteningPen, FontReader, QuadraticReductionPen
from curveflat.utils import SubdivisionLogger, SubdivisionStats, configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Upper bound for halving depth; each level can double the piece count
HALVING_MAX_DEPTH = 64

# Create the Typer app
app = typer.Typer(
    name="curveflat",
    help="Flatten Bezier curves to polylines and reduce cubics to quadratics.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by every command."""

    quiet: bool = False
    logger: SubdivisionLogger | None = None


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]curveflat[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Flatten Bezier curves and reduce cubics to quadratics within a tolerance."""
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    logging_config = LoggingConfig(log_file=log_file, log_level=log_level.upper())
    logger = configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(quiet=quiet, logger=SubdivisionLogger(logger))


def _state(ctx: typer.Context) -> CliState:
    if isinstance(ctx.obj, CliState):
        return ctx.obj
    return CliState()


def _curve_from_coords(coords: list[float], cubic_only: bool = False) -> Curve:
    """Build a curve from raw coordinates.

    Raises:
        InvalidCurveError: If the coordinate count does not describe a curve
    """
    if len(coords) == 8:
        return CubicCurve.from_coords(*coords)
    if len(coords) == 6 and not cubic_only:
        return QuadraticCurve.from_coords(*coords)

    expected = "8 coordinates (cubic)" if cubic_only else "6 (quadratic) or 8 (cubic) coordinates"
    raise InvalidCurveError(f"Expected {expected}, got {len(coords)}")


def _fail(
    state: CliState, operation: str, error: Exception, message: str | None = None
) -> NoReturn:
    if state.logger is not None:
        state.logger.log_invalid_input(operation, error)
    print_error(message or str(error))
    raise typer.Exit(code=1)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"Invalid {location}: {first['msg']}"


@app.command()
def flatten(
    ctx: typer.Context,
    coords: Annotated[
        list[float],
        typer.Argument(
            help="Curve coordinates: X0 Y0 CX CY X1 Y1 or X0 Y0 C1X C1Y C2X C2Y X1 Y1",
            show_default=False,
        ),
    ],
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Maximum accepted flatness defect",
        ),
    ] = 0.25,
    algorithm: Annotated[
        FlatnessAlgorithmType,
        typer.Option(
            "--algorithm",
            "-a",
            help="Flatness algorithm",
        ),
    ] = FlatnessAlgorithmType.ROBUST_CONVEX_HULL,
    metric: Annotated[
        DistanceMetric,
        typer.Option(
            "--metric",
            help="Distance metric (line_defect only)",
        ),
    ] = DistanceMetric.EUCLIDEAN,
    combine: Annotated[
        CombineStrategy,
        typer.Option(
            "--combine",
            help="Combine control point defects by sum or max (line_defect only)",
        ),
    ] = CombineStrategy.SUM,
    max_depth: Annotated[
        int,
        typer.Option(
            "--max-depth",
            help="Maximum halving depth",
        ),
    ] = 32,
) -> None:
    """Flatten a quadratic or cubic curve into a polyline.

    Example:
        curveflat flatten 0 0 0 100 100 100 100 0 --tolerance 0.5
    """
    state = _state(ctx)

    try:
        curve = _curve_from_coords(coords)
        config = FlatteningConfig(
            algorithm=algorithm,
            tolerance=tolerance,
            metric=metric,
            combine=combine,
            max_depth=max_depth,
        )
    except ValidationError as e:
        _fail(state, "flatten", e, _validation_message(e))
    except CurveflatError as e:
        _fail(state, "flatten", e)

    stats = SubdivisionStats()
    chain = adaptive_halving_list(curve, criterion_from_config(config), config.max_depth, stats)
    if state.logger is not None:
        state.logger.log_run(
            "flatten", stats, algorithm=config.algorithm.value, tolerance=config.tolerance
        )

    if not state.quiet:
        print_header(__version__)
        print_curve("cubic" if isinstance(curve, CubicCurve) else "quadratic", curve.points)
        print_step("Pieces")
        print_pieces(chain, f"{len(chain)} pieces")
    print_polyline(chain.polyline())
    if not state.quiet:
        print_stats(stats)


@app.command()
def reduce(
    ctx: typer.Context,
    coords: Annotated[
        list[float],
        typer.Argument(
            help="Cubic coordinates: X0 Y0 C1X C1Y C2X C2Y X1 Y1",
            show_default=False,
        ),
    ],
    precision: Annotated[
        float,
        typer.Option(
            "--precision",
            "-p",
            help="Maximum deviation between the cubic and its quadratics",
        ),
    ] = 1.0,
    halving: Annotated[
        bool,
        typer.Option(
            "--halving",
            help="Use plain adaptive halving instead of optimal split points",
        ),
    ] = False,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            help="Maximum refinement depth (default: 1024, or 32 with --halving)",
        ),
    ] = None,
) -> None:
    """Reduce a cubic curve to a chain of quadratic curves.

    Example:
        curveflat reduce 0 0 0 100 100 100 100 0 --precision 0.5
    """
    state = _state(ctx)

    try:
        cubic = _curve_from_coords(coords, cubic_only=True)
        options: dict[str, object] = {"precision": precision, "use_halving": halving}
        if max_depth is not None:
            options["max_depth"] = max_depth
        config = DegreeReductionConfig(**options)
    except ValidationError as e:
        _fail(state, "reduce", e, _validation_message(e))
    except CurveflatError as e:
        _fail(state, "reduce", e)

    stats = SubdivisionStats()
    if config.use_halving:
        depth = min(config.max_depth, HALVING_MAX_DEPTH) if max_depth is not None else 32
        chain = adaptive_halving_degree_reduction_list(cubic, config.precision, depth, stats)
    else:
        chain = adaptive_degree_reduction_list(cubic, config.precision, config.max_depth, stats)
    if state.logger is not None:
        state.logger.log_run(
            "reduce", stats, precision=config.precision, halving=config.use_halving
        )

    if not state.quiet:
        print_header(__version__)
        print_curve("cubic", cubic.points)
        print_step("Quadratics")
    print_pieces(chain, f"{len(chain)} quadratics")
    if not state.quiet:
        print_stats(stats)


@app.command()
def inflections(
    ctx: typer.Context,
    coords: Annotated[
        list[float],
        typer.Argument(
            help="Cubic coordinates: X0 Y0 C1X C1Y C2X C2Y X1 Y1",
            show_default=False,
        ),
    ],
) -> None:
    """Print the inflection points of a cubic curve.

    Example:
        curveflat inflections 0 0 1 1 2 -1 3 0
    """
    state = _state(ctx)

    try:
        cubic = _curve_from_coords(coords, cubic_only=True)
    except CurveflatError as e:
        _fail(state, "inflections", e)

    params = compute_inflections(cubic)
    if not state.quiet:
        print_header(__version__)
        print_curve("cubic", cubic.points)
        print_step(f"{len(params)} inflection points")
    print_inflections([(t, point_on_curve(cubic, t)) for t in params])


def _count_ops(pen: RecordingPen) -> dict[str, int]:
    return dict(Counter(op for op, _ in pen.value))


@app.command()
def glyph(
    ctx: typer.Context,
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to TTF/OTF font file",
            show_default=False,
        ),
    ],
    glyph_name: Annotated[
        str,
        typer.Argument(
            help="Glyph name",
            show_default=False,
        ),
    ],
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Maximum accepted flatness defect (font units)",
        ),
    ] = 1.0,
    precision: Annotated[
        float,
        typer.Option(
            "--precision",
            "-p",
            help="Maximum cubic to quadratic deviation (font units)",
        ),
    ] = 1.0,
) -> None:
    """Flatten and degree-reduce a glyph outline, printing segment counts.

    Example:
        curveflat glyph MyFont.otf a --tolerance 0.5
    """
    state = _state(ctx)

    if not font.exists():
        print_error(
            f"Input file not found: {font}",
            details=f"The file '{font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    try:
        flattening = FlatteningConfig(tolerance=tolerance)
        reduction = DegreeReductionConfig(precision=precision)
    except ValidationError as e:
        _fail(state, "glyph", e, _validation_message(e))

    try:
        with FontReader(font) as reader:
            if not state.quiet:
                print_header(__version__)
                print_step("Loading font")
                print_font_info(
                    font_path=str(font),
                    font_type=reader.format,
                    glyph_count=reader.glyph_count,
                    upm=reader.units_per_em,
                )

            glyph_set = reader.glyph_set()
            original = RecordingPen()
            reader.draw_glyph(glyph_name, original)

            flat = RecordingPen()
            flattening_pen = FlatteningPen(
                flat, criterion_from_config(flattening), flattening.max_depth, glyph_set
            )
            reader.draw_glyph(glyph_name, flattening_pen)

            reduced = RecordingPen()
            reduction_pen = QuadraticReductionPen(reduced, reduction.precision, glyph_set)
            reader.draw_glyph(glyph_name, reduction_pen)
    except FontLoadError as e:
        _fail(state, "glyph", e, f"Could not load font: {e.reason}")
    except CurveflatError as e:
        _fail(state, "glyph", e)

    if state.logger is not None:
        state.logger.log_run("glyph.flatten", flattening_pen.stats, glyph=glyph_name)
        state.logger.log_run("glyph.reduce", reduction_pen.stats, glyph=glyph_name)

    structlog.get_logger(__name__).debug(
        "Glyph converted",
        glyph=glyph_name,
        curves_flattened=flattening_pen.curves_in,
        cubics_reduced=reduction_pen.curves_in,
    )

    print_glyph_summary(
        glyph_name,
        {
            "original": _count_ops(original),
            "flattened": _count_ops(flat),
            "quadratic": _count_ops(reduced),
        },
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
