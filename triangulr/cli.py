"""Command-line interface for triangulr.

Evaluates the triangular distribution functions on values given on the
command line. Built with Typer, with Rich tables for human-readable output
and ``--json`` for machine-readable output.

Negative inputs must follow ``--`` so they are not read as options::

    triangulr cdf --min -1 --max 1 --mode 0 -- -0.5 0 0.5
"""

import json
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .core.config import LOG_LEVELS, TriangulrConfig, load_config
from .core.distributions import TriangularDistribution
from .core.exceptions import TriangulrError, handle_exception
from .core.logging_config import get_logger, log_performance, setup_logging
from .core.triangular import dtri, estri, mgtri, ptri, qtri, rtri

app: typer.Typer = typer.Typer(help="Triangular distribution functions from the command line")
console: Console = Console()
logger = get_logger(__name__)

FUNCTIONS: Dict[str, Callable[..., np.ndarray]] = {
    'dtri': dtri,
    'ptri': ptri,
    'qtri': qtri,
    'rtri': rtri,
    'mgtri': mgtri,
    'estri': estri,
}

MIN_OPTION = typer.Option(None, "--min", help="Lower limit (repeat for a vector)")
MAX_OPTION = typer.Option(None, "--max", help="Upper limit (repeat for a vector)")
MODE_OPTION = typer.Option(None, "--mode", help="Mode (repeat for a vector)")
JSON_OPTION = typer.Option(False, "--json", help="Print results as JSON")
UPPER_TAIL_OPTION = typer.Option(False, "--upper-tail", help="Use P[X > x] instead of P[X <= x]")
LOG_P_OPTION = typer.Option(False, "--log-p", help="Probabilities are on the log scale")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Configuration file (JSON or YAML)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit structured JSON log records"),
):
    """Triangular distribution functions from the command line."""
    try:
        cfg = load_config(config)
    except (FileNotFoundError, ValueError, TriangulrError) as e:
        console.print(f"[red]❌ Config error: {e}[/red]")
        raise typer.Exit(1)

    if log_level and log_level.upper() not in LOG_LEVELS:
        console.print(f"[red]❌ Invalid log level: {log_level} "
                      f"(choose from {', '.join(LOG_LEVELS)})[/red]")
        raise typer.Exit(1)

    setup_logging(
        log_level=log_level or cfg.log_level,
        enable_structured=json_logs or cfg.structured_logging,
    )
    ctx.obj = cfg


@log_performance
def _evaluate(function: str, values: Any, params: Sequence[Any], **options) -> np.ndarray:
    return FUNCTIONS[function](values, *params, **options)


def _config(ctx: typer.Context) -> TriangulrConfig:
    return ctx.obj if isinstance(ctx.obj, TriangulrConfig) else TriangulrConfig()


def _params(cfg: TriangulrConfig, min_, max_, mode_) -> List[Any]:
    """Explicit parameters win over configuration defaults."""
    return [
        list(min_) if min_ else cfg.min,
        list(max_) if max_ else cfg.max,
        list(mode_) if mode_ else cfg.mode,
    ]


def _format(value: float, precision: int) -> str:
    return f"{value:.{precision}g}"


def _run(
    ctx: typer.Context,
    function: str,
    input_name: str,
    values: Any,
    min_, max_, mode_,
    as_json: bool,
    **options
) -> None:
    cfg = _config(ctx)
    params = _params(cfg, min_, max_, mode_)

    try:
        result = _evaluate(function, values, params, **options)
    except TriangulrError as e:
        # already logged by log_performance
        console.print(f"[red]❌ {e.error_code}: {e.message}[/red]")
        raise typer.Exit(1)

    inputs = np.atleast_1d(np.asarray(values, dtype=float))
    if function == 'rtri':
        inputs = np.arange(1, result.size + 1, dtype=float)
    elif inputs.size != result.size:
        inputs = np.resize(inputs, result.size)

    if as_json:
        typer.echo(json.dumps({
            'function': function,
            input_name: inputs.tolist(),
            'result': result.tolist(),
        }))
        return

    table = Table(title=function)
    table.add_column(input_name, justify="right")
    table.add_column("value", justify="right")
    for x, y in zip(inputs, result):
        table.add_row(_format(x, cfg.precision), _format(y, cfg.precision))
    console.print(table)


@app.command()
def density(
    ctx: typer.Context,
    x: List[float] = typer.Argument(..., help="Quantiles"),
    min_: Optional[List[float]] = MIN_OPTION,
    max_: Optional[List[float]] = MAX_OPTION,
    mode_: Optional[List[float]] = MODE_OPTION,
    log: bool = typer.Option(False, "--log", help="Return the log density"),
    as_json: bool = JSON_OPTION,
):
    """Evaluate the density function."""
    _run(ctx, 'dtri', 'x', x, min_, max_, mode_, as_json, log=log)


@app.command()
def cdf(
    ctx: typer.Context,
    q: List[float] = typer.Argument(..., help="Quantiles"),
    min_: Optional[List[float]] = MIN_OPTION,
    max_: Optional[List[float]] = MAX_OPTION,
    mode_: Optional[List[float]] = MODE_OPTION,
    upper_tail: bool = UPPER_TAIL_OPTION,
    log_p: bool = LOG_P_OPTION,
    as_json: bool = JSON_OPTION,
):
    """Evaluate the distribution function."""
    _run(ctx, 'ptri', 'q', q, min_, max_, mode_, as_json,
         lower_tail=not upper_tail, log_p=log_p)


@app.command()
def quantile(
    ctx: typer.Context,
    p: List[float] = typer.Argument(..., help="Probabilities"),
    min_: Optional[List[float]] = MIN_OPTION,
    max_: Optional[List[float]] = MAX_OPTION,
    mode_: Optional[List[float]] = MODE_OPTION,
    upper_tail: bool = UPPER_TAIL_OPTION,
    log_p: bool = LOG_P_OPTION,
    as_json: bool = JSON_OPTION,
):
    """Evaluate the quantile function."""
    _run(ctx, 'qtri', 'p', p, min_, max_, mode_, as_json,
         lower_tail=not upper_tail, log_p=log_p)


@app.command()
def sample(
    ctx: typer.Context,
    n: float = typer.Argument(..., help="Number of observations"),
    min_: Optional[List[float]] = MIN_OPTION,
    max_: Optional[List[float]] = MAX_OPTION,
    mode_: Optional[List[float]] = MODE_OPTION,
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for reproducibility"),
    as_json: bool = JSON_OPTION,
):
    """Draw random variates."""
    cfg = _config(ctx)
    random_state = seed if seed is not None else cfg.seed
    _run(ctx, 'rtri', 'draw', n, min_, max_, mode_, as_json, random_state=random_state)


@app.command()
def mgf(
    ctx: typer.Context,
    t: List[float] = typer.Argument(..., help="Dummy variables"),
    min_: Optional[List[float]] = MIN_OPTION,
    max_: Optional[List[float]] = MAX_OPTION,
    mode_: Optional[List[float]] = MODE_OPTION,
    as_json: bool = JSON_OPTION,
):
    """Evaluate the moment generating function."""
    _run(ctx, 'mgtri', 't', t, min_, max_, mode_, as_json)


@app.command()
def shortfall(
    ctx: typer.Context,
    p: List[float] = typer.Argument(..., help="Probabilities"),
    min_: Optional[List[float]] = MIN_OPTION,
    max_: Optional[List[float]] = MAX_OPTION,
    mode_: Optional[List[float]] = MODE_OPTION,
    upper_tail: bool = UPPER_TAIL_OPTION,
    log_p: bool = LOG_P_OPTION,
    as_json: bool = JSON_OPTION,
):
    """Evaluate the expected shortfall."""
    _run(ctx, 'estri', 'p', p, min_, max_, mode_, as_json,
         lower_tail=not upper_tail, log_p=log_p)


@app.command()
def info(
    ctx: typer.Context,
    min_: Optional[float] = typer.Option(None, "--min", help="Lower limit"),
    max_: Optional[float] = typer.Option(None, "--max", help="Upper limit"),
    mode_: Optional[float] = typer.Option(None, "--mode", help="Mode"),
):
    """Show summary statistics of a triangular distribution."""
    cfg = _config(ctx)

    try:
        dist = TriangularDistribution(
            min=cfg.min if min_ is None else min_,
            max=cfg.max if max_ is None else max_,
            mode=cfg.mode if mode_ is None else mode_,
        )
    except TriangulrError as e:
        handle_exception(e, logger, reraise=False)
        console.print(f"[red]❌ {e.error_code}: {e.message}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold blue]triangulr {__version__}[/bold blue]")

    table = Table(title="Triangular Distribution")
    table.add_column("Property")
    table.add_column("Value", justify="right")

    p = cfg.precision
    table.add_row("min", _format(dist.min, p))
    table.add_row("max", _format(dist.max, p))
    table.add_row("mode", _format(dist.mode, p))
    table.add_row("mean", _format(dist.mean(), p))
    table.add_row("variance", _format(dist.variance(), p))
    table.add_row("median", _format(dist.median(), p))
    table.add_row("P[X <= mode]", _format(dist.mode_probability, p))

    console.print(table)
