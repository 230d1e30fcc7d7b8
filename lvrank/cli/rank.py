"""CLI commands for the liquidity/volatility ranking.

Commands:
    - run: Fetch a fresh snapshot and print both rankings (optionally save chart)
    - symbols: Display the configured symbol universe

Rules Applied:
    - Typer CLI: Annotated syntax, Rich UI, async handling via asyncio.run
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from lvrank.config.settings import get_settings
from lvrank.config.universe import load_universe
from lvrank.core.exceptions import RankerError
from lvrank.core.logger import setup_logger
from lvrank.models.ranking import RankedSeries, RankingResult
from lvrank.monitoring.chart_generator import ChartGenerator
from lvrank.pipeline.runner import RankingPipeline

console = Console()

app = typer.Typer(
    name="lvrank",
    help="Binance USDT pair liquidity / volatility ranking",
    no_args_is_help=True,
)


def _ranked_table(series: RankedSeries, title: str, value_header: str) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Symbol", style="cyan")
    table.add_column(value_header, justify="right", style="green")
    for i, (symbol, value) in enumerate(series.pairs(), start=1):
        table.add_row(str(i), symbol, f"{value:,.4f}")
    return table


def _print_result(result: RankingResult) -> None:
    console.print(
        _ranked_table(result.liquidity, "Relative Liquidity (ascending)", "ref / notional")
    )
    console.print(
        _ranked_table(result.volatility, "Relative Volatility (ascending)", "max / swing")
    )


@app.command()
def run(
    symbol: Annotated[
        list[str] | None,
        typer.Option("--symbol", "-s", help="Override universe (first = reference)"),
    ] = None,
    chart: Annotated[
        Path | None,
        typer.Option("--chart", "-c", help="Write dual-axis PNG chart to this path"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Fetch a fresh market snapshot and rank all symbols.

    Example:
        uv run lvrank run --chart ranking.png
    """
    settings = get_settings()
    setup_logger(log_dir=settings.log_dir, console_level="DEBUG" if verbose else "WARNING")

    try:
        pipeline = RankingPipeline(symbol or None, settings)
    except RankerError as e:
        console.print(f"[bold red]✗ Invalid universe:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print(
        Panel.fit(
            f"[bold]Liquidity / Volatility Ranking[/bold]\n"
            f"Symbols: {len(pipeline.universe)} (reference={pipeline.universe[0]})\n"
            f"Klines: {settings.kline_limit} x {settings.kline_interval}",
            border_style="blue",
        )
    )

    try:
        result = asyncio.run(pipeline.run())
    except RankerError as e:
        console.print(f"\n[bold red]✗ Failed:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    _print_result(result)

    if chart is not None:
        png = ChartGenerator().generate_dual_axis(result)
        chart.parent.mkdir(parents=True, exist_ok=True)
        chart.write_bytes(png)
        console.print(f"[green]✓[/green] Chart saved: {chart}")

    console.print("\n[bold green]✓ Ranking completed![/bold green]")


@app.command()
def symbols() -> None:
    """Display the configured symbol universe."""
    settings = get_settings()
    try:
        universe = load_universe(settings.symbols)
    except RankerError as e:
        console.print(f"[bold red]✗ Invalid universe:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    table = Table(title=f"Symbol Universe ({len(universe)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Symbol", style="cyan")
    table.add_column("Role")
    for i, sym in enumerate(universe, start=1):
        table.add_row(str(i), sym, "reference" if i == 1 else "")
    console.print(table)
