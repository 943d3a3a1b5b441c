"""conspire CLI — render declarative chart files to HTML."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .config import load_config
from .core.charts import CHART_TYPES, line, scatter
from .core.errors import ConspireError
from .core.layer import Layer
from .core.models import BackendKind
from .loader import load_plot
from .plot import PlotBuilder, PlotSystem

console = Console()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _write(plot: PlotSystem, output: str | None, config_path: str | None) -> None:
    config = load_config(config_path, output_path=output)
    result = plot.write(config=config)
    console.print(f"[green]✓[/] Wrote {len(plot)} chart(s) → [bold]{result.output_path}[/bold]")
    if result.error:
        console.print(f"[yellow]⚠ Could not open viewer:[/] {escape(result.error)}")
    elif result.displayed:
        console.print("[green]✓[/] Opened in viewer")


@click.group()
@click.version_option(version=__version__, prog_name="conspire")
def main():
    """conspire — declarative charts rendered through pluggable backends."""
    pass


@main.command()
@click.argument("chart_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: render.html or the config's output_path).",
)
@click.option(
    "--config",
    "config_path",
    envvar="CONSPIRE_CONFIG",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Render config file, YAML/JSON/TOML (or set CONSPIRE_CONFIG env var).",
)
@click.option(
    "--display/--no-display",
    default=None,
    help="Open the result in a viewer (overrides the chart file).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def render(chart_file: str, output: str | None, config_path: str | None,
           display: bool | None, verbose: bool):
    """Render CHART_FILE (YAML or JSON) to an HTML document."""
    _setup_logging(verbose)
    try:
        builder = load_plot(chart_file)
        if display is not None:
            builder = builder.set_display(display)
        plot = builder.finalize()
        _write(plot, output, config_path)
    except ConspireError as exc:
        console.print(f"[bold red]❌ {type(exc).__name__}:[/] {escape(str(exc))}")
        raise SystemExit(1)


@main.command()
def kinds():
    """List chart kinds and the channels they use."""
    from rich.table import Table as RichTable

    table = RichTable(title="Chart Kinds", show_lines=False)
    table.add_column("Kind", style="bold cyan")
    table.add_column("Required", style="bold")
    table.add_column("Optional")

    for kind, cls in CHART_TYPES.items():
        table.add_row(
            kind.value,
            ", ".join(c.value for c in cls.required),
            ", ".join([c.value for c in cls.optional] + ["name"]),
        )

    console.print(table)


@main.command()
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None)
@click.option("--display", is_flag=True, default=False, help="Open the result in a viewer.")
def demo(output: str | None, display: bool):
    """Render a scatter and a line chart from built-in sample data."""
    layer1 = (
        Layer()
        .bind_x([1.0, 1.3, 2.0, 2.7, 3.0, 4.0, 5.1, 6.2, 6.3])
        .bind_y([8.0, 8.1, 7.0, 6.4, 5.0, 4.0, 4.2, 4.2, 4.3])
        .bind_color([1, 2, 3, 4, 5, 6, 7, 8, 9])
        .bind_size([30])
    )
    layer2 = (
        Layer()
        .bind_x([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0])
        .bind_y([9.0, 1.0, 10.0, 11.0, 11.0, 11.0, 11.0])
        .bind_color("blue")
    )

    plot = (
        PlotBuilder(BackendKind.PLOTLY)
        .set_display(display)
        .add_variant(scatter(layer1))
        .add_variant(line(layer2))
        .finalize()
    )
    try:
        _write(plot, output, None)
    except ConspireError as exc:
        console.print(f"[bold red]❌ {type(exc).__name__}:[/] {escape(str(exc))}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
