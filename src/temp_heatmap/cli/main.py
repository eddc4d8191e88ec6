"""Temperature heat map - Command Line Interface.

Renders the monthly global temperature variance heat map to HTML (and
optionally SVG, PNG and CSV), or prints a summary of the dataset.
"""

import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from typing_extensions import Annotated

from temp_heatmap import __version__
from temp_heatmap.core.exceptions import HeatmapError
from temp_heatmap.core.logger import get_logger, setup_console_logging
from temp_heatmap.core.renderer import HeatmapRenderer


app = typer.Typer(
    name="temp-heatmap",
    help="🌡️  Monthly global land-surface temperature heat map",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console(stderr=True)

setup_console_logging(console=console)

HTML_NAME = "heatmap.html"
SVG_NAME = "heatmap.svg"
PNG_NAME = "heatmap.png"
CSV_NAME = "monthly_variance.csv"

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
SourceOption = Annotated[
    Path | None,
    typer.Option(
        "--source",
        "-s",
        help="Read the dataset from a local JSON file instead of the network",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
UrlOption = Annotated[
    str | None,
    typer.Option("--url", help="Dataset URL (overrides the config file)"),
]


def _set_log_level(verbose: bool) -> None:
    get_logger().setLevel(logging.INFO if verbose else logging.WARNING)


def _display_info_table(info_data: dict[str, Any]) -> None:
    table = Table(title="Dataset", show_header=False, box=None)
    table.add_column(style="cyan", width=20)
    table.add_column()

    min_year, max_year = info_data["year_range"]
    vmin, vmax = info_data["variance_range"]
    warmest = info_data["warmest"]
    coldest = info_data["coldest"]

    table.add_row("Records", f"{info_data['num_records']:,}")
    table.add_row("Years", f"{min_year} to {max_year}")
    table.add_row("Base Temperature", f"{info_data['base_temperature']}℃")
    table.add_row("Variance Range", f"{vmin:.3f}℃ to {vmax:.3f}℃")
    table.add_row(
        "Warmest Month",
        f"{warmest['month']} {warmest['year']} ({warmest['temperature']:.2f}℃)",
    )
    table.add_row(
        "Coldest Month",
        f"{coldest['month']} {coldest['year']} ({coldest['temperature']:.2f}℃)",
    )
    console.print(table)
    console.print()


def _run_render_steps(
    renderer: HeatmapRenderer,
    progress: Progress,
    output: Path,
    svg: bool,
    png: bool,
    csv: bool,
    verbose: bool,
) -> list[Path]:
    """Run the layout and export steps with progress tracking.

    Returns
    -------
    list[Path]
        Files written, HTML page first.
    """
    written = []

    layout_task = progress.add_task("[cyan]Computing chart layout...", total=None)
    layout = renderer.compute_layout()
    progress.remove_task(layout_task)
    if verbose:
        console.print(f"  [dim]Cells: {len(layout.cells):,}[/dim]")

    html_task = progress.add_task("[cyan]Rendering HTML page...", total=None)
    written.append(renderer.save_html(output / HTML_NAME))
    progress.remove_task(html_task)

    if svg:
        svg_task = progress.add_task("[cyan]Exporting SVG...", total=None)
        written.append(renderer.save_svg(output / SVG_NAME))
        progress.remove_task(svg_task)

    if png:
        png_task = progress.add_task("[cyan]Exporting PNG...", total=None)
        written.append(renderer.save_png(output / PNG_NAME))
        progress.remove_task(png_task)

    if csv:
        csv_task = progress.add_task("[cyan]Saving records to CSV...", total=None)
        written.append(renderer.save_csv(output / CSV_NAME))
        progress.remove_task(csv_task)

    if verbose:
        for path in written:
            console.print(f"  [dim]Saved: {path}[/dim]")

    return written


@app.command(name="render")
def render(
    config: ConfigOption = None,
    source: SourceOption = None,
    url: UrlOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for the page and exports",
        ),
    ] = None,
    svg: Annotated[
        bool,
        typer.Option("--svg/--no-svg", help="Also write a standalone SVG"),
    ] = False,
    png: Annotated[
        bool,
        typer.Option("--png/--no-png", help="Also write a static PNG"),
    ] = False,
    csv: Annotated[
        bool,
        typer.Option("--csv/--no-csv", help="Also write the records to CSV"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show detailed logging output",
        ),
    ] = False,
) -> None:
    """Fetch the dataset and render the heat map page.

    When the configuration or the dataset cannot be loaded, an error page is
    written in place of the chart and the command exits with status 1.

    Example:
        temp-heatmap render --output site/ --png
        temp-heatmap render -s global-temperature.json --no-svg
    """
    renderer: HeatmapRenderer | None = None
    try:
        _set_log_level(verbose)

        console.print()
        console.print(
            Panel.fit(
                "[bold cyan]Global Temperature Heat Map[/bold cyan]\n"
                "[dim]Monthly variance rendering[/dim]",
                border_style="cyan",
            )
        )
        console.print()

        renderer = HeatmapRenderer(config)

        if output is None:
            output = Path(renderer.config.get("output_dir", "output"))
        output = Path(output)
        output.mkdir(parents=True, exist_ok=True)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            fetch_task = progress.add_task(
                "[cyan]Fetching temperature data...", total=None
            )
            dataset = renderer.fetch_data(source=source, url=url)
            progress.remove_task(fetch_task)
            if verbose:
                min_year, max_year = dataset.year_range()
                console.print(
                    f"  [dim]Fetched {len(dataset):,} records • "
                    f"{min_year}-{max_year}[/dim]"
                )

            written = _run_render_steps(
                renderer, progress, output, svg, png, csv, verbose
            )

        console.print()
        console.print(
            Panel.fit(
                f"[bold green]✓ Heat map rendered![/bold green]\n\n"
                f"📊 [bold]{len(dataset):,}[/bold] monthly records\n"
                f"🌡️  {renderer.description()}\n"
                f"📂 Output: [cyan]{written[0]}[/cyan]",
                border_style="green",
            )
        )
        console.print()

    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Operation cancelled by user[/yellow]")
        raise typer.Exit(1) from None
    except HeatmapError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        # A config failure leaves no renderer; fall back to the defaults.
        if renderer is None:
            renderer = HeatmapRenderer()
        if output is None:
            output = Path(renderer.config.get("output_dir", "output"))
        error_page = renderer.save_error_html(e, Path(output) / HTML_NAME)
        console.print(f"[dim]Error page written to {error_page}[/dim]")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1) from e


@app.command(name="info")
def info(
    config: ConfigOption = None,
    source: SourceOption = None,
    url: UrlOption = None,
) -> None:
    """Fetch the dataset and print a summary of it.

    Example:
        temp-heatmap info
        temp-heatmap info --source global-temperature.json
    """
    try:
        _set_log_level(False)

        console.print()
        console.print(
            Panel.fit(
                "[bold cyan]Temperature dataset information[/bold cyan]",
                border_style="cyan",
            )
        )
        console.print()

        renderer = HeatmapRenderer(config)
        renderer.fetch_data(source=source, url=url)
        _display_info_table(renderer.get_dataset_info())

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        raise typer.Exit(1) from e


@app.command(name="version")
def version() -> None:
    """Show version information."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Global Temperature Heat Map[/bold cyan]\n"
            f"Version: [bold]{__version__}[/bold]",
            border_style="cyan",
        )
    )
    console.print()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Monthly global land-surface temperature heat map CLI."""
    if version_flag:
        version()
        raise typer.Exit

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()
