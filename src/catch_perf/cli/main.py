"""Main CLI entry point for Catch Perf."""

import json
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from catch_perf import __version__
from catch_perf.config import get_settings

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="catch-perf")
def main() -> None:
    """Catch Perf - difficulty and performance for catch-the-fruit charts.

    Rate the difficulty of a chart and turn plays into performance values.
    """
    pass


@main.command()
@click.argument("chart_file", type=click.Path(path_type=Path))
@click.option("-m", "--mods", default="", help="Modifier acronyms, e.g. HDHR")
@click.option(
    "--all",
    "all_mods",
    is_flag=True,
    help="Calculate every combination of difficulty-changing modifiers",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Output format (default from settings)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show stage notes")
def difficulty(
    chart_file: Path,
    mods: str,
    all_mods: bool,
    output_format: str | None,
    verbose: bool,
) -> None:
    """Calculate the difficulty of CHART_FILE (a JSON chart document)."""
    from catch_perf.pipeline import CalculationError, DifficultyCalculator

    settings = get_settings()
    output_format = output_format or settings.output_format

    chart = _load(chart_file)
    calculator = DifficultyCalculator(chart, settings)

    try:
        if all_mods:
            results = list(calculator.run_all())
        else:
            results = [calculator.run(_parse_mods(mods))]
    except CalculationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)

    if output_format == "json":
        data = []
        for result in results:
            entry = _to_serializable(result.attributes)
            if verbose:
                entry["notes"] = result.warnings
            data.append(entry)
        click.echo(json.dumps(data, indent=2))
        return

    console.print(f"[bold blue]{escape(_chart_name(chart))}[/bold blue]")
    for result in results:
        attributes = result.attributes
        console.print(
            f"  [green]{attributes.mods.acronyms or 'NM'}[/green]: "
            f"{attributes.star_rating:.2f} stars, "
            f"AR {attributes.approach_rate:.2f}, "
            f"max combo {attributes.max_combo}"
        )
        if verbose:
            for warning in result.warnings:
                console.print(f"    - {escape(warning)}")


@main.command()
@click.argument("chart_file", type=click.Path(path_type=Path))
@click.option("-m", "--mods", default="", help="Modifier acronyms, e.g. HDHR")
@click.option("--great", type=int, help="Fruits caught (default: all)")
@click.option("--large-ticks", type=int, help="Droplets caught (default: all)")
@click.option("--small-ticks", type=int, help="Tiny droplets caught (default: all)")
@click.option("--small-tick-misses", type=int, default=0, help="Tiny droplets missed")
@click.option("--misses", type=int, default=0, help="Fruits and droplets missed")
@click.option("--combo", type=int, help="Achieved max combo (default: chart max combo)")
def performance(
    chart_file: Path,
    mods: str,
    great: int | None,
    large_ticks: int | None,
    small_ticks: int | None,
    small_tick_misses: int,
    misses: int,
    combo: int | None,
) -> None:
    """Calculate the performance value of a play on CHART_FILE.

    Statistics that are not given are taken from a perfect play.
    """
    from catch_perf.models.attributes import HitStatistics, ScoreInfo
    from catch_perf.performance import PerformanceCalculator, simulate_statistics
    from catch_perf.pipeline import CalculationError, DifficultyCalculator

    chart = _load(chart_file)
    active_mods = _parse_mods(mods)

    try:
        attributes = DifficultyCalculator(chart, get_settings()).calculate_with_mods(active_mods)
    except CalculationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)

    if attributes.max_combo == 0:
        console.print("[yellow]Chart has nothing to catch; no performance value.[/yellow]")
        raise SystemExit(1)

    perfect = simulate_statistics(chart)
    statistics = HitStatistics(
        great=perfect.great if great is None else great,
        large_tick_hit=perfect.large_tick_hit if large_ticks is None else large_ticks,
        small_tick_hit=perfect.small_tick_hit if small_ticks is None else small_ticks,
        small_tick_miss=small_tick_misses,
        miss=misses,
    )
    score = ScoreInfo(
        statistics=statistics,
        max_combo=attributes.max_combo if combo is None else combo,
        mods=active_mods,
    )
    result = PerformanceCalculator(attributes).calculate(score)

    console.print(f"[bold blue]{escape(_chart_name(chart))}[/bold blue] +{active_mods.acronyms or 'NM'}")
    console.print(f"  Stars: {attributes.star_rating:.2f}")
    console.print(f"  Accuracy: {statistics.accuracy * 100:.2f}%")
    console.print(f"  Combo: {score.max_combo}/{attributes.max_combo}")
    console.print(f"  [bold green]{result.total:.2f}pp[/bold green]")


@main.command()
def info() -> None:
    """Show current configuration."""
    settings = get_settings()

    console.print("[bold]Configuration[/bold]")
    console.print(f"  Section length: {settings.section_length} ms")
    console.print(f"  Decay weight: {settings.decay_weight}")
    console.print(f"  Strain decay base: {settings.strain_decay_base}")
    console.print(f"  Skill multiplier: {settings.skill_multiplier}")
    console.print(f"  Output format: {settings.output_format}")


def _load(chart_file: Path):
    from catch_perf.chart_loader import ChartFormatError, load_chart

    if not chart_file.exists():
        console.print(f"[red]Error: File not found: {chart_file}[/red]")
        raise SystemExit(1)
    try:
        return load_chart(chart_file)
    except ChartFormatError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)


def _parse_mods(text: str):
    from catch_perf.models.mods import Mods

    try:
        return Mods.from_acronyms(text)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)


def _chart_name(chart) -> str:
    name = f"{chart.artist} - {chart.title}" if chart.artist else chart.title or "Untitled"
    return f"{name} [{chart.version}]" if chart.version else name


def _to_serializable(attributes) -> dict:
    data = asdict(attributes)
    data["mods"] = attributes.mods.acronyms
    return data


if __name__ == "__main__":
    main()
