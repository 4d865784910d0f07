#!/usr/bin/env python3
"""
running-log CLI.

Race predictions, dashboard numbers and race forecasts from a running log.

Usage:
    runlog predict --distance 5 --time 20:00    # Race calculator
    runlog dashboard                             # Stats, best effort, weekly volume
    runlog races --distance 10                   # Races near 10K with forecasts
    runlog history --search park --sort pace-asc # Training history
    runlog serve                                 # Start the HTTP API
"""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from .config import get_settings
from .exceptions import RunningLogError, ValidationError
from .loader import load_races, load_runs
from .metrics.vdot import PaceZone, RacePrediction, calculate_race_predictions
from .analysis.filters import HistorySort, IndexedRecord, search_history, sort_history
from .analysis.forecast import analyze_race_distance
from .analysis.stats import (
    best_effort_predictions,
    calculate_dashboard_stats,
    recent_pace_series,
    recent_runs,
    weekly_aggregation,
)
from .utils.formatting import format_pace, format_time, parse_time

console = Console()
logger = logging.getLogger(__name__)


def _pace_text(seconds_per_km: Optional[float]) -> str:
    if seconds_per_km is None:
        return "-"
    return f"{format_pace(seconds_per_km)}/km"


def _print_predictions(title: str, predictions: List[RacePrediction]) -> None:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Distance", style="cyan")
    table.add_column("Time", justify="right")
    table.add_column("Pace", justify="right")

    for p in predictions:
        table.add_row(p.label, p.time_formatted, _pace_text(p.pace_sec_per_km))

    console.print(table)


def _print_zones(zones: List[PaceZone]) -> None:
    table = Table(title="Training Paces", box=box.ROUNDED)
    table.add_column("Zone", style="cyan")
    table.add_column("Pace", justify="right")
    table.add_column("Purpose")
    table.add_column("Splits", style="dim")

    for zone in zones:
        splits = "  ".join(
            f"{split.distance_m}m {split.time_formatted}" for split in zone.intervals
        )
        table.add_row(zone.name, zone.pace_formatted, zone.description, splits)

    console.print(table)


def _print_record_table(title: str, items: List[IndexedRecord]) -> None:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Date")
    table.add_column("Distance", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Pace", justify="right")
    table.add_column("HR", justify="right")
    table.add_column("Notes")

    for item in items:
        record = item.record
        label = " - ".join(part for part in (getattr(record, "race_name", None), record.notes) if part)
        table.add_row(
            str(item.index),
            record.date.isoformat(),
            f"{record.distance_km:g} km",
            format_time(record.time_seconds),
            _pace_text(record.pace_seconds_per_km),
            str(record.heart_rate_bpm) if record.heart_rate_bpm else "-",
            label,
        )

    console.print(table)


def cmd_predict(args):
    """Run the race calculator for one performance."""
    settings = get_settings()

    try:
        time_seconds = parse_time(args.time)
    except ValueError as e:
        raise ValidationError(str(e), field="time_seconds") from e

    report = calculate_race_predictions(
        args.distance,
        time_seconds,
        targets=settings.prediction_distances_km,
    )

    console.print()
    console.print(Panel(
        f"[bold]{args.distance:g} km in {format_time(report.time_seconds)}[/bold]\n"
        f"VDOT: [green]{report.vdot:.1f}[/green]",
        title="Race Calculator",
        box=box.ROUNDED,
    ))
    _print_predictions("Riegel Formula", report.riegel_predictions)
    _print_predictions("VDOT Model", report.vdot_predictions)
    _print_zones(report.pace_zones)


def cmd_dashboard(args):
    """Show dashboard stats from the training-run snapshot."""
    settings = get_settings()
    runs = load_runs(args.runs or settings.runs_path)

    stats = calculate_dashboard_stats(runs, date.today())

    avg_hr = f"{stats.average_heart_rate} bpm" if stats.average_heart_rate is not None else "-"
    best = (
        f"{stats.best_effort.record.distance_km:g} km on {stats.best_effort.record.date} "
        f"(VDOT {stats.best_effort.vdot:.1f})"
        if stats.best_effort else "-"
    )

    console.print()
    console.print(Panel(
        f"Total runs:      {stats.total_runs}\n"
        f"Last 7 days:     {stats.weekly_volume_km:.1f} km\n"
        f"Average pace:    {_pace_text(stats.average_pace_sec_per_km)}\n"
        f"Average HR:      {avg_hr}\n"
        f"Best effort:     {best}",
        title="Dashboard",
        box=box.ROUNDED,
    ))

    predictions = best_effort_predictions(runs, settings.prediction_distances_km)
    if predictions:
        _print_predictions("Predictions from Best Effort", predictions.predictions)
    else:
        console.print("[yellow]No runs with distance and time to predict from.[/yellow]")

    weekly = weekly_aggregation(runs, settings.weekly_chart_weeks)
    if weekly.weeks:
        table = Table(title=f"Weekly Volume (avg {weekly.average_km:.1f} km)", box=box.ROUNDED)
        table.add_column("Week of")
        table.add_column("Distance", justify="right")
        for week in weekly.weeks:
            table.add_row(week.week_start.isoformat(), f"{week.distance_km:.1f} km")
        console.print(table)

    pace = recent_pace_series(runs, settings.pace_series_runs)
    if pace.average_min_per_km is not None:
        console.print(
            f"Recent pace ({len(pace.paces_min_per_km)} runs): "
            f"avg {_pace_text(pace.average_min_per_km * 60)}"
        )

    latest = recent_runs(runs, settings.recent_runs_limit)
    _print_record_table(
        "Recent Runs",
        [IndexedRecord(index=i, record=run) for i, run in enumerate(latest)],
    )


def cmd_races(args):
    """Show races near one distance with their forecasts."""
    settings = get_settings()
    races = load_races(args.races or settings.races_path)

    analysis = analyze_race_distance(
        races,
        args.distance,
        periods=settings.forecast_periods,
        window=settings.forecast_window,
    )

    console.print()
    if not analysis.has_races:
        console.print(f"[yellow]No races recorded near {args.distance:g} km.[/yellow]")
        return

    _print_record_table(f"Races near {args.distance:g} km", analysis.races)

    trend = analysis.trend
    lines = []
    if trend.finish_time_forecast:
        lines.append(f"Trend finish time:  {format_time(trend.finish_time_forecast[0] * 60)}")
    if trend.pace_forecast:
        lines.append(f"Trend pace:         {_pace_text(trend.pace_forecast[0] * 60)}")
    if trend.heart_rate_forecast:
        lines.append(f"Trend heart rate:   {trend.heart_rate_forecast[0]:.0f} bpm")
    if analysis.vdot_forecast_sec is not None:
        lines.append(f"VDOT forecast:      {format_time(analysis.vdot_forecast_sec)}")

    if lines:
        console.print(Panel("\n".join(lines), title="Next Race Forecast", box=box.ROUNDED))
    else:
        console.print("[dim]Need at least two races for a trend.[/dim]")


def cmd_history(args):
    """List training history with optional search and sort."""
    settings = get_settings()
    runs = load_runs(args.runs or settings.runs_path)

    items = sort_history(search_history(runs, args.search or ""), args.sort)

    console.print()
    if not items:
        console.print("[yellow]No runs match.[/yellow]")
        return
    _print_record_table(f"Training History ({len(items)} runs)", items)


def cmd_serve(args):
    """Start the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "running_log.api.app:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="runlog",
        description="running-log - race predictions and training trends",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  runlog predict --distance 5 --time 20:00
  runlog dashboard --runs data/runs.json
  runlog races --distance 21.1
  runlog history --search tempo --sort date-asc
  runlog serve --port 8000
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Predict command
    predict_p = subparsers.add_parser("predict", help="Race calculator")
    predict_p.add_argument(
        "--distance", "-d", type=float, required=True, help="Distance run in km"
    )
    predict_p.add_argument(
        "--time", "-t", type=str, required=True, help="Time taken (H:MM:SS, MM:SS or seconds)"
    )

    # Dashboard command
    dashboard_p = subparsers.add_parser("dashboard", help="Show dashboard stats")
    dashboard_p.add_argument("--runs", type=str, help="Training-run snapshot (JSON)")

    # Races command
    races_p = subparsers.add_parser("races", help="Show races and forecasts for a distance")
    races_p.add_argument(
        "--distance", "-d", type=float, default=10.0, help="Nominal distance in km"
    )
    races_p.add_argument("--races", type=str, help="Race snapshot (JSON)")

    # History command
    history_p = subparsers.add_parser("history", help="Search and sort training history")
    history_p.add_argument("--runs", type=str, help="Training-run snapshot (JSON)")
    history_p.add_argument("--search", "-s", type=str, help="Match notes, date or distance")
    history_p.add_argument(
        "--sort",
        choices=[order.value for order in HistorySort],
        default=HistorySort.DATE_DESC.value,
        help="Sort order",
    )

    # Serve command
    serve_p = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_p.add_argument("--host", type=str, help="Bind address")
    serve_p.add_argument("--port", type=int, help="Port")

    return parser


COMMANDS = {
    "predict": cmd_predict,
    "dashboard": cmd_dashboard,
    "races": cmd_races,
    "history": cmd_history,
    "serve": cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        COMMANDS[args.command](args)
    except RunningLogError as e:
        logger.debug(repr(e))
        console.print(f"[red]Error: {e.message}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
