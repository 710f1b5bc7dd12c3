"""CLI front end for the Stoplight fundability analyzer."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from dotenv import load_dotenv
from typing import Optional

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

from .analyzer import StoplightAnalyzer
from .config import get_display_settings, get_log_level, get_widget_settings, load_config
from .fundability import MIN_LOAN_AMOUNT
from .models import AnalysisSnapshot, DisplaySettings, Mode, WidgetSettings, coerce_mode
from .render import FIELD_LABELS, format_currency, render_inputs, render_outcome

app = typer.Typer(
    name="stoplight",
    help="Stoplight analyzer - is a rehab deal fully fundable, fundable with a downpayment, or not?",
)
console = Console()

FIELD_ALIASES: dict[str, str] = {
    "arv": "arv_amount",
    "rehab": "rehab_amount",
    "purchase": "purchase_amount",
    "value": "no_rehab_value",
}

MODE_ALIASES: dict[str, Mode] = {
    "rehab": Mode.REHAB_REQUIRED,
    "no-rehab": Mode.NO_REHAB,
    "norehab": Mode.NO_REHAB,
}

_HELP_TEXT = """\
Commands:
  arv <amount>       set after repair value (no amount clears it)
  rehab <amount>     set rehab amount
  purchase <amount>  set purchase price
  value <amount>     set current value (no-rehab mode)
  mode rehab|no-rehab
  example            load the example scenario
  clear              clear all amounts
  show               show inputs and outcome
  quit"""


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _setup(
    config_path: Optional[Path], verbose: bool
) -> tuple[WidgetSettings, DisplaySettings]:
    """Load config and configure logging. Exits on a missing or invalid config."""
    try:
        cfg = load_config(config_path)
        level = logging.DEBUG if verbose else get_log_level(cfg)
        widget, display = get_widget_settings(cfg), get_display_settings(cfg)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    _configure_logging(level)
    return widget, display


def _resolve_mode(mode: str) -> Mode:
    key = mode.strip().lower()
    if key in MODE_ALIASES:
        return MODE_ALIASES[key]
    return coerce_mode(key)


def _soft_hints(snapshot: AnalysisSnapshot, display: DisplaySettings) -> None:
    """Dim notice for amounts under the usual minimum; never a rejection."""
    inputs = snapshot.inputs
    for name, label in FIELD_LABELS.items():
        value = getattr(inputs, name)
        if value is not None and value < MIN_LOAN_AMOUNT:
            console.print(
                f"[dim]{label} {format_currency(value, display)} is below the usual "
                f"{format_currency(MIN_LOAN_AMOUNT, display)} minimum[/dim]"
            )


def _display(snapshot: AnalysisSnapshot, display: DisplaySettings) -> None:
    console.print(render_inputs(snapshot.inputs, display))
    panel = render_outcome(snapshot.outcome, display)
    if panel is None:
        console.print("[dim]Enter the scenario amounts to see an outcome.[/dim]")
    else:
        console.print(panel)


def _show_live(snapshot: AnalysisSnapshot, display: DisplaySettings) -> None:
    _soft_hints(snapshot, display)
    _display(snapshot, display)


def _emit(snapshot: AnalysisSnapshot, display: DisplaySettings, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(snapshot.to_dict(), indent=2))
        return
    _show_live(snapshot, display)


@app.command()
def analyze(
    arv: Optional[float] = typer.Option(None, "--arv", help="After repair value (ARV)"),
    rehab: Optional[float] = typer.Option(None, "--rehab", help="Rehab amount"),
    purchase: Optional[float] = typer.Option(None, "--purchase", help="Purchase price"),
    value: Optional[float] = typer.Option(None, "--value", help="Current value (no-rehab mode)"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="rehab or no-rehab (default from config)"),
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Evaluate one scenario and show the outcome panel."""
    widget, display = _setup(config_path, verbose)
    analyzer = StoplightAnalyzer(settings=widget)
    if mode:
        try:
            analyzer.set_mode(_resolve_mode(mode))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
    analyzer.set_field("arv_amount", arv)
    analyzer.set_field("rehab_amount", rehab)
    analyzer.set_field("purchase_amount", purchase)
    snapshot = analyzer.set_field("no_rehab_value", value)
    _emit(snapshot, display, as_json)


@app.command()
def example(
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="rehab or no-rehab (default from config)"),
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Show the built-in example scenario."""
    widget, display = _setup(config_path, verbose)
    analyzer = StoplightAnalyzer(settings=widget)
    if mode:
        try:
            analyzer.set_mode(_resolve_mode(mode))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
    snapshot = analyzer.load_example()
    _emit(snapshot, display, as_json)


def apply_command(
    analyzer: StoplightAnalyzer, line: str, display: DisplaySettings | None = None
) -> bool:
    """Apply one interactive command. Returns False when the session should end.

    Raises ValueError for unknown commands or modes.
    """
    parts = line.strip().split()
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]
    if cmd in ("quit", "exit", "q"):
        return False
    if cmd in FIELD_ALIASES:
        analyzer.set_field(FIELD_ALIASES[cmd], args[0] if args else None)
    elif cmd == "mode":
        if not args:
            raise ValueError("mode needs rehab or no-rehab")
        analyzer.set_mode(_resolve_mode(args[0]))
    elif cmd == "example":
        analyzer.load_example()
    elif cmd == "clear":
        analyzer.clear()
    elif cmd == "show":
        _display(analyzer.snapshot, display or DisplaySettings())
    elif cmd == "help":
        console.print(_HELP_TEXT)
    else:
        raise ValueError(f"Unknown command: {cmd} (try 'help')")
    return True


@app.command()
def interactive(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Edit a scenario live; the outcome re-renders after every change."""
    widget, display = _setup(config_path, verbose)
    analyzer = StoplightAnalyzer(settings=widget)
    analyzer.subscribe(lambda snap: _show_live(snap, display))
    console.print(_HELP_TEXT)
    while True:
        try:
            line = Prompt.ask("[bold]stoplight[/bold]", console=console)
        except EOFError:
            break
        try:
            if not apply_command(analyzer, line, display):
                break
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")


if __name__ == "__main__":
    app()
