"""Rich renderables for the analyzer panels."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Category, DisplaySettings, FundabilityOutcome, InputState, Mode

# Panel border style per category (success / warning / danger / primary)
TONES: dict[Category, str] = {
    Category.FULLY_FUNDABLE: "green",
    Category.FUNDABLE_WITH_DOWNPAYMENT: "yellow",
    Category.NOT_FUNDABLE: "red",
    Category.NO_REHAB_FUNDED: "blue",
}

FIELD_LABELS: dict[str, str] = {
    "arv_amount": "After Repair Value (ARV)",
    "rehab_amount": "Rehab Amount",
    "purchase_amount": "Purchase Price",
    "no_rehab_value": "Current Value",
}

MODE_LABELS: dict[Mode, str] = {
    Mode.REHAB_REQUIRED: "Rehab Required",
    Mode.NO_REHAB: "No Rehab",
}

MODE_FIELDS: dict[Mode, tuple[str, ...]] = {
    Mode.REHAB_REQUIRED: ("arv_amount", "rehab_amount", "purchase_amount"),
    Mode.NO_REHAB: ("no_rehab_value",),
}


def format_currency(amount: float | None, settings: DisplaySettings | None = None) -> str:
    """Format like ``$104,000.00``; unset amounts render as an empty string."""
    if amount is None:
        return ""
    s = settings or DisplaySettings()
    sign = "-" if amount < 0 else ""
    return f"{sign}{s.currency_symbol}{abs(amount):,.{s.decimals}f}"


def format_depth(depth: float | None) -> str:
    if depth is None:
        return ""
    return f"{depth:.2f}%"


def outcome_headline(outcome: FundabilityOutcome, settings: DisplaySettings | None = None) -> str:
    """Plain-text message shown at the top of the outcome panel."""
    c = outcome.category
    if c is Category.FULLY_FUNDABLE:
        return "Fully Fundable - we can fund the entire purchase and rehab cost in draws"
    if c is Category.FUNDABLE_WITH_DOWNPAYMENT:
        amount = format_currency(outcome.downpayment_needed_amount, settings)
        return (
            f"Fundable with downpayment - we can fund if you provide a {amount} "
            "downpayment to bring our loan to 80% of as-is"
        )
    if c is Category.NOT_FUNDABLE:
        return (
            "Sorry, not fundable - you're buying above the as-is value, "
            "with a high chance of losing money"
        )
    if c is Category.NO_REHAB_FUNDED:
        return "No rehab? We fund 70% of the current value: " + format_currency(
            outcome.no_rehab_loan_amount, settings
        )
    return ""


def _draws_table(outcome: FundabilityOutcome, settings: DisplaySettings) -> Table:
    table = Table(show_header=False, show_footer=True, box=None, padding=(0, 2))
    table.add_column(footer=Text("Total loan amount", style="bold"))
    table.add_column(
        justify="right",
        footer=Text(format_currency(outcome.total_loan_amount, settings), style="bold"),
    )
    table.add_row("Purchase (80% of as-is)", format_currency(outcome.purchase_draw, settings))
    table.add_row("Rehab draws", format_currency(outcome.rehab_amount, settings))
    return table


def render_outcome(
    outcome: FundabilityOutcome,
    settings: DisplaySettings | None = None,
) -> Panel | None:
    """Outcome panel, or None when there is nothing to show yet."""
    if not outcome.has_panel:
        return None
    s = settings or DisplaySettings()
    parts: list[RenderableType] = [Text(outcome_headline(outcome, s), style="bold")]
    if outcome.category in (Category.FULLY_FUNDABLE, Category.FUNDABLE_WITH_DOWNPAYMENT):
        parts.append(Text(""))
        parts.append(_draws_table(outcome, s))
    if s.show_depth and outcome.depth is not None:
        parts.append(Text(""))
        parts.append(
            Text(
                f"As-is value {format_currency(outcome.as_is_value, s)}"
                f" | depth {format_depth(outcome.depth)}",
                style="dim",
            )
        )
    return Panel(Group(*parts), border_style=TONES[outcome.category], expand=False)


def render_inputs(inputs: InputState, settings: DisplaySettings | None = None) -> Table:
    """Table of the fields visible in the active mode."""
    s = settings or DisplaySettings()
    table = Table(title=MODE_LABELS[inputs.mode], show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Amount", justify="right")
    for name in MODE_FIELDS[inputs.mode]:
        value = getattr(inputs, name)
        table.add_row(FIELD_LABELS[name], format_currency(value, s) or "[dim]-[/dim]")
    return table
