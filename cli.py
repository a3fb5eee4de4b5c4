"""
CLI interface and shared formatting helpers for the Pautang
payment schedule calculator.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Tuple

import config as cfg
from clients import ClientNameStore
from schedule import (
    LoanInput,
    Mode,
    PaymentSchedule,
    ValidationError,
    compute,
    parse_loan_input,
)
import report
from report import BorrowerDetails


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val, decimals: int = 2) -> str:
    """Format number as ₱X,XXX.XX."""
    return f"{cfg.CURRENCY_SYMBOL}{val:,.{decimals}f}"


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _prompt_text(label: str, default: str = "") -> str:
    raw = input(f"  {label} [{default}]: ").strip()
    return raw or default


def _prompt_choice(label: str, options: list[str], default: str) -> str:
    opts = "/".join(options)
    while True:
        raw = input(f"  {label} ({opts}) [{default}]: ").strip().lower()
        if not raw:
            return default
        if raw in options:
            return raw
        print(f"    Choose from: {opts}")


def _prompt_loan(mode: Mode) -> LoanInput:
    """Ask for credit amount and term until they validate."""
    default_term = "60" if mode is Mode.DAILY else "12"
    while True:
        amount = _prompt_text("Credit amount", "5000")
        term = _prompt_text(f"Term ({mode.noun}s)", default_term)
        try:
            return parse_loan_input(amount, term, mode)
        except ValidationError as e:
            print(f"    {e}")


def collect_inputs(store: Optional[ClientNameStore] = None) -> Tuple[LoanInput, BorrowerDetails]:
    """Prompt the user for borrower details and loan terms."""
    print("\n  Enter the credit details (press Enter for defaults):\n")

    mode = Mode.parse(_prompt_choice("Calculation", ["daily", "monthly"], "daily"))

    if store is not None and store.names:
        print(f"    Known clients: {', '.join(store.names)}")
    name = _prompt_text("Name")
    if store is not None:
        store.add(name)
    address = _prompt_text("Address")
    received = _prompt_text("Received cash")

    loan = _prompt_loan(mode)

    date = _prompt_text("Date (YYYY-MM-DD)")
    due_date = _prompt_text("Due date (YYYY-MM-DD)")

    borrower = BorrowerDetails(
        name=name.strip(),
        address=address,
        received_cash=received,
        date=date,
        due_date=due_date,
    )
    return loan, borrower


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)
H_BAR = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    bar = H_BAR * inner
    return (
        f"╔{bar}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{bar}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 30) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H_BAR * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def summary_rows(schedule: PaymentSchedule, borrower: BorrowerDetails) -> List[str]:
    loan = schedule.loan
    return [
        _box_row("Name", borrower.name or "-"),
        _box_row("Address", borrower.address or "-"),
        _box_row("Received cash", borrower.received_cash or "-"),
        _box_row("Date / Due date", f"{borrower.date or '-'} / {borrower.due_date or '-'}"),
        _box_line(),
        _box_row("Credit amount", fmt(loan.principal)),
        _box_row(f"Term ({loan.mode.noun}s)", str(loan.term_length)),
        _box_row("Total interest", fmt(schedule.total_interest)),
        _box_row("Total amount due", fmt(schedule.total_amount_due)),
    ]


def schedule_rows(schedule: PaymentSchedule) -> List[str]:
    noun = schedule.mode.noun.title()
    pay_label = f"{schedule.mode.label} Payment"
    header = f"{noun:>6}  {pay_label:>16}  {'Interest':>14}  {'Remaining':>16}"
    rows = [_box_line(header), _box_line("─" * (W - 6))]
    for p in schedule:
        rows.append(_box_line(
            f"{p.period:>6}  "
            f"{fmt(p.payment):>16}  "
            f"{fmt(p.interest_component):>14}  "
            f"{fmt(p.remaining_balance):>16}"
        ))
    return rows


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(store: Optional[ClientNameStore] = None) -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError, ValueError):
        pass
    print()
    print("=" * W)
    print(f"  {cfg.APP_TITLE}")
    print("=" * W)

    if store is None:
        store = ClientNameStore()

    loan, borrower = collect_inputs(store)
    schedule = compute(loan)

    print()
    _print_section(f"{loan.mode.label.upper()} CALCULATION", summary_rows(schedule, borrower))
    _print_section(f"LIST OF {loan.mode.label.upper()} PAYMENTS", schedule_rows(schedule))

    if _prompt_choice("Save PDF statement?", ["yes", "no"], "no") == "yes":
        print("\n  Generating PDF statement...")
        pdf_path = report.generate_pdf(schedule, borrower, cfg.PDF_PATH)
        print(f"  Saved to {pdf_path}\n")


if __name__ == "__main__":
    run_cli()
