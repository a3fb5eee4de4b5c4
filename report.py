"""
Printable statement and chart rendering for the Pautang calculator.

Provides:
  - Multi-page A4 PDF statement (generate_pdf)
  - Base64-encoded balance chart for web embedding (balance_chart_base64)
"""

from __future__ import annotations

import base64
import io
from dataclasses import dataclass
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter, MaxNLocator
import numpy as np

import config as cfg
from schedule import PaymentSchedule

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#ffffff"
TEXT = "#111827"
TEXT2 = "#4b5563"
INDIGO = "#4f46e5"
INDIGO_LIGHT = "#e0e7ff"
EMERALD = "#10b981"
ROW_ALT = "#f9fafb"
BORDER = "#d1d5db"

A4W, A4H = 8.27, 11.69
WEB_W, WEB_H = 10, 4.5

ROWS_FIRST_PAGE = 18
ROWS_PER_PAGE = 40

PESO = cfg.CURRENCY_SYMBOL


@dataclass
class BorrowerDetails:
    """Form fields echoed onto the statement. Not used in calculation."""

    name: str = ""
    address: str = ""
    received_cash: str = ""
    date: str = ""
    due_date: str = ""


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _peso_fmt(x, _):
    if abs(x) >= 1e6:
        return f"{PESO}{x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"{PESO}{x / 1e3:.0f}k"
    return f"{PESO}{x:.0f}"


PESO_FMT = FuncFormatter(_peso_fmt)


def _money(value) -> str:
    return f"{PESO}{value:,.2f}"


# ═══════════════════════════════════════════════════════════════════
# Charts
# ═══════════════════════════════════════════════════════════════════

def _balance_axes(ax, schedule: PaymentSchedule) -> None:
    """Bar chart of remaining principal after each period."""
    periods = np.arange(1, len(schedule) + 1)
    balances = schedule.balances
    ax.bar(periods, balances, color=INDIGO, alpha=0.85, width=0.8)
    ax.axhline(0, color=BORDER, linewidth=0.8)
    ax.set_xlabel(schedule.mode.noun.title())
    ax.set_ylabel("Remaining principal")
    ax.yaxis.set_major_formatter(PESO_FMT)
    ax.xaxis.set_major_locator(MaxNLocator(integer=True))
    ax.set_xlim(0.4, len(schedule) + 0.6)
    ax.set_ylim(0, schedule.loan.principal * 1.05)
    ax.grid(True, axis="y", alpha=0.3, color=BORDER)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)
    ax.tick_params(colors=TEXT2, labelsize=8)


def balance_figure(schedule: PaymentSchedule, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    fig, ax = plt.subplots(figsize=figsize)
    fig.patch.set_facecolor(BG)
    _balance_axes(ax, schedule)
    ax.set_title(f"Remaining principal by {schedule.mode.noun}",
                 fontsize=11, color=TEXT, fontweight="bold")
    fig.tight_layout()
    return fig


# ═══════════════════════════════════════════════════════════════════
# Statement pages
# ═══════════════════════════════════════════════════════════════════

def _table_rows(schedule: PaymentSchedule, start: int, stop: int) -> List[List[str]]:
    return [
        [str(p.period), _money(p.payment), _money(p.interest_component),
         _money(p.remaining_balance)]
        for p in schedule.periods[start:stop]
    ]


def _draw_table(ax, schedule: PaymentSchedule, start: int, stop: int) -> None:
    noun = schedule.mode.noun.title()
    header = [noun, f"{schedule.mode.label} Payment", "Interest Component",
              "Remaining Principal"]
    ax.axis("off")
    rows = _table_rows(schedule, start, stop)
    table = ax.table(cellText=rows, colLabels=header, loc="upper center",
                     cellLoc="left", colLoc="left")
    table.auto_set_font_size(False)
    table.set_fontsize(8)
    table.scale(1, 1.25)
    for (r, _c), cell in table.get_celld().items():
        cell.set_edgecolor(BORDER)
        if r == 0:
            cell.set_facecolor(INDIGO_LIGHT)
            cell.set_text_props(fontweight="bold", color=TEXT)
        elif r % 2 == 1:
            cell.set_facecolor(ROW_ALT)


def _page1_summary(schedule: PaymentSchedule, borrower: BorrowerDetails) -> plt.Figure:
    fig = plt.figure(figsize=(A4W, A4H))
    fig.patch.set_facecolor(BG)

    fig.text(0.08, 0.94, cfg.APP_TITLE, fontsize=18, color=INDIGO, fontweight="bold")
    fig.text(0.08, 0.915, f"{schedule.mode.label} payment statement",
             fontsize=11, color=TEXT2)

    loan = schedule.loan
    details = [
        ("Name", borrower.name or "-"),
        ("Address", borrower.address or "-"),
        ("Received cash", borrower.received_cash or "-"),
        ("Date", borrower.date or "-"),
        ("Due date", borrower.due_date or "-"),
        ("Credit amount", _money(loan.principal)),
        (f"Term ({loan.mode.noun}s)", str(loan.term_length)),
        ("Total interest", _money(schedule.total_interest)),
        ("Total amount due", _money(schedule.total_amount_due)),
    ]
    y = 0.87
    for label, value in details:
        fig.text(0.08, y, f"{label}:", fontsize=9.5, color=TEXT2)
        fig.text(0.32, y, value, fontsize=9.5, color=TEXT, fontweight="bold")
        y -= 0.022

    chart_ax = fig.add_axes([0.10, 0.50, 0.82, 0.14])
    _balance_axes(chart_ax, schedule)

    fig.text(0.08, 0.455, f"LIST OF {schedule.mode.label.upper()} PAYMENTS",
             fontsize=12, color=TEXT, fontweight="bold")
    table_ax = fig.add_axes([0.08, 0.03, 0.84, 0.41])
    _draw_table(table_ax, schedule, 0, ROWS_FIRST_PAGE)
    return fig


def _continuation_page(schedule: PaymentSchedule, start: int) -> plt.Figure:
    fig = plt.figure(figsize=(A4W, A4H))
    fig.patch.set_facecolor(BG)
    fig.text(0.08, 0.95, f"LIST OF {schedule.mode.label.upper()} PAYMENTS (continued)",
             fontsize=11, color=TEXT, fontweight="bold")
    ax = fig.add_axes([0.08, 0.04, 0.84, 0.89])
    _draw_table(ax, schedule, start, start + ROWS_PER_PAGE)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=120, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def statement_pages(schedule: PaymentSchedule, borrower: BorrowerDetails) -> List[plt.Figure]:
    pages = [_page1_summary(schedule, borrower)]
    for start in range(ROWS_FIRST_PAGE, len(schedule), ROWS_PER_PAGE):
        pages.append(_continuation_page(schedule, start))
    return pages


def write_pdf(schedule: PaymentSchedule, borrower: BorrowerDetails, target) -> None:
    """Write the statement to a path or binary file object."""
    pages = statement_pages(schedule, borrower)
    try:
        with PdfPages(target) as pdf:
            for fig in pages:
                pdf.savefig(fig, facecolor=fig.get_facecolor())
    finally:
        for fig in pages:
            plt.close(fig)


def generate_pdf(
    schedule: PaymentSchedule,
    borrower: BorrowerDetails,
    path: str = cfg.PDF_PATH,
) -> str:
    """Generate the PDF statement. Returns the file path."""
    write_pdf(schedule, borrower, path)
    return path


def pdf_bytes(schedule: PaymentSchedule, borrower: BorrowerDetails) -> bytes:
    buf = io.BytesIO()
    write_pdf(schedule, borrower, buf)
    return buf.getvalue()


def balance_chart_base64(schedule: PaymentSchedule) -> str:
    fig = balance_figure(schedule)
    try:
        return figure_to_base64(fig)
    finally:
        plt.close(fig)
