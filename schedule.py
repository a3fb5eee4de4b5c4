"""
Payment schedule calculator for the Pautang loan form.

Two lending rules share one calculator:
  Daily:   flat 10% charged once over the whole term, split evenly per day
  Monthly: 10% APR simple interest prorated by term, split evenly per month

Interest in monthly mode is always taken on the original principal, not on
the declining balance. Running balances are kept at full float precision;
only the reported fields are rounded (half-up, 2dp).
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Tuple

import numpy as np

import config as cfg

REQUIRED_MESSAGE = "Credit Amount and Term are required."
TERM_LIMIT_MESSAGE = f"Term must be at most {cfg.MAX_TERM} periods."

_CENT = Decimal(1).scaleb(-cfg.MONEY_PLACES)


# ─── Errors ──────────────────────────────────────────────────────────

class ValidationError(ValueError):
    """Raised when loan inputs are missing, non-numeric or not positive."""


# ─── Data Classes ────────────────────────────────────────────────────

class Mode(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"

    @property
    def noun(self) -> str:
        return "day" if self is Mode.DAILY else "month"

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def parse(cls, value: Any) -> "Mode":
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError(f"Unknown calculation mode: {value!r}") from None


@dataclass(frozen=True)
class LoanInput:
    """Validated calculator inputs."""

    principal: float       # amount lent, before interest
    term_length: int       # number of periods (days or months by mode)
    mode: Mode = Mode.DAILY

    def __post_init__(self) -> None:
        if isinstance(self.principal, bool) or not isinstance(self.principal, (numbers.Real, Decimal)):
            raise ValidationError(REQUIRED_MESSAGE)
        try:
            principal = float(self.principal)
        except (OverflowError, ValueError):
            raise ValidationError(REQUIRED_MESSAGE) from None
        if not math.isfinite(principal) or principal <= 0:
            raise ValidationError(REQUIRED_MESSAGE)
        if isinstance(self.term_length, bool) or not isinstance(self.term_length, numbers.Integral):
            raise ValidationError(REQUIRED_MESSAGE)
        if self.term_length <= 0:
            raise ValidationError(REQUIRED_MESSAGE)
        if self.term_length > cfg.MAX_TERM:
            raise ValidationError(TERM_LIMIT_MESSAGE)
        object.__setattr__(self, "principal", principal)
        object.__setattr__(self, "term_length", int(self.term_length))
        object.__setattr__(self, "mode", Mode.parse(self.mode))


@dataclass(frozen=True)
class PaymentPeriod:
    """One row of the payment table. Money fields are rounded to 2dp."""

    period: int
    payment: Decimal
    interest_component: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class PaymentSchedule:
    """Ordered, immutable list of payment periods for one calculation."""

    loan: LoanInput
    periods: Tuple[PaymentPeriod, ...]
    total_interest: Decimal
    total_amount_due: Decimal
    raw_balances: Tuple[float, ...]   # unrounded balance after each period

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self) -> Iterator[PaymentPeriod]:
        return iter(self.periods)

    def __getitem__(self, index: int) -> PaymentPeriod:
        return self.periods[index]

    @property
    def mode(self) -> Mode:
        return self.loan.mode

    @property
    def balances(self) -> np.ndarray:
        """Remaining balance per period as a float array (for charts)."""
        return np.asarray(self.raw_balances, dtype=float)


# ─── Helpers ─────────────────────────────────────────────────────────

def round_money(value: float) -> Decimal:
    """Round *value* half-up to the display precision."""
    return Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP)


def _strip_currency(s: str) -> str:
    """Remove currency symbols, commas, spaces."""
    return (
        s.replace(cfg.CURRENCY_SYMBOL, "")
        .replace("PHP", "")
        .replace(",", "")
        .replace(" ", "")
    )


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def _parse_principal(raw: Any) -> float:
    if _is_blank(raw):
        raise ValidationError(REQUIRED_MESSAGE)
    try:
        value = float(_strip_currency(raw) if isinstance(raw, str) else raw)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Credit Amount must be a number.") from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(REQUIRED_MESSAGE)
    return value


def _parse_term(raw: Any) -> int:
    if _is_blank(raw):
        raise ValidationError(REQUIRED_MESSAGE)
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Term must be a whole number.") from None
    if not math.isfinite(value):
        raise ValidationError("Term must be a whole number.")
    # fractional terms are truncated, so "0.5" is rejected as zero
    term = int(value)
    if term <= 0:
        raise ValidationError(REQUIRED_MESSAGE)
    if term > cfg.MAX_TERM:
        raise ValidationError(TERM_LIMIT_MESSAGE)
    return term


def parse_loan_input(principal: Any, term: Any, mode: Any = Mode.DAILY) -> LoanInput:
    """Build a LoanInput from raw form or prompt values.

    Raises
    ------
    ValidationError
        If the amount or term is missing, non-numeric or not positive,
        or the mode is not ``daily``/``monthly``.
    """
    return LoanInput(
        principal=_parse_principal(principal),
        term_length=_parse_term(term),
        mode=Mode.parse(mode),
    )


# ─── Lending rules ───────────────────────────────────────────────────
# Each rule returns (total_interest, payment, interest_component,
# principal_step), all unrounded and constant across periods.

_Terms = Tuple[float, float, float, float]


def _daily_flat_terms(principal: float, n: int) -> _Terms:
    total_interest = principal * cfg.DAILY_FLAT_RATE
    total_due = principal + total_interest
    payment = total_due / n
    interest = total_interest / n
    principal_step = principal / n
    return total_interest, payment, interest, principal_step


def _monthly_simple_terms(principal: float, n: int) -> _Terms:
    annual_rate = cfg.MONTHLY_ANNUAL_RATE
    monthly_rate = annual_rate / cfg.MONTHS_PER_YEAR
    total_interest = principal * annual_rate * (n / cfg.MONTHS_PER_YEAR)
    total_due = principal + total_interest
    payment = total_due / n
    interest = principal * monthly_rate
    principal_step = payment - interest
    return total_interest, payment, interest, principal_step


_RULES: Dict[Mode, Callable[[float, int], _Terms]] = {
    Mode.DAILY: _daily_flat_terms,
    Mode.MONTHLY: _monthly_simple_terms,
}


# ─── Core calculation ────────────────────────────────────────────────

def compute(loan: LoanInput) -> PaymentSchedule:
    """Compute the payment schedule for a validated loan."""
    if not isinstance(loan, LoanInput):
        raise ValidationError(REQUIRED_MESSAGE)

    n = loan.term_length
    total_interest, payment, interest, principal_step = _RULES[loan.mode](loan.principal, n)

    payment_2dp = round_money(payment)
    interest_2dp = round_money(interest)

    periods = []
    balances = []
    balance = loan.principal
    for i in range(1, n + 1):
        balance = max(0.0, balance - principal_step)
        balances.append(balance)
        periods.append(PaymentPeriod(
            period=i,
            payment=payment_2dp,
            interest_component=interest_2dp,
            remaining_balance=round_money(balance),
        ))

    return PaymentSchedule(
        loan=loan,
        periods=tuple(periods),
        total_interest=round_money(total_interest),
        total_amount_due=round_money(loan.principal + total_interest),
        raw_balances=tuple(balances),
    )


def compute_schedule(principal: Any, term: Any, mode: Any = Mode.DAILY) -> PaymentSchedule:
    """Parse raw inputs and compute in one step."""
    return compute(parse_loan_input(principal, term, mode))
