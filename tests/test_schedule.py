from decimal import Decimal

import pytest

import config as cfg
from schedule import (
    REQUIRED_MESSAGE,
    TERM_LIMIT_MESSAGE,
    LoanInput,
    Mode,
    PaymentSchedule,
    ValidationError,
    compute,
    compute_schedule,
    parse_loan_input,
    round_money,
)


def _d(x) -> Decimal:
    return Decimal(str(x))


# ─── Worked examples ─────────────────────────────────────────────────

def test_daily_example_5000_over_60_days():
    sched = compute(LoanInput(5000, 60, Mode.DAILY))

    assert len(sched) == 60
    assert sched.total_interest == _d("500.00")
    assert sched.total_amount_due == _d("5500.00")
    first = sched[0]
    assert first.period == 1
    assert first.payment == _d("91.67")
    assert first.interest_component == _d("8.33")
    assert first.remaining_balance == _d("4916.67")
    assert sched[-1].remaining_balance == _d("0.00")


def test_monthly_example_12000_over_12_months():
    sched = compute(LoanInput(12000, 12, Mode.MONTHLY))

    assert len(sched) == 12
    assert sched.total_interest == _d("1200.00")
    assert sched.total_amount_due == _d("13200.00")
    for p in sched:
        assert p.payment == _d("1100.00")
        assert p.interest_component == _d("100.00")
    assert sched[0].remaining_balance == _d("11000.00")
    assert sched[1].remaining_balance == _d("10000.00")
    assert sched[-1].remaining_balance == _d("0.00")


def test_monthly_interest_stays_on_original_principal():
    sched = compute(LoanInput(6000, 6, Mode.MONTHLY))
    # 6000 * 0.10 / 12 every month, even as the balance falls
    assert {p.interest_component for p in sched} == {_d("50.00")}
    assert sched.total_interest == _d("300.00")
    assert sched[0].payment == _d("1050.00")


def test_single_period_is_total_amount_due():
    daily = compute(LoanInput(1000, 1, Mode.DAILY))
    assert len(daily) == 1
    assert daily[0].payment == daily.total_amount_due == _d("1100.00")
    assert daily[0].remaining_balance == _d("0.00")

    monthly = compute(LoanInput(1200, 1, Mode.MONTHLY))
    assert monthly[0].payment == monthly.total_amount_due == _d("1210.00")
    assert monthly[0].interest_component == _d("10.00")


# ─── Properties ──────────────────────────────────────────────────────

CASES = [
    (5000, 60, Mode.DAILY),
    (1234.56, 7, Mode.DAILY),
    (99.99, 30, Mode.DAILY),
    (12000, 12, Mode.MONTHLY),
    (7777.77, 18, Mode.MONTHLY),
    (250, 5, Mode.MONTHLY),
]


@pytest.mark.parametrize("principal,term,mode", CASES)
def test_length_and_period_indexing(principal, term, mode):
    sched = compute(LoanInput(principal, term, mode))
    assert len(sched) == term
    assert [p.period for p in sched] == list(range(1, term + 1))


@pytest.mark.parametrize("principal,term,mode", CASES)
def test_balance_non_increasing_and_non_negative(principal, term, mode):
    sched = compute(LoanInput(principal, term, mode))
    balances = [p.remaining_balance for p in sched]
    assert all(b >= 0 for b in balances)
    assert all(a >= b for a, b in zip(balances, balances[1:]))
    assert (sched.balances >= 0).all()


@pytest.mark.parametrize("principal,term", [(5000, 60), (1234.56, 7), (99.99, 30), (10, 3)])
def test_daily_interest_sums_to_flat_rate(principal, term):
    sched = compute(LoanInput(principal, term, Mode.DAILY))
    total = sum(p.interest_component for p in sched)
    # each row may be off by half a cent
    tolerance = Decimal("0.005") * term
    assert abs(total - _d(principal * cfg.DAILY_FLAT_RATE)) <= tolerance


@pytest.mark.parametrize("principal,term,mode", CASES)
def test_doubling_principal_doubles_every_amount(principal, term, mode):
    base = compute(LoanInput(principal, term, mode))
    double = compute(LoanInput(principal * 2, term, mode))
    cent = Decimal("0.01")
    for a, b in zip(base, double):
        assert abs(b.payment - 2 * a.payment) <= cent
        assert abs(b.interest_component - 2 * a.interest_component) <= cent
        assert abs(b.remaining_balance - 2 * a.remaining_balance) <= cent


def test_schedule_is_immutable():
    sched = compute(LoanInput(100, 2))
    assert isinstance(sched, PaymentSchedule)
    assert isinstance(sched.periods, tuple)
    with pytest.raises(AttributeError):
        sched[0].payment = Decimal("1")


def test_recomputing_gives_a_fresh_equal_schedule():
    loan = LoanInput(5000, 60)
    assert compute(loan) == compute(loan)
    assert compute(loan) is not compute(loan)


# ─── Validation ──────────────────────────────────────────────────────

@pytest.mark.parametrize("principal,term", [
    (0, 10),
    (-5, 10),
    (100, 0),
    (100, -3),
    (float("nan"), 10),
    (float("inf"), 10),
    (10**400, 1),
])
def test_loan_input_rejects_non_positive(principal, term):
    with pytest.raises(ValidationError):
        LoanInput(principal, term)


def test_loan_input_rejects_fractional_and_bool_terms():
    with pytest.raises(ValidationError):
        LoanInput(100, 2.5)
    with pytest.raises(ValidationError):
        LoanInput(100, True)


@pytest.mark.parametrize("amount,term", [
    ("", "60"),
    ("5000", ""),
    (None, "60"),
    ("5000", None),
    ("   ", "12"),
    ("0", "60"),
    ("5000", "0"),
    ("5000", "0.5"),
])
def test_missing_or_zero_inputs_raise_required_message(amount, term):
    with pytest.raises(ValidationError) as exc:
        parse_loan_input(amount, term)
    assert str(exc.value) == REQUIRED_MESSAGE


def test_non_numeric_inputs_raise_validation_error():
    with pytest.raises(ValidationError, match="Credit Amount"):
        parse_loan_input("lots", "60")
    with pytest.raises(ValidationError, match="Term"):
        parse_loan_input("5000", "two months")


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        compute_schedule("", "")


def test_parse_accepts_currency_text_and_truncates_term():
    loan = parse_loan_input("₱5,000", "12.9", "MONTHLY")
    assert loan.principal == 5000.0
    assert loan.term_length == 12
    assert loan.mode is Mode.MONTHLY


def test_unknown_mode_rejected():
    with pytest.raises(ValidationError):
        parse_loan_input("100", "10", "weekly")


def test_compute_rejects_non_loan_input():
    with pytest.raises(ValidationError):
        compute({"principal": 100, "term_length": 2})


# ─── Helpers ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("value,expected", [
    (91.66666666666667, "91.67"),
    (8.333333333333334, "8.33"),
    (2.675, "2.68"),
    (0.0, "0.00"),
    (1e-12, "0.00"),
])
def test_round_money_half_up(value, expected):
    assert round_money(value) == Decimal(expected)


def test_mode_labels():
    assert Mode.DAILY.noun == "day"
    assert Mode.MONTHLY.noun == "month"
    assert Mode.MONTHLY.label == "Monthly"
    assert Mode.parse(" daily ") is Mode.DAILY


def test_term_is_capped():
    assert len(compute(LoanInput(100, cfg.MAX_TERM))) == cfg.MAX_TERM
    with pytest.raises(ValidationError) as exc:
        LoanInput(100, cfg.MAX_TERM + 1)
    assert str(exc.value) == TERM_LIMIT_MESSAGE
    with pytest.raises(ValidationError) as exc:
        parse_loan_input("100", "1e20")
    assert str(exc.value) == TERM_LIMIT_MESSAGE


def test_oversized_numeric_principal_is_a_validation_error():
    with pytest.raises(ValidationError):
        parse_loan_input(10**400, "12")
    with pytest.raises(ValidationError):
        parse_loan_input("1e400", "12")
