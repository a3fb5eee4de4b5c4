from decimal import Decimal

import pytest

import cli
from clients import ClientNameStore
from report import BorrowerDetails
from schedule import LoanInput, Mode, compute


def _feed(monkeypatch, answers):
    it = iter(answers)
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(it))


@pytest.fixture()
def store(tmp_path):
    return ClientNameStore(str(tmp_path / "clients.json"))


def test_fmt():
    assert cli.fmt(5000) == "₱5,000.00"
    assert cli.fmt(Decimal("91.67")) == "₱91.67"
    assert cli.fmt(1234.5, decimals=0) == "₱1,234"


def test_collect_inputs_defaults(monkeypatch, store):
    # mode, name, address, received cash, amount, term, date, due date
    _feed(monkeypatch, [""] * 8)
    loan, borrower = cli.collect_inputs(store)
    assert loan == LoanInput(5000, 60, Mode.DAILY)
    assert borrower.name == ""
    assert store.names == ["John Doe", "Jane Smith"]


def test_collect_inputs_monthly_records_name(monkeypatch, store):
    _feed(monkeypatch, [
        "monthly", "Ana Cruz", "Quezon City", "500",
        "12000", "12", "2024-01-01", "2024-12-31",
    ])
    loan, borrower = cli.collect_inputs(store)
    assert loan.mode is Mode.MONTHLY
    assert loan.principal == 12000.0
    assert loan.term_length == 12
    assert borrower == BorrowerDetails(
        name="Ana Cruz",
        address="Quezon City",
        received_cash="500",
        date="2024-01-01",
        due_date="2024-12-31",
    )
    assert store.names[-1] == "Ana Cruz"


def test_collect_inputs_reprompts_on_invalid_loan(monkeypatch, capsys, store):
    _feed(monkeypatch, [
        "weekly", "daily",          # bad choice, then daily
        "", "", "",
        "0", "30",                  # rejected amount
        "abc", "30",                # rejected amount
        "3000", "30",
        "", "",
    ])
    loan, _ = cli.collect_inputs(store)
    assert loan == LoanInput(3000, 30, Mode.DAILY)
    out = capsys.readouterr().out
    assert "Choose from: daily/monthly" in out
    assert "Credit Amount and Term are required." in out
    assert "Credit Amount must be a number." in out


def test_schedule_rows_layout():
    sched = compute(LoanInput(12000, 12, Mode.MONTHLY))
    rows = cli.schedule_rows(sched)
    assert len(rows) == 2 + 12
    assert "Month" in rows[0] and "Monthly Payment" in rows[0]
    assert "₱1,100.00" in rows[2]
    assert "₱11,000.00" in rows[2]
    assert all(len(r) == cli.W for r in rows)


def test_summary_rows_show_totals():
    sched = compute(LoanInput(5000, 60))
    text = "\n".join(cli.summary_rows(sched, BorrowerDetails(name="Ana")))
    assert "Ana" in text
    assert "Term (days)" in text
    assert "₱500.00" in text
    assert "₱5,500.00" in text


def test_run_cli_prints_table(monkeypatch, capsys, store):
    _feed(monkeypatch, ["", "Ben", "", "", "1000", "4", "", "", "no"])
    cli.run_cli(store)
    out = capsys.readouterr().out
    assert "LIST OF DAILY PAYMENTS" in out
    assert "₱275.00" in out      # 1100 / 4
    assert "₱750.00" in out      # balance after day 1
    assert "Ben" in store.names


def test_run_cli_writes_pdf(monkeypatch, tmp_path, store):
    pdf_path = str(tmp_path / "statement.pdf")
    monkeypatch.setattr(cli.cfg, "PDF_PATH", pdf_path)
    _feed(monkeypatch, ["", "", "", "", "1000", "4", "", "", "yes"])
    cli.run_cli(store)
    with open(pdf_path, "rb") as fh:
        assert fh.read(4) == b"%PDF"
