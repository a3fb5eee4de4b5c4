"""
Flask web application for the Pautang payment schedule calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Dict, Optional

from flask import Flask, redirect, render_template_string, request, send_file, url_for

import config as cfg
from clients import ClientNameStore
from schedule import Mode, PaymentSchedule, ValidationError, compute_schedule
from cli import fmt
import report
from report import BorrowerDetails

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.setdefault("CLIENT_STORE_PATH", cfg.CLIENT_STORE_PATH)
app.config.setdefault("SHOW_CHART", True)


def get_store() -> ClientNameStore:
    return ClientNameStore(app.config["CLIENT_STORE_PATH"])


# ═══════════════════════════════════════════════════════════════════
# Form parsing
# ═══════════════════════════════════════════════════════════════════

def _form_mode(form: Dict[str, str]) -> Mode:
    try:
        return Mode.parse(form.get("mode") or Mode.DAILY)
    except ValidationError:
        return Mode.DAILY


def parse_borrower(form: Dict[str, str]) -> BorrowerDetails:
    """Borrower fields shown on the page and statement."""
    return BorrowerDetails(
        name=form.get("name", "").strip(),
        address=form.get("address", "").strip(),
        received_cash=form.get("received_cash", "").strip(),
        date=form.get("date", "").strip(),
        due_date=form.get("due_date", "").strip(),
    )


def parse_form(form: Dict[str, str]) -> PaymentSchedule:
    """Parse the HTML form and compute the schedule.

    An unknown mode falls back to daily. Raises ValidationError when
    credit amount or term is unusable.
    """
    return compute_schedule(
        form.get("credit_amount"),
        form.get("term"),
        _form_mode(form),
    )


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{ title }}</title>
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800&display=swap" rel="stylesheet">
<style>
  *{margin:0;padding:0;box-sizing:border-box}

  :root{
    --bg-deep:#050816;
    --bg-surface:rgba(15,23,42,0.55);
    --bg-input:rgba(8,11,22,0.85);
    --border-subtle:rgba(99,102,241,0.1);
    --border-hover:rgba(99,102,241,0.25);
    --text-primary:#f1f5f9;
    --text-secondary:#94a3b8;
    --text-muted:#64748b;
    --indigo:#818cf8;
    --indigo-deep:#6366f1;
    --violet:#8b5cf6;
    --emerald:#34d399;
    --emerald-deep:#10b981;
    --red:#f87171;
    --radius-lg:16px;
    --radius-md:10px;
  }

  body{
    background:var(--bg-deep);color:var(--text-primary);
    font-family:'Inter',system-ui,-apple-system,sans-serif;
    line-height:1.6;min-height:100vh;
  }

  .container{max-width:1000px;margin:0 auto;padding:2rem 1.5rem}

  /* ── hero header ── */
  .hero{text-align:center;padding:1rem 0 1.8rem}
  .hero h1{
    font-size:clamp(1.5rem,4vw,2.3rem);font-weight:800;
    letter-spacing:-.035em;line-height:1.15;
    background:linear-gradient(135deg,#e2e8f0 0%,#818cf8 45%,#34d399 100%);
    -webkit-background-clip:text;-webkit-text-fill-color:transparent;
    background-clip:text;
  }

  /* ── mode toggle ── */
  .mode-toggle{display:flex;justify-content:center;gap:.5rem;margin-bottom:1.5rem}
  .mode-btn{
    padding:.5rem 1.1rem;border-radius:100px;border:1px solid rgba(99,102,241,.18);
    background:rgba(99,102,241,.08);color:var(--text-secondary);
    font:inherit;font-size:.85rem;font-weight:600;cursor:pointer;
  }
  .mode-btn.active{background:var(--indigo-deep);color:#fff;box-shadow:0 4px 20px rgba(99,102,241,.3)}

  /* ── glass cards ── */
  .card{
    background:var(--bg-surface);
    border:1px solid var(--border-subtle);
    border-radius:var(--radius-lg);padding:1.8rem;
    margin-bottom:1.4rem;position:relative;overflow:hidden;
  }
  h2{font-size:1.1rem;font-weight:700;color:var(--text-primary);letter-spacing:-.015em;
     text-align:center;margin-bottom:1rem}

  /* ── form ── */
  .form-grid{
    display:grid;grid-template-columns:repeat(auto-fill,minmax(260px,1fr));
    gap:1rem 1.5rem;
  }
  .form-group{display:flex;flex-direction:column}
  .form-group.wide{grid-column:1/-1}
  .form-group label{
    font-size:.78rem;color:var(--text-secondary);margin-bottom:.3rem;
    font-weight:500;letter-spacing:.02em;
  }
  .form-group input{
    background:var(--bg-input);
    border:1px solid rgba(71,85,105,.35);border-radius:var(--radius-md);
    color:var(--text-primary);padding:.6rem .85rem;font-size:.88rem;font-family:inherit;
  }
  .form-group input:focus{
    outline:none;border-color:var(--indigo-deep);
    box-shadow:0 0 0 3px rgba(99,102,241,.12);
  }
  .error{
    margin-top:1rem;padding:.7rem 1rem;border-radius:var(--radius-md);
    background:rgba(248,113,113,.08);border:1px solid rgba(248,113,113,.3);
    color:var(--red);font-size:.88rem;font-weight:600;
  }

  /* ── buttons ── */
  .actions{display:flex;justify-content:flex-end;gap:.7rem;margin-top:1.2rem;flex-wrap:wrap}
  .btn{
    display:inline-flex;align-items:center;justify-content:center;gap:.5rem;
    padding:.65rem 1.6rem;border:none;border-radius:var(--radius-md);
    font-size:.9rem;font-weight:600;cursor:pointer;font-family:inherit;
    text-decoration:none;
  }
  .btn-plain{background:rgba(148,163,184,.1);color:var(--text-secondary)}
  .btn-primary{
    background:linear-gradient(135deg,var(--indigo-deep),var(--violet));
    color:#fff;box-shadow:0 4px 20px rgba(99,102,241,.3);
  }
  .btn-success{
    background:linear-gradient(135deg,var(--emerald-deep),var(--emerald));
    color:#fff;box-shadow:0 4px 20px rgba(16,185,129,.25);
  }

  /* ── totals ── */
  .totals{display:flex;gap:2rem;justify-content:center;margin-bottom:1rem;flex-wrap:wrap}
  .stat-label{color:var(--text-secondary);font-size:.8rem}
  .stat-value{font-weight:700;font-size:1rem;font-variant-numeric:tabular-nums}

  /* ── schedule table ── */
  .table-wrap{overflow-x:auto;margin-top:.5rem;border-radius:var(--radius-md);border:1px solid rgba(51,65,85,.25)}
  .pay-table{width:100%;border-collapse:collapse;font-size:.84rem}
  .pay-table th{
    text-align:left;padding:.6rem .9rem;background:rgba(99,102,241,.08);
    color:var(--text-secondary);font-weight:600;font-size:.74rem;
    text-transform:uppercase;letter-spacing:.05em;
  }
  .pay-table td{padding:.5rem .9rem;border-bottom:1px solid rgba(51,65,85,.25);font-variant-numeric:tabular-nums}
  .pay-table tbody tr:nth-child(odd) td{background:rgba(99,102,241,.025)}
  .empty{text-align:center;color:var(--text-muted);padding:2rem 0;font-size:.88rem}

  /* ── charts ── */
  .chart-img{width:100%;border-radius:var(--radius-md);margin-top:1rem;background:#fff}

  .footer{text-align:center;padding:1rem 0 2rem;color:var(--text-muted);font-size:.78rem}

  @media(max-width:640px){
    .container{padding:1rem}
    .card{padding:1.2rem}
    .form-grid{grid-template-columns:1fr}
  }

  /* ── print ── */
  @media print{
    body{background:#fff;color:#000}
    .print-hide{display:none !important}
    .container{max-width:none;padding:0}
    .card{border:none;padding:0;background:none}
    .hero h1{-webkit-text-fill-color:#000;color:#000;text-align:left}
    h2{text-align:left;border-bottom:1px solid #ccc;padding-bottom:5px}
    .form-group input{border:1px dashed #ccc;background:transparent;color:#000;padding:2px 5px}
    .pay-table th,.pay-table td{border:1px solid #ddd;color:#000;background:none !important}
    .pay-table thead{background:#f2f2f2}
    .chart-img{display:none}
  }
</style>
</head>
<body>
<div class="container">

<header class="hero">
  <h1>{{ title }}</h1>
</header>

<div class="mode-toggle print-hide">
  <button type="button" class="mode-btn {{ 'active' if mode.value == 'daily' }}" data-mode="daily">Daily Calculation</button>
  <button type="button" class="mode-btn {{ 'active' if mode.value == 'monthly' }}" data-mode="monthly">Monthly Calculation</button>
</div>

<div class="card">
  <form method="POST" action="{{ url_for('index') }}" id="pautang-form">
    <input type="hidden" name="mode" id="mode-field" value="{{ mode.value }}">
    <div class="form-grid">
      <div class="form-group">
        <label for="received_cash">RECEIVED CASH:</label>
        <input type="number" step="any" id="received_cash" name="received_cash" value="{{ form.received_cash or '' }}" placeholder="e.g., 1000">
      </div>
      <div class="form-group">
        <label for="name">Name:</label>
        <input type="text" id="name" name="name" list="client-names" value="{{ form.name or '' }}" placeholder="e.g., Jane Doe">
        <datalist id="client-names">
          {% for client in clients %}<option value="{{ client }}">{% endfor %}
        </datalist>
      </div>
      <div class="form-group wide">
        <label for="address">Address:</label>
        <input type="text" id="address" name="address" value="{{ form.address or '' }}" placeholder="e.g., 123 Main St, Anytown">
      </div>
      <div class="form-group">
        <label for="credit_amount">Credit Amount:</label>
        <input type="number" step="any" id="credit_amount" name="credit_amount" value="{{ form.credit_amount or '' }}" placeholder="e.g., 5000">
      </div>
      <div class="form-group">
        <label for="date">Date:</label>
        <input type="date" id="date" name="date" value="{{ form.date or '' }}">
      </div>
      <div class="form-group">
        <label for="due_date">Due Date:</label>
        <input type="date" id="due_date" name="due_date" value="{{ form.due_date or '' }}">
      </div>
      <div class="form-group">
        <label for="term" id="term-label">Term ({{ mode.noun }}s):</label>
        <input type="number" id="term" name="term" value="{{ form.term or '' }}" placeholder="{{ 'e.g., 60' if mode.value == 'daily' else 'e.g., 12' }}">
      </div>
    </div>

    {% if error %}<div class="error" role="alert">{{ error }}</div>{% endif %}

    <div class="actions print-hide">
      <a class="btn btn-plain" href="{{ url_for('clear', mode=mode.value) }}">Clear</a>
      <button type="submit" class="btn btn-primary">Calculate Interest</button>
      {% if schedule %}
      <button type="button" class="btn btn-success" onclick="window.print()">Print</button>
      <button type="submit" class="btn btn-success" formaction="{{ url_for('statement_pdf') }}">Save PDF</button>
      {% endif %}
    </div>
  </form>
</div>

<div class="card">
  <h2>LIST OF {{ mode.label|upper }} PAYMENTS</h2>
  {% if schedule %}
  <div class="totals">
    <div><div class="stat-label">Total interest</div><div class="stat-value">{{ fmt(schedule.total_interest) }}</div></div>
    <div><div class="stat-label">Total amount due</div><div class="stat-value">{{ fmt(schedule.total_amount_due) }}</div></div>
  </div>
  <div class="table-wrap">
    <table class="pay-table">
      <thead>
        <tr>
          <th>{{ mode.noun|title }}</th>
          <th>{{ mode.label }} Payment</th>
          <th>Interest Component</th>
          <th>Remaining Principal</th>
        </tr>
      </thead>
      <tbody>
        {% for p in schedule %}
        <tr>
          <td>{{ p.period }}</td>
          <td>{{ fmt(p.payment) }}</td>
          <td>{{ fmt(p.interest_component) }}</td>
          <td>{{ fmt(p.remaining_balance) }}</td>
        </tr>
        {% endfor %}
      </tbody>
    </table>
  </div>
  {% if chart %}<img class="chart-img" src="data:image/png;base64,{{ chart }}" alt="Remaining principal by {{ mode.noun }}">{% endif %}
  {% else %}
  <p class="empty">Enter credit details and click "Calculate Interest" to see the payment breakdown.</p>
  {% endif %}
</div>

<div class="footer">Flat 10% per term (daily) &middot; 10% APR simple interest (monthly)</div>

</div>

<script>
/* Mode toggle: switches the hidden field and term label without a round trip */
(function(){
  var field=document.getElementById('mode-field');
  var label=document.getElementById('term-label');
  var term=document.getElementById('term');
  document.querySelectorAll('.mode-btn').forEach(function(btn){
    btn.addEventListener('click',function(){
      var m=btn.getAttribute('data-mode');
      field.value=m;
      label.textContent='Term ('+(m==='daily'?'days':'months')+'):';
      term.placeholder=m==='daily'?'e.g., 60':'e.g., 12';
      document.querySelectorAll('.mode-btn').forEach(function(b){b.classList.toggle('active',b===btn)});
    });
  });
})();
</script>
</body>
</html>
"""


def _render(
    form: Dict[str, Any],
    mode: Mode,
    schedule: Optional[PaymentSchedule] = None,
    error: str = "",
    status: int = 200,
):
    chart = ""
    if schedule is not None and app.config.get("SHOW_CHART", True):
        chart = report.balance_chart_base64(schedule)
    html = render_template_string(
        HTML_TEMPLATE,
        title=cfg.APP_TITLE,
        form=form,
        mode=mode,
        schedule=schedule,
        error=error,
        chart=chart,
        clients=get_store().names,
        fmt=fmt,
    )
    return html, status


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        return _render(form={}, mode=_form_mode(request.args))

    # POST: record the client, then calculate
    form = request.form.to_dict()
    mode = _form_mode(form)
    get_store().add(form.get("name"))

    try:
        schedule = parse_form(form)
    except ValidationError as e:
        logger.info("Rejected calculation: %s", e)
        return _render(form=form, mode=mode, error=str(e), status=400)

    return _render(form=form, mode=schedule.mode, schedule=schedule)


@app.route("/clear")
def clear():
    return redirect(url_for("index", mode=_form_mode(request.args).value))


@app.route("/statement.pdf", methods=["POST"])
def statement_pdf():
    form = request.form.to_dict()
    try:
        schedule = parse_form(form)
    except ValidationError as e:
        logger.info("Rejected statement: %s", e)
        return _render(form=form, mode=_form_mode(form), error=str(e), status=400)
    data = report.pdf_bytes(schedule, parse_borrower(form))
    logger.info("Generated %s statement (%d periods)", schedule.mode.value, len(schedule))
    return send_file(
        io.BytesIO(data),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=cfg.PDF_PATH,
    )


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = True) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    url = f"http://{cfg.WEB_HOST}:{cfg.WEB_PORT}"
    print(f"Starting web app at {url}")
    threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=cfg.WEB_HOST, port=cfg.WEB_PORT, debug=debug)


if __name__ == "__main__":
    run_web()
