"""
Constants for the Pautang payment schedule calculator.

All monetary values in Philippine pesos. Rates are plain fractions
(0.10 == 10%).
"""

import os

# ── Daily lending rule ───────────────────────────────────────────────
DAILY_FLAT_RATE = 0.10        # flat, charged once over the whole term

# ── Monthly lending rule ─────────────────────────────────────────────
MONTHLY_ANNUAL_RATE = 0.10    # APR, simple interest prorated by term
MONTHS_PER_YEAR = 12

# ── Input limits ─────────────────────────────────────────────────────
MAX_TERM = 3650               # ten years of daily periods

# ── Display ──────────────────────────────────────────────────────────
CURRENCY_SYMBOL = "\u20b1"     # ₱
MONEY_PLACES = 2
APP_TITLE = "Connie's Pautang Application"

# ── Client name store ────────────────────────────────────────────────
CLIENT_STORE_KEY = "clientNames"
DEFAULT_CLIENT_NAMES = ["John Doe", "Jane Smith"]
CLIENT_STORE_PATH = os.environ.get("PAUTANG_CLIENT_STORE", "client_names.json")

# ── Output / web server ──────────────────────────────────────────────
PDF_PATH = "pautang_statement.pdf"
WEB_HOST = "127.0.0.1"
WEB_PORT = 5000
