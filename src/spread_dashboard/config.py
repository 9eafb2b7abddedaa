from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Project paths
# ---------------------------------------------------------------------------

# Root of the project (repo root)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Data directory (static CSV exports served alongside the dashboard)
DATA_DIR = PROJECT_ROOT / "data"

# ---------------------------------------------------------------------------
# Data sources
#
# Each can be a local path or an http(s):// URL. Defaults point at the
# exports produced by the estimation pipeline:
#   data/master_panel.csv       one row per (country, quarter)
#   data/spreads_wide.csv       one row per date, one column per country
#   data/regression_coefs.csv   one row per (variable, model, se_type)
# ---------------------------------------------------------------------------

MASTER_CSV_PATH = os.getenv("MASTER_CSV_PATH", str(DATA_DIR / "master_panel.csv")).strip()
SPREADS_CSV_PATH = os.getenv("SPREADS_CSV_PATH", str(DATA_DIR / "spreads_wide.csv")).strip()
REGRESSION_CSV_PATH = os.getenv("REGRESSION_CSV_PATH", str(DATA_DIR / "regression_coefs.csv")).strip()

# Single network read per dataset; no retries are attempted.
HTTP_TIMEOUT_SECONDS = int(os.getenv("HTTP_TIMEOUT_SECONDS", "30").strip() or 30)
