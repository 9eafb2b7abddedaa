from __future__ import annotations

import asyncio
import csv
import io
import math
import re
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Collection, Dict, List, Optional, Sequence
from urllib.parse import unquote, urlparse

import logging

import pandas as pd
import requests
from requests.adapters import HTTPAdapter

from spread_dashboard.config import HTTP_TIMEOUT_SECONDS
from spread_dashboard.core.regression import (
    REGRESSION_TEXT_FIELDS,
    RegressionCoefficient,
    parse_regression_coefficients,
)
from spread_dashboard.core.schema import (
    MASTER_TEXT_FIELDS,
    SPREAD_TEXT_FIELDS,
    MasterRow,
    SpreadRow,
    master_rows_from_records,
    spread_rows_from_records,
    to_number,
)

logger = logging.getLogger(__name__)


class DataLoaderError(Exception):
    """Raised when a dataset cannot be loaded."""


class FetchError(DataLoaderError):
    """Raised when the CSV text itself cannot be retrieved (network, HTTP status, file I/O)."""


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def _build_session() -> requests.Session:
    """
    Build a requests Session for dataset downloads.
    Exactly one read per request: failures surface to the caller untouched.
    """
    session = requests.Session()

    adapter = HTTPAdapter(max_retries=0, pool_connections=4, pool_maxsize=4)
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    return session


_SESSION: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    global _SESSION
    if _SESSION is None:
        _SESSION = _build_session()
    return _SESSION


def _is_url(path: str) -> bool:
    return path.startswith(("http://", "https://"))


def _local_path(path: str) -> Path:
    parsed = urlparse(path)
    if parsed.scheme != "file":
        return Path(path)
    if parsed.netloc not in ("", "localhost"):
        raise FetchError(f"Cannot read {path}: file URLs must point at this machine")
    return Path(unquote(parsed.path))


def _fetch_text(path: str, timeout_seconds: int) -> str:
    if _is_url(path):
        try:
            resp = _get_session().get(path, timeout=timeout_seconds)
        except requests.RequestException as exc:
            raise FetchError(f"HTTP error while fetching {path}: {exc}") from exc

        if not resp.ok:
            preview = (resp.text or "")[:200]
            raise FetchError(f"Fetching {path} failed (status={resp.status_code}). Preview: {preview}")

        # Exports are always UTF-8, whatever the server claims
        resp.encoding = "utf-8"
        text = resp.text
    else:
        local = _local_path(path)
        try:
            text = local.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(f"Could not read {local}: {exc}") from exc

    return text.lstrip("\ufeff")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_INT_RE = re.compile(r"^[-+]?\d+$")
_DATE_RE = re.compile(
    r"^\d{4}(-\d{2}(-\d{2})?)?"
    r"(T\d{2}:\d{2}(:\d{2}(\.\d{3})?)?(Z|[-+]\d{2}:\d{2})?)?$"
)


def _parse_date(text: str) -> Optional[Any]:
    try:
        if "T" in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        parts = [int(p) for p in text.split("-")]
        while len(parts) < 3:
            parts.append(1)
        return date(*parts)
    except ValueError:
        return None


def auto_type_value(value: Any) -> Any:
    """
    Infer the type of a single CSV cell from its text.

    Rules, in order:
      - blank                  -> None
      - 'true' / 'false'       -> bool
      - 'NaN'                  -> float('nan')
      - integer literal        -> int
      - any other number       -> float (pandas numeric rules)
      - ISO date / datetime    -> date / datetime (a bare year is a number)
      - anything else          -> the original text
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    if not text:
        return None
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "NaN":
        return math.nan
    if _INT_RE.match(text):
        return int(text)
    number = to_number(text)
    if not math.isnan(number):
        return number
    if _DATE_RE.match(text):
        parsed = _parse_date(text)
        if parsed is not None:
            return parsed
    return value


def auto_type(record: Dict[str, Any], text_columns: Collection[str] = ()) -> Dict[str, Any]:
    """Type every cell of a record; cells in text_columns keep their text as read."""
    return {k: v if k in text_columns else auto_type_value(v) for k, v in record.items()}


def parse_csv(text: str, text_columns: Collection[str] = ()) -> List[Dict[str, Any]]:
    """
    Parse comma-separated text with a header row into auto-typed records.

    Short rows leave their trailing fields as None; surplus fields on long
    rows are dropped. Blank lines are skipped. Columns named in text_columns
    are not type-inferred.
    """
    reader = csv.DictReader(io.StringIO(text))
    records: List[Dict[str, Any]] = []
    for row in reader:
        row.pop(None, None)
        records.append(auto_type(row, text_columns))
    return records


# ---------------------------------------------------------------------------
# Public loaders
# ---------------------------------------------------------------------------

async def load_csv(
    path: str,
    *,
    text_columns: Collection[str] = (),
    timeout_seconds: int = HTTP_TIMEOUT_SECONDS,
) -> List[Dict[str, Any]]:
    """
    Fetch a CSV resource (http(s) URL, file:// URL or local path) and parse it.

    The blocking read runs in a worker thread, so this is the only suspension
    point of a load. FetchError propagates to the caller; no retry, no cache.
    """
    text = await asyncio.to_thread(_fetch_text, str(path), timeout_seconds)
    records = parse_csv(text, text_columns)
    logger.info("Loaded %d rows from %s", len(records), path)
    return records


async def load_master_rows(path: str, **kwargs: Any) -> List[MasterRow]:
    return master_rows_from_records(await load_csv(path, text_columns=MASTER_TEXT_FIELDS, **kwargs))


async def load_spread_rows(path: str, **kwargs: Any) -> List[SpreadRow]:
    return spread_rows_from_records(await load_csv(path, text_columns=SPREAD_TEXT_FIELDS, **kwargs))


async def load_regression_coefficients(path: str, **kwargs: Any) -> List[RegressionCoefficient]:
    return parse_regression_coefficients(
        await load_csv(path, text_columns=REGRESSION_TEXT_FIELDS, **kwargs)
    )


def records_to_frame(rows: Sequence[Any]) -> pd.DataFrame:
    """
    Convenience helper for charting code: typed rows (dataclasses) or plain
    records -> DataFrame with one column per field.
    """
    if not rows:
        return pd.DataFrame()
    if is_dataclass(rows[0]):
        return pd.DataFrame.from_records([asdict(r) for r in rows])
    return pd.DataFrame.from_records(list(rows))
