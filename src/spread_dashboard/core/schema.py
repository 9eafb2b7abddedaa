from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

import logging
import math

import pandas as pd

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Country vocabulary
# ---------------------------------------------------------------------------

GIIPS = ("Greece", "Ireland", "Italy", "Portugal", "Spain")
CORE = ("Germany", "France", "Netherlands", "Austria")

# Column order of the wide spreads export
SPREAD_COUNTRIES = (
    "Austria",
    "France",
    "Germany",
    "Greece",
    "Ireland",
    "Italy",
    "Netherlands",
    "Portugal",
    "Spain",
)

COLORS: Dict[str, str] = {
    "giips": "#944839",
    "core": "#184948",
    "germany": "#022a2a",
    "greece": "#944839",
    "ireland": "#7f793c",
    "italy": "#c08e39",
    "portugal": "#a8664f",
    "spain": "#b57845",
    "france": "#184948",
    "netherlands": "#2d6765",
    "austria": "#4a5d52",
    "accent": "#c08e39",
    "bg": "#0a1514",
    "surface": "#0f2322",
    "surfaceLight": "#184948",
    "text": "#f4efe8",
    "textMuted": "#c9bfb3",
    "positive": "#7f793c",
    "negative": "#944839",
    "warning": "#c08e39",
}

COUNTRY_COLORS: Dict[str, str] = {name: COLORS[name.lower()] for name in GIIPS + CORE}

# Columns read verbatim (no number or date inference) by the typed loaders
MASTER_TEXT_FIELDS = frozenset({"date", "country", "country_group", "period"})
SPREAD_TEXT_FIELDS = frozenset({"date"})


# ---------------------------------------------------------------------------
# Cell coercion
# ---------------------------------------------------------------------------

def to_number(value: Any) -> float:
    """
    Lenient numeric conversion: never raises.

    Booleans map to 0/1, blanks and anything non-numeric map to NaN.
    """
    if value is None or isinstance(value, (date, datetime)):
        return math.nan
    if isinstance(value, (bool, int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return math.nan
    return float(pd.to_numeric(text, errors="coerce"))


def to_text(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _optional_number(value: Any) -> Optional[float]:
    # Missing cells stay None so callers can tell "absent" from "unparseable"
    if value is None:
        return None
    return to_number(value)


# ---------------------------------------------------------------------------
# Typed rows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MasterRow:
    """
    One country-quarter observation from the master panel.

    Numeric indicators are None when the cell was empty and NaN when it
    could not be read as a number. Filter with stats.valid_numbers before
    aggregating.
    """
    date: str
    country: str
    country_group: str
    debt_gdp: Optional[float]
    deficit_gdp: Optional[float]
    gdp_growth: Optional[float]
    unemployment: Optional[float]
    inflation: Optional[float]
    spread_bps: Optional[float]
    bond_yield: Optional[float]
    ecb_rate: Optional[float]
    crisis_period: Optional[float]
    post_omt: Optional[float]
    giips: Optional[float]
    year: Optional[float]
    quarter: Optional[float]
    period: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "MasterRow":
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = record.get(f.name)
            if f.name in MASTER_TEXT_FIELDS:
                values[f.name] = to_text(raw)
            else:
                values[f.name] = _optional_number(raw)
        return cls(**values)


@dataclass(frozen=True)
class SpreadRow:
    """Bond spread (bps over Bund) of each country on one date."""
    date: str
    Austria: Optional[float] = None
    France: Optional[float] = None
    Germany: Optional[float] = None
    Greece: Optional[float] = None
    Ireland: Optional[float] = None
    Italy: Optional[float] = None
    Netherlands: Optional[float] = None
    Portugal: Optional[float] = None
    Spain: Optional[float] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SpreadRow":
        return cls(
            date=to_text(record.get("date")),
            **{c: _optional_number(record.get(c)) for c in SPREAD_COUNTRIES},
        )

    def values(self) -> Dict[str, Optional[float]]:
        """Country -> spread mapping, in SPREAD_COUNTRIES order."""
        return {c: getattr(self, c) for c in SPREAD_COUNTRIES}


def master_rows_from_records(records: List[Mapping[str, Any]]) -> List[MasterRow]:
    return [MasterRow.from_record(r) for r in records]


def spread_rows_from_records(records: List[Mapping[str, Any]]) -> List[SpreadRow]:
    if records:
        unknown = [k for k in records[0] if k != "date" and k not in SPREAD_COUNTRIES]
        if unknown:
            logger.warning("Ignoring unknown spread columns: %s", unknown)
    return [SpreadRow.from_record(r) for r in records]
