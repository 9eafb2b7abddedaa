from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import logging

import pandas as pd

from spread_dashboard.core.schema import to_number, to_text

logger = logging.getLogger(__name__)

DEFAULT_SE_TYPE = "cluster-robust"

REGRESSION_TEXT_FIELDS = frozenset({"variable", "model", "se_type"})


@dataclass(frozen=True)
class RegressionCoefficient:
    """
    One line of regression output, as exported by the estimation scripts.

    (variable, model, se_type) identifies the line. Numeric fields are NaN
    when the export held something non-numeric; display code must check.
    """
    variable: str
    estimate: float
    std_error: float
    ci_lower: float
    ci_upper: float
    p_value: float
    model: str
    se_type: str


def parse_regression_coefficients(rows: Sequence[Mapping[str, Any]]) -> List[RegressionCoefficient]:
    """
    Convert untyped CSV records into RegressionCoefficient values.

    Never raises on bad cells: numbers fall back to NaN, labels to str().
    """
    coefficients = [
        RegressionCoefficient(
            variable=to_text(r.get("variable")),
            estimate=to_number(r.get("estimate")),
            std_error=to_number(r.get("std_error")),
            ci_lower=to_number(r.get("ci_lower")),
            ci_upper=to_number(r.get("ci_upper")),
            p_value=to_number(r.get("p_value")),
            model=to_text(r.get("model")),
            se_type=to_text(r.get("se_type")),
        )
        for r in rows
    ]

    seen: Dict[Tuple[str, str, str], int] = {}
    for c in coefficients:
        k = (c.variable, c.model, c.se_type)
        seen[k] = seen.get(k, 0) + 1
    duplicates = [k for k, n in seen.items() if n > 1]
    if duplicates:
        logger.warning(
            "Duplicate regression keys (variable, model, se_type); first match wins: %s",
            duplicates,
        )

    return coefficients


def get_coef(
    coefficients: Sequence[RegressionCoefficient],
    variable: str,
    model: str,
    se_type: str = DEFAULT_SE_TYPE,
) -> Optional[RegressionCoefficient]:
    """First coefficient matching (variable, model, se_type), or None."""
    return next(
        (
            c
            for c in coefficients
            if c.variable == variable and c.model == model and c.se_type == se_type
        ),
        None,
    )


def fmt_coef(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}"


def fmt_ci(coef: RegressionCoefficient, decimals: int = 2) -> str:
    return f"[{fmt_coef(coef.ci_lower, decimals)}, {fmt_coef(coef.ci_upper, decimals)}]"


def sig_stars(p_value: float) -> str:
    # " ns" keeps its leading space so it lines up with the star columns
    if p_value < 0.001:
        return "***"
    if p_value < 0.01:
        return "**"
    if p_value < 0.05:
        return "*"
    return " ns"


def regression_table(
    coefficients: Sequence[RegressionCoefficient],
    variables: Sequence[str],
    models: Sequence[str],
    se_type: str = DEFAULT_SE_TYPE,
    decimals: int = 2,
    labels: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Build a display table: one row per variable, one column per model.

    Each cell reads "<estimate><stars>" over "(<std error>)"; a variable not
    estimated in a model leaves its cell blank.
    """
    labels = labels or {}
    out = pd.DataFrame(index=[labels.get(v, v) for v in variables], columns=list(models), dtype=object)

    for variable in variables:
        for model in models:
            coef = get_coef(coefficients, variable, model, se_type)
            if coef is None:
                cell = ""
            else:
                cell = (
                    f"{fmt_coef(coef.estimate, decimals)}{sig_stars(coef.p_value)}\n"
                    f"({fmt_coef(coef.std_error, decimals)})"
                )
            out.loc[labels.get(variable, variable), model] = cell

    return out
