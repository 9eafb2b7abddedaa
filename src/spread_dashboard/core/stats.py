from __future__ import annotations

from typing import Any, Iterable, List

import math
import numbers


def valid_numbers(values: Iterable[Any]) -> List[float]:
    """
    Keep only finite numeric values, in their original order.

    None, NaN, infinities, booleans and non-numeric cells are dropped.
    """
    return [
        v
        for v in values
        if isinstance(v, numbers.Real) and not isinstance(v, bool) and math.isfinite(v)
    ]


def mean(values: Iterable[Any]) -> float:
    """Arithmetic mean of the valid values; 0 when there are none."""
    valid = valid_numbers(values)
    if not valid:
        return 0.0
    return math.fsum(valid) / len(valid)


def std(values: Iterable[Any]) -> float:
    """
    Sample standard deviation (n - 1 denominator) of the valid values.

    Returns 0 when fewer than two valid values remain, matching how the
    charts render error bands for single observations.
    """
    valid = valid_numbers(values)
    if len(valid) < 2:
        return 0.0
    m = mean(valid)
    return math.sqrt(math.fsum((v - m) ** 2 for v in valid) / (len(valid) - 1))
