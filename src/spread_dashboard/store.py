from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, List, Tuple, TypeVar

import logging

from spread_dashboard.config import (
    MASTER_CSV_PATH,
    REGRESSION_CSV_PATH,
    SPREADS_CSV_PATH,
)
from spread_dashboard.core.data_loader import (
    load_master_rows,
    load_regression_coefficients,
    load_spread_rows,
)
from spread_dashboard.core.regression import RegressionCoefficient
from spread_dashboard.core.schema import MasterRow, SpreadRow

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[T], None]
Unsubscribe = Callable[[], None]


class Writable(Generic[T]):
    """
    Observable value holder.

    Subscribers are called once with the current value when they register,
    then again (in registration order) every time the value is replaced.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: List[Subscriber] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


@dataclass
class DataStore:
    """
    Dashboard session state, handed to display components explicitly.

    Row holders always contain tuples, so readers can share them without
    being able to mutate what the store owns.
    """
    master_data: Writable[Tuple[MasterRow, ...]] = field(default_factory=lambda: Writable(()))
    spreads_wide: Writable[Tuple[SpreadRow, ...]] = field(default_factory=lambda: Writable(()))
    regression_coefficients: Writable[Tuple[RegressionCoefficient, ...]] = field(
        default_factory=lambda: Writable(())
    )
    data_loaded: Writable[bool] = field(default_factory=lambda: Writable(False))

    def reset(self) -> None:
        self.master_data.set(())
        self.spreads_wide.set(())
        self.regression_coefficients.set(())
        self.data_loaded.set(False)


async def load_dashboard_data(
    store: DataStore,
    *,
    master_path: str = MASTER_CSV_PATH,
    spreads_path: str = SPREADS_CSV_PATH,
    coefficients_path: str = REGRESSION_CSV_PATH,
) -> DataStore:
    """
    Startup load sequence: fill each holder, then flip data_loaded.

    Datasets load one after another. If any fetch fails the error
    propagates and data_loaded stays False; holders already filled keep
    their new values.
    """
    store.master_data.set(tuple(await load_master_rows(master_path)))
    store.spreads_wide.set(tuple(await load_spread_rows(spreads_path)))
    store.regression_coefficients.set(tuple(await load_regression_coefficients(coefficients_path)))
    store.data_loaded.set(True)

    logger.info(
        "Dashboard data loaded: %d master rows, %d spread rows, %d coefficients",
        len(store.master_data.get()),
        len(store.spreads_wide.get()),
        len(store.regression_coefficients.get()),
    )
    return store
