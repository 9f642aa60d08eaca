from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .machine import (
    MACHINE_REPLACEMENT_CYCLE,
    RENTAL_REDUCTION_MONTH,
    Machine,
)


@dataclass(frozen=True)
class FleetStats:
    total: int
    full_rental_count: int
    half_rental_count: int


class FleetTracker:
    """
    Append-only population of machines.

    Start months are kept as an int vector in creation order; ages are
    recomputed from them on every advance:
        age = current_month - start_month + 1

    Replacement is a cost event only: a replaced machine keeps its record
    and keeps ageing, so it is due again every MACHINE_REPLACEMENT_CYCLE months.
    """

    def __init__(self) -> None:
        self._start_months = np.zeros(0, dtype=np.int64)
        self._ages = np.zeros(0, dtype=np.int64)

    def __len__(self) -> int:
        return int(self._start_months.size)

    def add_machines(self, count: int, current_month: int) -> None:
        count = int(count)
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if count == 0:
            return

        new = np.full(count, int(current_month), dtype=np.int64)
        self._start_months = np.concatenate([self._start_months, new])
        # Not aged until the next advance()
        self._ages = np.concatenate([self._ages, np.zeros(count, dtype=np.int64)])

    def advance(self, current_month: int) -> int:
        """Age every machine to current_month; return how many are due for replacement."""
        self._ages = int(current_month) - self._start_months + 1

        due = (self._ages >= MACHINE_REPLACEMENT_CYCLE) & (
            self._ages % MACHINE_REPLACEMENT_CYCLE == 0
        )
        return int(np.count_nonzero(due))

    def fleet_stats(self) -> FleetStats:
        total = len(self)
        full = int(np.count_nonzero(self._ages < RENTAL_REDUCTION_MONTH))
        return FleetStats(
            total=total,
            full_rental_count=full,
            half_rental_count=total - full,
        )

    @property
    def machines(self) -> List[Machine]:
        return [
            Machine(start_month=int(s), current_age=int(a))
            for s, a in zip(self._start_months, self._ages)
        ]
