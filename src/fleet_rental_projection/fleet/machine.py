from __future__ import annotations

from dataclasses import dataclass

MACHINE_REPLACEMENT_CYCLE = 48  # months between replacements
RENTAL_REDUCTION_MONTH = 61     # age at which rent drops
RENTAL_REDUCTION_RATE = 0.5


@dataclass(frozen=True)
class Machine:
    """One rented unit as seen at a given simulation month."""
    start_month: int   # month it entered service (1-based)
    current_age: int   # months in service, 1 in its start month

    @property
    def is_half_rental(self) -> bool:
        return self.current_age >= RENTAL_REDUCTION_MONTH

    @property
    def due_for_replacement(self) -> bool:
        return (
            self.current_age >= MACHINE_REPLACEMENT_CYCLE
            and self.current_age % MACHINE_REPLACEMENT_CYCLE == 0
        )
