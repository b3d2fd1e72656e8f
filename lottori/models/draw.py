"""Historical draw record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Draw:
    """One official Lotto 6/45 result.

    ``numbers`` holds the six main numbers sorted ascending. Records are
    never mutated after validation; the dataset only grows.
    """

    round: int
    draw_date: date
    numbers: tuple[int, int, int, int, int, int]
    bonus: int
    first_prize_amount: int = 0
    first_prize_winners: int = 0
