"""Lotto 6/45 game constants."""

from __future__ import annotations

from datetime import date

LOTTO_MIN_NUMBER = 1
LOTTO_MAX_NUMBER = 45
LOTTO_NUMBERS_PER_SET = 6
LOTTO_HIGH_LOW_THRESHOLD = 22
LOTTO_TICKET_PRICE = 1_000
LOTTO_FIRST_DRAW_DATE = date(2002, 12, 7)

# Sections used by balanced recommendations.
LOTTO_SECTIONS: tuple[tuple[int, int], ...] = (
    (1, 9),
    (10, 18),
    (19, 27),
    (28, 36),
    (37, 45),
)

# Saturday draw time (KST).
LOTTO_DRAW_HOUR = 20
LOTTO_DRAW_MINUTE = 45

DEFAULT_RECENT_DRAWS = 20
DEFAULT_RECENT_RESULTS = 10

# Tiers 1-3 are flat estimates, not real prize pools. Tiers 4-5 are fixed by law.
PRIZE_AMOUNTS: dict[int, int] = {
    1: 2_000_000_000,
    2: 50_000_000,
    3: 1_500_000,
    4: 50_000,
    5: 5_000,
}
