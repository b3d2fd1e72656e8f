"""Business logic for lotto number frequency analysis (hot/cold numbers)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from math import ceil

from lottori.constants import LOTTO_MAX_NUMBER, LOTTO_MIN_NUMBER
from lottori.models.draw import Draw

logger = logging.getLogger(__name__)

ALL_NUMBERS = range(LOTTO_MIN_NUMBER, LOTTO_MAX_NUMBER + 1)


@dataclass(frozen=True)
class FrequencyTable:
    """Occurrences of every number 1..45 over a window of draws.

    Ties are broken by ascending number in both rankings.
    """

    counts: dict[int, int]
    draws_used: int
    recent_n: int | None = None
    skipped: int = 0

    @property
    def min_count(self) -> int:
        return min(self.counts.values()) if self.counts else 0

    @property
    def max_count(self) -> int:
        return max(self.counts.values()) if self.counts else 0

    def top(self, k: int) -> list[int]:
        ranked = sorted(self.counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return [n for n, _ in ranked[: max(0, int(k))]]

    def bottom(self, k: int) -> list[int]:
        ranked = sorted(self.counts.items(), key=lambda kv: (kv[1], kv[0]))
        return [n for n, _ in ranked[: max(0, int(k))]]

    def percentage(self, number: int) -> float:
        """Share of draws in the window that contained ``number``."""

        if not self.draws_used:
            return 0.0
        return self.counts.get(number, 0) / self.draws_used * 100

    def hot_numbers(self, percent: float) -> list[int]:
        return self.top(_bucket_size(percent))

    def cold_numbers(self, percent: float) -> list[int]:
        return self.bottom(_bucket_size(percent))


def _bucket_size(percent: float) -> int:
    if not (0.0 < float(percent) < 1.0):
        raise ValueError("percent must be between 0 and 1")
    return max(1, int(ceil(len(ALL_NUMBERS) * float(percent))))


class FrequencyAnalysisService:
    """Compute number frequency across all or recent draws."""

    def analyze(self, draws: Sequence[Draw], *, recent_n: int | None = None) -> FrequencyTable:
        """Count main numbers; ``draws`` must be ordered most-recent-first.

        Bonus numbers are not counted. Malformed records are skipped.
        """

        if recent_n is not None and recent_n <= 0:
            raise ValueError("recent_n must be positive")

        window = list(draws[: int(recent_n)]) if recent_n is not None else list(draws)

        counts: dict[int, int] = {n: 0 for n in ALL_NUMBERS}
        used = 0
        skipped = 0
        for d in window:
            try:
                nums = list(d.numbers)
            except (AttributeError, TypeError):
                skipped += 1
                continue
            if not all(isinstance(n, int) and not isinstance(n, bool) for n in nums):
                skipped += 1
                continue
            if len(nums) != 6 or len(set(nums)) != 6 or any(n not in counts for n in nums):
                skipped += 1
                continue
            for n in nums:
                counts[n] += 1
            used += 1

        if skipped:
            logger.warning("Skipped %s malformed draws in frequency window", skipped)

        return FrequencyTable(
            counts=counts,
            draws_used=used,
            recent_n=int(recent_n) if recent_n is not None else None,
            skipped=skipped,
        )


def compute_frequencies(draws: Sequence[Draw], window_size: int | None = None) -> FrequencyTable:
    return FrequencyAnalysisService().analyze(draws, recent_n=window_size)
