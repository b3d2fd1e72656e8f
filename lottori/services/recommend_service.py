"""Business logic for recommending lotto number sets."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from datetime import date
from enum import Enum

from lottori.constants import (
    DEFAULT_RECENT_DRAWS,
    LOTTO_MAX_NUMBER,
    LOTTO_MIN_NUMBER,
    LOTTO_NUMBERS_PER_SET,
    LOTTO_SECTIONS,
)
from lottori.errors import AppError, ValidationError
from lottori.models.draw import Draw
from lottori.services.frequency_analysis_service import FrequencyAnalysisService
from lottori.utils.kst import daily_seed

logger = logging.getLogger(__name__)

NumberTuple6 = tuple[int, int, int, int, int, int]

MAX_SETS = 10
MAX_FIXED = 2
MAX_EXCLUDED = 39


class RecommendMethod(str, Enum):
    RANDOM = "random"
    STATISTICS = "statistics"
    HOT = "hot"
    COLD = "cold"
    BALANCED = "balanced"


def _normalize6(numbers: Iterable[int]) -> NumberTuple6:
    t = tuple(sorted(int(n) for n in numbers))
    return (t[0], t[1], t[2], t[3], t[4], t[5])


class RecommendService:
    """Pick number sets from random, frequency-weighted or balanced pools."""

    def __init__(
        self,
        rng: random.Random | None = None,
        frequency_service: FrequencyAnalysisService | None = None,
        max_retries: int = 5_000,
    ) -> None:
        self._rng = rng or random.Random()
        self._frequency = frequency_service or FrequencyAnalysisService()
        self._max_retries = max_retries

    def recommend(
        self,
        method: str,
        draws: Sequence[Draw],
        *,
        count: int = 1,
        fixed_numbers: Iterable[int] | None = None,
        exclude_numbers: Iterable[int] | None = None,
        exclude_winning: bool = False,
    ) -> list[list[int]]:
        """Return ``count`` sorted sets of 6 unique numbers.

        ``draws`` must be ordered most-recent-first. With ``exclude_winning``
        a set equal to any past first-prize combination is redrawn.
        """

        try:
            mode = RecommendMethod(method)
        except ValueError as exc:
            raise ValidationError(
                message="Invalid method",
                details={"method": [f"Must be one of {'|'.join(m.value for m in RecommendMethod)}"]},
            ) from exc

        if count < 1 or count > MAX_SETS:
            raise ValidationError(message="Invalid count", details={"count": [f"Must be within 1..{MAX_SETS}"]})

        fixed = self._checked_numbers(fixed_numbers, "fixed_numbers", MAX_FIXED)
        excluded = self._checked_numbers(exclude_numbers, "exclude_numbers", MAX_EXCLUDED)
        if fixed & excluded:
            raise ValidationError(
                message="Invalid fixed_numbers",
                details={"fixed_numbers": ["Fixed numbers cannot overlap excluded numbers"]},
            )

        population = [n for n in range(LOTTO_MIN_NUMBER, LOTTO_MAX_NUMBER + 1) if n not in excluded and n not in fixed]
        pool = [n for n in self._pool(mode, draws) if n in population]
        winning = {_normalize6(d.numbers) for d in draws} if exclude_winning else set()

        sets: list[list[int]] = []
        for _ in range(int(count)):
            sets.append(list(self._draw_one(mode, pool, population, fixed, winning)))
        logger.debug("Recommended %s sets via %s", count, mode.value)
        return sets

    @staticmethod
    def _checked_numbers(numbers: Iterable[int] | None, name: str, limit: int) -> set[int]:
        values = [int(n) for n in numbers] if numbers else []
        if any(n < LOTTO_MIN_NUMBER or n > LOTTO_MAX_NUMBER for n in values):
            raise ValidationError(message=f"Invalid {name}", details={name: ["All numbers must be within 1..45"]})
        if len(values) != len(set(values)):
            raise ValidationError(message=f"Invalid {name}", details={name: ["Numbers must be unique"]})
        if len(values) > limit:
            raise ValidationError(
                message=f"Invalid {name}",
                details={name: [f"Too many numbers (must be <= {limit})"]},
            )
        return set(values)

    def _pool(self, mode: RecommendMethod, draws: Sequence[Draw]) -> list[int]:
        if mode is RecommendMethod.RANDOM:
            return []

        recent = self._frequency.analyze(draws, recent_n=DEFAULT_RECENT_DRAWS)
        if mode is RecommendMethod.HOT:
            return recent.top(10)
        if mode is RecommendMethod.COLD or mode is RecommendMethod.BALANCED:
            return recent.bottom(10)

        all_time = self._frequency.analyze(draws)
        mixed = recent.top(10)[:5] + all_time.top(15)[:5]
        return list(dict.fromkeys(mixed))

    def _pick(self, pool: list[int], needed: int, population: list[int], taken: set[int]) -> list[int]:
        available = [n for n in pool if n not in taken]
        picked = self._rng.sample(available, min(needed, len(available)))
        rest = [n for n in population if n not in taken and n not in picked]
        if len(picked) < needed:
            picked += self._rng.sample(rest, needed - len(picked))
        return picked

    def _balanced(self, cold: list[int], population: list[int], fixed: set[int]) -> list[int]:
        chosen = set(fixed)
        for lo, hi in LOTTO_SECTIONS:
            if len(chosen) >= LOTTO_NUMBERS_PER_SET:
                break
            if any(lo <= n <= hi for n in chosen):
                continue
            cold_in_section = [n for n in cold if lo <= n <= hi and n not in chosen]
            section = [n for n in population if lo <= n <= hi and n not in chosen]
            candidates = cold_in_section or section
            if candidates:
                chosen.add(self._rng.choice(candidates))
        needed = LOTTO_NUMBERS_PER_SET - len(chosen)
        return [*chosen, *self._pick([], needed, population, chosen)]

    def _draw_one(
        self,
        mode: RecommendMethod,
        pool: list[int],
        population: list[int],
        fixed: set[int],
        winning: set[NumberTuple6],
    ) -> NumberTuple6:
        needed = LOTTO_NUMBERS_PER_SET - len(fixed)
        if len(population) < needed:
            raise ValidationError(
                message="Invalid exclude_numbers",
                details={"exclude_numbers": ["Not enough numbers left to draw 6 with fixed numbers"]},
            )

        for _ in range(self._max_retries):
            if mode is RecommendMethod.BALANCED:
                candidate = _normalize6(self._balanced(pool, population, fixed))
            else:
                candidate = _normalize6([*fixed, *self._pick(pool, needed, population, set(fixed))])

            if candidate in winning:
                continue
            return candidate

        raise AppError(
            code="draw_failed",
            message=f"Failed to draw numbers within retry limit ({self._max_retries})",
            status_code=503,
        )


class LuckyNumberService:
    """Numbers of the day: the same KST date always yields the same set."""

    def for_date(self, day: date) -> list[int]:
        rng = random.Random(daily_seed(day))
        return sorted(rng.sample(range(LOTTO_MIN_NUMBER, LOTTO_MAX_NUMBER + 1), LOTTO_NUMBERS_PER_SET))
