"""Summary statistics shown on the statistics page."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from lottori.constants import DEFAULT_RECENT_DRAWS, LOTTO_HIGH_LOW_THRESHOLD
from lottori.models.draw import Draw
from lottori.services.frequency_analysis_service import FrequencyAnalysisService, FrequencyTable


@dataclass(frozen=True)
class NumberFrequency:
    number: int
    count: int
    percentage: float


@dataclass(frozen=True)
class LottoStats:
    total_draws: int
    frequencies: list[NumberFrequency]
    recent_frequencies: list[NumberFrequency]
    odd_even_ratio: dict[str, int]
    high_low_ratio: dict[str, int]
    most_common: list[int]
    least_common: list[int]
    hottest_numbers: list[int]
    coldest_numbers: list[int]


def _as_frequencies(table: FrequencyTable) -> list[NumberFrequency]:
    return [
        NumberFrequency(number=n, count=c, percentage=round(table.percentage(n), 2))
        for n, c in sorted(table.counts.items())
    ]


class StatisticsService:
    """Aggregate frequency, odd/even and high/low statistics."""

    def __init__(self, frequency_service: FrequencyAnalysisService | None = None, top_k: int = 6) -> None:
        self._frequency = frequency_service or FrequencyAnalysisService()
        self._top_k = top_k

    def summarize(self, draws: Sequence[Draw], *, recent_n: int = DEFAULT_RECENT_DRAWS) -> LottoStats:
        all_time = self._frequency.analyze(draws)
        recent = self._frequency.analyze(draws, recent_n=recent_n)

        odd = even = high = low = 0
        for n, c in all_time.counts.items():
            if n % 2:
                odd += c
            else:
                even += c
            if n > LOTTO_HIGH_LOW_THRESHOLD:
                high += c
            else:
                low += c

        return LottoStats(
            total_draws=all_time.draws_used,
            frequencies=_as_frequencies(all_time),
            recent_frequencies=_as_frequencies(recent),
            odd_even_ratio={"odd": odd, "even": even},
            high_low_ratio={"high": high, "low": low},
            most_common=all_time.top(self._top_k),
            least_common=all_time.bottom(self._top_k),
            hottest_numbers=recent.top(self._top_k),
            coldest_numbers=recent.bottom(self._top_k),
        )
