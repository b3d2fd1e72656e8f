from __future__ import annotations

from lottori.services.statistics_service import StatisticsService
from tests.conftest import make_draw


def test_summary_ratios_cover_every_main_number(sample_draws):
    stats = StatisticsService().summarize(sample_draws)

    assert stats.total_draws == 30
    assert stats.odd_even_ratio["odd"] + stats.odd_even_ratio["even"] == 30 * 6
    assert stats.high_low_ratio["high"] + stats.high_low_ratio["low"] == 30 * 6
    assert len(stats.frequencies) == 45
    assert len(stats.most_common) == 6
    assert len(stats.coldest_numbers) == 6


def test_recent_window_drives_hot_numbers():
    draws = [make_draw(n, [1, 2, 3, 4, 5, 6], 7) for n in range(25, 5, -1)]
    draws += [make_draw(n, [40, 41, 42, 43, 44, 45], 7) for n in range(5, 0, -1)]

    stats = StatisticsService().summarize(draws, recent_n=20)

    assert stats.hottest_numbers == [1, 2, 3, 4, 5, 6]
    assert 40 not in stats.hottest_numbers
    recent_45 = next(f for f in stats.recent_frequencies if f.number == 45)
    assert recent_45.count == 0


def test_high_low_threshold():
    stats = StatisticsService().summarize([make_draw(1, [1, 22, 23, 30, 40, 45], 2)])
    assert stats.high_low_ratio == {"high": 4, "low": 2}
    assert stats.odd_even_ratio == {"odd": 3, "even": 3}
