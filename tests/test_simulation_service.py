from __future__ import annotations

import random

import pytest

from lottori.constants import LOTTO_TICKET_PRICE, PRIZE_AMOUNTS
from lottori.errors import InvalidTicketError
from lottori.services.simulation_service import (
    SimulatedDraw,
    SimulationService,
    Ticket,
    WinTier,
    match_tier,
    run_simulation,
)

TICKET = [3, 11, 19, 27, 35, 43]


def _always_zero() -> float:
    return 0.0


def _must_not_be_called() -> float:
    raise AssertionError("random source used")


def test_simulate_draw_shape():
    service = SimulationService(random.Random(7).random)
    for _ in range(500):
        draw = service.simulate_draw()
        assert len(draw.numbers) == 6
        assert list(draw.numbers) == sorted(draw.numbers)
        assert len(set(draw.numbers)) == 6
        assert draw.bonus not in draw.numbers
        assert all(1 <= n <= 45 for n in (*draw.numbers, draw.bonus))


def test_simulate_draw_is_deterministic_with_fixed_source():
    draw = SimulationService(_always_zero).simulate_draw()
    assert draw == SimulatedDraw(numbers=(40, 41, 42, 43, 44, 45), bonus=1)


def test_seeded_sources_repeat():
    a = SimulationService(random.Random(99).random).run(TICKET, 300)
    b = SimulationService(random.Random(99).random).run(TICKET, 300)
    assert a == b


@pytest.mark.parametrize(
    "ticket,expected",
    [
        ([1, 2, 3, 4, 5, 6], WinTier.FIRST),
        ([1, 2, 3, 4, 5, 7], WinTier.SECOND),
        ([1, 2, 3, 4, 5, 8], WinTier.THIRD),
        ([1, 2, 3, 4, 7, 8], WinTier.FOURTH),
        ([1, 2, 3, 7, 8, 9], WinTier.FIFTH),
        ([1, 2, 7, 8, 9, 10], WinTier.NONE),
        ([20, 21, 22, 23, 24, 25], WinTier.NONE),
    ],
)
def test_match_tier(ticket, expected):
    draw = SimulatedDraw(numbers=(1, 2, 3, 4, 5, 6), bonus=7)
    assert match_tier(Ticket.of(ticket), draw) is expected


def test_five_matches_never_reported_below_third_tier():
    service = SimulationService(random.Random(3).random)
    for _ in range(300):
        draw = service.simulate_draw()
        five = list(draw.numbers[:5])
        outsider = next(n for n in range(1, 46) if n not in draw.numbers and n != draw.bonus)

        assert match_tier(Ticket.of([*five, draw.bonus]), draw) is WinTier.SECOND
        assert match_tier(Ticket.of([*five, outsider]), draw) is WinTier.THIRD


def test_run_with_fixed_draw_counts_every_trial():
    result = SimulationService(_always_zero).run([40, 41, 42, 43, 44, 45], 3)

    first = result.wins[0]
    assert first.tier == 1
    assert first.count == 3
    assert first.total_prize == 3 * PRIZE_AMOUNTS[1]
    assert result.best_tier == 1
    assert result.total_won == 3 * PRIZE_AMOUNTS[1]
    assert result.total_spent == 3 * LOTTO_TICKET_PRICE


def test_run_second_tier_uses_bonus():
    result = SimulationService(_always_zero).run([1, 40, 41, 42, 43, 44], 2)
    assert result.best_tier == 2
    assert [w.count for w in result.wins] == [0, 2, 0, 0, 0]


@pytest.mark.parametrize("trials", [0, 1, 250, 2_000])
def test_run_accounting(trials):
    result = SimulationService(random.Random(trials).random).run(TICKET, trials)

    assert result.draw_count == trials
    assert result.total_spent == trials * LOTTO_TICKET_PRICE
    assert [w.tier for w in result.wins] == [1, 2, 3, 4, 5]
    assert result.total_won == sum(w.count * PRIZE_AMOUNTS[w.tier] for w in result.wins)
    assert all(w.total_prize == w.count * PRIZE_AMOUNTS[w.tier] for w in result.wins)
    assert result.winning_draws <= trials


def test_zero_trials_is_zero_result():
    result = run_simulation(TICKET, 0, _must_not_be_called)

    assert result.total_spent == 0
    assert result.total_won == 0
    assert all(w.count == 0 for w in result.wins)
    assert result.best_tier is None


def test_negative_trials_is_zero_result():
    result = run_simulation(TICKET, -10, _must_not_be_called)
    assert result.draw_count == 0
    assert result.total_spent == 0


def test_best_tier_is_none_without_wins():
    # The fixed source always draws 40..45 with bonus 1.
    result = SimulationService(_always_zero).run([2, 3, 4, 5, 6, 7], 10)
    assert result.best_tier is None
    assert result.net == -10 * LOTTO_TICKET_PRICE


@pytest.mark.parametrize(
    "numbers",
    [
        [1, 2, 3, 4, 5],
        [1, 2, 3, 4, 5, 6, 7],
        [1, 1, 2, 3, 4, 5],
        [0, 1, 2, 3, 4, 5],
        [1, 2, 3, 4, 5, 46],
        [1, 2, 3, 4, 5, "6"],
        [1, 2, 3, 4, 5, True],
    ],
)
def test_invalid_ticket_rejected_before_any_trial(numbers):
    with pytest.raises(InvalidTicketError):
        run_simulation(numbers, 100, _must_not_be_called)


def test_ticket_order_does_not_matter():
    assert Ticket.of([6, 5, 4, 3, 2, 1]) == Ticket.of([1, 2, 3, 4, 5, 6])
    assert Ticket.of([6, 5, 4, 3, 2, 1]).sorted_numbers() == [1, 2, 3, 4, 5, 6]
