"""Monte-Carlo purchase simulator for Lotto 6/45.

A fixed ticket is checked against ``trials`` freshly simulated draws and
the winnings are aggregated per prize tier.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum

from lottori.constants import (
    LOTTO_MAX_NUMBER,
    LOTTO_MIN_NUMBER,
    LOTTO_NUMBERS_PER_SET,
    LOTTO_TICKET_PRICE,
    PRIZE_AMOUNTS,
)
from lottori.errors import InvalidTicketError

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]

_POOL_SIZE = LOTTO_NUMBERS_PER_SET + 1


class WinTier(IntEnum):
    NONE = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5

    @property
    def payout(self) -> int:
        return PRIZE_AMOUNTS.get(int(self), 0)

    @property
    def is_win(self) -> bool:
        return self is not WinTier.NONE


WINNING_TIERS: tuple[WinTier, ...] = (
    WinTier.FIRST,
    WinTier.SECOND,
    WinTier.THIRD,
    WinTier.FOURTH,
    WinTier.FIFTH,
)


@dataclass(frozen=True)
class Ticket:
    """Six distinct player numbers. Order carries no meaning."""

    numbers: frozenset[int]

    @classmethod
    def of(cls, numbers: Iterable[int]) -> "Ticket":
        raw = list(numbers)
        if len(raw) != LOTTO_NUMBERS_PER_SET:
            raise InvalidTicketError(
                message="Ticket must have exactly 6 numbers",
                details={"numbers": raw},
            )
        if any(isinstance(n, bool) or not isinstance(n, int) for n in raw):
            raise InvalidTicketError(
                message="Ticket numbers must be integers",
                details={"numbers": raw},
            )
        if any(n < LOTTO_MIN_NUMBER or n > LOTTO_MAX_NUMBER for n in raw):
            raise InvalidTicketError(
                message="Ticket numbers must be within 1..45",
                details={"numbers": raw},
            )
        unique = frozenset(raw)
        if len(unique) != LOTTO_NUMBERS_PER_SET:
            raise InvalidTicketError(
                message="Ticket numbers must be unique",
                details={"numbers": raw},
            )
        return cls(numbers=unique)

    def sorted_numbers(self) -> list[int]:
        return sorted(self.numbers)


@dataclass(frozen=True)
class SimulatedDraw:
    numbers: tuple[int, ...]
    bonus: int


@dataclass(frozen=True)
class TierWinnings:
    tier: int
    count: int
    total_prize: int


@dataclass(frozen=True)
class SimulationResult:
    ticket: list[int]
    draw_count: int
    total_spent: int
    total_won: int
    wins: list[TierWinnings]
    best_tier: int | None

    @property
    def winning_draws(self) -> int:
        return sum(w.count for w in self.wins)

    @property
    def net(self) -> int:
        return self.total_won - self.total_spent


def match_tier(ticket: Ticket, draw: SimulatedDraw) -> WinTier:
    """Classify one draw against a ticket.

    Checked in prize order; a 5-match holding the bonus is always tier 2.
    """

    match_count = len(ticket.numbers.intersection(draw.numbers))
    bonus_match = draw.bonus in ticket.numbers

    if match_count == 6:
        return WinTier.FIRST
    if match_count == 5 and bonus_match:
        return WinTier.SECOND
    if match_count == 5:
        return WinTier.THIRD
    if match_count == 4:
        return WinTier.FOURTH
    if match_count == 3:
        return WinTier.FIFTH
    return WinTier.NONE


class SimulationService:
    """Simulate buying the same ticket over many draws."""

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random = random_source or random.random

    def simulate_draw(self) -> SimulatedDraw:
        """Draw 6 main numbers plus a bonus without replacement.

        Partial Fisher-Yates: only the last 7 slots of the pool are shuffled
        into place, which is enough for a uniform 7-element sample.
        """

        pool = list(range(LOTTO_MIN_NUMBER, LOTTO_MAX_NUMBER + 1))
        size = len(pool)
        for i in range(size - 1, size - 1 - _POOL_SIZE, -1):
            j = int(self._random() * (i + 1))
            pool[i], pool[j] = pool[j], pool[i]

        picked = pool[size - _POOL_SIZE :]
        return SimulatedDraw(numbers=tuple(sorted(picked[:6])), bonus=picked[6])

    def run(self, ticket: Ticket | Iterable[int], trials: int) -> SimulationResult:
        if not isinstance(ticket, Ticket):
            ticket = Ticket.of(ticket)

        draw_count = max(0, int(trials))
        counts = {tier: 0 for tier in WINNING_TIERS}
        best: WinTier | None = None

        for _ in range(draw_count):
            tier = match_tier(ticket, self.simulate_draw())
            if not tier.is_win:
                continue
            counts[tier] += 1
            if best is None or tier < best:
                best = tier

        wins = [
            TierWinnings(tier=int(tier), count=counts[tier], total_prize=counts[tier] * tier.payout)
            for tier in WINNING_TIERS
        ]
        total_won = sum(w.total_prize for w in wins)

        logger.debug(
            "Simulated %s draws for %s: won %s, best tier %s",
            draw_count,
            ticket.sorted_numbers(),
            total_won,
            best,
        )

        return SimulationResult(
            ticket=ticket.sorted_numbers(),
            draw_count=draw_count,
            total_spent=draw_count * LOTTO_TICKET_PRICE,
            total_won=total_won,
            wins=wins,
            best_tier=int(best) if best is not None else None,
        )


def run_simulation(
    ticket: Iterable[int],
    trials: int,
    random_source: RandomSource | None = None,
) -> SimulationResult:
    return SimulationService(random_source).run(ticket, trials)
