"""Withholding tax on lottery prizes.

Rules:
- the ticket cost is treated as a necessary expense and deducted first
- a post-expense amount of 2,000,000 KRW or less is tax free
- above that the whole post-expense amount is taxable (no floor subtracted)
- up to 300,000,000: 20% income tax + 2% local tax
- the excess over 300,000,000: 30% income tax + 3% local tax
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal

from lottori.constants import LOTTO_TICKET_PRICE

TAX_FREE_THRESHOLD = 2_000_000
LOWER_BRACKET_LIMIT = 300_000_000
LOWER_INCOME_RATE = Decimal("0.20")
LOWER_LOCAL_RATE = Decimal("0.02")
UPPER_INCOME_RATE = Decimal("0.30")
UPPER_LOCAL_RATE = Decimal("0.03")
TICKET_COST = LOTTO_TICKET_PRICE


@dataclass(frozen=True)
class TaxResult:
    prize_amount: int
    ticket_cost: int
    taxable_amount: int
    income_tax: int
    local_tax: int
    total_tax: int
    net_amount: int
    effective_rate: float


ZERO_TAX_RESULT = TaxResult(
    prize_amount=0,
    ticket_cost=0,
    taxable_amount=0,
    income_tax=0,
    local_tax=0,
    total_tax=0,
    net_amount=0,
    effective_rate=0.0,
)


def _floor_tax(amount: int, rate: Decimal) -> int:
    return int((Decimal(amount) * rate).to_integral_value(rounding=ROUND_FLOOR))


def calculate_tax(prize_amount: int) -> TaxResult:
    if prize_amount <= 0:
        return ZERO_TAX_RESULT

    prize_amount = int(prize_amount)
    after_expense = prize_amount - TICKET_COST

    if after_expense <= TAX_FREE_THRESHOLD:
        return TaxResult(
            prize_amount=prize_amount,
            ticket_cost=TICKET_COST,
            taxable_amount=0,
            income_tax=0,
            local_tax=0,
            total_tax=0,
            net_amount=prize_amount,
            effective_rate=0.0,
        )

    taxable_amount = after_expense

    if taxable_amount <= LOWER_BRACKET_LIMIT:
        income_tax = _floor_tax(taxable_amount, LOWER_INCOME_RATE)
        local_tax = _floor_tax(taxable_amount, LOWER_LOCAL_RATE)
    else:
        excess = taxable_amount - LOWER_BRACKET_LIMIT
        income_tax = _floor_tax(LOWER_BRACKET_LIMIT, LOWER_INCOME_RATE) + _floor_tax(excess, UPPER_INCOME_RATE)
        local_tax = _floor_tax(LOWER_BRACKET_LIMIT, LOWER_LOCAL_RATE) + _floor_tax(excess, UPPER_LOCAL_RATE)

    total_tax = income_tax + local_tax

    return TaxResult(
        prize_amount=prize_amount,
        ticket_cost=TICKET_COST,
        taxable_amount=taxable_amount,
        income_tax=income_tax,
        local_tax=local_tax,
        total_tax=total_tax,
        net_amount=prize_amount - total_tax,
        effective_rate=total_tax / prize_amount * 100,
    )
