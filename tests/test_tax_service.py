from __future__ import annotations

import pytest

from lottori.services.tax_service import ZERO_TAX_RESULT, calculate_tax


@pytest.mark.parametrize("amount", [0, -5, -1_000_000])
def test_non_positive_amount_is_zero_result(amount):
    assert calculate_tax(amount) == ZERO_TAX_RESULT


def test_tax_free_boundary():
    result = calculate_tax(2_000_000)

    assert result.ticket_cost == 1_000
    assert result.taxable_amount == 0
    assert result.total_tax == 0
    assert result.net_amount == 2_000_000
    assert result.effective_rate == 0


def test_threshold_is_a_cliff():
    assert calculate_tax(2_001_000).total_tax == 0

    result = calculate_tax(2_001_001)
    assert result.taxable_amount == 2_000_001
    assert result.income_tax == 400_000
    assert result.local_tax == 40_000
    assert result.net_amount == 2_001_001 - 440_000


def test_lower_bracket():
    result = calculate_tax(50_000_000)

    assert result.taxable_amount == 49_999_000
    assert result.income_tax == 9_999_800
    assert result.local_tax == 999_980
    assert result.total_tax == 10_999_780
    assert result.net_amount == 39_000_220
    assert result.effective_rate == pytest.approx(10_999_780 / 50_000_000 * 100)


def test_upper_bracket():
    result = calculate_tax(2_000_000_000)

    assert result.taxable_amount == 1_999_999_000
    assert result.income_tax == 60_000_000 + 509_999_700
    assert result.local_tax == 6_000_000 + 50_999_970
    assert result.total_tax == 626_999_670
    assert result.net_amount == 1_373_000_330
    assert result.effective_rate == pytest.approx(31.3499835)


def test_bracket_edge():
    # post-expense amount exactly at the bracket limit stays in the lower bracket
    result = calculate_tax(300_001_000)
    assert result.income_tax == 60_000_000
    assert result.local_tax == 6_000_000
