"""Domain records and ORM models."""

from lottori.models.draw import Draw
from lottori.models.lotto_result import LottoResult

__all__ = ["Draw", "LottoResult"]
