"""Lotto results stored in one wide table.

Columns:
- draw_no (PK)
- draw_date
- number1..number6
- bonus_number
- first_prize_amount, first_prize_winners
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import BigInteger, Date, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from lottori.models.base import Base
from lottori.models.draw import Draw


class LottoResult(Base):
    """One row per draw with 6 numbers + bonus."""

    __tablename__ = "lotto_results"

    draw_no: Mapped[int] = mapped_column(Integer, primary_key=True)
    draw_date: Mapped[date] = mapped_column(Date, nullable=False)

    number1: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number2: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number3: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number4: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number5: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    number6: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    bonus_number: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    first_prize_amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    first_prize_winners: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @classmethod
    def from_draw(cls, draw: Draw) -> "LottoResult":
        n = draw.numbers
        return cls(
            draw_no=draw.round,
            draw_date=draw.draw_date,
            number1=n[0],
            number2=n[1],
            number3=n[2],
            number4=n[3],
            number5=n[4],
            number6=n[5],
            bonus_number=draw.bonus,
            first_prize_amount=draw.first_prize_amount,
            first_prize_winners=draw.first_prize_winners,
        )

    def main_numbers(self) -> list[int]:
        return [
            int(self.number1),
            int(self.number2),
            int(self.number3),
            int(self.number4),
            int(self.number5),
            int(self.number6),
        ]
