"""Schemas for historical draw records.

The data file keeps the field names of the official result feed
(``drwNo``, ``drwtNo1`` ... ``bnusNo``); these schemas map them onto
:class:`~lottori.models.draw.Draw`.
"""

from __future__ import annotations

from datetime import date

from marshmallow import (
    EXCLUDE,
    Schema,
    ValidationError,
    fields,
    post_dump,
    post_load,
    pre_dump,
    validate,
    validates_schema,
)

from lottori.constants import LOTTO_MAX_NUMBER, LOTTO_MIN_NUMBER
from lottori.models.draw import Draw

_NUMBER_RANGE = validate.Range(
    min=LOTTO_MIN_NUMBER,
    max=LOTTO_MAX_NUMBER,
    error="must be within 1..45",
)
_DATE_FORMAT = validate.Regexp(r"^\d{4}-\d{2}-\d{2}$", error="must be formatted YYYY-MM-DD")

MAIN_FIELDS = ("number1", "number2", "number3", "number4", "number5", "number6")


class DrawRecordSchema(Schema):
    """Load/dump one record of the flat draw file."""

    class Meta:
        unknown = EXCLUDE

    round = fields.Integer(data_key="drwNo", required=True, strict=True, validate=validate.Range(min=1))
    draw_date = fields.String(data_key="drwNoDate", required=True, validate=_DATE_FORMAT)

    number1 = fields.Integer(data_key="drwtNo1", required=True, strict=True, validate=_NUMBER_RANGE)
    number2 = fields.Integer(data_key="drwtNo2", required=True, strict=True, validate=_NUMBER_RANGE)
    number3 = fields.Integer(data_key="drwtNo3", required=True, strict=True, validate=_NUMBER_RANGE)
    number4 = fields.Integer(data_key="drwtNo4", required=True, strict=True, validate=_NUMBER_RANGE)
    number5 = fields.Integer(data_key="drwtNo5", required=True, strict=True, validate=_NUMBER_RANGE)
    number6 = fields.Integer(data_key="drwtNo6", required=True, strict=True, validate=_NUMBER_RANGE)
    bonus = fields.Integer(data_key="bnusNo", required=True, strict=True, validate=_NUMBER_RANGE)

    first_prize_amount = fields.Integer(data_key="firstWinamnt", load_default=0, validate=validate.Range(min=0))
    first_prize_winners = fields.Integer(data_key="firstPrzwnerCo", load_default=0, validate=validate.Range(min=0))

    @validates_schema
    def _validate_numbers(self, data, **kwargs):  # type: ignore[no-untyped-def]
        main = [int(data[f]) for f in MAIN_FIELDS]
        if len(set(main)) != len(main):
            raise ValidationError(f"duplicate numbers found in {','.join(str(n) for n in main)}")
        if int(data["bonus"]) in main:
            raise ValidationError(f"bonus {data['bonus']} duplicates a main number")
        try:
            date.fromisoformat(data["draw_date"])
        except ValueError as exc:
            raise ValidationError({"draw_date": [f"invalid date {data['draw_date']!r}"]}) from exc

    @post_load
    def _make_draw(self, data, **kwargs) -> Draw:  # type: ignore[no-untyped-def]
        main = sorted(int(data[f]) for f in MAIN_FIELDS)
        return Draw(
            round=int(data["round"]),
            draw_date=date.fromisoformat(data["draw_date"]),
            numbers=(main[0], main[1], main[2], main[3], main[4], main[5]),
            bonus=int(data["bonus"]),
            first_prize_amount=int(data.get("first_prize_amount") or 0),
            first_prize_winners=int(data.get("first_prize_winners") or 0),
        )

    @pre_dump
    def _flatten(self, draw, **kwargs):  # type: ignore[no-untyped-def]
        if not isinstance(draw, Draw):
            return draw
        out = {
            "round": draw.round,
            "draw_date": draw.draw_date.isoformat(),
            "bonus": draw.bonus,
            "first_prize_amount": draw.first_prize_amount,
            "first_prize_winners": draw.first_prize_winners,
        }
        out.update(zip(MAIN_FIELDS, draw.numbers))
        return out

    @post_dump
    def _add_feed_fields(self, data, **kwargs):  # type: ignore[no-untyped-def]
        data.setdefault("totSellamnt", 0)
        data.setdefault("returnValue", "success")
        return data


class DrawSchema(Schema):
    """Public API representation of a draw."""

    round = fields.Int()
    draw_date = fields.Date()
    numbers = fields.List(fields.Int())
    bonus = fields.Int()
    first_prize_amount = fields.Int()
    first_prize_winners = fields.Int()
