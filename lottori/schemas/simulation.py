"""Schemas for the purchase simulator API."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates

from lottori.constants import LOTTO_MAX_NUMBER, LOTTO_MIN_NUMBER, LOTTO_NUMBERS_PER_SET


class SimulationRequestSchema(Schema):
    numbers = fields.List(
        fields.Integer(strict=True, validate=validate.Range(min=LOTTO_MIN_NUMBER, max=LOTTO_MAX_NUMBER)),
        required=True,
        validate=validate.Length(equal=LOTTO_NUMBERS_PER_SET),
    )

    # The upper bound comes from SIMULATION_MAX_TRIALS and is checked in the route.
    trials = fields.Integer(required=False, load_default=1_000, validate=validate.Range(min=0))

    @validates("numbers")
    def _validate_unique(self, value, **kwargs):  # type: ignore[no-untyped-def]
        if len(value) != len(set(value)):
            raise ValidationError("Numbers must be unique")


class TierWinningsSchema(Schema):
    tier = fields.Int()
    count = fields.Int()
    total_prize = fields.Int()


class SimulationResultSchema(Schema):
    ticket = fields.List(fields.Int())
    draw_count = fields.Int()
    total_spent = fields.Int()
    total_won = fields.Int()
    net = fields.Int()
    winning_draws = fields.Int()
    wins = fields.List(fields.Nested(TierWinningsSchema))
    best_tier = fields.Int(allow_none=True)
