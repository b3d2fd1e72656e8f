"""Schemas for statistics endpoints."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class FrequencyQuerySchema(Schema):
    n = fields.Integer(required=False, load_default=None, validate=validate.Range(min=1))
    percent = fields.Float(
        required=False,
        load_default=0.2,
        validate=validate.Range(min=0.0, max=1.0, min_inclusive=False, max_inclusive=False),
    )


class NumberFrequencySchema(Schema):
    number = fields.Int()
    count = fields.Int()
    percentage = fields.Float()


class LottoStatsSchema(Schema):
    total_draws = fields.Int()
    frequencies = fields.List(fields.Nested(NumberFrequencySchema))
    recent_frequencies = fields.List(fields.Nested(NumberFrequencySchema))
    odd_even_ratio = fields.Dict(keys=fields.Str(), values=fields.Int())
    high_low_ratio = fields.Dict(keys=fields.Str(), values=fields.Int())
    most_common = fields.List(fields.Int())
    least_common = fields.List(fields.Int())
    hottest_numbers = fields.List(fields.Int())
    coldest_numbers = fields.List(fields.Int())
