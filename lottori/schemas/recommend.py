"""Schemas for the number recommendation API."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from lottori.services.recommend_service import MAX_EXCLUDED, MAX_FIXED, MAX_SETS, RecommendMethod


def _number() -> fields.Integer:
    return fields.Integer(validate=validate.Range(min=1, max=45))


class RecommendRequestSchema(Schema):
    method = fields.String(
        required=False,
        load_default=RecommendMethod.RANDOM.value,
        validate=validate.OneOf([m.value for m in RecommendMethod]),
    )

    count = fields.Integer(
        required=False,
        load_default=1,
        validate=validate.Range(min=1, max=MAX_SETS),
    )

    exclude_numbers = fields.List(_number(), required=False, load_default=None)
    fixed_numbers = fields.List(_number(), required=False, load_default=None)
    exclude_winning = fields.Boolean(required=False, load_default=False)

    @validates_schema
    def _validate_numbers(self, data, **kwargs):  # type: ignore[no-untyped-def]
        nums = data.get("exclude_numbers")
        fixed = data.get("fixed_numbers")

        if nums is not None:
            if len(nums) != len(set(nums)):
                raise ValidationError({"exclude_numbers": ["Numbers must be unique"]})

            # Must leave at least 6 numbers available.
            if len(nums) > MAX_EXCLUDED:
                raise ValidationError({"exclude_numbers": [f"Too many excluded numbers (must be <= {MAX_EXCLUDED})"]})

        if fixed is not None:
            if len(fixed) != len(set(fixed)):
                raise ValidationError({"fixed_numbers": ["Numbers must be unique"]})
            if len(fixed) > MAX_FIXED:
                raise ValidationError({"fixed_numbers": [f"Too many fixed numbers (must be <= {MAX_FIXED})"]})

        if nums is not None and fixed is not None:
            if set(nums).intersection(set(fixed)):
                raise ValidationError({"fixed_numbers": ["Fixed numbers cannot overlap excluded numbers"]})


class RecommendResponseSchema(Schema):
    method = fields.String(required=True)
    numbers = fields.List(fields.Integer(), required=True)
    sets = fields.List(fields.List(fields.Integer()), required=True)
    count = fields.Integer(required=True)
