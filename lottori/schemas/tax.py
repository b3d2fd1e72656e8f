"""Schemas for the prize tax calculator API."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class TaxQuerySchema(Schema):
    amount = fields.Integer(required=True, validate=validate.Range(min=0, max=10**15))


class TaxResultSchema(Schema):
    prize_amount = fields.Int()
    ticket_cost = fields.Int()
    taxable_amount = fields.Int()
    income_tax = fields.Int()
    local_tax = fields.Int()
    total_tax = fields.Int()
    net_amount = fields.Int()
    effective_rate = fields.Float()
