"""Prize tax calculator route."""

from __future__ import annotations

from flask import Blueprint, request

from lottori.schemas.tax import TaxQuerySchema, TaxResultSchema
from lottori.services.tax_service import calculate_tax
from lottori.utils.responses import ok

tax_bp = Blueprint("tax", __name__)

_query_schema = TaxQuerySchema()
_result_schema = TaxResultSchema()


@tax_bp.get("/tax")
def get_tax():
    query = _query_schema.load({"amount": (request.args.get("amount") or "").replace(",", "").strip()})
    return ok(_result_schema.dump(calculate_tax(query["amount"])))
