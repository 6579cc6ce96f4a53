from __future__ import annotations

from decimal import Decimal

from flask import Flask, jsonify, request

from ..container import Container
from .export import payroll_rows, summary_totals


def _jsonable(row: dict) -> dict:
    return {k: str(v) if isinstance(v, Decimal) else v for k, v in row.items()}


def _summary_json(summary) -> dict:
    return {
        **_jsonable(summary_totals(summary)),
        "days": [_jsonable(r) for r in payroll_rows(summary)],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="api_payroll")
    def api_payroll():
        staff_id = request.args.get("staff_id")
        store_id = request.args.get("store_id")

        result = container.payroll_service.compute_payroll(
            request.args.get("month", ""),
            staff_id=staff_id,
            store_id=store_id,
        )
        if isinstance(result, list):
            return jsonify({"success": True, "staff": [_summary_json(s) for s in result]})
        return jsonify({"success": True, **_summary_json(result)})
