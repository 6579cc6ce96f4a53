from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_date
from ..container import Container
from ..core.exceptions import ValidationError
from .model import DayRecord


def _iso(value):
    return value.isoformat() if value else None


def record_to_json(record: DayRecord) -> dict:
    return {
        "staff_id": record.staff_id,
        "store_id": record.store_id,
        "work_date": record.work_date.strftime("%Y-%m-%d"),
        "clock_in": _iso(record.clock_in),
        "clock_out": _iso(record.clock_out),
        "first_clock_in": _iso(record.day_first_clock_in),
        "status": record.status.value,
        "break_intervals": [{"start": _iso(b.start), "end": _iso(b.end)} for b in record.break_intervals],
        "work_minutes": record.work_minutes,
        "break_minutes": record.break_minutes,
        "night_minutes": record.night_minutes,
        "previous_work_minutes": record.previous_work_minutes,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clock", methods=["POST"], endpoint="api_clock")
    def api_clock():
        data = request.get_json(silent=True) or {}

        timestamp = None
        if data.get("timestamp"):
            try:
                timestamp = parse_iso_datetime(str(data["timestamp"]))
            except ValueError:
                raise ValidationError("timestamp must be ISO 8601") from None

        record = container.attendance_service.record_event(
            data.get("staff_id"),
            data.get("store_id"),
            data.get("type"),
            timestamp,
        )
        return jsonify({"success": True, "record": record_to_json(record)}), 200

    @app.route("/api/staff/<int:staff_id>/state", methods=["GET"], endpoint="api_staff_state")
    def api_staff_state(staff_id: int):
        current = container.attendance_service.get_current_state(staff_id)
        return jsonify(
            {
                "staff_id": current.staff_id,
                "work_date": current.work_date.strftime("%Y-%m-%d"),
                "state": current.state.value,
                "last_clock_in": _iso(current.last_clock_in),
                "last_break_start": _iso(current.last_break_start),
            }
        )

    @app.route("/api/staff/<int:staff_id>/days/<work_date>", methods=["GET"], endpoint="api_staff_day")
    def api_staff_day(staff_id: int, work_date: str):
        day = container.day_query_service.get_aggregated_day(staff_id, require_date(work_date))
        return jsonify(
            {
                "staff_id": day.staff_id,
                "work_date": day.work_date.strftime("%Y-%m-%d"),
                "work_minutes": day.work_minutes,
                "break_minutes": day.break_minutes,
                "night_minutes": day.night_minutes,
                "is_holiday": day.is_holiday,
            }
        )
