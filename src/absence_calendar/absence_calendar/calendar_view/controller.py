from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import optional_int, require_int
from ..core.enums import MANAGER_ROLES, Role
from ..core.exceptions import AuthorizationError, BackendError, ValidationError
from ..container import Container
from .presenter import build_month_grid

log = logging.getLogger(__name__)


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def _current_role() -> Role | None:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def _is_manager() -> bool:
    return _current_role() in MANAGER_ROLES


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _fail("Please sign in to continue", 401)
            return view(*args, **kwargs)

        return wrapper

    def hr_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _fail("Please sign in to continue", 401)
            if not _is_manager():
                return _fail("HR access required", 403)
            return view(*args, **kwargs)

        return wrapper

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return _fail(str(e), 400)
            except AuthorizationError as e:
                return _fail(str(e), 403)
            except BackendError:
                log.exception("backend error in %s", request.path)
                return _fail("Database error, please retry", 502)

        return wrapper

    @app.route("/api/calendar/<int:year>/<int:month>", methods=["GET"], endpoint="calendar_month")
    @login_required
    @json_errors
    def calendar_month(year: int, month: int):
        if not 1 <= month <= 12:
            raise ValidationError("Month must be 1-12")

        user_id = optional_int(request.args.get("user_id"), "user_id")
        if not _is_manager():
            own_id = int(session["user_id"])
            if user_id is None:
                user_id = own_id
            elif user_id != own_id:
                raise AuthorizationError("You can only view your own calendar")

        today = today_local()
        stats = container.month_stats_service.fetch_month_stats(year, month - 1, user_id, today=today)
        payload = stats.to_dict()
        payload["grid"] = build_month_grid(stats.days, year, month - 1, single_user=stats.single_user, today=today)
        return jsonify({"success": True, **payload}), 200

    @app.route("/api/calendar/day/<day>", methods=["GET"], endpoint="calendar_day")
    @hr_required
    @json_errors
    def calendar_day(day: str):
        roster = container.daily_attendance_service.get_daily_roster(parse_iso_date(day), request.args.get("q"))
        return jsonify({"success": True, **roster.to_dict()}), 200

    @app.route("/api/calendar/day/<day>/present", methods=["POST"], endpoint="calendar_mark_present")
    @hr_required
    @json_errors
    def calendar_mark_present(day: str):
        data = request.get_json(silent=True) or {}
        result = container.daily_attendance_service.mark_present(
            actor_id=int(session["user_id"]),
            user_id=require_int(data.get("user_id"), "user_id"),
            day=parse_iso_date(day),
        )
        return jsonify({"success": True, **result.to_dict()}), 200

    @app.route("/api/calendar/day/<day>/absent", methods=["POST"], endpoint="calendar_mark_absent")
    @hr_required
    @json_errors
    def calendar_mark_absent(day: str):
        data = request.get_json(silent=True) or {}
        result = container.daily_attendance_service.mark_absent(
            actor_id=int(session["user_id"]),
            user_id=require_int(data.get("user_id"), "user_id"),
            day=parse_iso_date(day),
        )
        return jsonify({"success": True, **result.to_dict()}), 200

    @app.route("/api/calendar/day/<day>/bulk-absent", methods=["POST"], endpoint="calendar_bulk_absent")
    @hr_required
    @json_errors
    def calendar_bulk_absent(day: str):
        result = container.daily_attendance_service.bulk_mark_absent(
            actor_id=int(session["user_id"]),
            day=parse_iso_date(day),
        )
        return jsonify({"success": True, **result.to_dict()}), 200
