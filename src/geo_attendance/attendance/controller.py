from __future__ import annotations

from flask import Flask, request

from ..common.http import domain_failure, internal_failure, json_body, success, token_required
from ..common.validators import parse_non_negative_int, parse_optional_int
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.identity_verifier)
    service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @auth_required
    def check_in(current):
        payload = json_body()
        try:
            data = service.check_in(
                current,
                latitude=payload.get("latitude"),
                longitude=payload.get("longitude"),
                location_id=payload.get("location_id"),
                notes=payload.get("notes"),
            )
            return success(data, message=f"Check-in successful! Status: {data['status']}", status=201)
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return internal_failure("Failed to check in. Please try again.", e)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @auth_required
    def check_out(current):
        payload = json_body()
        try:
            data = service.check_out(
                current,
                latitude=payload.get("latitude"),
                longitude=payload.get("longitude"),
                notes=payload.get("notes"),
            )
            return success(data, message="Check-out successful!")
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return internal_failure("Failed to check out. Please try again.", e)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @auth_required
    def today(current):
        try:
            data = service.get_today(current)
            if data is None:
                return success(None, message="No attendance record for today")
            return success(data)
        except Exception as e:
            return internal_failure("Failed to get today attendance", e)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @auth_required
    def history(current):
        try:
            limit = parse_non_negative_int(request.args.get("limit"), "limit", default=DEFAULT_HISTORY_LIMIT)
            offset = parse_non_negative_int(request.args.get("offset"), "offset", default=0)
            rows, pagination = service.get_history(current, limit=limit, offset=offset)
            return success(rows, pagination=pagination)
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return internal_failure("Failed to get attendance history", e)

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @auth_required
    def summary(current):
        try:
            year = parse_optional_int(request.args.get("year"), "year")
            try:
                month = parse_optional_int(request.args.get("month"), "month")
            except ValidationError:
                raise ValidationError("Invalid month. Must be between 1-12")
            data = service.get_monthly_summary(current, year=year, month=month)
            return success(data)
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return internal_failure("Failed to get monthly summary", e)
