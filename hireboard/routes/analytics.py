"""
Analytics Routes Blueprint - dashboard aggregations
"""

import logging

from flask import Blueprint, jsonify, request

from hireboard import analytics
from hireboard.repositories import parse_datetime
from hireboard.routes.helpers import app_clock, db_connection, error_response

logger = logging.getLogger(__name__)

analytics_bp = Blueprint("analytics", __name__, url_prefix="/api/analytics")


@analytics_bp.route("/summary", methods=["GET"])
def summary():
    with db_connection() as conn:
        result = analytics.summary(conn, app_clock())
    return jsonify({"success": True, **result})


@analytics_bp.route("/trends", methods=["GET"])
def trends():
    with db_connection() as conn:
        result = analytics.trends(conn)
    return jsonify({"success": True, "trends": result})


@analytics_bp.route("/charts", methods=["GET"])
def charts():
    """
    Chart series, optionally filtered.

    Query Parameters:
        startDate: Earliest opportunity creation date
        endDate: Latest opportunity creation date
        company: Exact company name
    """
    try:
        start = parse_datetime(request.args["startDate"]) if request.args.get("startDate") else None
        end = parse_datetime(request.args["endDate"]) if request.args.get("endDate") else None
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        with db_connection() as conn:
            result = analytics.charts(conn, start=start, end=end, company=request.args.get("company"))
    except Exception as e:
        logger.error(f"Chart data error: {e}", exc_info=True)
        return error_response("Error fetching chart data", 500)

    return jsonify({"success": True, **result})


@analytics_bp.route("/companies", methods=["GET"])
def companies():
    with db_connection() as conn:
        result = analytics.companies(conn)
    return jsonify({"success": True, "companies": result})
