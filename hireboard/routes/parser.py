"""
Parser Routes Blueprint - message analysis and reminder management

Endpoints:
- POST   /api/parser/analyze          Analyze message text
- POST   /api/parser/save-reminders   Save extracted reminders
- GET    /api/parser/reminders        List reminders (optional ?status=)
- GET    /api/parser/reminders/stats  Reminder notification counts
- PUT    /api/parser/reminders/<id>   Update reminder status
- DELETE /api/parser/reminders/<id>   Delete a reminder
"""

import logging

from flask import Blueprint, jsonify, request

from hireboard.extraction import analyze_message
from hireboard.repositories import (
    delete_reminder,
    find_reminders,
    save_reminders,
    update_reminder_status,
)
from hireboard.routes.helpers import app_clock, db_connection, error_response, json_body
from hireboard.scheduler import get_reminder_stats

logger = logging.getLogger(__name__)

parser_bp = Blueprint("parser", __name__, url_prefix="/api/parser")


@parser_bp.route("/analyze", methods=["POST"])
def analyze():
    """
    Analyze a chat message and extract reminder candidates.

    Request Body (JSON):
        {"text": "Submit assignment by 25/12/2024 ..."}

    Returns:
        JSON: {success, summary, reminders, stats}
    """
    data = json_body()
    text = data.get("text")

    if not isinstance(text, str) or not text.strip():
        return error_response("Message text is required", 400)

    try:
        result = analyze_message(text, clock=app_clock())
    except Exception as e:
        logger.error(f"Parse error: {e}", exc_info=True)
        return error_response("Error analyzing message", 500)

    return jsonify({"success": True, **result.to_dict()})


@parser_bp.route("/save-reminders", methods=["POST"])
def save():
    """
    Save extracted reminders as pending reminders.

    Request Body (JSON):
        {"reminders": [...], "originalMessage": "..."}

    Returns:
        JSON: {success, message, reminders} with status 201
    """
    data = json_body()
    reminders = data.get("reminders")

    if not isinstance(reminders, list):
        return error_response("Reminders array is required", 400)

    try:
        with db_connection() as conn:
            saved = save_reminders(conn, reminders, data.get("originalMessage") or "")
    except ValueError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.error(f"Save reminders error: {e}", exc_info=True)
        return error_response("Error saving reminders", 500)

    return jsonify({
        "success": True,
        "message": f"{len(saved)} reminders saved successfully",
        "reminders": saved,
    }), 201


@parser_bp.route("/reminders", methods=["GET"])
def list_reminders():
    """List reminders sorted by due date, optionally filtered by ?status=."""
    status = request.args.get("status")
    with db_connection() as conn:
        reminders = find_reminders(conn, status)
    return jsonify({"success": True, "count": len(reminders), "reminders": reminders})


@parser_bp.route("/reminders/stats", methods=["GET"])
def reminder_stats():
    with db_connection() as conn:
        stats = get_reminder_stats(conn, app_clock())
    return jsonify({"success": True, "stats": stats})


@parser_bp.route("/reminders/<int:reminder_id>", methods=["PUT"])
def update_reminder(reminder_id):
    """
    Update reminder status.

    Request Body (JSON):
        {"status": "completed"}
    """
    data = json_body()

    try:
        with db_connection() as conn:
            reminder = update_reminder_status(conn, reminder_id, data.get("status"))
    except ValueError as e:
        return error_response(str(e), 400)

    if reminder is None:
        return error_response("Reminder not found", 404)

    return jsonify({"success": True, "reminder": reminder})


@parser_bp.route("/reminders/<int:reminder_id>", methods=["DELETE"])
def remove_reminder(reminder_id):
    with db_connection() as conn:
        deleted = delete_reminder(conn, reminder_id)

    if not deleted:
        return error_response("Reminder not found", 404)

    return jsonify({"success": True, "message": "Reminder deleted successfully"})
