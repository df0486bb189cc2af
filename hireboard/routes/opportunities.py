"""
Opportunity Routes Blueprint - CRUD for tracked job applications
"""

import logging

from flask import Blueprint, jsonify

from hireboard.repositories import (
    create_opportunity,
    delete_opportunity,
    find_opportunities,
    find_opportunity_by_id,
    update_opportunity,
)
from hireboard.routes.helpers import db_connection, error_response, json_body

logger = logging.getLogger(__name__)

opportunities_bp = Blueprint("opportunities", __name__, url_prefix="/api/opportunities")

EDITABLE_FIELDS = ("company", "role", "status", "deadline", "link")


def _editable(data):
    return {field: data[field] for field in EDITABLE_FIELDS if field in data}


@opportunities_bp.route("", methods=["POST"])
def create():
    """
    Create an opportunity.

    Request Body (JSON):
        {"company": "Acme", "role": "Backend Engineer", "status": "applied",
         "deadline": "2024-12-25", "link": "https://..."}
    """
    data = json_body()

    try:
        with db_connection() as conn:
            opportunity = create_opportunity(conn, _editable(data))
    except ValueError as e:
        return error_response(str(e), 400)

    logger.info(f"Created opportunity {opportunity['id']}: {opportunity['company']}")
    return jsonify({
        "success": True,
        "message": "Opportunity created successfully",
        "data": opportunity,
    }), 201


@opportunities_bp.route("", methods=["GET"])
def list_all():
    with db_connection() as conn:
        opportunities = find_opportunities(conn)
    return jsonify({"success": True, "count": len(opportunities), "data": opportunities})


@opportunities_bp.route("/<int:opportunity_id>", methods=["GET"])
def get_one(opportunity_id):
    with db_connection() as conn:
        opportunity = find_opportunity_by_id(conn, opportunity_id)

    if opportunity is None:
        return error_response("Opportunity not found", 404)

    return jsonify({"success": True, "data": opportunity})


@opportunities_bp.route("/<int:opportunity_id>", methods=["PUT"])
def update(opportunity_id):
    data = json_body()

    try:
        with db_connection() as conn:
            opportunity = update_opportunity(conn, opportunity_id, _editable(data))
    except ValueError as e:
        return error_response(str(e), 400)

    if opportunity is None:
        return error_response("Opportunity not found", 404)

    return jsonify({
        "success": True,
        "message": "Opportunity updated successfully",
        "data": opportunity,
    })


@opportunities_bp.route("/<int:opportunity_id>", methods=["DELETE"])
def delete(opportunity_id):
    with db_connection() as conn:
        deleted = delete_opportunity(conn, opportunity_id)

    if not deleted:
        return error_response("Opportunity not found", 404)

    return jsonify({"success": True, "message": "Opportunity deleted successfully"})
