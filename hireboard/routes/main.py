"""
Main Routes Blueprint - service health and JSON error handlers
"""

import logging

from flask import Blueprint, jsonify

logger = logging.getLogger(__name__)

main_bp = Blueprint("main", __name__)


@main_bp.route("/api/health")
def health():
    """Liveness check."""
    return jsonify({"status": "ok"})


@main_bp.app_errorhandler(404)
def not_found(error):
    return jsonify({"success": False, "error": "Route not found"}), 404


@main_bp.app_errorhandler(500)
def internal_error(error):
    logger.error(f"Unhandled error: {error}")
    return jsonify({"success": False, "error": "Internal server error"}), 500


@main_bp.app_errorhandler(413)
def payload_too_large(error):
    return jsonify({"success": False, "error": "File too large"}), 413
