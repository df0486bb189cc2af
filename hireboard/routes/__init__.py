"""
Routes Package - Flask Blueprints for Hireboard

This module registers all Flask blueprints with the application.

Blueprint structure:
- main_bp: Health check and JSON error handlers
- parser_bp: Message analysis and reminders (/api/parser)
- resume_bp: Resume upload and scoring (/api/resume)
- opportunities_bp: Opportunity CRUD (/api/opportunities)
- analytics_bp: Dashboard aggregations (/api/analytics)
"""

import logging

from .analytics import analytics_bp
from .main import main_bp
from .opportunities import opportunities_bp
from .parser import parser_bp
from .resume import resume_bp

logger = logging.getLogger(__name__)

BLUEPRINTS = [main_bp, parser_bp, resume_bp, opportunities_bp, analytics_bp]


def register_all_blueprints(app):
    """
    Register all Flask blueprints with the application.

    Args:
        app: Flask application instance
    """
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
        logger.debug(f"Registered {blueprint.name} blueprint")


__all__ = [
    "register_all_blueprints",
    "main_bp",
    "parser_bp",
    "resume_bp",
    "opportunities_bp",
    "analytics_bp",
]
