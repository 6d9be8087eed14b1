"""Flask application factory for the bizledger HTTP API."""

import logging
from dataclasses import dataclass
from typing import Optional

from flask import Flask, current_app, jsonify

from bizledger.auth import TokenAuthenticator
from bizledger.config import Settings
from bizledger.database.base import Database
from bizledger.database.factories import create_database

logger = logging.getLogger(__name__)

EXTENSION_KEY = "bizledger"


@dataclass
class AppServices:
    """Process-wide collaborators shared by all requests."""

    settings: Settings
    db: Database
    authenticator: TokenAuthenticator


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[Database] = None,
    authenticator: Optional[TokenAuthenticator] = None,
) -> Flask:
    """Create the HTTP application.

    The database is opened once here and shared by every request; pass an
    existing one to reuse it (tests, CLI).

    Args:
        settings: Settings, read from the environment when omitted
        db: Database instance, created from settings.database_url when omitted
        authenticator: Token authenticator, built from settings when omitted
    """
    settings = settings or Settings.from_env()
    if db is None:
        db = create_database(settings.database_url)
        db.connect()
        db.initialize_schema()
    if authenticator is None:
        authenticator = TokenAuthenticator.from_settings(db, settings)

    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions[EXTENSION_KEY] = AppServices(
        settings=settings, db=db, authenticator=authenticator
    )

    from bizledger.web.errors import register_error_handlers
    from bizledger.web.banks import banks_bp
    from bizledger.web.transactions import transactions_bp
    from bizledger.web.users import users_bp
    from bizledger.web.projects import projects_bp
    from bizledger.web.tasks import tasks_bp

    register_error_handlers(app)
    app.register_blueprint(banks_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(tasks_bp)

    @app.get("/healthz")
    def healthz():
        return jsonify(status="ok")

    @app.teardown_appcontext
    def _release_session(exc):
        db.release_session()

    logger.info("HTTP application created")
    return app


def get_services() -> AppServices:
    """Return the collaborators of the running application."""
    return current_app.extensions[EXTENSION_KEY]
