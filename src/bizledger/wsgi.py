"""WSGI entry point, e.g. ``gunicorn bizledger.wsgi:app``."""

from bizledger.config import Settings, configure_logging
from bizledger.web import create_app

settings = Settings.from_env()
configure_logging(settings.log_level)
app = create_app(settings)
