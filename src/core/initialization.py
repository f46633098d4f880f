"""Application initialization and setup.

Tasks that must run once before the application object is built.
"""

from src.core.config.settings import settings
from src.core.logging import configure_logging


def initialize_application() -> None:
    """Configure logging from the loaded settings."""
    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
