"""
Logging setup shared by the CI entry point and the function app.
"""

import os
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_app_logging(is_production: Optional[bool] = None) -> None:
    """Configure application logging with more detailed information outside production."""
    if is_production is None:
        is_production = os.getenv("ENVIRONMENT", "development").lower() == "production"
    log_level = logging.INFO if is_production else logging.DEBUG

    handlers = [logging.StreamHandler()]
    log_file = os.getenv("LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Set levels for other modules
    logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
    logging.getLogger("markdown").setLevel(logging.WARNING)
    logging.getLogger("azure.functions").setLevel(logging.INFO)

    logging.info(f"Logging configured. Level: {'INFO' if is_production else 'DEBUG'}")
