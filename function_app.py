"""
Main entry point for the Azure Function app using the v2 programming model.
This file registers all function blueprints from different modules.
"""

import logging

import azure.functions as func

from jira_notes.utils.log_utils import configure_app_logging
from function_blueprints.release_notes_blueprint import release_notes_bp
from function_blueprints.healthcheck_blueprint import healthcheck_bp

# Configure logging when module is loaded
configure_app_logging()

# Create the function app
app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

# Register blueprints
app.register_blueprint(release_notes_bp)
app.register_blueprint(healthcheck_bp)

logging.info("Azure Function app initialized with all blueprints registered")
