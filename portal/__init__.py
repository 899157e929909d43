# ==============================================================================
# portal/__init__.py
# ------------------------------------------------------------------------------
# Application factory for creating and configuring the Flask app instance.
# ==============================================================================

import os
import logging
import click
from flask import Flask
from config import Config
from flask_sqlalchemy import SQLAlchemy

# Initialize extensions globally to be accessible by other modules
db = SQLAlchemy()

def create_app(config_class=Config):
    """
    Application factory function. Creates and configures the Flask application.

    Args:
        config_class (class): The configuration class to use.

    Returns:
        Flask: The configured Flask application instance.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    # Configure logging
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    # Records keep their sheet column order in the JSON output
    app.json.sort_keys = False

    # Ensure the instance folder exists for the workbook and the SQLite database
    try:
        os.makedirs(app.instance_path)
    except OSError:
        # The directory already exists, which is fine.
        pass

    db.init_app(app)

    # Register blueprints with the application
    from portal.main import bp as main_bp
    app.register_blueprint(main_bp)

    @app.cli.command("import-workbook")
    @click.argument("path")
    def import_workbook_command(path):
        """Copies the portal sheets of a workbook into the database."""
        from portal.workbook_import import import_workbook
        imported = import_workbook(path, db.engine, app.config)
        app.logger.info(f"Imported {len(imported)} table(s) from '{path}': {', '.join(imported)}")

    app.logger.info('Sales Portal API startup complete')

    return app
