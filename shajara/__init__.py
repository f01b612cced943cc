"""
Shajara GEDCOM - GEDCOM 5.5 import/export for Arabic family trees
"""

import os

from flask import Flask

from shajara.blueprints.gedcom import gedcom_bp
from shajara.commands import register_commands
from shajara.error_handlers import register_error_handlers
from shajara.services.gedcom_service import DEFAULT_MAX_UPLOAD_BYTES


# Room for the multipart envelope around an upload at the size limit
MULTIPART_OVERHEAD_BYTES = 1024 * 1024


class Config:
    """Configuration class for Flask app with required environment variables"""

    def __init__(self):
        # Flask configuration
        self.secret_key = self._require_env('SECRET_KEY')

        # GEDCOM configuration
        self.gedcom_max_upload_bytes = int(os.environ.get('GEDCOM_MAX_UPLOAD_BYTES', DEFAULT_MAX_UPLOAD_BYTES))
        self.gedcom_submitter_name = os.environ.get('GEDCOM_SUBMITTER_NAME', 'Shajara User')
        self.gedcom_submitter_email = os.environ.get('GEDCOM_SUBMITTER_EMAIL')

    def _require_env(self, var_name: str) -> str:
        """Require environment variable or raise error"""
        value = os.environ.get(var_name)
        if not value:
            raise RuntimeError(f"Required environment variable {var_name} is not set")
        return value


def create_app(config=None):
    """Application factory"""
    app = Flask(__name__)

    # Initialize configuration
    if config is None:
        config = Config()

    # Set Flask config from our config object
    app.config['SECRET_KEY'] = config.secret_key
    app.config['GEDCOM_MAX_UPLOAD_BYTES'] = config.gedcom_max_upload_bytes
    app.config['GEDCOM_SUBMITTER_NAME'] = config.gedcom_submitter_name
    app.config['GEDCOM_SUBMITTER_EMAIL'] = config.gedcom_submitter_email
    app.config['MAX_CONTENT_LENGTH'] = config.gedcom_max_upload_bytes + MULTIPART_OVERHEAD_BYTES

    # Register blueprints
    app.register_blueprint(gedcom_bp)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def main_cli():
    """Development server entry point"""
    app = create_app()

    print("Shajara GEDCOM API")
    print("=" * 50)
    print("POST /api/gedcom/import  - upload a .ged file")
    print("POST /api/gedcom/export  - download a tree as .ged")
    print()

    app.run(debug=True, host='0.0.0.0', port=5000)
