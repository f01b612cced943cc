"""
Shared error handlers for Flask application and blueprints
"""

from flask import jsonify, request

from shajara.services.exceptions import NotFoundError, ServiceError, ValidationError
from shajara.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)


def register_error_handlers(app_or_blueprint):
    """Register JSON error handlers for Flask app or blueprint"""

    @app_or_blueprint.errorhandler(ValidationError)
    def validation_error(error):
        """Handle invalid uploads and payloads"""
        logger.warning(f"Validation error: {request.method} {request.path} - {error}")
        return jsonify({'success': False, 'error': str(error)}), 400

    @app_or_blueprint.errorhandler(NotFoundError)
    def not_found_service_error(error):
        logger.warning(f"Not found: {request.path} - {error}")
        return jsonify({'success': False, 'error': str(error)}), 404

    @app_or_blueprint.errorhandler(ServiceError)
    def service_error(error):
        logger.error(f"Service error: {request.path} - {error}")
        return jsonify({'success': False, 'error': str(error)}), 500

    @app_or_blueprint.errorhandler(400)
    def bad_request_error(error):
        """Handle 400 errors"""
        logger.warning(f"400 error: {request.url}")
        return jsonify({'success': False, 'error': 'Bad request'}), 400

    @app_or_blueprint.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors"""
        logger.warning(f"404 error: {request.url}")
        return jsonify({'success': False, 'error': 'Resource not found'}), 404

    @app_or_blueprint.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors"""
        logger.warning(f"405 error: {request.method} {request.url}")
        return jsonify({'success': False, 'error': 'Method not allowed'}), 405

    @app_or_blueprint.errorhandler(413)
    def request_too_large_error(error):
        """Handle uploads over MAX_CONTENT_LENGTH"""
        logger.warning(f"413 error: {request.url}")
        return jsonify({'success': False, 'error': 'File too large'}), 413

    @app_or_blueprint.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors"""
        logger.error(f"500 error: {request.url} - {str(error)}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    @app_or_blueprint.errorhandler(Exception)
    def handle_exception(error):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {request.url} - {str(error)}", exc_info=True)
        return jsonify({'success': False, 'error': 'An unexpected error occurred'}), 500
