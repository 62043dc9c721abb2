from flask import jsonify
from cms.domain.exceptions import (
    ConfigurationError,
    InvariantViolation,
    ValidationError,
)

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        response = jsonify({
            "error": type(error).__name__,
            "message": str(error),
            "fields": error.errors,
        })
        response.status_code = 400
        return response

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error):
        app.logger.error("CMS configuration error: %s", error)
        response = jsonify({
            "error": "ConfigurationError",
            "message": str(error)
        })
        response.status_code = 500
        return response
