from flask import jsonify
from werkzeug.exceptions import HTTPException

from hirelane.extensions import db, jwt
from hirelane.logger import get_logger

log = get_logger(__name__)


class HirelaneError(Exception):
    """Base error; carries the HTTP status the API answers with."""
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(HirelaneError):
    status_code = 400
    message = "Invalid input"


class Unauthorized(HirelaneError):
    status_code = 401
    message = "Unauthorized"


class Forbidden(HirelaneError):
    status_code = 403
    message = "Forbidden"


class NotFound(HirelaneError):
    status_code = 404
    message = "Not found"


def register_error_handlers(app):
    @app.errorhandler(HirelaneError)
    def handle_hirelane_error(error):
        db.session.rollback()
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        db.session.rollback()
        log.exception("Unhandled error: %s", error)
        return jsonify({"error": "Internal server error"}), 500

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": reason}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"error": reason}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token has expired"}), 401
