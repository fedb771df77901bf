from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from hirelane.services.store import Store

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health():
    db_status = "unknown"
    tenant_count = 0
    try:
        tenant_count = Store().count_tenants()
        db_status = "connected"
    except SQLAlchemyError as e:
        current_app.logger.error("Health check database error: %s", e)
        db_status = "connection failed"

    return jsonify({
        "status": "ok",
        "db_status": db_status,
        "tenant_count": tenant_count,
    }), 200
