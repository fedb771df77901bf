from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from hirelane.errors import NotFound, ValidationError
from hirelane.services.auth import AuthService
from hirelane.services.store import Store

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError("No JSON data provided")

    token, error = AuthService.register(
        Store(),
        data.get("name"),
        data.get("email"),
        data.get("password"),
        role=data.get("role"),
    )
    if not token:
        raise ValidationError(error)

    return jsonify({"access_token": token}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError("No JSON data provided")

    email = data.get("email")
    password = data.get("password")
    if not email or not password:
        raise ValidationError("Email and password are required")

    token, error = AuthService.authenticate_user(Store(), email, password)
    if not token:
        return jsonify({"error": error}), 401

    return jsonify({"access_token": token}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user = Store().get_user(get_jwt_identity())
    if not user:
        raise NotFound("User not found")

    payload = user.to_dict()
    payload["tenant_name"] = user.tenant.name if user.tenant else None
    return jsonify(payload), 200
