from flask import Blueprint, request, jsonify

from hirelane.errors import ValidationError
from hirelane.services.auth import AuthService, Permission, current_principal, permission_required
from hirelane.services.store import Store

team_bp = Blueprint("dashboard_team", __name__)


@team_bp.route("", methods=["GET"])
@permission_required(Permission.VIEW_TEAM)
def list_members():
    principal = current_principal()
    members = Store().list_users(principal.tenant_id)
    return jsonify({
        "data": [member.to_dict() for member in members],
        "is_admin": principal.role == "admin",
    }), 200


@team_bp.route("", methods=["POST"])
@permission_required(Permission.MANAGE_TEAM)
def add_member():
    data = request.get_json(silent=True) or {}
    user, error = AuthService.add_team_member(
        Store(),
        current_principal().tenant_id,
        data.get("name"),
        data.get("email"),
        data.get("password"),
        role=data.get("role", "member"),
    )
    if not user:
        raise ValidationError(error)
    return jsonify(user.to_dict()), 201
