from flask import Blueprint, request, jsonify

from hirelane.errors import NotFound, ValidationError
from hirelane.services.applications import parse_stage, update_notes, update_stage
from hirelane.services.auth import Permission, current_principal, permission_required
from hirelane.services.store import Store

application_bp = Blueprint("dashboard_applications", __name__)


def _summary(application):
    payload = application.to_dict()
    payload["candidate"] = {
        "id": application.candidate.id,
        "full_name": application.candidate.full_name,
        "email": application.candidate.email,
    }
    payload["job"] = {"id": application.job.id, "title": application.job.title}
    return payload


@application_bp.route("", methods=["GET"])
@permission_required(Permission.VIEW_APPLICATIONS)
def list_applications():
    """
    Applications of the caller's tenant, newest first.
    Filters: ?job_id=...&stage=SCREENED&min_score=60
    """
    stage = request.args.get("stage")
    min_score = None
    if request.args.get("min_score"):
        try:
            min_score = int(request.args["min_score"])
        except ValueError:
            raise ValidationError("min_score must be an integer")

    applications = Store().list_applications(
        current_principal().tenant_id,
        job_id=request.args.get("job_id") or None,
        stage=parse_stage(stage) if stage else None,
        min_score=min_score,
    )
    return jsonify({"data": [_summary(a) for a in applications]}), 200


@application_bp.route("/<application_id>", methods=["GET"])
@permission_required(Permission.VIEW_APPLICATIONS)
def get_application(application_id):
    application = Store().get_application(application_id, current_principal().tenant_id)
    if not application:
        raise NotFound("Application not found")

    payload = application.to_dict()
    payload["candidate"] = application.candidate.to_dict()
    payload["job"] = application.job.to_dict()
    payload["answers"] = [answer.to_dict() for answer in application.answers]
    return jsonify(payload), 200


@application_bp.route("/<application_id>/stage", methods=["POST"])
@permission_required(Permission.MANAGE_APPLICATIONS)
def change_stage(application_id):
    data = request.get_json(silent=True) or request.form
    if not data.get("stage"):
        raise ValidationError("Missing required fields")

    # rows outside the caller's tenant are left untouched without saying so
    update_stage(Store(), application_id, current_principal().tenant_id, data.get("stage"))
    return jsonify({"status": "success"}), 200


@application_bp.route("/<application_id>/notes", methods=["POST"])
@permission_required(Permission.MANAGE_APPLICATIONS)
def change_notes(application_id):
    data = request.get_json(silent=True) or request.form
    update_notes(Store(), application_id, current_principal().tenant_id, data.get("notes"))
    return jsonify({"status": "success"}), 200
