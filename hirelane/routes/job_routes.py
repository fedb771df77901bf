from flask import Blueprint, request, jsonify

from hirelane.errors import NotFound
from hirelane.services import jobs as job_service
from hirelane.services.auth import Permission, current_principal, permission_required
from hirelane.services.store import Store

job_bp = Blueprint("dashboard_jobs", __name__)


def _is_remote(data):
    value = data.get("is_remote")
    if isinstance(value, str):
        return value.lower() in ("on", "true", "1", "yes")
    return bool(value)


@job_bp.route("", methods=["GET"])
@permission_required(Permission.MANAGE_JOBS)
def list_jobs():
    jobs = job_service.list_jobs(Store(), current_principal().tenant_id)
    return jsonify({"data": [job.to_dict() for job in jobs]}), 200


@job_bp.route("", methods=["POST"])
@permission_required(Permission.MANAGE_JOBS)
def create_job():
    data = request.get_json(silent=True) or request.form
    principal = current_principal()

    job = job_service.create_job(
        Store(),
        principal.tenant_id,
        principal.user_id,
        data.get("title"),
        description=data.get("description"),
        location=data.get("location"),
        is_remote=_is_remote(data),
    )
    return jsonify(job.to_dict()), 201


@job_bp.route("/<job_id>", methods=["GET"])
@permission_required(Permission.MANAGE_JOBS)
def get_job(job_id):
    job = job_service.get_job(Store(), job_id, current_principal().tenant_id)
    return jsonify(job.to_dict()), 200


@job_bp.route("/<job_id>", methods=["PUT"])
@permission_required(Permission.MANAGE_JOBS)
def update_job(job_id):
    data = request.get_json(silent=True) or request.form
    store = Store()
    tenant_id = current_principal().tenant_id

    updated = job_service.update_job(
        store,
        job_id,
        tenant_id,
        data.get("title"),
        description=data.get("description"),
        location=data.get("location"),
        is_remote=_is_remote(data),
    )
    if not updated:
        raise NotFound("Job not found")

    return jsonify(job_service.get_job(store, job_id, tenant_id).to_dict()), 200


@job_bp.route("/<job_id>/slots", methods=["GET"])
@permission_required(Permission.MANAGE_JOBS)
def list_slots(job_id):
    slots = job_service.list_interview_slots(Store(), job_id, current_principal().tenant_id)
    return jsonify({"data": [slot.to_dict() for slot in slots]}), 200


@job_bp.route("/<job_id>/slots", methods=["POST"])
@permission_required(Permission.MANAGE_JOBS)
def create_slot(job_id):
    data = request.get_json(silent=True) or {}
    slot = job_service.create_interview_slot(
        Store(),
        job_id,
        current_principal().tenant_id,
        data.get("starts_at"),
        data.get("ends_at"),
    )
    return jsonify(slot.to_dict()), 201
