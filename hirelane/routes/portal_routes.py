from flask import Blueprint, request, jsonify

from hirelane.errors import NotFound, Unauthorized, ValidationError
from hirelane.services import jobs as job_service
from hirelane.services.applications import lookup_candidate_by_email
from hirelane.services.auth import applicant_principal
from hirelane.services.candidate_session import (
    clear_candidate_session,
    load_candidate_session,
    set_candidate_session,
)
from hirelane.services.store import Store

portal_bp = Blueprint("portal", __name__)


def _my_applications(store):
    """Applications of the signed-in applicant, else of the session cookie's candidate."""
    principal = applicant_principal()
    if principal:
        candidates = store.find_candidates_by_external_user(principal.user_id)
        if candidates:
            return store.list_applications(None, candidate_ids=[c.id for c in candidates])

    candidate = load_candidate_session(store)
    if candidate is None:
        return None
    return store.list_applications(candidate.tenant_id, candidate_ids=[candidate.id])


@portal_bp.route("", methods=["GET"])
def portal_home():
    store = Store()
    applications = _my_applications(store) or []
    return jsonify({
        "open_jobs": len(store.list_jobs()),
        "my_applications": len(applications),
    }), 200


@portal_bp.route("/jobs", methods=["GET"])
def open_jobs():
    return jsonify({"data": job_service.list_open_jobs(Store())}), 200


@portal_bp.route("/my-applications", methods=["GET"])
def my_applications():
    applications = _my_applications(Store())
    if applications is None:
        raise Unauthorized("No candidate session; look up your applications by email")

    data = []
    for application in applications:
        payload = application.to_dict()
        payload.pop("notes", None)  # recruiter-only
        payload["job"] = {
            "id": application.job.id,
            "title": application.job.title,
            "location": application.job.location,
            "is_remote": application.job.is_remote,
        }
        data.append(payload)
    return jsonify({"data": data}), 200


@portal_bp.route("/lookup", methods=["POST"])
def lookup():
    data = request.get_json(silent=True) or request.form
    email = data.get("email")
    if not email or not str(email).strip():
        raise ValidationError("Email is required")

    identity = lookup_candidate_by_email(Store(), email, tenant_id=data.get("tenant_id") or None)
    if identity is None:
        raise NotFound("No applications found for this email")

    response = jsonify({"status": "found"})
    return set_candidate_session(response, identity.tenant_id, identity.candidate_id)


@portal_bp.route("/logout", methods=["POST"])
def logout():
    return clear_candidate_session(jsonify({"status": "success"}))
