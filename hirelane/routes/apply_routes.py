from flask import Blueprint, current_app, request, jsonify

from hirelane.errors import NotFound, ValidationError
from hirelane.services.applications import CandidateInput, submit_application
from hirelane.services.auth import applicant_principal
from hirelane.services.candidate_session import set_candidate_session
from hirelane.services.questions import SCREENING_QUESTIONS, missing_required_answers
from hirelane.services.store import Store

apply_bp = Blueprint("apply", __name__)


def _job_or_404(store, job_id):
    job = store.get_job(job_id)
    if not job:
        raise NotFound("Job not found")
    return job


@apply_bp.route("/<job_id>", methods=["GET"])
def get_job_for_apply(job_id):
    job = _job_or_404(Store(), job_id)
    payload = job.to_dict()
    payload["tenant_name"] = job.tenant.name
    return jsonify(payload), 200


@apply_bp.route("/<job_id>/questions", methods=["GET"])
def get_questions(job_id):
    job = _job_or_404(Store(), job_id)
    return jsonify({"job_id": job.id, "job_title": job.title, "questions": SCREENING_QUESTIONS}), 200


@apply_bp.route("/<job_id>", methods=["POST"])
def apply(job_id):
    """
    Submit an application.
    Body: {"candidate": {"full_name", "email", "phone", "location"}, "answers": {key: text}}
    """
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError("No JSON data provided")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    answers = data.get("answers") or {}
    if not isinstance(answers, dict):
        raise ValidationError("answers must be an object")
    answers = {k: str(v) for k, v in answers.items() if v is not None}
    missing = missing_required_answers(answers)
    if missing:
        return jsonify({"error": "Please answer all required questions", "missing": missing}), 400

    principal = applicant_principal()
    result = submit_application(
        Store(),
        job_id,
        CandidateInput.from_dict(data.get("candidate")),
        answers,
        external_user_id=principal.user_id if principal else None,
        keywords=current_app.config.get("SCREENING_KEYWORDS") or None,
    )

    if result.already_applied:
        response = jsonify({"status": "already_applied", "application_id": result.application_id})
        response.status_code = 200
    else:
        response = jsonify({
            "status": "applied",
            "application_id": result.application_id,
            "score": result.score,
        })
        response.status_code = 201

    return set_candidate_session(response, result.tenant_id, result.candidate_id)
