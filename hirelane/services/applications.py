"""
Application lifecycle: candidate resolution, duplicate prevention,
application creation and recruiter updates.

Every function takes the Store it works against as its first argument.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError

from hirelane.errors import NotFound, ValidationError
from hirelane.logger import get_logger
from hirelane.models import Stage
from hirelane.services.questions import QUESTION_KEYS
from hirelane.services.scoring import calculate_screening_score

log = get_logger(__name__)


@dataclass
class CandidateInput:
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        if not isinstance(data, dict):
            raise ValidationError("candidate must be an object")
        return cls(
            full_name=data.get("full_name") or data.get("fullName") or "",
            email=data.get("email"),
            phone=data.get("phone"),
            location=data.get("location"),
        )


@dataclass
class SubmissionResult:
    application_id: str
    score: int
    candidate_id: str
    tenant_id: str
    already_applied: bool = False


@dataclass
class CandidateIdentity:
    tenant_id: str
    candidate_id: str


def _clean(value):
    """Stripped string, or None when blank."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _validate_candidate(candidate_input):
    full_name = _clean(candidate_input.full_name)
    email = _clean(candidate_input.email)
    phone = _clean(candidate_input.phone)

    if not full_name:
        raise ValidationError("full name is required")
    if not email and not phone:
        raise ValidationError("either email or phone is required")
    if email and "@" not in email:
        raise ValidationError("please enter a valid email")

    return full_name, email, phone, _clean(candidate_input.location)


def _resolve_candidate(store, tenant_id, email, phone):
    candidate = None
    if email:
        candidate = store.find_candidate_by_email(tenant_id, email)
    if candidate is None and phone:
        candidate = store.find_candidate_by_phone(tenant_id, phone)
    return candidate


def _upsert_candidate(store, tenant_id, candidate_input, external_user_id):
    full_name, email, phone, location = _validate_candidate(candidate_input)
    candidate = _resolve_candidate(store, tenant_id, email, phone)

    if candidate is None:
        candidate = store.add_candidate(
            tenant_id=tenant_id,
            full_name=full_name,
            email=email,
            phone=phone,
            location=location,
            external_user_id=external_user_id,
        )
        log.info("Created candidate %s in tenant %s", email or phone, tenant_id)
        return candidate

    # merge: blanks never replace what is already stored. A new email is free
    # (it was looked up first); a phone may belong to another candidate.
    candidate.full_name = full_name or candidate.full_name
    candidate.email = email or candidate.email
    if phone and phone != candidate.phone:
        if store.find_candidate_by_phone(tenant_id, phone) is None:
            candidate.phone = phone
        else:
            log.warning("Phone %s belongs to another candidate; keeping %s", phone, candidate.id)
    candidate.location = location or candidate.location
    if external_user_id and not candidate.external_user_id:
        candidate.external_user_id = external_user_id
    return candidate


def _answer_rows(answers):
    for key in QUESTION_KEYS:
        text = _clean(answers.get(key))
        if text:
            yield key, text


def submit_application(store, job_id, candidate_input, answers: Dict[str, str],
                       external_user_id=None, keywords=None) -> SubmissionResult:
    """
    Record an application of a candidate to a job.

    The candidate is looked up by email, then phone, within the job's tenant
    and merged or created. A second submission for the same job returns the
    existing application with ``already_applied`` set instead of creating a
    new one.

    Raises:
        ValidationError: no full name, or neither email nor phone
        NotFound: unknown job
    """
    if not isinstance(candidate_input, CandidateInput):
        candidate_input = CandidateInput.from_dict(candidate_input)
    answers = answers or {}
    _validate_candidate(candidate_input)

    job = store.get_job(job_id)
    if job is None:
        raise NotFound("Job not found")
    tenant_id = job.tenant_id

    try:
        with store.transaction():
            candidate = _upsert_candidate(store, tenant_id, candidate_input, external_user_id)
            store.flush()

            existing = store.find_application(job_id, candidate.id)
            if existing is not None:
                log.info("Candidate %s already applied to job %s", candidate.id, job_id)
                return SubmissionResult(existing.id, existing.score, candidate.id, tenant_id, True)

            score = calculate_screening_score(answers, keywords)
            application = store.add_application(
                tenant_id=tenant_id,
                job_id=job_id,
                candidate_id=candidate.id,
                stage=Stage.NEW,
                score=score,
            )
            store.flush()
            store.add_answers(application.id, _answer_rows(answers))
            result = SubmissionResult(application.id, score, candidate.id, tenant_id)
    except IntegrityError as error:
        # a concurrent submission committed first; report it as a duplicate
        if not _is_application_conflict(error):
            raise
        existing = _existing_after_conflict(store, tenant_id, job_id, candidate_input)
        if existing is None:
            raise
        log.info("Concurrent duplicate application %s for job %s", existing.id, job_id)
        return SubmissionResult(existing.id, existing.score, existing.candidate_id, tenant_id, True)

    log.info(
        "Application %s submitted for job %s with score %s",
        result.application_id, job_id, result.score,
    )
    return result


def _is_application_conflict(error):
    """True when the violated constraint is the one-application-per-job rule."""
    message = str(error.orig)
    return "uq_application_tenant_job_candidate" in message or "applications." in message


def _existing_after_conflict(store, tenant_id, job_id, candidate_input):
    _, email, phone, _ = _validate_candidate(candidate_input)
    candidate = _resolve_candidate(store, tenant_id, email, phone)
    if candidate is None:
        return None
    return store.find_application(job_id, candidate.id)


def parse_stage(value):
    if isinstance(value, Stage):
        return value
    try:
        return Stage(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError(f"unknown stage: {value}")


def update_stage(store, application_id, tenant_id, new_stage) -> int:
    """Move an application to any stage. Returns the number of rows changed."""
    stage = parse_stage(new_stage)
    with store.transaction():
        updated = store.update_applications(application_id, tenant_id, stage=stage)
    log.info("Application %s stage -> %s (%d row(s))", application_id, stage.value, updated)
    return updated


def update_notes(store, application_id, tenant_id, notes) -> int:
    """Replace recruiter notes; blank notes are stored as NULL."""
    if notes is not None and not str(notes).strip():
        notes = None
    with store.transaction():
        updated = store.update_applications(application_id, tenant_id, notes=notes)
    log.info("Application %s notes updated (%d row(s))", application_id, updated)
    return updated


def lookup_candidate_by_email(store, email, tenant_id=None) -> Optional[CandidateIdentity]:
    """
    Find the candidate a portal visitor claims to be.

    With ``tenant_id`` the search stays inside that tenant. Without it the most
    recently created candidate with this email in any tenant wins, which can
    pick the wrong tenant when the same address applied to several.
    """
    email = _clean(email)
    if not email:
        return None
    candidate = store.find_latest_candidate_by_email(email, tenant_id)
    if candidate is None:
        return None
    if tenant_id is None:
        log.debug("Cross-tenant email lookup matched tenant %s", candidate.tenant_id)
    return CandidateIdentity(candidate.tenant_id, candidate.id)
