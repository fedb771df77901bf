from datetime import datetime, timezone

from hirelane.errors import NotFound, ValidationError
from hirelane.logger import get_logger

log = get_logger(__name__)


def _job_fields(title, description, location, is_remote):
    title = (title or "").strip()
    if not title:
        raise ValidationError("title is required")
    return {
        "title": title,
        "description": (description or "").strip() or None,
        "location": (location or "").strip() or None,
        "is_remote": bool(is_remote),
    }


def create_job(store, tenant_id, created_by_id, title, description=None, location=None, is_remote=False):
    fields = _job_fields(title, description, location, is_remote)
    with store.transaction():
        job = store.add_job(tenant_id=tenant_id, created_by_id=created_by_id, **fields)
    log.info("Job %s created in tenant %s: %s", job.id, tenant_id, job.title)
    return job


def update_job(store, job_id, tenant_id, title, description=None, location=None, is_remote=False):
    """Tenant-filtered update. Returns the number of rows changed."""
    fields = _job_fields(title, description, location, is_remote)
    with store.transaction():
        updated = store.update_jobs(job_id, tenant_id, **fields)
    log.info("Job %s updated (%d row(s))", job_id, updated)
    return updated


def get_job(store, job_id, tenant_id):
    job = store.find_job(job_id, tenant_id)
    if job is None:
        raise NotFound("Job not found")
    return job


def list_jobs(store, tenant_id):
    return store.list_jobs(tenant_id)


def list_open_jobs(store):
    """Every posting across tenants, newest first, with its applicant count."""
    counts = store.count_applications_by_job()
    return [
        {**job.to_dict(), "applicant_count": counts.get(job.id, 0)}
        for job in store.list_jobs()
    ]


def _parse_datetime(value, field):
    """Naive UTC datetime from a datetime or an ISO 8601 string."""
    if not isinstance(value, datetime):
        try:
            value = datetime.fromisoformat(str(value))
        except (TypeError, ValueError):
            raise ValidationError(f"{field} must be an ISO 8601 datetime")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def create_interview_slot(store, job_id, tenant_id, starts_at, ends_at):
    get_job(store, job_id, tenant_id)
    starts_at = _parse_datetime(starts_at, "starts_at")
    ends_at = _parse_datetime(ends_at, "ends_at")
    if ends_at <= starts_at:
        raise ValidationError("ends_at must be after starts_at")

    with store.transaction():
        slot = store.add_interview_slot(job_id=job_id, starts_at=starts_at, ends_at=ends_at)
    log.info("Interview slot %s added to job %s", slot.id, job_id)
    return slot


def list_interview_slots(store, job_id, tenant_id):
    get_job(store, job_id, tenant_id)
    return store.list_interview_slots(job_id)
