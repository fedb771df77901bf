"""
Tenant-scoped data access.

The lifecycle and job services never touch ``db.session`` directly; they are
handed a Store, which keeps every lookup and mutation filtered by tenant and
leaves transaction boundaries to the caller (``store.transaction()``).
"""
from contextlib import contextmanager

from sqlalchemy import func

from hirelane.extensions import db
from hirelane.models import Answer, Application, Candidate, InterviewSlot, Job, Tenant, User


class Store:
    def __init__(self, session=None):
        self.session = session or db.session

    @contextmanager
    def transaction(self):
        """Commit on success, roll back and re-raise on any error."""
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def flush(self):
        self.session.flush()

    # Tenants and users

    def get_tenant(self, tenant_id):
        return self.session.get(Tenant, tenant_id)

    def add_tenant(self, name, external_org_id=None):
        tenant = Tenant(name=name, external_org_id=external_org_id)
        self.session.add(tenant)
        return tenant

    def count_tenants(self):
        return self.session.query(Tenant).count()

    def get_user(self, user_id):
        return self.session.get(User, user_id)

    def find_user_by_email(self, email):
        return self.session.query(User).filter_by(email=email).first()

    def add_user(self, **fields):
        user = User(**fields)
        self.session.add(user)
        return user

    def list_users(self, tenant_id):
        return (
            self.session.query(User)
            .filter_by(tenant_id=tenant_id)
            .order_by(User.created_at.asc())
            .all()
        )

    # Jobs

    def get_job(self, job_id):
        return self.session.get(Job, job_id)

    def find_job(self, job_id, tenant_id):
        return self.session.query(Job).filter_by(id=job_id, tenant_id=tenant_id).first()

    def add_job(self, **fields):
        job = Job(**fields)
        self.session.add(job)
        return job

    def update_jobs(self, job_id, tenant_id, **values):
        return (
            self.session.query(Job)
            .filter_by(id=job_id, tenant_id=tenant_id)
            .update(values, synchronize_session="fetch")
        )

    def list_jobs(self, tenant_id=None):
        query = self.session.query(Job)
        if tenant_id is not None:
            query = query.filter_by(tenant_id=tenant_id)
        return query.order_by(Job.created_at.desc()).all()

    def count_applications_by_job(self):
        rows = (
            self.session.query(Application.job_id, func.count(Application.id))
            .group_by(Application.job_id)
            .all()
        )
        return dict(rows)

    def add_interview_slot(self, **fields):
        slot = InterviewSlot(**fields)
        self.session.add(slot)
        return slot

    def list_interview_slots(self, job_id):
        return (
            self.session.query(InterviewSlot)
            .filter_by(job_id=job_id)
            .order_by(InterviewSlot.starts_at.asc())
            .all()
        )

    # Candidates

    def get_candidate(self, candidate_id, tenant_id):
        return self.session.query(Candidate).filter_by(id=candidate_id, tenant_id=tenant_id).first()

    def find_candidate_by_email(self, tenant_id, email):
        return self.session.query(Candidate).filter_by(tenant_id=tenant_id, email=email).first()

    def find_candidate_by_phone(self, tenant_id, phone):
        return self.session.query(Candidate).filter_by(tenant_id=tenant_id, phone=phone).first()

    def find_latest_candidate_by_email(self, email, tenant_id=None):
        query = self.session.query(Candidate).filter_by(email=email)
        if tenant_id is not None:
            query = query.filter_by(tenant_id=tenant_id)
        return query.order_by(Candidate.created_at.desc()).first()

    def find_candidates_by_external_user(self, external_user_id):
        return self.session.query(Candidate).filter_by(external_user_id=external_user_id).all()

    def add_candidate(self, **fields):
        candidate = Candidate(**fields)
        self.session.add(candidate)
        return candidate

    # Applications

    def get_application(self, application_id, tenant_id):
        return (
            self.session.query(Application)
            .filter_by(id=application_id, tenant_id=tenant_id)
            .first()
        )

    def find_application(self, job_id, candidate_id):
        return (
            self.session.query(Application)
            .filter_by(job_id=job_id, candidate_id=candidate_id)
            .first()
        )

    def add_application(self, **fields):
        application = Application(**fields)
        self.session.add(application)
        return application

    def add_answers(self, application_id, answers):
        rows = [
            Answer(application_id=application_id, question_key=key, answer_text=text)
            for key, text in answers
        ]
        self.session.add_all(rows)
        return rows

    def update_applications(self, application_id, tenant_id, **values):
        """Filtered update; affects zero rows when the tenant does not own the id."""
        return (
            self.session.query(Application)
            .filter_by(id=application_id, tenant_id=tenant_id)
            .update(values, synchronize_session="fetch")
        )

    def list_applications(self, tenant_id, job_id=None, stage=None, min_score=None, candidate_ids=None):
        query = self.session.query(Application)
        if tenant_id is not None:
            query = query.filter(Application.tenant_id == tenant_id)
        if job_id:
            query = query.filter(Application.job_id == job_id)
        if stage is not None:
            query = query.filter(Application.stage == stage)
        if min_score is not None:
            query = query.filter(Application.score >= min_score)
        if candidate_ids is not None:
            query = query.filter(Application.candidate_id.in_(candidate_ids))
        return query.order_by(Application.created_at.desc()).all()
