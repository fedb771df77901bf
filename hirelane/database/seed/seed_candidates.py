import random
from datetime import datetime, timedelta

from hirelane.extensions import db
from hirelane.models import Application, Candidate, InterviewSlot, Job, Stage
from hirelane.services.scoring import calculate_screening_score
from hirelane.services.store import Store

CANDIDATES = [
    {"full_name": "Alice Johnson", "email": "alice@example.com", "phone": "+1-555-0101"},
    {"full_name": "Bob Smith", "email": "bob@example.com", "phone": "+1-555-0102"},
    {"full_name": "Carol Davis", "email": "carol@example.com", "phone": "+1-555-0103"},
    {"full_name": "David Wilson", "email": "david@example.com", "phone": "+1-555-0104"},
    {"full_name": "Eve Brown", "email": "eve@example.com", "phone": "+1-555-0105"},
]

STAGES = [Stage.NEW, Stage.SCREENED, Stage.SHORTLISTED, Stage.SCHEDULED, Stage.INTERVIEWED]

ROLES = ["Software Engineer", "Frontend Developer", "Senior Frontend Developer", "Tech Lead"]

DESIGN_ANSWERS = [
    "Built a REST api with a postgres database and redis caching for performance.",
    "Designed event-driven microservices on kubernetes with monitoring and ci/cd.",
    "Migrated a monolith to the cloud.",
    "",
]


def _answers():
    """A plausible questionnaire, as the apply form would submit it."""
    return {
        "yearsExperience": str(random.randint(1, 9)),
        "reactExperience": str(random.randint(0, 6)),
        "currentRole": random.choice(ROLES),
        "systemDesign": random.choice(DESIGN_ANSWERS),
        "availability": random.choice(["immediate", "2weeks", "1month", "3months"]),
        "noticePeriod": random.choice(["none", "2weeks", "1month", "3months"]),
        "preferredWork": random.choice(["remote", "hybrid", "onsite"]),
    }


def seed(tenant):
    print("🌱 Seeding candidates and applications...")

    store = Store()
    jobs = Job.query.filter_by(tenant_id=tenant.id).order_by(Job.created_at).all()
    if not jobs:
        print("⚠️ No jobs to apply to. Skipping.")
        return

    for data, stage in zip(CANDIDATES, STAGES):
        if Candidate.query.filter_by(tenant_id=tenant.id, email=data["email"]).first():
            continue
        candidate = Candidate(tenant_id=tenant.id, **data)
        db.session.add(candidate)
        db.session.flush()

        # each candidate applies to one or two jobs
        for job in random.sample(jobs, k=min(len(jobs), random.randint(1, 2))):
            answers = _answers()
            application = Application(
                tenant_id=tenant.id,
                job_id=job.id,
                candidate_id=candidate.id,
                stage=stage,
                score=calculate_screening_score(answers),
            )
            db.session.add(application)
            db.session.flush()
            store.add_answers(application.id, ((k, v) for k, v in answers.items() if v))

    if not InterviewSlot.query.filter_by(job_id=jobs[0].id).first():
        now = datetime.utcnow()
        db.session.add_all([
            InterviewSlot(job_id=jobs[0].id, starts_at=now + timedelta(hours=24), ends_at=now + timedelta(hours=25)),
            InterviewSlot(job_id=jobs[0].id, starts_at=now + timedelta(hours=48), ends_at=now + timedelta(hours=49),
                          is_booked=True),
            InterviewSlot(job_id=jobs[-1].id, starts_at=now + timedelta(hours=72), ends_at=now + timedelta(hours=73)),
        ])

    db.session.commit()
    print("✅ Candidates seeded successfully!")
