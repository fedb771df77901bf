from hirelane.extensions import db
from hirelane.models import Job, User


JOBS = [
    {
        "title": "Senior Frontend Engineer",
        "description": "Looking for an experienced React developer with TypeScript expertise.",
    },
    {
        "title": "Backend Developer (Node.js)",
        "description": "Build scalable APIs and services using Node.js and PostgreSQL.",
    },
    {
        "title": "Full Stack Engineer",
        "description": "Work across the entire stack - React frontend and Node.js backend.",
    },
]


def seed(tenant):
    print("🌱 Seeding jobs...")

    recruiter = User.query.filter_by(tenant_id=tenant.id).first()
    for data in JOBS:
        if Job.query.filter_by(tenant_id=tenant.id, title=data["title"]).first():
            print(f"⚠️ Job '{data['title']}' already exists. Skipping insert.")
            continue
        db.session.add(Job(tenant_id=tenant.id, created_by_id=recruiter.id if recruiter else None, **data))

    db.session.commit()
    print("✅ Jobs seeded successfully!")
