from hirelane.extensions import db, bcrypt
from hirelane.models import Tenant, User


def seed():
    print("🌱 Seeding tenant and recruiter...")

    tenant = Tenant.query.filter_by(name="Acme Corporation").first()
    if not tenant:
        tenant = Tenant(name="Acme Corporation")
        db.session.add(tenant)
        db.session.flush()

    # prevent duplicates
    if not User.query.filter_by(email="recruiter@acme.com").first():
        db.session.add(User(
            name="Jane Recruiter",
            email="recruiter@acme.com",
            password=bcrypt.generate_password_hash("password123").decode("utf-8"),
            role="admin",
            tenant_id=tenant.id,
        ))

    db.session.commit()
    print("✅ Tenant seeded successfully!")
    return tenant
