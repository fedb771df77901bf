"""
Pytest configuration and shared fixtures.
"""

import pytest
from flask_jwt_extended import create_access_token

from config import TestConfig
from hirelane import create_app
from hirelane.extensions import db, bcrypt
from hirelane.models import Job, Tenant, User
from hirelane.services.store import Store


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database."""
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return Store()


def _make_tenant(name):
    tenant = Tenant(name=name)
    db.session.add(tenant)
    db.session.commit()
    return tenant


def _make_user(tenant, email, role="admin", password="password123"):
    user = User(
        name=email.split("@")[0],
        email=email,
        password=bcrypt.generate_password_hash(password).decode("utf-8"),
        role=role,
        tenant_id=tenant.id if tenant else None,
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def tenant(app):
    return _make_tenant("Acme Corporation")


@pytest.fixture
def other_tenant(app):
    return _make_tenant("Globex")


@pytest.fixture
def recruiter(tenant):
    return _make_user(tenant, "recruiter@acme.com", role="admin")


@pytest.fixture
def member(tenant):
    return _make_user(tenant, "member@acme.com", role="member")


@pytest.fixture
def job(tenant, recruiter):
    job = Job(
        tenant_id=tenant.id,
        created_by_id=recruiter.id,
        title="Senior Frontend Engineer",
        description="React and TypeScript",
        location="San Francisco, CA",
    )
    db.session.add(job)
    db.session.commit()
    return job


@pytest.fixture
def other_job(other_tenant):
    job = Job(tenant_id=other_tenant.id, title="Data Engineer")
    db.session.add(job)
    db.session.commit()
    return job


def auth_headers_for(user):
    token = create_access_token(
        identity=user.id,
        additional_claims={"role": user.role, "email": user.email, "tenant_id": user.tenant_id},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(recruiter):
    return auth_headers_for(recruiter)


@pytest.fixture
def strong_answers():
    return {
        "yearsExperience": "8",
        "reactExperience": "5",
        "currentRole": "Staff Engineer",
        "systemDesign": (
            "Built a scalable microservices architecture with caching, "
            "load balancing, and Kubernetes orchestration"
        ),
        "availability": "immediate",
        "noticePeriod": "none",
        "preferredWork": "remote",
    }


@pytest.fixture
def weak_answers():
    return {
        "yearsExperience": "0",
        "reactExperience": "0",
        "systemDesign": "",
        "availability": "3months",
        "noticePeriod": "3months",
    }
