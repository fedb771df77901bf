from hirelane.extensions import db
from datetime import datetime
import uuid

class Tenant(db.Model):
    __tablename__ = "tenants"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    # organization id assigned by the identity provider
    external_org_id = db.Column(db.String(255), unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    users = db.relationship("User", back_populates="tenant", cascade="all, delete-orphan")
    jobs = db.relationship("Job", back_populates="tenant", cascade="all, delete-orphan")
    candidates = db.relationship("Candidate", back_populates="tenant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Tenant {self.name}>"
