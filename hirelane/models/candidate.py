from hirelane.extensions import db
from datetime import datetime
import uuid

class Candidate(db.Model):
    __tablename__ = "candidates"
    __table_args__ = (
        db.UniqueConstraint("tenant_id", "email", name="uq_candidate_tenant_email"),
        db.UniqueConstraint("tenant_id", "phone", name="uq_candidate_tenant_phone"),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    location = db.Column(db.String(255))
    # subject of the signed-in identity that applied, if any
    external_user_id = db.Column(db.String(255), index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tenant = db.relationship("Tenant", back_populates="candidates")
    applications = db.relationship("Application", back_populates="candidate", cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
        }
