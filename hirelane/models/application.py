from hirelane.extensions import db
from datetime import datetime
import enum
import uuid


class Stage(enum.Enum):
    """Pipeline position of an application. Any stage may follow any other."""

    NEW = "NEW"
    SCREENED = "SCREENED"
    SHORTLISTED = "SHORTLISTED"
    SCHEDULED = "SCHEDULED"
    INTERVIEWED = "INTERVIEWED"
    OFFERED = "OFFERED"
    HIRED = "HIRED"
    REJECTED = "REJECTED"
    DROPPED = "DROPPED"

    @property
    def description(self):
        return STAGE_DESCRIPTIONS[self]


STAGE_DESCRIPTIONS = {
    Stage.NEW: "Application received",
    Stage.SCREENED: "Under initial review",
    Stage.SHORTLISTED: "Selected for next round",
    Stage.SCHEDULED: "Interview scheduled",
    Stage.INTERVIEWED: "Interview completed",
    Stage.OFFERED: "Offer extended",
    Stage.HIRED: "Congratulations! You're hired",
    Stage.REJECTED: "Not selected for this role",
    Stage.DROPPED: "Application withdrawn",
}


class Application(db.Model):
    __tablename__ = "applications"
    __table_args__ = (
        db.UniqueConstraint("tenant_id", "job_id", "candidate_id", name="uq_application_tenant_job_candidate"),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = db.Column(db.String(36), db.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    candidate_id = db.Column(db.String(36), db.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False)
    stage = db.Column(db.Enum(Stage, name="application_stage"), nullable=False, default=Stage.NEW)
    score = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    job = db.relationship("Job", back_populates="applications")
    candidate = db.relationship("Candidate", back_populates="applications")
    answers = db.relationship(
        "Answer", back_populates="application", cascade="all, delete-orphan",
        order_by="Answer.created_at",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "job_id": self.job_id,
            "candidate_id": self.candidate_id,
            "stage": self.stage.value,
            "stage_description": self.stage.description,
            "score": self.score,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class Answer(db.Model):
    __tablename__ = "answers"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    application_id = db.Column(db.String(36), db.ForeignKey("applications.id", ondelete="CASCADE"), nullable=False)
    question_key = db.Column(db.String(100), nullable=False)
    answer_text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    application = db.relationship("Application", back_populates="answers")

    def to_dict(self):
        return {
            "question_key": self.question_key,
            "answer_text": self.answer_text,
        }
