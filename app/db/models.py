"""
SQLAlchemy ORM models for saved loan plans.
"""

from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class SavedPlan(AuditMixin, Base):
    """
    A financing plan saved for later replay.

    The plan inputs and the summary computed when it was saved are stored
    as JSON. The stored summary is a snapshot; replaying recomputes from
    the plan.
    """

    __tablename__ = "saved_plans"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)

    # Loan type as displayed (custom label for manual entries)
    loan_type = Column(String(100), nullable=False, index=True)
    loan_label = Column(String(255), nullable=False)

    plan = Column(JSON, nullable=False)
    summary = Column(JSON, default=dict)
    currency = Column(String(3), default="AUD")
