"""SQLAlchemy async models for the ComplyFlow PostgreSQL database.

Defines the tables behind the compliance platform:
- Organizations, user profiles and subscription state
- Sponsored workers, Home Office reporting log and compliance alerts
- Shared and organisation-specific knowledge with pgvector embeddings
- Email send logs
- Regulatory updates and the local CQC trend watchdog

All timestamps use UTC. All primary keys use UUID.
"""

from datetime import datetime, timezone
from uuid import uuid4

from pgvector.sqlalchemy import Vector
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import declarative_base

from complyflow.constants import EMBEDDING_DIMENSIONS

BaseModel = declarative_base()


def utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


class Organization(BaseModel):
    """Care provider organisation and its subscription."""

    __tablename__ = "organizations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    subscription_tier = Column(String(50), nullable=False, default="trial")
    subscription_status = Column(String(50), nullable=False, default="trial")
    stripe_customer_id = Column(String(255), nullable=True)
    trial_ends_at = Column(DateTime(timezone=True), nullable=True)
    cos_allocated = Column(Integer, nullable=False, default=0)
    cos_used = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class Profile(BaseModel):
    """User profile. The id is the auth user id."""

    __tablename__ = "profiles"

    id = Column(UUID(as_uuid=True), primary_key=True)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
    )
    email = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="member")
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (Index("ix_profiles_organization_id", "organization_id"),)


class SponsoredWorker(BaseModel):
    """Overseas worker employed under the organisation's sponsor licence."""

    __tablename__ = "sponsored_workers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    employee_id = Column(String(100), nullable=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    visa_type = Column(String(100), nullable=False, default="Health and Care Worker")
    visa_expiry = Column(Date, nullable=False)
    cos_number = Column(String(100), nullable=True)
    cos_assigned_date = Column(Date, nullable=True)
    start_date = Column(Date, nullable=True)
    salary = Column(Numeric(12, 2), nullable=True)
    status = Column(String(50), nullable=False, default="compliant")
    last_rtw_check = Column(Date, nullable=True)
    ni_number = Column(String(50), nullable=True)
    passport_number = Column(String(50), nullable=True)
    job_title = Column(String(255), nullable=True)
    work_location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    __table_args__ = (
        Index("ix_sponsored_workers_organization_id", "organization_id"),
        Index("ix_sponsored_workers_visa_expiry", "visa_expiry"),
    )


class SponsorReportingLog(BaseModel):
    """Reportable sponsor event with a Home Office deadline."""

    __tablename__ = "sponsor_reporting_log"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    worker_id = Column(
        UUID(as_uuid=True),
        ForeignKey("sponsored_workers.id", ondelete="CASCADE"),
        nullable=True,
    )
    event_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    deadline_date = Column(Date, nullable=False)
    status = Column(String(50), nullable=False, default="pending")
    reported_at = Column(DateTime(timezone=True), nullable=True)
    reported_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)


class ComplianceAlert(BaseModel):
    """Open or resolved compliance issue raised for an organisation."""

    __tablename__ = "compliance_alerts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    alert_type = Column(String(100), nullable=False)
    severity = Column(String(50), nullable=False, default="warning")
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    related_worker_id = Column(
        UUID(as_uuid=True),
        ForeignKey("sponsored_workers.id", ondelete="CASCADE"),
        nullable=True,
    )
    related_policy_id = Column(UUID(as_uuid=True), nullable=True)
    due_date = Column(Date, nullable=True)
    is_resolved = Column(Boolean, nullable=False, default=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    resolved_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        Index("ix_compliance_alerts_org_resolved", "organization_id", "is_resolved"),
    )


class KnowledgeBaseEntry(BaseModel):
    """Shared regulatory knowledge chunk with its embedding."""

    __tablename__ = "knowledge_base"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    content = Column(Text, nullable=False)
    metadata_ = Column("metadata", JSONB, nullable=False, default=dict)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)


class OrganizationKnowledgeFile(BaseModel):
    """Document uploaded by an organisation for indexing."""

    __tablename__ = "organization_knowledge_base"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    file_name = Column(String(500), nullable=False)
    storage_path = Column(String(1000), nullable=False)
    status = Column(String(50), nullable=False, default="processing")
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)


class OrganizationDocumentChunk(BaseModel):
    """Embedded chunk of an organisation document."""

    __tablename__ = "organization_document_chunks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    file_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organization_knowledge_base.id", ondelete="CASCADE"),
        nullable=False,
    )
    content = Column(Text, nullable=False)
    metadata_ = Column("metadata", JSONB, nullable=False, default=dict)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        Index("ix_organization_document_chunks_org", "organization_id"),
    )


class EmailLog(BaseModel):
    """Scheduled lifecycle email that has been sent."""

    __tablename__ = "email_logs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False)
    email_type = Column(String(100), nullable=False)
    sent_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (Index("ix_email_logs_user_type", "user_id", "email_type"),)


class OnboardingEmail(BaseModel):
    """Onboarding sequence email that has been sent."""

    __tablename__ = "onboarding_emails"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False)
    email_type = Column(String(100), nullable=False)
    sent_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)


class RegulatoryUpdate(BaseModel):
    """News or policy item harvested from a regulator feed."""

    __tablename__ = "regulatory_updates"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    source = Column(String(100), nullable=False)
    title = Column(String(1000), nullable=False)
    summary = Column(Text, nullable=True)
    url = Column(String(2000), nullable=False, unique=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    category = Column(String(100), nullable=True)
    relevance_score = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class LocalCQCReport(BaseModel):
    """CQC inspection snapshot of a nearby care home."""

    __tablename__ = "local_cqc_reports"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    cqc_location_id = Column(String(100), nullable=False)
    location_name = Column(String(500), nullable=True)
    location_postcode = Column(String(20), nullable=True)
    report_date = Column(Date, nullable=False)
    overall_rating = Column(String(100), nullable=True)
    safe_rating = Column(String(100), nullable=True)
    effective_rating = Column(String(100), nullable=True)
    caring_rating = Column(String(100), nullable=True)
    responsive_rating = Column(String(100), nullable=True)
    well_led_rating = Column(String(100), nullable=True)
    themes_identified = Column(JSONB, nullable=False, default=list)
    raw_data = Column(JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "cqc_location_id", "report_date", name="uq_local_cqc_reports_location_date"
        ),
    )


class WatchdogAlert(BaseModel):
    """Local inspection trend surfaced to an organisation."""

    __tablename__ = "watchdog_alerts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    alert_type = Column(String(100), nullable=False)
    severity = Column(String(50), nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    theme = Column(String(255), nullable=True)
    regulation = Column(String(255), nullable=True)
    affected_locations = Column(Integer, nullable=False, default=0)
    recommended_action = Column(Text, nullable=True)
    recommended_audit_type = Column(String(100), nullable=True)
    is_dismissed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)


class WatchdogScanHistory(BaseModel):
    """One trend watchdog scan run."""

    __tablename__ = "watchdog_scan_history"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    postcode = Column(String(20), nullable=False)
    radius_miles = Column(Integer, nullable=False)
    scan_status = Column(String(50), nullable=False, default="running")
    reports_found = Column(Integer, nullable=True)
    alerts_generated = Column(Integer, nullable=True)
    started_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)


class TrainingCompletion(BaseModel):
    """Staff training module completion."""

    __tablename__ = "training_completions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    completed_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)


class ComplianceAnalysis(BaseModel):
    """Gap analysis result with its overall score."""

    __tablename__ = "compliance_analyses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    compliance_score = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
