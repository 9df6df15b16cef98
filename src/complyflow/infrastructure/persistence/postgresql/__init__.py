"""PostgreSQL database layer for ComplyFlow.

Provides SQLAlchemy models and the async client used by the repositories.
"""

from .client import PostgreSQLClient
from .models import (
    BaseModel,
    ComplianceAlert,
    ComplianceAnalysis,
    EmailLog,
    KnowledgeBaseEntry,
    LocalCQCReport,
    OnboardingEmail,
    Organization,
    OrganizationDocumentChunk,
    OrganizationKnowledgeFile,
    Profile,
    RegulatoryUpdate,
    SponsoredWorker,
    SponsorReportingLog,
    TrainingCompletion,
    WatchdogAlert,
    WatchdogScanHistory,
)

__all__ = [
    "PostgreSQLClient",
    "BaseModel",
    "ComplianceAlert",
    "ComplianceAnalysis",
    "EmailLog",
    "KnowledgeBaseEntry",
    "LocalCQCReport",
    "OnboardingEmail",
    "Organization",
    "OrganizationDocumentChunk",
    "OrganizationKnowledgeFile",
    "Profile",
    "RegulatoryUpdate",
    "SponsoredWorker",
    "SponsorReportingLog",
    "TrainingCompletion",
    "WatchdogAlert",
    "WatchdogScanHistory",
]
