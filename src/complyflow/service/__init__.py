"""Service layer for ComplyFlow business logic.

Exports the services behind the edge function handlers and the REST API:
AI proxying and retrieval, billing, email, scheduled jobs, the sponsored
worker register and static reference lookups.
"""

from complyflow.service.ai_service import AIProxyService
from complyflow.service.billing_service import BillingService
from complyflow.service.compliance_alert_service import ComplianceAlertService
from complyflow.service.document_search_service import DocumentSearchService
from complyflow.service.email_service import EmailService
from complyflow.service.embedding_service import EmbeddingService
from complyflow.service.experiment_service import ExperimentService
from complyflow.service.gap_analysis_service import GapAnalysisService
from complyflow.service.growth_service import GrowthService
from complyflow.service.help_service import HelpService
from complyflow.service.knowledge_ingestion_service import KnowledgeIngestionService
from complyflow.service.onboarding_service import OnboardingService
from complyflow.service.reference_service import ReferenceService
from complyflow.service.regulatory_feed_service import RegulatoryFeedService
from complyflow.service.source_layer_service import SourceLayerService
from complyflow.service.sponsor_service import SponsorService
from complyflow.service.trend_watchdog_service import TrendWatchdogService
from complyflow.service.trial_expiry_service import TrialExpiryService
from complyflow.service.visa_expiry_service import VisaExpiryService
from complyflow.service.weekly_digest_service import WeeklyDigestService

__all__ = [
    "AIProxyService",
    "BillingService",
    "ComplianceAlertService",
    "DocumentSearchService",
    "EmailService",
    "EmbeddingService",
    "ExperimentService",
    "GapAnalysisService",
    "GrowthService",
    "HelpService",
    "KnowledgeIngestionService",
    "OnboardingService",
    "ReferenceService",
    "RegulatoryFeedService",
    "SourceLayerService",
    "SponsorService",
    "TrendWatchdogService",
    "TrialExpiryService",
    "VisaExpiryService",
    "WeeklyDigestService",
]
