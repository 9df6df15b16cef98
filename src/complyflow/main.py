"""ComplyFlow FastAPI application.

This module initializes and configures the ComplyFlow compliance backend with
middleware, routers, and lifecycle management.
"""

# ruff: noqa: E402  load_dotenv() must run before any complyflow imports that read env

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from complyflow.config.app_settings import AppSettings, get_settings
from complyflow.controller import (
    ai_controller,
    billing_controller,
    compliance_controller,
    document_controller,
    email_controller,
    health_controller,
    jobs_controller,
    knowledge_controller,
    reference_controller,
    sponsor_controller,
    watchdog_controller,
)
from complyflow.infrastructure.cqc import CQCClient
from complyflow.infrastructure.email import ResendClient
from complyflow.infrastructure.feeds import RegulatorySourceClient
from complyflow.infrastructure.llm import LLMModelFactory
from complyflow.infrastructure.payments import StripeClient
from complyflow.infrastructure.persistence.postgresql.client import PostgreSQLClient
from complyflow.infrastructure.persistence.redis.client import RedisClient
from complyflow.infrastructure.persistence.s3.client import KnowledgeFileStorage
from complyflow.middleware import (
    ErrorHandlerMiddleware,
    JWTAuth,
    RateLimitMiddleware,
    register_exception_handlers,
)
from complyflow.repository.compliance_alert_repository import ComplianceAlertRepository
from complyflow.repository.compliance_metrics_repository import (
    ComplianceMetricsRepository,
)
from complyflow.repository.email_log_repository import EmailLogRepository
from complyflow.repository.knowledge_base_repository import KnowledgeBaseRepository
from complyflow.repository.organization_document_repository import (
    OrganizationDocumentRepository,
)
from complyflow.repository.organization_repository import OrganizationRepository
from complyflow.repository.profile_repository import ProfileRepository
from complyflow.repository.regulatory_update_repository import (
    RegulatoryUpdateRepository,
)
from complyflow.repository.sponsor_reporting_repository import (
    SponsorReportingRepository,
)
from complyflow.repository.sponsored_worker_repository import SponsoredWorkerRepository
from complyflow.repository.watchdog_repository import WatchdogRepository
from complyflow.service import (
    AIProxyService,
    BillingService,
    ComplianceAlertService,
    DocumentSearchService,
    EmailService,
    EmbeddingService,
    ExperimentService,
    GapAnalysisService,
    GrowthService,
    HelpService,
    KnowledgeIngestionService,
    OnboardingService,
    ReferenceService,
    RegulatoryFeedService,
    SourceLayerService,
    SponsorService,
    TrendWatchdogService,
    TrialExpiryService,
    VisaExpiryService,
    WeeklyDigestService,
)

app_settings = get_settings()

logging.basicConfig(
    level=getattr(logging, app_settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def initialize_database_clients(
    app_settings: AppSettings,
) -> tuple[PostgreSQLClient, RedisClient]:
    """Initialize and connect all database clients."""
    postgres_client = PostgreSQLClient(app_settings.postgres_url)
    await postgres_client.connect()

    redis_client = RedisClient(app_settings.redis_url, app_settings.redis_ratelimit_db)
    await redis_client.connect()

    logger.info("Database connections established")
    return postgres_client, redis_client


def create_postgresql_repositories(
    postgres_client: PostgreSQLClient,
) -> dict[str, Any]:
    """Create all PostgreSQL repositories."""
    return {
        "org_repo": OrganizationRepository(postgres_client),
        "profile_repo": ProfileRepository(postgres_client),
        "worker_repo": SponsoredWorkerRepository(postgres_client),
        "reporting_repo": SponsorReportingRepository(postgres_client),
        "alert_repo": ComplianceAlertRepository(postgres_client),
        "metrics_repo": ComplianceMetricsRepository(postgres_client),
        "knowledge_repo": KnowledgeBaseRepository(postgres_client),
        "document_repo": OrganizationDocumentRepository(postgres_client),
        "email_log_repo": EmailLogRepository(postgres_client),
        "regulatory_repo": RegulatoryUpdateRepository(postgres_client),
        "watchdog_repo": WatchdogRepository(postgres_client),
    }


def create_external_clients(app_settings: AppSettings) -> dict[str, Any]:
    """Create clients for the third-party APIs."""
    timeout = app_settings.http_timeout_seconds
    storage = KnowledgeFileStorage(
        bucket_name=app_settings.storage_bucket_name,
        access_key_id=app_settings.storage_access_key_id,
        secret_access_key=app_settings.storage_secret_access_key,
        endpoint_url=app_settings.storage_endpoint_url,
        region=app_settings.storage_region,
    )
    logger.info(
        f"Storage client configured: endpoint={app_settings.storage_endpoint_url or 'AWS'}, "
        f"bucket={app_settings.storage_bucket_name}"
    )
    return {
        "llm_factory": LLMModelFactory(app_settings),
        "resend": ResendClient(
            app_settings.resend_api_key, app_settings.resend_api_url, timeout=timeout
        ),
        "stripe": StripeClient(
            app_settings.stripe_secret_key, app_settings.stripe_webhook_secret
        ),
        "cqc": CQCClient(
            app_settings.cqc_api_base_url, app_settings.cqc_api_key, timeout=timeout
        ),
        "feeds": RegulatorySourceClient(
            app_settings.cqc_news_rss_url, app_settings.govuk_search_url, timeout=timeout
        ),
        "storage": storage,
    }


def create_application_services(
    repositories: dict[str, Any],
    clients: dict[str, Any],
    app_settings: AppSettings,
) -> dict[str, Any]:
    """Create all application service instances."""
    base_url = app_settings.app_base_url
    embedding_service = EmbeddingService(clients["llm_factory"])
    email_service = EmailService(clients["resend"], base_url)

    return {
        "ai_service": AIProxyService(clients["llm_factory"]),
        "embedding_service": embedding_service,
        "email_service": email_service,
        "source_layer_service": SourceLayerService(
            knowledge_repo=repositories["knowledge_repo"],
            embedding_service=embedding_service,
            cqc_client=clients["cqc"],
            llm_factory=clients["llm_factory"],
        ),
        "knowledge_ingestion_service": KnowledgeIngestionService(
            document_repo=repositories["document_repo"],
            storage=clients["storage"],
            embedding_service=embedding_service,
        ),
        "document_search_service": DocumentSearchService(
            document_repo=repositories["document_repo"],
            embedding_service=embedding_service,
        ),
        "billing_service": BillingService(
            stripe=clients["stripe"],
            org_repo=repositories["org_repo"],
            profile_repo=repositories["profile_repo"],
            email_service=email_service,
            price_ids=app_settings.stripe_price_ids,
            app_base_url=base_url,
        ),
        "onboarding_service": OnboardingService(
            email_service=email_service,
            email_log_repo=repositories["email_log_repo"],
        ),
        "growth_service": GrowthService(
            profile_repo=repositories["profile_repo"],
            org_repo=repositories["org_repo"],
            email_log_repo=repositories["email_log_repo"],
            email_service=email_service,
            app_base_url=base_url,
        ),
        "trial_expiry_service": TrialExpiryService(repositories["org_repo"]),
        "visa_expiry_service": VisaExpiryService(
            worker_repo=repositories["worker_repo"],
            profile_repo=repositories["profile_repo"],
            org_repo=repositories["org_repo"],
            email_service=email_service,
        ),
        "weekly_digest_service": WeeklyDigestService(
            org_repo=repositories["org_repo"],
            profile_repo=repositories["profile_repo"],
            alert_repo=repositories["alert_repo"],
            metrics_repo=repositories["metrics_repo"],
            worker_repo=repositories["worker_repo"],
            regulatory_repo=repositories["regulatory_repo"],
            email_service=email_service,
        ),
        "regulatory_feed_service": RegulatoryFeedService(
            clients["feeds"], repositories["regulatory_repo"]
        ),
        "trend_watchdog_service": TrendWatchdogService(
            clients["cqc"], repositories["watchdog_repo"]
        ),
        "sponsor_service": SponsorService(
            worker_repo=repositories["worker_repo"],
            reporting_repo=repositories["reporting_repo"],
            org_repo=repositories["org_repo"],
            alert_repo=repositories["alert_repo"],
        ),
        "compliance_alert_service": ComplianceAlertService(
            alert_repo=repositories["alert_repo"],
            worker_repo=repositories["worker_repo"],
            profile_repo=repositories["profile_repo"],
            email_service=email_service,
            app_base_url=base_url,
        ),
        "gap_analysis_service": GapAnalysisService(),
        "experiment_service": ExperimentService(app_settings.feature_flags),
        "help_service": HelpService(),
        "reference_service": ReferenceService(),
    }


async def disconnect_database_clients(
    postgres_client: PostgreSQLClient, redis_client: RedisClient
) -> None:
    """Disconnect all database clients."""
    await postgres_client.disconnect()
    await redis_client.disconnect()
    logger.info("Database connections closed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("=== ComplyFlow Startup ===")

    app.state.app_settings = app_settings
    if app_settings.is_production():
        for problem in app_settings.validate_production_config():
            logger.warning(f"Configuration: {problem}")

    postgres_client, redis_client = await initialize_database_clients(app_settings)
    app.state.postgres_client = postgres_client
    app.state.redis_client = redis_client

    repositories = create_postgresql_repositories(postgres_client)
    app.state.profile_repo = repositories["profile_repo"]

    app.state.jwt_auth = JWTAuth(
        secret=app_settings.jwt_secret,
        algorithm=app_settings.jwt_algorithm,
        audience=app_settings.jwt_audience,
    )
    app.state.service_role_key = app_settings.service_role_key

    clients = create_external_clients(app_settings)
    services = create_application_services(repositories, clients, app_settings)
    for name, service in services.items():
        setattr(app.state, name, service)

    logger.info("=== ComplyFlow Ready ===")

    yield

    logger.info("=== ComplyFlow Shutdown ===")
    await disconnect_database_clients(postgres_client, redis_client)
    logger.info("=== ComplyFlow Stopped ===")


def create_openapi_schema() -> dict:
    """Generate custom OpenAPI schema with security schemes."""
    if app.openapi_schema:
        return app.openapi_schema

    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        servers=app.servers,
        tags=app.openapi_tags,
    )

    openapi_schema["components"]["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Supabase access token, or the service-role key for scheduled jobs. Format: `Bearer <token>`",
        },
    }
    openapi_schema["security"] = [{"BearerAuth": []}]

    openapi_schema["x-rate-limit"] = {
        "default": f"{app_settings.rate_limit_max_requests} requests per "
        f"{app_settings.rate_limit_window_seconds} seconds per client on AI endpoints",
        "configurable": True,
    }

    app.openapi_schema = openapi_schema
    return app.openapi_schema


async def resolve_rate_limit_store() -> Optional[RedisClient]:
    """Redis counters once the lifespan has connected, otherwise None."""
    return getattr(app.state, "redis_client", None)


def configure_cors_middleware(application: FastAPI, allowed_origins: list[str]) -> None:
    """Configure CORS middleware with specified origins."""
    application.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )


def configure_rate_limiting_middleware(
    application: FastAPI, app_settings: AppSettings
) -> None:
    """Configure rate limiting middleware."""
    application.add_middleware(
        RateLimitMiddleware,
        resolve_store=resolve_rate_limit_store,
        window_seconds=app_settings.rate_limit_window_seconds,
        max_requests=app_settings.rate_limit_max_requests,
        enabled=app_settings.rate_limit_enabled,
    )


def configure_error_handlers_middleware(
    app: FastAPI, app_settings: AppSettings
) -> None:
    """Set up error handlers for FastAPI application."""
    app.state.debug = app_settings.debug
    app.state.environment = app_settings.environment

    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    logger.info(
        "Error handling middleware configured",
        extra={"debug": app.state.debug, "environment": app.state.environment},
    )


def register_api_routers(application: FastAPI) -> None:
    """Register all API route controllers."""
    application.include_router(health_controller.router)
    application.include_router(ai_controller.router)
    application.include_router(knowledge_controller.router)
    application.include_router(billing_controller.router)
    application.include_router(email_controller.router)
    application.include_router(jobs_controller.router)
    application.include_router(watchdog_controller.router)
    application.include_router(reference_controller.router)
    application.include_router(compliance_controller.router)
    application.include_router(sponsor_controller.router)
    application.include_router(document_controller.router)


app = FastAPI(
    title="ComplyFlow",
    description="""
# Care Home Compliance Backend

Server side of ComplyFlow, the CQC and sponsor licence compliance platform for
UK care homes.

## Features

* **AI Compliance Adviser**: generative AI proxy with retrieval over regulations and organization documents
* **Billing**: Stripe checkout, customer portal and webhook
* **Email**: transactional templates, onboarding sequence and lifecycle drips
* **Scheduled Jobs**: trial expiry, visa expiry alerts, weekly digest, regulatory feed
* **Trend Watchdog**: local CQC rating trends around a postcode
* **Sponsor Register**: sponsored workers, reporting log and visa alerts

## Authentication

```
Authorization: Bearer <supabase_access_token>
```

Scheduled jobs take the service-role key as bearer token.
""",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "health", "description": "Service availability and database connectivity."},
        {"name": "ai", "description": "Generative AI proxy and embeddings."},
        {"name": "knowledge", "description": "Regulatory knowledge base and document ingestion."},
        {"name": "billing", "description": "Stripe subscriptions."},
        {"name": "email", "description": "Notification, transactional and onboarding emails."},
        {"name": "jobs", "description": "Scheduled jobs. Require the service-role key."},
        {"name": "watchdog", "description": "Local CQC inspection trends."},
        {"name": "reference", "description": "Static reference data, help centre and A/B tests."},
        {"name": "compliance", "description": "Policy gap analysis."},
        {"name": "sponsor", "description": "Sponsored worker register and compliance alerts."},
        {"name": "documents", "description": "Organization document retrieval."},
    ],
    servers=[
        {"url": "http://localhost:8000", "description": "Local development server"},
    ],
    openapi_url="/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.openapi = create_openapi_schema

configure_rate_limiting_middleware(app, app_settings)
configure_error_handlers_middleware(app, app_settings)
cors_origins = app_settings.cors_origins if app_settings.cors_origins else ["*"]
configure_cors_middleware(app, cors_origins)

register_api_routers(app)

logger.info("ComplyFlow application configured")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "complyflow.main:app",
        host=app_settings.api_host,
        port=app_settings.api_port,
        reload=app_settings.debug,
    )
