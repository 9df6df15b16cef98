"""Shared fixtures for API (controller) tests.

Builds a minimal FastAPI test application with all services injected via
app.state. The organisation membership dependency is overridden so tests
focus on controller routing and response shaping, not auth mechanics.
Domain exceptions flow through the real ErrorHandlerMiddleware.

Key exports:
    - org_context: OrganizationContext injected into org-scoped routes
    - services: MagicMock namespace holding every mocked service
    - app: FastAPI instance with all routers mounted and mocks injected
    - client: synchronous TestClient
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.conftest import TEST_ORG_ID, TEST_USER_ID

SERVICE_NAMES = (
    "ai_service",
    "embedding_service",
    "source_layer_service",
    "knowledge_ingestion_service",
    "document_search_service",
    "billing_service",
    "email_service",
    "onboarding_service",
    "growth_service",
    "trial_expiry_service",
    "visa_expiry_service",
    "weekly_digest_service",
    "regulatory_feed_service",
    "trend_watchdog_service",
    "sponsor_service",
    "compliance_alert_service",
    "gap_analysis_service",
    "reference_service",
    "help_service",
    "experiment_service",
)


def _make_test_app(services: MagicMock, context: Any) -> FastAPI:
    """Build a minimal FastAPI app with mocked state and overridden membership.

    Args:
        services: Namespace whose attributes are the mocked services.
        context: OrganizationContext returned by require_org_member.

    Returns:
        Configured FastAPI test application.
    """
    import complyflow.middleware.authorization_middleware as perms
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
    from complyflow.middleware.error_handler_middleware import (
        ErrorHandlerMiddleware,
        register_exception_handlers,
    )

    _app = FastAPI()

    _app.state.environment = "test"
    _app.state.service_role_key = None
    _app.state.jwt_auth = services.jwt_auth
    _app.state.postgres_client = services.postgres_client
    _app.state.redis_client = services.redis_client
    for name in SERVICE_NAMES:
        setattr(_app.state, name, getattr(services, name))

    _app.dependency_overrides[perms.require_org_member] = lambda: context

    _app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(_app)

    for controller in (
        health_controller,
        ai_controller,
        knowledge_controller,
        document_controller,
        billing_controller,
        email_controller,
        jobs_controller,
        watchdog_controller,
        sponsor_controller,
        compliance_controller,
        reference_controller,
    ):
        _app.include_router(controller.router)

    return _app


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def org_context() -> Any:
    """Owner membership of the test organisation."""
    from complyflow.middleware.authorization_middleware import OrganizationContext

    return OrganizationContext(user_id=TEST_USER_ID, org_id=TEST_ORG_ID, role="owner")


@pytest.fixture
def services() -> MagicMock:
    """Mocked infrastructure clients and services with async defaults."""
    svc = MagicMock()

    svc.postgres_client.health_check = AsyncMock(return_value=None)
    svc.postgres_client.vector_enabled = AsyncMock(return_value=True)
    svc.redis_client.ping = AsyncMock(return_value=True)

    svc.ai_service.complete = AsyncMock(return_value="Regulation 17 covers governance.")
    svc.embedding_service.embed = AsyncMock(return_value=[0.1, 0.2, 0.3])
    svc.source_layer_service.handle = AsyncMock(
        return_value={"answer": "Record drills monthly.", "citations": []}
    )
    svc.knowledge_ingestion_service.ingest = AsyncMock(return_value=4)
    svc.document_search_service.search = AsyncMock(return_value=[])
    svc.document_search_service.has_indexed_documents = AsyncMock(return_value=True)
    svc.document_search_service.list_files = AsyncMock(return_value=[])

    svc.billing_service.create_checkout_session = AsyncMock(
        return_value="https://checkout.stripe.com/c/pay/cs_test"
    )
    svc.billing_service.create_portal_session = AsyncMock(
        return_value="https://billing.stripe.com/p/session/test"
    )
    svc.billing_service.handle_webhook = AsyncMock(return_value=None)

    svc.email_service.send_raw = AsyncMock(return_value="msg_raw")
    svc.email_service.send_transactional = AsyncMock(return_value="msg_123")
    svc.onboarding_service.send = AsyncMock(return_value=True)

    svc.growth_service.run = AsyncMock(
        return_value={"success": True, "welcomeSent": 1, "trialWarningsSent": 0}
    )
    svc.trial_expiry_service.expire = AsyncMock(
        return_value={"success": True, "expired": 2}
    )
    svc.visa_expiry_service.check = AsyncMock(
        return_value={"success": True, "alertsSent": 1}
    )
    svc.weekly_digest_service.send = AsyncMock(
        return_value={"success": True, "emailsSent": 3}
    )
    svc.regulatory_feed_service.refresh = AsyncMock(
        return_value={"success": True, "stored": 2}
    )
    svc.trend_watchdog_service.handle = AsyncMock(return_value={"alerts": []})

    svc.sponsor_service.list_workers = AsyncMock(return_value=[])
    svc.sponsor_service.create_worker = AsyncMock(
        return_value={"id": "worker_1", "full_name": "Amara Okafor"}
    )
    svc.sponsor_service.update_worker = AsyncMock(
        return_value={"id": "worker_1", "full_name": "Amara Okafor"}
    )
    svc.sponsor_service.delete_worker = AsyncMock(return_value=None)
    svc.sponsor_service.get_reporting_log = AsyncMock(return_value=[])
    svc.sponsor_service.create_reporting_event = AsyncMock(
        return_value={"id": "event_1", "event_type": "salary_change"}
    )
    svc.sponsor_service.mark_reported = AsyncMock(
        return_value={"id": "event_1", "reported": True}
    )
    svc.sponsor_service.get_stats = AsyncMock(
        return_value={
            "cosAllocated": 10,
            "cosUsed": 4,
            "urgentAlerts": 1,
            "pendingReports": 0,
        }
    )
    svc.compliance_alert_service.list_alerts = AsyncMock(return_value=[])
    svc.compliance_alert_service.refresh_alerts = AsyncMock(
        return_value={"created": 1, "escalated": 0}
    )
    svc.compliance_alert_service.resolve_alert = AsyncMock(
        return_value={"id": "alert_1", "is_resolved": True}
    )

    svc.gap_analysis_service.analyze = MagicMock(return_value=[])
    svc.reference_service.subscription_tiers = MagicMock(
        return_value=[{"id": "tier_pro", "name": "Professional"}]
    )
    svc.help_service.get_articles = MagicMock(return_value=[])
    svc.experiment_service.get_variant = MagicMock(return_value="control")
    svc.experiment_service.track_view = MagicMock(return_value={"tracked": True})
    svc.experiment_service.track_conversion = MagicMock(
        return_value={"variant": "control"}
    )
    return svc


@pytest.fixture
def app(services: MagicMock, org_context: Any) -> FastAPI:
    """FastAPI test app with all routers mounted."""
    return _make_test_app(services, org_context)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Synchronous TestClient for the test app."""
    return TestClient(app)
