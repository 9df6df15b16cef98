"""Root-level pytest configuration and shared fixtures.

Adds the src/ directory to sys.path so complyflow can be imported without installation.
Provides common mock factories and pytest fixtures used across all test suites.

Key exports:
    - ORM-like mock builders (make_mock_org, make_mock_profile, make_mock_worker, ...)
    - Mock repository factories (make_org_repo, make_profile_repo, ...)
    - Pytest fixtures for every mock dependency
"""

import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

TEST_ORG_ID = "org_test"
TEST_USER_ID = "user_test"
# Ids that must parse as UUIDs at the API boundary.
TEST_ORG_UUID = "550e8400-e29b-41d4-a716-446655440000"
TEST_RECORD_UUID = "3f2a1b4c-5d6e-4f70-8a9b-0c1d2e3f4a5b"
FIXED_NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# ORM-like object builders
# ---------------------------------------------------------------------------


def make_mock_org(
    org_id: str = TEST_ORG_ID,
    name: str = "Sunrise Care Home",
    subscription_tier: str = "trial",
    subscription_status: str = "trial",
    stripe_customer_id: Optional[str] = None,
    trial_ends_at: Optional[datetime] = None,
) -> MagicMock:
    """Build a mock Organization ORM object."""
    org = MagicMock()
    org.id = org_id
    org.name = name
    org.subscription_tier = subscription_tier
    org.subscription_status = subscription_status
    org.stripe_customer_id = stripe_customer_id
    org.trial_ends_at = trial_ends_at
    org.cos_allocated = 10
    org.cos_used = 4
    return org


def make_mock_profile(
    user_id: str = TEST_USER_ID,
    email: str = "manager@sunrise.example",
    full_name: Optional[str] = "Jane Smith",
    organization_id: Optional[str] = TEST_ORG_ID,
    role: str = "owner",
) -> MagicMock:
    """Build a mock Profile ORM object."""
    profile = MagicMock()
    profile.id = user_id
    profile.email = email
    profile.full_name = full_name
    profile.organization_id = organization_id
    profile.role = role
    return profile


def make_mock_worker(
    worker_id: str = "worker_1",
    full_name: str = "Amara Okafor",
    visa_expiry: date = date(2026, 4, 1),
    organization_id: str = TEST_ORG_ID,
) -> MagicMock:
    """Build a mock SponsoredWorker ORM object with every serialized column."""
    worker = MagicMock()
    worker.id = worker_id
    worker.organization_id = organization_id
    worker.full_name = full_name
    worker.visa_expiry = visa_expiry
    worker.visa_type = "Skilled Worker"
    worker.employee_id = "EMP-001"
    worker.email = "amara@example.com"
    worker.cos_number = "C2G8Y12345"
    worker.status = "active"
    worker.ni_number = None
    worker.passport_number = None
    worker.job_title = "Senior Carer"
    worker.work_location = "Birmingham"
    worker.notes = None
    worker.cos_assigned_date = None
    worker.start_date = date(2025, 1, 6)
    worker.last_rtw_check = None
    worker.salary = 29000
    worker.created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    worker.updated_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return worker


def make_mock_alert(
    alert_id: str = "alert_1",
    related_worker_id: Optional[str] = "worker_1",
    severity: str = "warning",
) -> MagicMock:
    """Build a mock ComplianceAlert ORM object."""
    alert = MagicMock()
    alert.id = alert_id
    alert.organization_id = TEST_ORG_ID
    alert.alert_type = "visa_expiry"
    alert.severity = severity
    alert.title = "Visa Expiry: Amara Okafor"
    alert.description = "Visa expires in 60 days (01/05/2026)."
    alert.related_worker_id = related_worker_id
    alert.due_date = date(2026, 5, 1)
    alert.is_resolved = False
    alert.created_at = datetime(2026, 3, 1, tzinfo=timezone.utc)
    return alert


# ---------------------------------------------------------------------------
# Mock repository factories
# ---------------------------------------------------------------------------


def make_org_repo(org: Optional[MagicMock] = None) -> MagicMock:
    """Build a mock OrganizationRepository with sensible defaults."""
    repo = MagicMock()
    default_org = org or make_mock_org()
    repo.get_by_id = AsyncMock(return_value=default_org)
    repo.update_subscription = AsyncMock(return_value=default_org)
    repo.list_by_subscription_status = AsyncMock(return_value=[default_org])
    repo.expire_trials_rpc = AsyncMock(return_value=0)
    repo.expire_trials = AsyncMock(return_value=[])
    return repo


def make_profile_repo(profiles: Optional[List[Any]] = None) -> MagicMock:
    """Build a mock ProfileRepository with sensible defaults."""
    repo = MagicMock()
    default_profiles = profiles if profiles is not None else [make_mock_profile()]
    repo.get_by_id = AsyncMock(
        return_value=default_profiles[0] if default_profiles else None
    )
    repo.list_by_organization = AsyncMock(return_value=default_profiles)
    repo.list_created_between = AsyncMock(return_value=[])
    return repo


def make_email_log_repo(already_sent: bool = False) -> MagicMock:
    """Build a mock EmailLogRepository."""
    repo = MagicMock()
    repo.has_sent = AsyncMock(return_value=already_sent)
    repo.log_sent = AsyncMock(return_value=None)
    repo.record_onboarding = AsyncMock(return_value=None)
    return repo


def make_worker_repo(workers: Optional[List[Any]] = None) -> MagicMock:
    """Build a mock SponsoredWorkerRepository."""
    repo = MagicMock()
    default_workers = workers if workers is not None else [make_mock_worker()]
    repo.list_by_organization = AsyncMock(return_value=default_workers)
    repo.list_expiring_on = AsyncMock(return_value=[])
    repo.list_expiring_by = AsyncMock(return_value=default_workers)
    repo.count_expiring_by = AsyncMock(return_value=0)
    repo.create = AsyncMock(return_value=make_mock_worker())
    repo.update = AsyncMock(return_value=make_mock_worker())
    repo.delete = AsyncMock(return_value=True)
    return repo


def make_alert_repo(unresolved: Optional[List[Any]] = None) -> MagicMock:
    """Build a mock ComplianceAlertRepository."""
    repo = MagicMock()
    repo.list_by_organization = AsyncMock(return_value=[make_mock_alert()])
    repo.list_unresolved_by_type = AsyncMock(return_value=unresolved or [])
    repo.create = AsyncMock(return_value=make_mock_alert())
    repo.update_severity = AsyncMock(return_value=None)
    repo.resolve = AsyncMock(return_value=make_mock_alert())
    repo.count_unresolved_by_type = AsyncMock(return_value=2)
    repo.count_resolved_since = AsyncMock(return_value=0)
    return repo


def make_email_service() -> MagicMock:
    """Build a mock EmailService whose sends all succeed."""
    svc = MagicMock()
    svc.send_raw = AsyncMock(return_value="msg_raw")
    svc.send_transactional = AsyncMock(return_value="msg_123")
    svc.send_onboarding = AsyncMock(return_value=True)
    return svc


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def org_repo() -> MagicMock:
    """Mock OrganizationRepository."""
    return make_org_repo()


@pytest.fixture
def profile_repo() -> MagicMock:
    """Mock ProfileRepository."""
    return make_profile_repo()


@pytest.fixture
def email_log_repo() -> MagicMock:
    """Mock EmailLogRepository reporting nothing sent yet."""
    return make_email_log_repo()


@pytest.fixture
def worker_repo() -> MagicMock:
    """Mock SponsoredWorkerRepository."""
    return make_worker_repo()


@pytest.fixture
def alert_repo() -> MagicMock:
    """Mock ComplianceAlertRepository."""
    return make_alert_repo()


@pytest.fixture
def email_service() -> MagicMock:
    """Mock EmailService."""
    return make_email_service()
