"""Unit tests for the exception hierarchy in complyflow.exception.api_exceptions.

Verifies that every exception class carries the HTTP status and error code
the error handler renders, and that the inheritance chain is intact.
"""

import pytest

from complyflow.exception.api_exceptions import (
    AuthenticationError,
    BillingError,
    ComplyFlowException,
    CQCApiError,
    DatabaseError,
    InvalidInputError,
    InvalidPlanTierError,
    InvalidTokenError,
    MethodNotAllowedError,
    MissingRequiredFieldError,
    OrganizationAccessError,
    RateLimitExceededError,
    ResourceNotFoundError,
    UnknownActionError,
    WebhookVerificationError,
)

# ---------------------------------------------------------------------------
# ComplyFlowException – base class contract
# ---------------------------------------------------------------------------


class TestComplyFlowException:
    """Tests for the ComplyFlowException base class."""

    def test_defaults(self) -> None:
        """The base exception is a 500 INTERNAL_ERROR with no field or details."""
        exception = ComplyFlowException("something broke")

        assert exception.message == "something broke"
        assert exception.code == "INTERNAL_ERROR"
        assert exception.status_code == 500
        assert exception.field is None
        assert exception.details == {}

    def test_str_representation_is_message(self) -> None:
        assert str(ComplyFlowException("boom")) == "boom"

    def test_original_cause_is_preserved_when_chained(self) -> None:
        cause = ValueError("root")
        with pytest.raises(ComplyFlowException) as info:
            try:
                raise cause
            except ValueError as e:
                raise DatabaseError("Database error") from e

        assert info.value.__cause__ is cause


# ---------------------------------------------------------------------------
# Status policy
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "exception,status_code,code",
    [
        (AuthenticationError(), 401, "AUTHENTICATION_FAILED"),
        (InvalidTokenError(), 401, "INVALID_TOKEN"),
        (OrganizationAccessError(), 403, "ORGANIZATION_ACCESS_DENIED"),
        (ResourceNotFoundError("Help article", "x"), 404, "RESOURCE_NOT_FOUND"),
        (InvalidInputError("bad"), 400, "INVALID_INPUT"),
        (MissingRequiredFieldError("missing"), 400, "MISSING_REQUIRED_FIELD"),
        (UnknownActionError(action="purge"), 400, "UNKNOWN_ACTION"),
        (MethodNotAllowedError("PUT"), 405, "METHOD_NOT_ALLOWED"),
        (RateLimitExceededError(retry_after=60), 429, "RATE_LIMIT_EXCEEDED"),
        (BillingError("No active billing"), 400, "BILLING_ERROR"),
        (InvalidPlanTierError("tier_gold"), 400, "INVALID_PLAN_TIER"),
        (WebhookVerificationError("Missing signature"), 400, "WEBHOOK_VERIFICATION_FAILED"),
        (CQCApiError(503), 500, "CQC_API_ERROR"),
        (DatabaseError("Database error"), 500, "DATABASE_ERROR"),
    ],
)
def test_status_and_code(exception, status_code, code) -> None:
    """Each exception maps to its documented HTTP status and error code."""
    assert exception.status_code == status_code
    assert exception.code == code


class TestSubclassing:
    """Tests for the inheritance chain used by except clauses."""

    def test_missing_field_is_invalid_input(self) -> None:
        assert isinstance(MissingRequiredFieldError("x"), InvalidInputError)

    def test_plan_tier_is_billing_error(self) -> None:
        assert isinstance(InvalidPlanTierError("tier_x"), BillingError)

    def test_invalid_token_is_authentication_error(self) -> None:
        assert isinstance(InvalidTokenError(), AuthenticationError)

    def test_rate_limit_carries_retry_after(self) -> None:
        assert RateLimitExceededError(retry_after=60).details == {"retry_after": 60}

    def test_plan_tier_message(self) -> None:
        assert InvalidPlanTierError("tier_gold").message == "Invalid plan tier: tier_gold"
