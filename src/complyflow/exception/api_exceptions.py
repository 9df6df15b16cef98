"""Custom exceptions for the ComplyFlow API.

All custom exceptions inherit from ComplyFlowException so the error handler
middleware can render them as ``{"error": message}`` with the right status.
"""

from typing import Any, Dict, Optional


class ComplyFlowException(Exception):
    """Base exception for all ComplyFlow errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize ComplyFlow exception.

        Args:
            message: Human-readable error message
            code: Error code for programmatic handling
            status_code: HTTP status code
            field: Field name if validation error
            details: Additional error context
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.field = field
        self.details = details or {}
        super().__init__(message)


# Authentication & Authorization Errors (401, 403)
class AuthenticationError(ComplyFlowException):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(
            message=message,
            code=kwargs.pop("code", "AUTHENTICATION_FAILED"),
            status_code=401,
            **kwargs,
        )


class InvalidTokenError(AuthenticationError):
    """Invalid or expired token."""

    def __init__(self, message: str = "Invalid or expired token", **kwargs):
        super().__init__(message=message, code="INVALID_TOKEN", **kwargs)


class AuthorizationError(ComplyFlowException):
    """Authorization failed - insufficient permissions."""

    def __init__(self, message: str = "Insufficient permissions", **kwargs):
        super().__init__(
            message=message,
            code=kwargs.pop("code", "AUTHORIZATION_FAILED"),
            status_code=403,
            **kwargs,
        )


class OrganizationAccessError(AuthorizationError):
    """Caller does not belong to the requested organization."""

    def __init__(
        self,
        message: str = "Access denied: resource belongs to another organization",
        **kwargs,
    ):
        super().__init__(message=message, code="ORGANIZATION_ACCESS_DENIED", **kwargs)


# Resource Errors (404)
class ResourceNotFoundError(ComplyFlowException):
    """Requested resource not found."""

    def __init__(self, resource: str, resource_id: str, **kwargs):
        super().__init__(
            message=kwargs.pop("message", f"{resource} not found: {resource_id}"),
            code="RESOURCE_NOT_FOUND",
            status_code=kwargs.pop("status_code", 404),
            details={"resource": resource, "resource_id": resource_id},
            **kwargs,
        )


# Request Errors (400, 405)
class InvalidInputError(ComplyFlowException):
    """Malformed or incomplete request payload."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            code=kwargs.pop("code", "INVALID_INPUT"),
            status_code=400,
            field=field,
            **kwargs,
        )


class MissingRequiredFieldError(InvalidInputError):
    """One or more required fields are missing."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, code="MISSING_REQUIRED_FIELD", **kwargs)


class UnknownActionError(InvalidInputError):
    """Requested action is not supported by the handler."""

    def __init__(self, message: str = "Unknown action", action: Optional[str] = None):
        super().__init__(
            message=message,
            code="UNKNOWN_ACTION",
            field="action",
            details={"action": action} if action else None,
        )


class MethodNotAllowedError(ComplyFlowException):
    """HTTP method is not accepted by the handler."""

    def __init__(self, method: str, **kwargs):
        super().__init__(
            message="Method not allowed",
            code="METHOD_NOT_ALLOWED",
            status_code=405,
            details={"method": method},
            **kwargs,
        )


# Rate Limiting (429)
class RateLimitExceededError(ComplyFlowException):
    """Rate limit exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        retry_after: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if retry_after:
            details["retry_after"] = retry_after

        super().__init__(
            message=message,
            code="RATE_LIMIT_EXCEEDED",
            status_code=429,
            details=details,
            **kwargs,
        )


# Billing Errors (400)
class BillingError(ComplyFlowException):
    """Checkout or billing portal request failed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            code=kwargs.pop("code", "BILLING_ERROR"),
            status_code=400,
            **kwargs,
        )


class InvalidPlanTierError(BillingError):
    """Plan tier has no configured price."""

    def __init__(self, tier_id: str, **kwargs):
        super().__init__(
            message=f"Invalid plan tier: {tier_id}",
            code="INVALID_PLAN_TIER",
            details={"tier_id": tier_id},
            **kwargs,
        )


class WebhookVerificationError(ComplyFlowException):
    """Payment provider webhook could not be verified."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            code="WEBHOOK_VERIFICATION_FAILED",
            status_code=400,
            **kwargs,
        )


# External Provider Errors (500)
class ExternalServiceError(ComplyFlowException):
    """A third-party API call failed."""

    def __init__(self, message: str, service: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if service:
            details["service"] = service

        super().__init__(
            message=message,
            code=kwargs.pop("code", "EXTERNAL_SERVICE_ERROR"),
            status_code=500,
            details=details,
            **kwargs,
        )


class LLMError(ExternalServiceError):
    """Generative AI call failed."""

    def __init__(self, message: str, provider: Optional[str] = None, **kwargs):
        super().__init__(message=message, service=provider, code="LLM_ERROR", **kwargs)


class EmbeddingError(ExternalServiceError):
    """Embedding generation failed."""

    def __init__(self, message: str, provider: Optional[str] = None, **kwargs):
        super().__init__(
            message=message, service=provider, code="EMBEDDING_ERROR", **kwargs
        )


class EmailDeliveryError(ExternalServiceError):
    """Email provider rejected or failed to send a message."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message, service="resend", code="EMAIL_DELIVERY_ERROR", **kwargs
        )


class CQCApiError(ExternalServiceError):
    """CQC public API returned an error."""

    def __init__(self, status: int, **kwargs):
        super().__init__(
            message=f"CQC API Error: {status}",
            service="cqc",
            code="CQC_API_ERROR",
            details={"upstream_status": status},
            **kwargs,
        )


class StorageError(ExternalServiceError):
    """Object storage download failed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message, service="storage", code="STORAGE_ERROR", **kwargs
        )


class KnowledgeIngestionError(ComplyFlowException):
    """Knowledge file could not be ingested."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message, code="KNOWLEDGE_INGESTION_ERROR", status_code=500, **kwargs
        )


# Database Errors
class DatabaseError(ComplyFlowException):
    """Database operation failed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            code=kwargs.pop("code", "DATABASE_ERROR"),
            status_code=500,
            **kwargs,
        )


# Configuration Errors
class ConfigurationError(ComplyFlowException):
    """Configuration error."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            code=kwargs.pop("code", "CONFIGURATION_ERROR"),
            status_code=500,
            **kwargs,
        )


class MissingCredentialError(ConfigurationError):
    """A third-party credential is not configured."""

    def __init__(self, setting: str, message: Optional[str] = None, **kwargs):
        super().__init__(
            message=message or f"{setting} is not configured",
            code="MISSING_CREDENTIAL",
            details={"setting": setting},
            **kwargs,
        )
