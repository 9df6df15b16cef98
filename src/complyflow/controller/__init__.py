"""API controllers.

This package provides the edge function handlers under ``/functions/v1`` and
the REST API under ``/api``, plus the health check.
"""

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

__all__ = [
    "ai_controller",
    "billing_controller",
    "compliance_controller",
    "document_controller",
    "email_controller",
    "health_controller",
    "jobs_controller",
    "knowledge_controller",
    "reference_controller",
    "sponsor_controller",
    "watchdog_controller",
]
