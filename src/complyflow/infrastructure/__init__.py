"""Infrastructure layer.

This package provides implementations for external system integrations
including persistence (PostgreSQL, Redis, S3-compatible storage), LLM
providers, Stripe payments, Resend email, the CQC API and regulator feeds.
"""
