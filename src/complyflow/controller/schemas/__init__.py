"""API schemas for request/response serialization.

Provides Pydantic models for API response formatting shared by the
route handlers and the error handler middleware.
"""
