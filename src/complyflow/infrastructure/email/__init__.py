"""Email delivery infrastructure."""

from .resend_client import ResendClient

__all__ = ["ResendClient"]
