"""Exception handling package.

This package provides custom exception classes that the error handler
middleware maps to HTTP responses.
"""

from complyflow.exception.api_exceptions import ComplyFlowException

__all__ = ["ComplyFlowException"]
