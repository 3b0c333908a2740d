"""
System failure error classifications for unrecoverable errors.

These exceptions represent misuse of the engine or a broken configuration
and are not expected to be handled inside a running session.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class SessionStateError(SystemFailureError):
    """Operation not allowed in the current session state."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_operation = attempted_operation


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
