"""
Error hierarchy for tgsctl

Everything raised on purpose derives from TgsctlError so the CLI can
report it in one place.
"""

from pathlib import Path
from typing import Optional


class TgsctlError(Exception):
    """Base class for all tgsctl errors"""


# ===== Persistence =====


class PersistenceError(TgsctlError):
    """Base class for persistence registry errors"""


class ConfigurationError(PersistenceError):
    """A type cannot be persisted as declared"""


class DuplicateBindingError(PersistenceError):
    """Two different types claim the same file name"""

    def __init__(self, file_name: str, value_type: type, existing_type: type):
        self.file_name = file_name
        self.value_type = value_type
        self.existing_type = existing_type
        super().__init__(
            f"Duplicate preferences file definition found, type is {_qualname(value_type)} "
            f"('{file_name}' is already bound to {_qualname(existing_type)})"
        )


class SerializationError(PersistenceError):
    """Stored content could not be turned back into its type"""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


# ===== Remote API =====


class ApiError(TgsctlError):
    """The server rejected a request or could not be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NotLoggedInError(TgsctlError):
    """No cached session exists"""


class SessionExpiredError(TgsctlError):
    """The cached session token is past its expiry"""


class InstanceNotFoundError(TgsctlError):
    """An instance selector did not match exactly one instance"""


def _qualname(value_type: type) -> str:
    return f"{value_type.__module__}.{value_type.__qualname__}"
