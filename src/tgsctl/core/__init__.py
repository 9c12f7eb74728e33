"""Core tgsctl functionality"""

from .app_info import ApplicationInfo
from .errors import (
    ConfigurationError,
    DuplicateBindingError,
    PersistenceError,
    SerializationError,
    TgsctlError,
)
from .persistence import PersistenceManager, data_location
from .schema import Preferences, SessionData

__all__ = [
    "ApplicationInfo",
    "ConfigurationError",
    "DuplicateBindingError",
    "PersistenceError",
    "PersistenceManager",
    "Preferences",
    "SerializationError",
    "SessionData",
    "TgsctlError",
    "data_location",
]
