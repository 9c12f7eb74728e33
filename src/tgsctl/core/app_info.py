"""
Application information shared by the core services
"""

import os
from pathlib import Path
from typing import Optional

# Default base directory for persisted files
DEFAULT_BASE_PATH = Path.home() / ".config" / "tgsctl"
BASE_PATH_ENV = "TGSCTL_HOME"


class ApplicationInfo:
    """
    Where tgsctl keeps its files

    The base path is expected to exist and be writable before any service
    uses it. Call ensure_base_path() from the entry point.
    """

    def __init__(self, base_path: Optional[Path] = None):
        if base_path is None:
            env_path = os.environ.get(BASE_PATH_ENV)
            base_path = Path(env_path).expanduser() if env_path else DEFAULT_BASE_PATH
        self.base_path = Path(base_path)

    def ensure_base_path(self) -> Path:
        """Create the base directory if it is missing"""
        self.base_path.mkdir(parents=True, exist_ok=True)
        return self.base_path

    def __repr__(self) -> str:
        return f"ApplicationInfo(base_path='{self.base_path}')"
