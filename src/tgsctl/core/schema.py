"""
Data models for tgsctl

Persisted types carry a @data_location binding. API models mirror the
subset of tgstation-server responses that the CLI reads.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from .persistence import data_location


# ============================================================================
# PERSISTED TYPES
# ============================================================================

@data_location("prefs.json")
class Preferences(BaseModel):
    """User preferences"""

    server_url: Optional[HttpUrl] = None
    default_instance: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0)
    verify_tls: bool = True


@data_location("session.json")
class SessionData(BaseModel):
    """Cached login for the last server"""

    server_url: Optional[str] = None
    username: Optional[str] = None
    token: Optional[str] = None
    expires_at: Optional[datetime] = None

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token and self.server_url)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the token is past its expiry"""
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now


# ============================================================================
# API MODELS
# ============================================================================

class ApiModel(BaseModel):
    """Base for API responses (camelCase on the wire)"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TokenResponse(ApiModel):
    bearer: str
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")


class InstanceInfo(ApiModel):
    id: int
    name: str
    path: Optional[str] = None
    online: bool = False


class InstancePage(ApiModel):
    content: List[InstanceInfo] = Field(default_factory=list)
    total_pages: int = Field(default=1, alias="totalPages")


class JobInfo(ApiModel):
    id: int
    description: Optional[str] = None
    instance_id: Optional[int] = Field(default=None, alias="instanceId")


class ErrorMessage(ApiModel):
    message: Optional[str] = None
    error_code: Optional[int] = Field(default=None, alias="errorCode")
