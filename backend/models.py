"""
Pydantic models used across the backend.

Input shapes (`*In`) deliberately declare every field optional: the
services own presence checks so that a missing field yields the
service's fixed 400 message rather than FastAPI's generic 422.

Output shapes (`*Out`, `AppStats`) describe what routes return and are
what the generated API docs show.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterIn(BaseModel):
    """Body of `POST /api/register`."""

    email: Optional[str] = None
    name: Optional[str] = None


class CollectIn(BaseModel):
    """Body of `POST /api/collect`.

    Fields:
    - `apiKey`: the App's API key, the only credential for collection.
    - `type`: free-form event type, e.g. `click`.
    - `payload`: arbitrary JSON stored as JSONB; absent means NULL.
    """

    model_config = ConfigDict(populate_by_name=True)

    api_key: Optional[str] = Field(default=None, alias="apiKey")
    type: Optional[str] = None
    payload: Optional[Any] = None


class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime


class AppStats(BaseModel):
    """Store count and Redis counter side by side, never reconciled."""

    total_events: int
    redis_count: int


class HealthOut(BaseModel):
    status: str
    db: bool
    redis: bool


class StatusOut(BaseModel):
    status: str
