"""SystemEvent schema — the event type that flows through the event bus.

Profile writes and recommendation runs emit SystemEvents. Subscribers
(the audit logger, anything registered at startup) consume them asynchronously.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """All event types emitted by the system."""

    # Profiles
    PROFILE_CREATED = "profile.created"
    PROFILE_UPDATED = "profile.updated"

    # Eligibility & recommendations
    ELIGIBILITY_CHECKED = "eligibility.checked"
    RECOMMENDATIONS_GENERATED = "recommendations.generated"
    RECOMMENDATIONS_FAILED = "recommendations.failed"

    # System
    SYSTEM_STARTUP = "system.startup"
    SYSTEM_SHUTDOWN = "system.shutdown"


class SystemEvent(BaseModel):
    """Event emitted by the profile service and the recommendation engine.

    Immutable once created. Consumed by:
    - audit_on_event → structured audit log line
    - any handler registered on the EventBus at startup
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Context (optional — system events have no user)
    user_id: str | None = None

    # Flexible payload
    data: dict[str, Any] = Field(default_factory=dict)

    # Metadata
    source_module: str | None = Field(default=None, description="Module that emitted this event")

    model_config = {"frozen": True}
