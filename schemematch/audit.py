"""Audit log subscriber — writes every SystemEvent to the structured log.

Registered as a global subscriber on the EventBus at startup.
"""

from __future__ import annotations

import structlog

from schemematch.schemas.events import SystemEvent

audit_logger = structlog.get_logger("schemematch.audit")


async def audit_on_event(event: SystemEvent) -> None:
    """Emit one audit line per event."""
    audit_logger.info(
        event.event_type.value,
        event_id=str(event.id),
        user_id=event.user_id,
        source_module=event.source_module,
        timestamp=event.timestamp.isoformat(),
        data=event.data,
    )
