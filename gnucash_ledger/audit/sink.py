"""
Audit Sinks

DESIGN DECISION: Where audit events end up is behind an interface.
The ledger never does I/O itself; an application that wants events
persisted plugs in its own sink. The in-memory sink is enough for tests
and for inspecting what happened while a document was read.

Sinks are append-only - we never delete or modify events.
"""

from abc import ABC, abstractmethod
from typing import Optional

from gnucash_ledger.models.audit import AuditEvent, AuditEventType


class AuditSinkInterface(ABC):
    """
    Abstract interface for audit event storage.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event.

        Args:
            event: The audit event to record

        Returns:
            True if recorded successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity, in the order they were appended.
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class MemoryAuditSink(AuditSinkInterface):
    """Keeps events in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

    def get_events_by_type(
        self,
        event_type: AuditEventType,
        limit: Optional[int] = None,
    ) -> list[AuditEvent]:
        matching = [event for event in self._events if event.event_type == event_type]
        return matching if limit is None else matching[:limit]
