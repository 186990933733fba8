"""
Audit Models for GnuCash Ledger

Diagnostics raised while reading the ledger are recorded as audit events.
This provides:
1. A side channel for problems that are absorbed rather than raised
2. Debugging information when a document is inconsistent
3. A record of links established between transactions and invoices

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Loading
    TRANSACTION_LOADED = "transaction_loaded"
    INVOICE_LINKED = "invoice_linked"

    # Absorbed problems
    INVOICE_NOT_FOUND = "invoice_not_found"
    COMPARISON_FAILED = "comparison_failed"
    RENDER_FAILED = "render_failed"

    # Data-integrity failures (raised to the caller as well)
    TIMESTAMP_UNPARSABLE = "timestamp_unparsable"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'invoice')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="GUID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.invoice_not_found(invoice_id, transaction_id, description)
        event = AuditEventBuilder.invoice_linked(invoice_id, transaction_id)
    """

    @staticmethod
    def transaction_loaded(
        transaction_id: str,
        invoice_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction loaded, linked to {invoice_count} invoices",
            details={
                "invoice_count": invoice_count,
            },
        )

    @staticmethod
    def invoice_linked(
        invoice_id: str,
        transaction_id: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVOICE_LINKED,
            severity=AuditSeverity.DEBUG,
            entity_type="invoice",
            entity_id=invoice_id,
            description=f"Invoice linked to transaction {transaction_id}",
            details={
                "transaction_id": transaction_id,
            },
        )

    @staticmethod
    def invoice_not_found(
        invoice_id: str,
        transaction_id: str,
        transaction_description: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVOICE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description=(
                f"No invoice with id='{invoice_id}' for transaction "
                f"'{transaction_id}' described '{transaction_description}'"
            )[:500],
            details={
                "invoice_id": invoice_id,
                "transaction_description": transaction_description,
            },
        )

    @staticmethod
    def timestamp_unparsable(
        transaction_id: Optional[str],
        field_name: str,
        raw_value: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TIMESTAMP_UNPARSABLE,
            severity=AuditSeverity.ERROR,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Unparsable {field_name} in transaction",
            details={
                "field": field_name,
                "raw_value": raw_value,
            },
        )

    @staticmethod
    def comparison_failed(
        transaction_id: str,
        other_id: Optional[str],
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMPARISON_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Ordering comparison failed, treated as equal",
            error_message=error_message,
            details={
                "other_id": other_id,
            },
        )

    @staticmethod
    def render_failed(
        transaction_id: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RENDER_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Debug rendering failed, error shown inline",
            error_message=error_message,
        )
