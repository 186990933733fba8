"""
Data Models Package

This package contains the value types and Pydantic models used by the ledger:
exact numbers, slot metadata, the parsed document nodes we consume, and
audit events.
"""

from gnucash_ledger.models.numbers import (
    NEGATIVE_ONE,
    FixedPointNumber,
)
from gnucash_ledger.models.slots import (
    FrameValue,
    ScalarValue,
    Slot,
    SlotTree,
    SlotValue,
)
from gnucash_ledger.models.nodes import (
    CURRENCY_NAMESPACE,
    SplitNode,
    TransactionNode,
)
from gnucash_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Numbers
    "NEGATIVE_ONE",
    "FixedPointNumber",
    # Slots
    "FrameValue",
    "ScalarValue",
    "Slot",
    "SlotTree",
    "SlotValue",
    # Document nodes
    "CURRENCY_NAMESPACE",
    "SplitNode",
    "TransactionNode",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
