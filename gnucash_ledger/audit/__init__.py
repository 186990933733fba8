"""Audit logging package."""

from gnucash_ledger.audit.sink import AuditSinkInterface, MemoryAuditSink
from gnucash_ledger.audit.logger import AuditLogger, configure_logging

__all__ = [
    "AuditLogger",
    "AuditSinkInterface",
    "MemoryAuditSink",
    "configure_logging",
]
