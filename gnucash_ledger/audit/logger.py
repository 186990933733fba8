"""
Audit Logger

DESIGN DECISION: Everything the ledger absorbs instead of raising
(unresolvable invoice ids, failed comparisons, failed debug rendering)
is logged. Returned collections stay quiet about what they left out;
this logger is where it shows up.

The audit logger:
- Is synchronous - reading a ledger has no suspension points
- Gracefully handles sink failures (never breaks the read path)
- Always logs locally, persists only when a sink is configured
"""

import logging
from typing import Optional

import structlog

from gnucash_ledger.config import get_settings
from gnucash_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from gnucash_ledger.audit.sink import AuditSinkInterface


LOGGER_NAME = "gnucash_ledger"


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog for local diagnostic output.

    Defaults come from AppSettings (GNUCASH_LEDGER_LOG_LEVEL,
    GNUCASH_LEDGER_LOG_JSON). GNUCASH_LEDGER_DEBUG_MODE forces DEBUG
    unless a level is passed explicitly.
    """
    app_settings = get_settings().app
    if level is None:
        level = "DEBUG" if app_settings.debug_mode else app_settings.log_level
    level = level.upper()
    if json_output is None:
        json_output = app_settings.log_json

    logging.getLogger(LOGGER_NAME).setLevel(getattr(logging, level))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink (for persistence and inspection)
    """

    def __init__(
        self,
        sink: Optional[AuditSinkInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Storage backend for events.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger(f"{LOGGER_NAME}.audit")

    @property
    def sink(self) -> Optional[AuditSinkInterface]:
        return self._sink

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_loaded(
        self,
        transaction_id: str,
        invoice_count: int,
    ) -> None:
        """Log construction of a transaction."""
        self.log(AuditEventBuilder.transaction_loaded(
            transaction_id=transaction_id,
            invoice_count=invoice_count,
        ))

    def log_invoice_linked(
        self,
        invoice_id: str,
        transaction_id: str,
    ) -> None:
        """Log a transaction registering with its invoice."""
        self.log(AuditEventBuilder.invoice_linked(
            invoice_id=invoice_id,
            transaction_id=transaction_id,
        ))

    def log_invoice_not_found(
        self,
        invoice_id: str,
        transaction_id: str,
        transaction_description: str,
    ) -> None:
        """Log an invoice reference the ledger could not resolve."""
        self.log(AuditEventBuilder.invoice_not_found(
            invoice_id=invoice_id,
            transaction_id=transaction_id,
            transaction_description=transaction_description,
        ))

    def log_timestamp_unparsable(
        self,
        transaction_id: Optional[str],
        field_name: str,
        raw_value: str,
    ) -> None:
        """Log a timestamp that failed to parse."""
        self.log(AuditEventBuilder.timestamp_unparsable(
            transaction_id=transaction_id,
            field_name=field_name,
            raw_value=raw_value,
        ))

    def log_comparison_failed(
        self,
        transaction_id: str,
        other_id: Optional[str],
        error_message: str,
    ) -> None:
        """Log an ordering comparison that was degraded to a tie."""
        self.log(AuditEventBuilder.comparison_failed(
            transaction_id=transaction_id,
            other_id=other_id,
            error_message=error_message,
        ))

    def log_render_failed(
        self,
        transaction_id: str,
        error_message: str,
    ) -> None:
        """Log a debug rendering failure."""
        self.log(AuditEventBuilder.render_failed(
            transaction_id=transaction_id,
            error_message=error_message,
        ))
