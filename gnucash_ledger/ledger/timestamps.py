"""
Timestamp Parsing

GnuCash writes timestamps as "yyyy-MM-dd HH:mm:ss Z", for example
"2001-09-18 00:00:00 +0200". The UTC offset is part of the value and is
kept on the parsed datetime.

CRITICAL: A timestamp that does not parse is a data-integrity error.
It is raised with the raw string, NEVER replaced by a default.
"""

import re
from datetime import datetime
from typing import Optional

from gnucash_ledger.ledger.interface import UnparsableTimestampError


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"

# strptime alone would accept one-digit fields, "+02:00" offsets and
# non-ASCII digits
_TIMESTAMP_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2} [+-][0-9]{4}"
)


def parse_timestamp(
    raw: str,
    transaction_id: Optional[str] = None,
    field_name: Optional[str] = None,
) -> datetime:
    """
    Parse a GnuCash timestamp into a timezone-aware datetime.

    Raises:
        UnparsableTimestampError: If raw is missing or malformed
    """
    if not isinstance(raw, str) or not _TIMESTAMP_PATTERN.fullmatch(raw):
        raise UnparsableTimestampError(str(raw), transaction_id, field_name)

    try:
        return datetime.strptime(raw, TIMESTAMP_FORMAT)
    except ValueError as e:
        # Right shape, impossible value (month 13, Feb 30, ...)
        raise UnparsableTimestampError(raw, transaction_id, field_name) from e


class TimestampCache:
    """
    Parse-once cell for one timestamp field of one transaction.

    The first successful parse is kept forever, even if the document node
    changes afterwards. A failed parse is not cached: every access raises
    again with the current raw value.

    Not thread-safe. Force get() before sharing across threads.
    """

    def __init__(
        self,
        field_name: str,
        raw_source,
        transaction_id: Optional[str] = None,
    ):
        """
        Args:
            field_name: Name used in error messages (e.g. "date_posted")
            raw_source: Zero-argument callable returning the raw string
            transaction_id: Owning transaction, for error messages
        """
        self._field_name = field_name
        self._raw_source = raw_source
        self._transaction_id = transaction_id
        self._value: Optional[datetime] = None

    @property
    def field_name(self) -> str:
        return self._field_name

    @property
    def is_cached(self) -> bool:
        return self._value is not None

    def get(self) -> datetime:
        if self._value is None:
            self._value = parse_timestamp(
                self._raw_source(),
                transaction_id=self._transaction_id,
                field_name=self._field_name,
            )
        return self._value
