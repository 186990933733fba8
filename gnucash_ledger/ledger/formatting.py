"""
Amount and Date Formatting

Locale-aware currency rendering is NOT done here. This is the plain
default used when a caller does not bring its own formatter: grouped
digits, a fixed number of decimals for currencies, and the ISO 4217 code.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Optional

from gnucash_ledger.config import FormattingSettings, get_settings
from gnucash_ledger.models.nodes import CURRENCY_NAMESPACE
from gnucash_ledger.models.numbers import FixedPointNumber


class CurrencyFormatter:
    """
    Renders amounts of one commodity.

    Currencies (namespace ISO4217) get a fixed number of decimals and
    their code, e.g. "1,234.50 EUR". Other commodities (stocks, funds)
    are rendered as plain grouped numbers at their stored scale.
    """

    def __init__(
        self,
        currency_namespace: str,
        currency_id: str,
        settings: Optional[FormattingSettings] = None,
    ):
        self._namespace = currency_namespace
        self._currency_id = currency_id
        self._settings = settings or get_settings().formatting

    @property
    def is_currency(self) -> bool:
        return self._namespace == CURRENCY_NAMESPACE

    def format(self, amount: FixedPointNumber) -> str:
        value = amount.to_decimal()

        if self.is_currency:
            # Display only - the underlying number is left untouched
            places = self._settings.decimal_places
            value = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)
            text = f"{value:,.{places}f}"
        else:
            text = f"{value:,f}"

        text = text.replace(",", self._settings.thousands_separator)

        if self.is_currency:
            return f"{text} {self._currency_id}"
        return text


def format_date(value: datetime, settings: Optional[FormattingSettings] = None) -> str:
    """Render a date with the configured strftime pattern."""
    settings = settings or get_settings().formatting
    return value.strftime(settings.date_format)
