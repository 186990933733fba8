"""
Document Node Models

These models describe what the document-tree parser hands us for each
transaction. The parser itself lives elsewhere; this is the contract.

Values are kept exactly as written in the document (rational strings,
timestamp strings). Interpretation happens in the ledger layer, so a
malformed value surfaces where it is read, together with the id of the
transaction it belongs to.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from gnucash_ledger.models.slots import SlotTree


CURRENCY_NAMESPACE = "ISO4217"


class SplitNode(BaseModel):
    """
    One split element of a transaction node.

    value is in the transaction currency, quantity in the account commodity,
    both as GnuCash rationals (e.g. "-1250/100").
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Split GUID"
    )
    value: str = Field(
        default="0/100",
        description="Amount in transaction currency"
    )
    quantity: str = Field(
        default="0/100",
        description="Amount in account commodity"
    )
    account_id: Optional[str] = Field(
        default=None,
        description="GUID of the account this split posts to"
    )
    memo: Optional[str] = None
    action: Optional[str] = None
    reconciled_state: str = Field(
        default="n",
        max_length=1,
        description="n (new), c (cleared), y (reconciled), f (frozen), v (voided)"
    )


class TransactionNode(BaseModel):
    """
    One transaction element of the document.

    slots is optional in the document. When absent, the ledger layer
    attaches a fresh empty SlotTree here.
    """
    id: str = Field(
        ...,
        min_length=1,
        description="Transaction GUID, assigned once at creation"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )
    currency_namespace: str = Field(
        default=CURRENCY_NAMESPACE,
        description="Commodity namespace of the unit of account"
    )
    currency_id: str = Field(
        ...,
        description="Commodity id of the unit of account (e.g. EUR)"
    )
    num: Optional[str] = Field(
        default=None,
        description="User-entered transaction number"
    )
    date_posted: str = Field(
        ...,
        description="When the transaction happened, 'yyyy-MM-dd HH:mm:ss Z'"
    )
    date_entered: str = Field(
        ...,
        description="When the transaction was recorded, 'yyyy-MM-dd HH:mm:ss Z'"
    )
    slots: Optional[SlotTree] = None
    splits: list[SplitNode] = Field(default_factory=list)
