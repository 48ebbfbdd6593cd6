"""Domain model entities for fintrxn.

These are pure data classes representing accounting concepts, independent of
the database schema. Contribution states themselves stay plain mappings since
the host decides which fields a contribution carries.
"""

from dataclasses import dataclass, replace
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

# Table name batches use to refer to postings
FINANCIAL_TRXN_TABLE = "civicrm_financial_trxn"

# A contribution as seen by the host: field name -> scalar value
RecordState = Mapping[str, Any]


class Operation(str, Enum):
    """Kind of host operation a generation session belongs to."""

    CREATE = "create"
    EDIT = "edit"


class Case(str, Enum):
    """Accounting case derived from a contribution change."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"
    REBOOKING = "rebooking"
    AMOUNT_CORRECTION = "amount correction"
    RECEIVE_DATE_CORRECTION = "receive date correction"
    REFUND_DATE_CORRECTION = "refund date correction"


@dataclass(frozen=True)
class FinancialAccount:
    """Financial account domain entity."""

    id: int
    name: str
    accounting_code: Optional[str]
    account_type_code: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Campaign:
    """Campaign domain entity with its accounting-code classification."""

    id: int
    title: str
    start_date: Optional[date]
    cocoa_code_acquisition: Optional[str]
    cocoa_code_follow: Optional[str]
    cocoa_profit_loss: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class PostingTemplate:
    """One movement of funds between two financial accounts."""

    trxn_date: datetime
    total_amount: Optional[Decimal]
    fee_amount: Optional[Decimal]
    net_amount: Optional[Decimal]
    currency: Optional[str]
    trxn_id: Optional[str]
    status_id: Any
    payment_processor_id: Any
    payment_instrument_id: Any
    check_number: Optional[str]
    from_account: Optional[int] = None
    to_account: Optional[int] = None
    trxn_result_code: str = ""

    def between(self, from_account: int, to_account: int) -> "PostingTemplate":
        """Return a copy of this template booked between the given accounts."""
        return replace(self, from_account=from_account, to_account=to_account)

    def reversed(self) -> "PostingTemplate":
        """Return the double-entry counterpart: accounts swapped, amount negated."""
        total = -self.total_amount if self.total_amount is not None else None
        return replace(
            self,
            from_account=self.to_account,
            to_account=self.from_account,
            total_amount=total,
        )


@dataclass(frozen=True)
class FinancialTransaction:
    """Persisted posting domain entity."""

    id: int
    contribution_id: Optional[int]
    trxn_date: datetime
    total_amount: Optional[Decimal]
    fee_amount: Optional[Decimal]
    net_amount: Optional[Decimal]
    currency: Optional[str]
    trxn_id: Optional[str]
    trxn_result_code: str
    status_id: Optional[str]
    payment_processor_id: Optional[str]
    payment_instrument_id: Optional[str]
    check_number: Optional[str]
    from_account_id: int
    to_account_id: int


@dataclass(frozen=True)
class Batch:
    """Accounting batch domain entity."""

    id: int
    title: str
    created_at: datetime
