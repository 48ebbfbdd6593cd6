"""Accounting configuration: status groups, field roles and change predicates.

The configuration is static data resolved once at startup. Field roles map a
logical meaning (e.g. "incoming bank account") to the field identifier the
host uses for it, so nothing downstream has to recognise custom fields by
their names.
"""

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Callable, Collection, Mapping, Optional

from fintrxn.domain.errors import ValidationError
from fintrxn.utils.date_parser import coerce_date

INCOMING_BANK_ACCOUNT = "incoming_bank_account"
REFUND_BANK_ACCOUNT = "refund_bank_account"
ACQUISITION_YEAR_CODE = "acquisition_year_code"
FOLLOWING_YEARS_CODE = "following_years_code"

DEFAULT_FIELD_ROLES = {
    INCOMING_BANK_ACCOUNT: "incoming_bank_account",
    REFUND_BANK_ACCOUNT: "refund_bank_account",
    ACQUISITION_YEAR_CODE: "cocoa_code_acquisition",
    FOLLOWING_YEARS_CODE: "cocoa_code_follow",
}


def _status_key(status: Any) -> Optional[str]:
    if status is None or status == "":
        return None
    return str(status).strip()


@dataclass(frozen=True)
class Configuration:
    """Static accounting policy consumed by the classifier and resolver."""

    completed_statuses: frozenset = frozenset({"1"})
    returned_statuses: frozenset = frozenset({"3", "7"})
    amount_fields: frozenset = frozenset({"total_amount", "fee_amount", "net_amount"})
    account_fields: frozenset = frozenset({"campaign_id", "financial_type_id"})
    field_roles: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_FIELD_ROLES))
    posting_counter: Optional[Callable[[Any], int]] = field(default=None, compare=False)

    def __post_init__(self):
        missing = set(DEFAULT_FIELD_ROLES) - set(self.field_roles)
        if missing:
            raise ValidationError(f"Missing field roles: {', '.join(sorted(missing))}")
        # status ids compare loosely, "1" and 1 are the same status
        object.__setattr__(
            self, "completed_statuses", frozenset(_status_key(s) for s in self.completed_statuses)
        )
        object.__setattr__(
            self, "returned_statuses", frozenset(_status_key(s) for s in self.returned_statuses)
        )

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], posting_counter: Optional[Callable[[Any], int]] = None
    ) -> "Configuration":
        """Build a configuration from plain data, e.g. a parsed JSON file.

        Unknown keys are rejected so that typos do not silently fall back
        to defaults.
        """
        known = {
            "completed_statuses",
            "returned_statuses",
            "amount_fields",
            "account_fields",
            "field_roles",
        }
        unknown = set(data) - known
        if unknown:
            raise ValidationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        kwargs: dict[str, Any] = {}
        for key in ("completed_statuses", "returned_statuses", "amount_fields", "account_fields"):
            if key in data:
                kwargs[key] = frozenset(data[key])
        if "field_roles" in data:
            kwargs["field_roles"] = {**DEFAULT_FIELD_ROLES, **data["field_roles"]}
        return cls(posting_counter=posting_counter, **kwargs)

    @classmethod
    def from_file(
        cls, path: str | Path, posting_counter: Optional[Callable[[Any], int]] = None
    ) -> "Configuration":
        """Load a configuration from a JSON file."""
        try:
            data = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ValidationError(f"Could not read configuration '{path}': {e}")
        return cls.from_mapping(data, posting_counter=posting_counter)

    def with_posting_counter(self, posting_counter: Callable[[Any], int]) -> "Configuration":
        """Return a copy that answers has_existing_postings with the given counter."""
        return Configuration(
            completed_statuses=self.completed_statuses,
            returned_statuses=self.returned_statuses,
            amount_fields=self.amount_fields,
            account_fields=self.account_fields,
            field_roles=self.field_roles,
            posting_counter=posting_counter,
        )

    # Status predicates
    def is_completed(self, status: Any) -> bool:
        return _status_key(status) in self.completed_statuses

    def is_returned(self, status: Any) -> bool:
        return _status_key(status) in self.returned_statuses

    # Change-set predicates
    def is_new_record_change(self, changes: Collection[str]) -> bool:
        """A change that assigns the record id is the creation of the record."""
        return "id" in changes

    def is_account_relevant_change(self, changes: Collection[str]) -> bool:
        relevant = self.account_fields | {self.incoming_bank_account_field}
        return any(f in relevant for f in changes)

    def is_amount_change(self, changes: Collection[str]) -> bool:
        return any(f in self.amount_fields for f in changes)

    def has_existing_postings(self, state: Mapping[str, Any]) -> bool:
        contribution_id = state.get("id")
        if self.posting_counter is None or contribution_id in (None, ""):
            return False
        return self.posting_counter(contribution_id) > 0

    # Field roles
    @property
    def incoming_bank_account_field(self) -> str:
        return self.field_roles[INCOMING_BANK_ACCOUNT]

    @property
    def refund_bank_account_field(self) -> str:
        return self.field_roles[REFUND_BANK_ACCOUNT]

    @property
    def campaign_accounting_code_fields(self) -> tuple[str, str]:
        """Campaign fields holding the acquisition-year and following-years codes."""
        return (self.field_roles[ACQUISITION_YEAR_CODE], self.field_roles[FOLLOWING_YEARS_CODE])

    def resolve_accounting_code_for_date(
        self, campaign: Mapping[str, Any], receive_date: Any
    ) -> Optional[str]:
        """Pick the campaign accounting code that applies on the receive date.

        Contributions received in the campaign's acquisition year (the year
        of its start date) book on the acquisition-year code, later ones on
        the following-years code. Without a start date or a receive date the
        acquisition-year code applies.
        """
        acquisition_field, follow_field = self.campaign_accounting_code_fields
        start: Optional[date] = coerce_date(campaign.get("start_date"))
        received: Optional[date] = coerce_date(receive_date)

        if start is None or received is None or received.year <= start.year:
            code = campaign.get(acquisition_field)
        else:
            code = campaign.get(follow_field)
        return code or None
