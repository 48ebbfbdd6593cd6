"""Utility for resolving contributions to financial account IDs."""

import json
import threading
from typing import Any, Mapping, Optional

from fintrxn.database.base import Database
from fintrxn.domain.configuration import Configuration
from fintrxn.domain.entities import RecordState
from fintrxn.domain.errors import (
    UnresolvedAccount,
    account_not_found,
    campaign_not_found,
    missing_field,
)
from fintrxn.logging_setup import get_logger

logger = get_logger("fintrxn.utils.account_resolver")

FINANCIAL_ACCOUNT = "FinancialAccount"
CAMPAIGN = "Campaign"


class LookupCache:
    """Process-lifetime memo of single-record lookups.

    Misses (no match or several matches) are cached as None as well. Racing
    lookups of the same key may both hit the database; the later result
    simply overwrites an identical earlier one.
    """

    def __init__(self):
        self._entries: dict[tuple[str, str], Optional[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(entity: str, criteria: Mapping[str, Any]) -> tuple[str, str]:
        return entity, json.dumps(criteria, sort_keys=True, default=str)

    def get(self, key: tuple[str, str]) -> tuple[bool, Optional[dict[str, Any]]]:
        with self._lock:
            if key in self._entries:
                return True, self._entries[key]
        return False, None

    def put(self, key: tuple[str, str], value: Optional[dict[str, Any]]) -> None:
        with self._lock:
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class AccountResolver:
    """Resolve the financial accounts a contribution books from and to."""

    def __init__(self, db: Database, config: Configuration, cache: Optional[LookupCache] = None):
        """Initialize account resolver.

        Args:
            db: Database used for lookups
            config: Accounting configuration
            cache: Lookup cache, shared between resolvers when given
        """
        self.db = db
        self.config = config
        self.cache = cache if cache is not None else LookupCache()

    def cached_lookup(self, entity: str, criteria: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        """Look up exactly one record, None when there are zero or several matches."""
        key = LookupCache.key(entity, criteria)
        found, record = self.cache.get(key)
        if found:
            return record

        rows = self.db.lookup(entity, dict(criteria))
        if len(rows) == 1:
            record = rows[0]
        else:
            logger.debug("%s lookup %s matched %d records", entity, key[1], len(rows))
            record = None
        self.cache.put(key, record)
        return record

    def by_bank_account(self, iban: Any) -> int:
        """Resolve a financial account from a bank account identifier.

        Raises:
            UnresolvedAccount: If no single account carries this IBAN
        """
        lookup_key = f"IBAN '{iban}'"
        if iban is None or iban == "":
            raise UnresolvedAccount(account_not_found(lookup_key), lookup_key=lookup_key)
        account = self.cached_lookup(FINANCIAL_ACCOUNT, {"name": str(iban)})
        if account is None:
            raise UnresolvedAccount(account_not_found(lookup_key), lookup_key=lookup_key)
        return account["id"]

    def incoming_account(self, state: RecordState, fallback: RecordState) -> int:
        """Resolve the account incoming money arrives on, falling back to an older state's IBAN."""
        field = self.config.incoming_bank_account_field
        iban = state.get(field) or fallback.get(field)
        if not iban:
            raise UnresolvedAccount(missing_field(field, "incoming"), lookup_key=field)
        return self.by_bank_account(iban)

    def refund_account(self, state: RecordState) -> int:
        """Resolve the account refunded money leaves to."""
        field = self.config.refund_bank_account_field
        iban = state.get(field)
        if not iban:
            raise UnresolvedAccount(missing_field(field, "refund"), lookup_key=field)
        return self.by_bank_account(iban)

    def by_campaign(self, state: RecordState) -> int:
        """Resolve the target account from the campaign's accounting-code classification.

        Raises:
            UnresolvedAccount: If the contribution has no campaign, the
                campaign or its code is missing, or no single account has
                that accounting code
        """
        campaign_id = state.get("campaign_id") or state.get("contribution_campaign_id")
        if not campaign_id:
            raise UnresolvedAccount(missing_field("campaign_id", "target"), lookup_key="campaign_id")

        if str(campaign_id).isdigit():
            campaign_id = int(campaign_id)
        campaign = self.cached_lookup(CAMPAIGN, {"id": campaign_id})
        if campaign is None:
            lookup_key = f"campaign {campaign_id}"
            raise UnresolvedAccount(campaign_not_found(campaign_id), lookup_key=lookup_key)

        code = self.config.resolve_accounting_code_for_date(campaign, state.get("receive_date"))
        lookup_key = f"accounting code '{code}' of campaign {campaign_id}"
        if code is None:
            raise UnresolvedAccount(account_not_found(lookup_key), lookup_key=lookup_key)

        account = self.cached_lookup(FINANCIAL_ACCOUNT, {"accounting_code": code})
        if account is None:
            raise UnresolvedAccount(account_not_found(lookup_key), lookup_key=lookup_key)
        return account["id"]
