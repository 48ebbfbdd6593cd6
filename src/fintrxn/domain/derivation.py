"""Derivation of postings from accounting cases."""

from datetime import datetime
from typing import Callable, Optional

from fintrxn.domain.entities import Case, PostingTemplate, RecordState
from fintrxn.domain.errors import UnsupportedCase, case_not_supported
from fintrxn.utils.account_resolver import AccountResolver
from fintrxn.utils.amount_parser import coerce_amount


def posting_template(state: RecordState, trxn_date: datetime) -> PostingTemplate:
    """Build a posting template from contribution data, without accounts.

    The net amount falls back to the total amount when the contribution has
    none.
    """
    total = coerce_amount(state.get("total_amount"))
    net = coerce_amount(state.get("net_amount"))
    return PostingTemplate(
        trxn_date=trxn_date,
        total_amount=total,
        fee_amount=coerce_amount(state.get("fee_amount")),
        net_amount=net if net is not None else total,
        currency=state.get("currency"),
        trxn_id=state.get("trxn_id"),
        status_id=state.get("contribution_status_id"),
        payment_processor_id=state.get("payment_processor_id"),
        payment_instrument_id=state.get("payment_instrument_id"),
        check_number=state.get("check_number"),
    )


class TransactionDeriver:
    """Turn an accounting case into the postings it implies."""

    def __init__(self, resolver: AccountResolver, clock: Optional[Callable[[], datetime]] = None):
        """Initialize transaction deriver.

        Args:
            resolver: Account resolver for from/to accounts
            clock: Source of the transaction date (defaults to datetime.now)
        """
        self.resolver = resolver
        self.clock = clock or datetime.now

    def derive(self, case: Case, old: RecordState, new: RecordState) -> list[PostingTemplate]:
        """Derive the postings for one case.

        Args:
            case: Accounting case
            old: Contribution state before the change
            new: Merged contribution state after the change

        Returns:
            One posting for incoming and outgoing money, a double-entry
            pair for a rebooking

        Raises:
            UnresolvedAccount: If an account cannot be resolved
            UnsupportedCase: For correction cases without posting semantics
        """
        if case is Case.INCOMING:
            return [self._incoming(old, new)]
        if case is Case.OUTGOING:
            return [self._outgoing(old, new)]
        if case is Case.REBOOKING:
            return self._rebooking(old, new)
        raise UnsupportedCase(case_not_supported(case.value), case=case)

    def _incoming(self, old: RecordState, new: RecordState) -> PostingTemplate:
        template = posting_template(new, self.clock())
        return template.between(
            self.resolver.incoming_account(new, fallback=old),
            self.resolver.by_campaign(new),
        )

    def _outgoing(self, old: RecordState, new: RecordState) -> PostingTemplate:
        template = posting_template(new, self.clock())
        return template.between(
            self.resolver.by_campaign(old),
            self.resolver.refund_account(new),
        )

    def _rebooking(self, old: RecordState, new: RecordState) -> list[PostingTemplate]:
        # both accounts resolve before any posting exists
        from_account = self.resolver.by_campaign(old)
        to_account = self.resolver.by_campaign(new)
        posting = posting_template(new, self.clock()).between(from_account, to_account)
        return [posting, posting.reversed()]
