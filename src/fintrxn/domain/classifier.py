"""Classification of contribution changes into accounting cases."""

from typing import Collection

from fintrxn.domain.configuration import Configuration
from fintrxn.domain.entities import Case, RecordState
from fintrxn.logging_setup import get_logger

logger = get_logger("fintrxn.domain.classifier")


def classify_cases(
    old: RecordState,
    new: RecordState,
    changes: Collection[str],
    config: Configuration,
) -> list[Case]:
    """Determine the accounting cases implied by a contribution change.

    A status change to or from "completed" creates or reverses the whole
    economic event and is the only case reported when it happens. Otherwise
    rebooking, amount and date corrections are detected independently, in
    that order.

    Args:
        old: Contribution state before the change
        new: Merged contribution state after the change
        changes: Names of the fields that changed
        config: Accounting configuration

    Returns:
        Ordered list of cases, possibly empty
    """
    old_status = old.get("contribution_status_id")
    new_status = new.get("contribution_status_id")

    if "contribution_status_id" in changes:
        logger.debug("Status changed from %s to %s", old_status, new_status)
        if not config.is_completed(old_status) and config.is_completed(new_status):
            return [Case.INCOMING]
        if (
            config.is_completed(old_status)
            and not config.is_completed(new_status)
            and not config.is_new_record_change(changes)
        ):
            return [Case.OUTGOING]

    cases = []
    if config.is_account_relevant_change(changes):
        cases.append(Case.REBOOKING)
    if config.is_amount_change(changes):
        cases.append(Case.AMOUNT_CORRECTION)
    if "receive_date" in changes and config.has_existing_postings(new):
        cases.append(Case.RECEIVE_DATE_CORRECTION)
    if "refund_date" in changes and config.is_returned(new_status):
        cases.append(Case.REFUND_DATE_CORRECTION)
    return cases
