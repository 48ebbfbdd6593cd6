"""Tests for accounting case classification."""

from fintrxn.domain.changes import compute_changes
from fintrxn.domain.classifier import classify_cases
from fintrxn.domain.configuration import Configuration
from fintrxn.domain.entities import Case


def classify(old, supplied, config):
    new, changes = compute_changes(old, supplied)
    return classify_cases(old, new, changes, config)


def test_no_changes_no_cases(config):
    old = {"id": 5, "contribution_status_id": "completed", "campaign_id": 7}
    assert classify(old, {"campaign_id": "7"}, config) == []


def test_creation_as_completed_is_incoming(config):
    supplied = {
        "id": 1,
        "contribution_status_id": "completed",
        "total_amount": 100,
        "campaign_id": 7,
        "receive_date": "2020-03-01",
    }
    assert classify({}, supplied, config) == [Case.INCOMING]


def test_completion_dominates_other_changes(config):
    old = {"id": 5, "contribution_status_id": "pending", "campaign_id": 7, "total_amount": 10}
    supplied = {"contribution_status_id": "completed", "campaign_id": 9, "total_amount": 20}
    assert classify(old, supplied, config) == [Case.INCOMING]


def test_completed_reversed_is_outgoing(config):
    old = {"id": 5, "contribution_status_id": "completed", "campaign_id": 7}
    assert classify(old, {"contribution_status_id": "cancelled"}, config) == [Case.OUTGOING]


def test_reversal_on_new_record_is_not_outgoing(config):
    # a record that only now gets its id cannot have been completed before
    old = {"contribution_status_id": "completed"}
    supplied = {"id": 3, "contribution_status_id": "pending"}
    assert Case.OUTGOING not in classify(old, supplied, config)


def test_campaign_change_while_completed_is_rebooking(config):
    old = {"id": 5, "contribution_status_id": "completed", "campaign_id": 7}
    supplied = {"contribution_status_id": "completed", "campaign_id": 9}
    assert classify(old, supplied, config) == [Case.REBOOKING]


def test_incoming_bank_account_change_is_rebooking(config):
    old = {"id": 5, "contribution_status_id": "completed", "incoming_bank_account": "A"}
    assert classify(old, {"incoming_bank_account": "B"}, config) == [Case.REBOOKING]


def test_status_change_between_non_completed_statuses_falls_through(config):
    old = {"id": 5, "contribution_status_id": "pending", "campaign_id": 7}
    supplied = {"contribution_status_id": "failed", "campaign_id": 9}
    assert classify(old, supplied, config) == [Case.REBOOKING]


def test_independent_cases_keep_their_order(config):
    old = {"id": 5, "contribution_status_id": "completed", "campaign_id": 7, "total_amount": 10}
    supplied = {"campaign_id": 9, "total_amount": 20}
    assert classify(old, supplied, config) == [Case.REBOOKING, Case.AMOUNT_CORRECTION]


def test_receive_date_correction_needs_existing_postings():
    old = {"id": 5, "contribution_status_id": "1", "receive_date": "2020-03-01"}
    supplied = {"receive_date": "2020-03-05"}

    without_postings = Configuration(posting_counter=lambda cid: 0)
    with_postings = Configuration(posting_counter=lambda cid: 1)

    assert classify(old, supplied, without_postings) == []
    assert classify(old, supplied, with_postings) == [Case.RECEIVE_DATE_CORRECTION]


def test_refund_date_correction_needs_returned_status(config):
    returned = {"id": 5, "contribution_status_id": "refunded", "refund_date": "2020-04-01"}
    pending = {"id": 5, "contribution_status_id": "pending", "refund_date": "2020-04-01"}
    supplied = {"refund_date": "2020-04-03"}

    assert classify(returned, supplied, config) == [Case.REFUND_DATE_CORRECTION]
    assert classify(pending, supplied, config) == []
