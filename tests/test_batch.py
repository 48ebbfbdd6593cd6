"""Tests for accounting batches."""

import pytest

from fintrxn.domain.batch import BatchService
from fintrxn.domain.entities import FINANCIAL_TRXN_TABLE
from fintrxn.domain.errors import NotFoundError


def test_missing_batch(temp_db):
    with pytest.raises(NotFoundError, match="single batch with id 3, found 0"):
        BatchService(temp_db, 3)


def test_batch_collects_postings(temp_db, completed_contribution):
    batch_id = temp_db.create_batch("March")
    service = BatchService(temp_db, batch_id)
    [posting] = temp_db.list_financial_transactions(contribution_id=completed_contribution)

    service.add_financial_transaction(posting.id)
    service.add_financial_transaction(posting.id)

    assert service.get_financial_transaction_ids() == [posting.id]


def test_other_entities_are_ignored(temp_db):
    batch_id = temp_db.create_batch("Mixed")
    temp_db.add_to_batch(batch_id, "civicrm_contribution", 12)
    temp_db.add_to_batch(batch_id, FINANCIAL_TRXN_TABLE, 4)
    assert BatchService(temp_db, batch_id).get_financial_transaction_ids() == [4]


def test_add_to_missing_batch(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.add_to_batch(8, FINANCIAL_TRXN_TABLE, 1)
