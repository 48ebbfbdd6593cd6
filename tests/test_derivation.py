"""Tests for posting derivation."""

from decimal import Decimal
import pytest

from fintrxn.domain.derivation import posting_template
from fintrxn.domain.entities import Case
from fintrxn.domain.errors import UnresolvedAccount, UnsupportedCase

from conftest import FIXED_NOW, INCOMING_IBAN, REFUND_IBAN


def test_template_copies_contribution_fields():
    template = posting_template(
        {
            "total_amount": "100.00",
            "fee_amount": "1.50",
            "currency": "EUR",
            "trxn_id": "TX-1",
            "contribution_status_id": 1,
            "payment_instrument_id": 5,
            "check_number": "0042",
        },
        FIXED_NOW,
    )
    assert template.total_amount == Decimal("100.00")
    assert template.fee_amount == Decimal("1.50")
    assert template.net_amount == Decimal("100.00")
    assert template.currency == "EUR"
    assert template.trxn_id == "TX-1"
    assert template.status_id == 1
    assert template.payment_instrument_id == 5
    assert template.check_number == "0042"
    assert template.trxn_result_code == ""
    assert template.trxn_date == FIXED_NOW
    assert template.from_account is None and template.to_account is None


def test_template_keeps_explicit_net_amount():
    template = posting_template({"total_amount": 100, "net_amount": "98.50"}, FIXED_NOW)
    assert template.net_amount == Decimal("98.50")


def test_incoming(deriver):
    new = {
        "contribution_status_id": "completed",
        "total_amount": 100,
        "campaign_id": 7,
        "receive_date": "2020-03-01",
        "incoming_bank_account": INCOMING_IBAN,
    }
    [posting] = deriver.derive(Case.INCOMING, {}, new)
    assert posting.from_account == 1
    assert posting.to_account == 10
    assert posting.total_amount == Decimal("100")


def test_incoming_uses_old_iban_when_new_has_none(deriver):
    old = {"incoming_bank_account": INCOMING_IBAN, "campaign_id": 9}
    new = {"incoming_bank_account": "", "campaign_id": 9, "total_amount": 5}
    [posting] = deriver.derive(Case.INCOMING, old, new)
    assert posting.from_account == 1
    assert posting.to_account == 12


def test_outgoing(deriver):
    old = {"contribution_status_id": "completed", "campaign_id": 7, "receive_date": "2020-03-01"}
    new = {**old, "contribution_status_id": "cancelled", "refund_bank_account": REFUND_IBAN}
    [posting] = deriver.derive(Case.OUTGOING, old, new)
    assert posting.from_account == 10
    assert posting.to_account == 2
    assert posting.status_id == "cancelled"


def test_rebooking_is_symmetric(deriver):
    old = {"campaign_id": 7, "receive_date": "2020-03-01", "total_amount": "25.00"}
    new = {**old, "campaign_id": 9}
    first, second = deriver.derive(Case.REBOOKING, old, new)

    assert (first.from_account, first.to_account) == (10, 12)
    assert (second.from_account, second.to_account) == (12, 10)
    assert first.total_amount == Decimal("25.00")
    assert second.total_amount == -first.total_amount
    assert first.total_amount + second.total_amount == 0


def test_rebooking_with_unresolvable_side_derives_nothing(deriver):
    old = {"campaign_id": 42, "total_amount": 10}
    new = {**old, "campaign_id": 9}
    with pytest.raises(UnresolvedAccount):
        deriver.derive(Case.REBOOKING, old, new)


@pytest.mark.parametrize(
    "case",
    [Case.AMOUNT_CORRECTION, Case.RECEIVE_DATE_CORRECTION, Case.REFUND_DATE_CORRECTION],
)
def test_correction_cases_are_unsupported(deriver, fake_db, case):
    with pytest.raises(UnsupportedCase) as exc_info:
        deriver.derive(case, {"campaign_id": 7}, {"campaign_id": 7})
    assert exc_info.value.case is case
    assert fake_db.lookups == []
