"""Mapper functions to convert between domain models and SQLAlchemy models.

Lookup results are plain dicts, since the engine only asks the database for
single records by arbitrary criteria.
"""

from typing import Any

from fintrxn.domain import entities as domain
from fintrxn.database.models import (
    FinancialAccount as ORMFinancialAccount,
    Campaign as ORMCampaign,
    FinancialTrxn as ORMFinancialTrxn,
    Batch as ORMBatch,
)


def financial_account_to_domain(orm_account: ORMFinancialAccount) -> domain.FinancialAccount:
    """Convert SQLAlchemy FinancialAccount model to domain entity."""
    return domain.FinancialAccount(
        id=orm_account.id,
        name=orm_account.name,
        accounting_code=orm_account.accounting_code,
        account_type_code=orm_account.account_type_code,
        created_at=orm_account.created_at,
    )


def campaign_to_domain(orm_campaign: ORMCampaign) -> domain.Campaign:
    """Convert SQLAlchemy Campaign model to domain entity."""
    return domain.Campaign(
        id=orm_campaign.id,
        title=orm_campaign.title,
        start_date=orm_campaign.start_date,
        cocoa_code_acquisition=orm_campaign.cocoa_code_acquisition,
        cocoa_code_follow=orm_campaign.cocoa_code_follow,
        cocoa_profit_loss=orm_campaign.cocoa_profit_loss,
        created_at=orm_campaign.created_at,
    )


def financial_trxn_to_domain(orm_trxn: ORMFinancialTrxn) -> domain.FinancialTransaction:
    """Convert SQLAlchemy FinancialTrxn model to domain entity."""
    return domain.FinancialTransaction(
        id=orm_trxn.id,
        contribution_id=orm_trxn.contribution_id,
        trxn_date=orm_trxn.trxn_date,
        total_amount=orm_trxn.total_amount,
        fee_amount=orm_trxn.fee_amount,
        net_amount=orm_trxn.net_amount,
        currency=orm_trxn.currency,
        trxn_id=orm_trxn.trxn_id,
        trxn_result_code=orm_trxn.trxn_result_code,
        status_id=orm_trxn.status_id,
        payment_processor_id=orm_trxn.payment_processor_id,
        payment_instrument_id=orm_trxn.payment_instrument_id,
        check_number=orm_trxn.check_number,
        from_account_id=orm_trxn.from_financial_account_id,
        to_account_id=orm_trxn.to_financial_account_id,
    )


def batch_to_domain(orm_batch: ORMBatch) -> domain.Batch:
    """Convert SQLAlchemy Batch model to domain entity."""
    return domain.Batch(id=orm_batch.id, title=orm_batch.title, created_at=orm_batch.created_at)


def posting_to_orm(posting: domain.PostingTemplate, contribution_id: Any) -> ORMFinancialTrxn:
    """Convert a posting template into a new SQLAlchemy FinancialTrxn row."""

    def _text(value: Any):
        return None if value is None or value == "" else str(value)

    return ORMFinancialTrxn(
        contribution_id=contribution_id,
        trxn_date=posting.trxn_date,
        total_amount=posting.total_amount,
        fee_amount=posting.fee_amount,
        net_amount=posting.net_amount,
        currency=posting.currency,
        trxn_id=_text(posting.trxn_id),
        trxn_result_code=posting.trxn_result_code,
        status_id=_text(posting.status_id),
        payment_processor_id=_text(posting.payment_processor_id),
        payment_instrument_id=_text(posting.payment_instrument_id),
        check_number=_text(posting.check_number),
        from_financial_account_id=posting.from_account,
        to_financial_account_id=posting.to_account,
    )


def row_to_dict(orm_row: Any) -> dict[str, Any]:
    """Convert any SQLAlchemy model instance into a dict of its columns."""
    return {column.name: getattr(orm_row, column.name) for column in orm_row.__table__.columns}
