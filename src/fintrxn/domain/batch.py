"""Batch domain service."""

from fintrxn.database.base import Database
from fintrxn.domain.entities import FINANCIAL_TRXN_TABLE
from fintrxn.domain.errors import NotFoundError, batch_not_unique


class BatchService:
    """Access to the postings collected in one accounting batch."""

    def __init__(self, db: Database, batch_id: int):
        """Initialize batch service.

        Args:
            db: Database instance
            batch_id: Batch ID

        Raises:
            NotFoundError: If the ID does not identify exactly one batch
        """
        count = db.count_batches(batch_id)
        if count != 1:
            raise NotFoundError(batch_not_unique(batch_id, count))
        self.db = db
        self.batch_id = batch_id

    def add_financial_transaction(self, trxn_id: int) -> None:
        """Assign a posting to this batch."""
        self.db.add_to_batch(self.batch_id, FINANCIAL_TRXN_TABLE, trxn_id)

    def get_financial_transaction_ids(self) -> list[int]:
        """Get the IDs of the postings in this batch.

        Returns:
            Posting IDs, ignoring other entities assigned to the batch
        """
        return [
            entity_id
            for entity_table, entity_id in self.db.list_batch_entities(self.batch_id)
            if entity_table == FINANCIAL_TRXN_TABLE
        ]
