"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from fintrxn.domain.entities import (
    Batch,
    Campaign,
    FinancialAccount,
    FinancialTransaction,
    PostingTemplate,
)


class Database(ABC):
    """Abstract database interface for fintrxn."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Record lookup
    @abstractmethod
    def lookup(self, entity: str, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        """Find the records of an entity kind matching all criteria.

        Args:
            entity: Entity kind, "FinancialAccount" or "Campaign"
            criteria: Field name -> required value

        Returns:
            All matching records as dicts (empty when nothing matches)

        Raises:
            ValidationError: If the entity kind or a criteria field is unknown
        """
        pass

    # Financial account operations
    @abstractmethod
    def create_financial_account(
        self,
        name: str,
        accounting_code: Optional[str] = None,
        account_type_code: Optional[str] = None,
    ) -> int:
        """Create a financial account. Returns account ID."""
        pass

    @abstractmethod
    def get_financial_account(self, account_id: int) -> Optional[FinancialAccount]:
        """Get financial account by ID."""
        pass

    @abstractmethod
    def list_financial_accounts(self) -> list[FinancialAccount]:
        """List all financial accounts."""
        pass

    # Campaign operations
    @abstractmethod
    def create_campaign(
        self,
        title: str,
        cocoa_code_acquisition: Optional[str] = None,
        cocoa_code_follow: Optional[str] = None,
        cocoa_profit_loss: Optional[str] = None,
        start_date: Optional[date] = None,
    ) -> int:
        """Create a campaign. Returns campaign ID."""
        pass

    @abstractmethod
    def get_campaign(self, campaign_id: int) -> Optional[Campaign]:
        """Get campaign by ID."""
        pass

    @abstractmethod
    def list_campaigns(self) -> list[Campaign]:
        """List all campaigns."""
        pass

    # Contribution operations
    @abstractmethod
    def create_contribution(self, data: dict[str, Any]) -> int:
        """Store a new contribution. Returns contribution ID."""
        pass

    @abstractmethod
    def get_contribution(self, contribution_id: int) -> Optional[dict[str, Any]]:
        """Get the stored state of a contribution, including its id."""
        pass

    @abstractmethod
    def update_contribution(self, contribution_id: int, data: dict[str, Any]) -> None:
        """Overwrite the given fields of a stored contribution."""
        pass

    # Posting operations
    @abstractmethod
    def write_posting(self, posting: PostingTemplate, contribution_id: Any = None) -> int:
        """Persist a posting. Returns financial transaction ID.

        Raises:
            PersistenceFailure: If the posting could not be stored
        """
        pass

    @abstractmethod
    def write_postings(self, postings: list[PostingTemplate], contribution_id: Any = None) -> list[int]:
        """Persist several postings in one transaction. Returns financial transaction IDs.

        Either all postings are stored or none is.

        Raises:
            PersistenceFailure: If the postings could not be stored
        """
        pass

    @abstractmethod
    def list_financial_transactions(
        self, contribution_id: Optional[int] = None
    ) -> list[FinancialTransaction]:
        """List postings, optionally only those of one contribution."""
        pass

    @abstractmethod
    def count_financial_transactions(self, contribution_id: Any) -> int:
        """Count the postings of a contribution."""
        pass

    # Batch operations
    @abstractmethod
    def create_batch(self, title: str) -> int:
        """Create a batch. Returns batch ID."""
        pass

    @abstractmethod
    def get_batch(self, batch_id: int) -> Optional[Batch]:
        """Get batch by ID."""
        pass

    @abstractmethod
    def count_batches(self, batch_id: int) -> int:
        """Count batches with the given ID (0 or 1)."""
        pass

    @abstractmethod
    def add_to_batch(self, batch_id: int, entity_table: str, entity_id: int) -> None:
        """Assign an entity row to a batch."""
        pass

    @abstractmethod
    def list_batch_entities(self, batch_id: int) -> list[tuple[str, int]]:
        """List (entity_table, entity_id) pairs assigned to a batch."""
        pass
