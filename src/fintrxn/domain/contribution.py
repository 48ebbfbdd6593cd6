"""Contribution domain service.

Stores contributions the way a host application would, notifying the
generator before and after every write.
"""

from datetime import datetime
from typing import Any, Callable, Optional

from fintrxn.database.base import Database
from fintrxn.domain.configuration import Configuration
from fintrxn.domain.derivation import TransactionDeriver
from fintrxn.domain.entities import Operation
from fintrxn.domain.errors import NotFoundError
from fintrxn.domain.generator import GenerationResult, Generator
from fintrxn.utils.account_resolver import AccountResolver, LookupCache


def create_generator(
    db: Database,
    config: Optional[Configuration] = None,
    cache: Optional[LookupCache] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Generator:
    """Wire a generator that resolves accounts in and writes postings to ``db``.

    Args:
        db: Database for lookups, stored contributions and postings
        config: Accounting configuration (defaults apply when None)
        cache: Lookup cache to share across generators
        clock: Source of posting dates

    Returns:
        Generator instance
    """
    config = (config or Configuration()).with_posting_counter(db.count_financial_transactions)
    resolver = AccountResolver(db, config, cache)
    return Generator(config, TransactionDeriver(resolver, clock), writer=db, store=db)


class ContributionService:
    """Service for storing contributions and generating their postings."""

    def __init__(self, db: Database, generator: Optional[Generator] = None):
        """Initialize contribution service.

        Args:
            db: Database instance
            generator: Generator to notify, wired to ``db`` when None
        """
        self.db = db
        self.generator = generator or create_generator(db)

    def get_contribution(self, contribution_id: int) -> Optional[dict[str, Any]]:
        """Get the stored state of a contribution."""
        return self.db.get_contribution(contribution_id)

    def create_contribution(self, values: dict[str, Any]) -> tuple[int, GenerationResult]:
        """Store a new contribution and generate its postings.

        Returns:
            Tuple of (contribution ID, generation result)

        Raises:
            PersistenceFailure: If a posting could not be written
        """
        self.generator.before(Operation.CREATE, None, values)
        contribution_id = self.db.create_contribution(values)
        result = self.generator.after(Operation.CREATE, contribution_id, {**values, "id": contribution_id})
        return contribution_id, result

    def update_contribution(self, contribution_id: int, values: dict[str, Any]) -> GenerationResult:
        """Update a stored contribution and generate the postings of the change.

        Raises:
            NotFoundError: If the contribution does not exist
            PersistenceFailure: If a posting could not be written
        """
        stored = self.db.get_contribution(contribution_id)
        if stored is None:
            raise NotFoundError(f"Contribution {contribution_id} not found", subject_id=contribution_id)

        self.generator.before(Operation.EDIT, contribution_id, stored)
        self.db.update_contribution(contribution_id, values)
        return self.generator.after(Operation.EDIT, contribution_id, values)
