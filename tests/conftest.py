"""Shared pytest fixtures for fintrxn tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal
import pytest

from fintrxn.database.factories import create_sqlite_database
from fintrxn.domain.configuration import Configuration
from fintrxn.domain.contribution import ContributionService, create_generator
from fintrxn.domain.derivation import TransactionDeriver
from fintrxn.domain.errors import PersistenceFailure
from fintrxn.utils.account_resolver import AccountResolver, LookupCache

FIXED_NOW = datetime(2020, 3, 2, 10, 30, 0)

INCOMING_IBAN = "BE68539007547034"
REFUND_IBAN = "BE71096123456769"


class FakeDatabase:
    """In-memory stand-in for the lookup and posting parts of Database.

    Counts lookups so tests can check what reaches the database. With
    ``fail_on_posting`` set, the write of that posting (counting from 1
    across all writes) fails and its whole batch of postings is dropped.
    """

    def __init__(self, accounts=None, campaigns=None, fail_writes=False, fail_on_posting=None):
        self.records = {
            "FinancialAccount": list(accounts or []),
            "Campaign": list(campaigns or []),
        }
        self.lookups = []
        self.postings = []
        self.fail_writes = fail_writes
        self.fail_on_posting = fail_on_posting
        self.attempted = 0
        self.contributions = {}

    def lookup(self, entity, criteria):
        self.lookups.append((entity, dict(criteria)))
        return [
            r
            for r in self.records[entity]
            if all(str(r.get(k)) == str(v) for k, v in criteria.items())
        ]

    def write_postings(self, postings, contribution_id=None):
        if self.fail_writes:
            raise PersistenceFailure("disk full", subject_id=contribution_id)
        pending = []
        for posting in postings:
            self.attempted += 1
            if self.attempted == self.fail_on_posting:
                raise PersistenceFailure("disk full", subject_id=contribution_id)
            pending.append((contribution_id, posting))
        self.postings.extend(pending)
        return list(range(len(self.postings) - len(pending) + 1, len(self.postings) + 1))

    def write_posting(self, posting, contribution_id=None):
        return self.write_postings([posting], contribution_id)[0]

    def count_financial_transactions(self, contribution_id):
        return sum(1 for cid, _ in self.postings if str(cid) == str(contribution_id))

    def get_contribution(self, contribution_id):
        return self.contributions.get(contribution_id)


@pytest.fixture
def config():
    """Configuration with readable status names."""
    return Configuration(
        completed_statuses={"completed"},
        returned_statuses={"cancelled", "refunded"},
    )


@pytest.fixture
def fake_db():
    """Fake database with two bank accounts, three ledger accounts and two campaigns."""
    return FakeDatabase(
        accounts=[
            {"id": 1, "name": INCOMING_IBAN, "accounting_code": None},
            {"id": 2, "name": REFUND_IBAN, "accounting_code": None},
            {"id": 10, "name": "Campaign 7 acquisition", "accounting_code": "7300"},
            {"id": 11, "name": "Campaign 7 following", "accounting_code": "7310"},
            {"id": 12, "name": "Campaign 9 acquisition", "accounting_code": "7400"},
        ],
        campaigns=[
            {
                "id": 7,
                "title": "Spring mailing",
                "start_date": "2020-01-15",
                "cocoa_code_acquisition": "7300",
                "cocoa_code_follow": "7310",
            },
            {
                "id": 9,
                "title": "Street fundraising",
                "start_date": None,
                "cocoa_code_acquisition": "7400",
                "cocoa_code_follow": "7410",
            },
        ],
    )


@pytest.fixture
def resolver(fake_db, config):
    """Account resolver on the fake database."""
    return AccountResolver(fake_db, config, LookupCache())


@pytest.fixture
def deriver(resolver):
    """Transaction deriver with a fixed clock."""
    return TransactionDeriver(resolver, clock=lambda: FIXED_NOW)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def sample_ledger(temp_db):
    """Create bank accounts, ledger accounts and campaigns in the temporary database."""
    ids = {
        "incoming": temp_db.create_financial_account(name=INCOMING_IBAN, account_type_code="INC"),
        "refund": temp_db.create_financial_account(name=REFUND_IBAN, account_type_code="INC"),
        "spring": temp_db.create_financial_account(name="Spring", accounting_code="7300"),
        "spring_follow": temp_db.create_financial_account(name="Spring later", accounting_code="7310"),
        "street": temp_db.create_financial_account(name="Street", accounting_code="7400"),
    }
    ids["spring_campaign"] = temp_db.create_campaign(
        title="Spring mailing", cocoa_code_acquisition="7300", cocoa_code_follow="7310"
    )
    ids["street_campaign"] = temp_db.create_campaign(
        title="Street fundraising", cocoa_code_acquisition="7400", cocoa_code_follow="7410"
    )
    return ids


@pytest.fixture
def contribution_service(temp_db):
    """Create a ContributionService with a temporary database and default configuration."""
    return ContributionService(temp_db, create_generator(temp_db, clock=lambda: FIXED_NOW))


@pytest.fixture
def completed_contribution(contribution_service, sample_ledger):
    """Create a completed contribution on the spring campaign."""
    contribution_id, _ = contribution_service.create_contribution(
        {
            "contribution_status_id": 1,
            "total_amount": Decimal("100.00"),
            "currency": "EUR",
            "campaign_id": sample_ledger["spring_campaign"],
            "receive_date": "2020-03-01",
            "incoming_bank_account": INCOMING_IBAN,
            "refund_bank_account": REFUND_IBAN,
        }
    )
    return contribution_id


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
