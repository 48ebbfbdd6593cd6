"""SQLAlchemy models for fintrxn database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from fintrxn.domain.entities import FINANCIAL_TRXN_TABLE

Base = declarative_base()


class FinancialAccount(Base):
    """Financial account model. ``name`` holds the IBAN for bank accounts."""

    __tablename__ = "financial_accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    accounting_code = Column(String, nullable=True, index=True)
    account_type_code = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Campaign(Base):
    """Campaign model with its accounting-code classification."""

    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    start_date = Column(Date, nullable=True)
    cocoa_code_acquisition = Column(String, nullable=True)
    cocoa_code_follow = Column(String, nullable=True)
    cocoa_profit_loss = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Contribution(Base):
    """Contribution model. The host's fields are kept as a JSON document."""

    __tablename__ = "contributions"

    id = Column(Integer, primary_key=True)
    data = Column(JSON, nullable=False, default=dict)

    financial_trxns = relationship("FinancialTrxn", back_populates="contribution")


class FinancialTrxn(Base):
    """Posting between two financial accounts."""

    __tablename__ = FINANCIAL_TRXN_TABLE

    id = Column(Integer, primary_key=True)
    contribution_id = Column(Integer, ForeignKey("contributions.id"), nullable=True, index=True)
    trxn_date = Column(DateTime, nullable=False)
    total_amount = Column(Numeric(20, 2), nullable=True)
    fee_amount = Column(Numeric(20, 2), nullable=True)
    net_amount = Column(Numeric(20, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    trxn_id = Column(String, nullable=True)
    trxn_result_code = Column(String, nullable=False, default="")
    status_id = Column(String, nullable=True)
    payment_processor_id = Column(String, nullable=True)
    payment_instrument_id = Column(String, nullable=True)
    check_number = Column(String, nullable=True)
    from_financial_account_id = Column(Integer, ForeignKey("financial_accounts.id"), nullable=False)
    to_financial_account_id = Column(Integer, ForeignKey("financial_accounts.id"), nullable=False)

    contribution = relationship("Contribution", back_populates="financial_trxns")


class Batch(Base):
    """Accounting batch model."""

    __tablename__ = "batches"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    entities = relationship("EntityBatch", back_populates="batch", cascade="all, delete-orphan")


class EntityBatch(Base):
    """Link between a batch and an entity row of some table."""

    __tablename__ = "entity_batches"

    id = Column(Integer, primary_key=True)
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=False)
    entity_table = Column(String, nullable=False)
    entity_id = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("batch_id", "entity_table", "entity_id", name="uq_batch_entity"),
    )

    batch = relationship("Batch", back_populates="entities")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
