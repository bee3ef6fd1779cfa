"""SQLAlchemy models for the finrecon transaction and budget stores."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_ref = Column(String, nullable=False, default="")
    type = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=True)
    category_key = Column(String, nullable=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    source = Column(String, nullable=False, default="manual")
    status = Column(String, nullable=False, default="completed")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_transactions_date", "date"),)

    # Relationships
    splits = relationship(
        "TransactionSplit",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionSplit.position",
    )


class TransactionSplit(Base):
    """One sub-category slice of a scan-derived transaction.

    Category and amount are nullable so that incomplete scan data is stored as
    received and reported during normalization.
    """

    __tablename__ = "transaction_splits"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    category = Column(String, nullable=True)
    category_key = Column(String, nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="splits")


class Budget(Base):
    """Budget model."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    category = Column(String, nullable=False)
    category_key = Column(String, nullable=False)
    type = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    period = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
