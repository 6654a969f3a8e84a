"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Enum as SqlEnum,
)
from sqlalchemy.types import TypeDecorator

from cashflow.repositories.sqlalchemy.database import Base
from cashflow.domain.models.enums import TransactionKind, CategorySource
from cashflow.domain.models.transaction import CENT, to_money


class Cents(TypeDecorator):
    """
    Decimal money stored as an integer number of cents.

    SQLite has no decimal type and would round-trip Numeric through float.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(to_money(value) / CENT)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return to_money(Decimal(value) * CENT)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_owner_date", "owner_id", "date"),
    )

    txn_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Cents, nullable=False)
    kind = Column(SqlEnum(TransactionKind), nullable=False)
    merchant = Column(String(200), nullable=False, index=True)
    account = Column(String(100), nullable=False, index=True)
    category = Column(String(100), nullable=True, index=True)
    category_confidence = Column(Integer, nullable=True)
    category_source = Column(
        SqlEnum(CategorySource),
        nullable=False,
        default=CategorySource.NONE,
    )
    notes = Column(String(500), nullable=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
