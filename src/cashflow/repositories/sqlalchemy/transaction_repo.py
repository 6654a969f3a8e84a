"""SQLAlchemy implementation of TransactionRepository."""

import logging
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy import String, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from cashflow.core.clock import to_utc
from cashflow.core.exceptions import StoreUnavailableError
from cashflow.domain.filters import TransactionFilter
from cashflow.domain.models import Transaction, to_money
from cashflow.repositories.sqlalchemy.database import SQLITE_LOWER
from cashflow.repositories.sqlalchemy.orm_models import TransactionORM

logger = logging.getLogger(__name__)


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        with self._guard("add"):
            orm_txn = self._to_orm(transaction)
            self._db.add(orm_txn)
            self._db.commit()
            self._db.refresh(orm_txn)
            return self._to_domain(orm_txn)

    def get_by_id(self, owner_id: str, txn_id: str) -> Optional[Transaction]:
        """Retrieve a live transaction owned by owner_id."""
        with self._guard("get_by_id"):
            orm_txn = self._live(owner_id).filter(
                TransactionORM.txn_id == txn_id
            ).first()
            return self._to_domain(orm_txn) if orm_txn else None

    def count(self, owner_id: str, flt: TransactionFilter) -> int:
        """Count live transactions matching the filter."""
        with self._guard("count"):
            return self._filtered(owner_id, flt).count()

    def query_page(
        self,
        owner_id: str,
        flt: TransactionFilter,
        skip: int,
        limit: int,
    ) -> list[Transaction]:
        """Return one ordered slice of the live transactions matching the filter."""
        with self._guard("query_page"):
            query = self._ordered(self._filtered(owner_id, flt))
            return [self._to_domain(t) for t in query.offset(skip).limit(limit).all()]

    def query_all(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
    ) -> list[Transaction]:
        """Return every live transaction dated within [start_date, end_date]."""
        with self._guard("query_all"):
            query = self._live(owner_id).filter(
                TransactionORM.date >= start_date,
                TransactionORM.date <= end_date,
            )
            return [self._to_domain(t) for t in self._ordered(query).all()]

    def update(
        self,
        transaction: Transaction,
        expected_version: Optional[int] = None,
    ) -> Optional[Transaction]:
        """Replace the mutable fields of a live transaction and bump its version."""
        with self._guard("update"):
            query = self._live(transaction.owner_id).filter(
                TransactionORM.txn_id == transaction.txn_id
            )
            if expected_version is not None:
                query = query.filter(TransactionORM.version == expected_version)

            updated = query.update(
                {
                    TransactionORM.date: transaction.date,
                    TransactionORM.amount: transaction.amount,
                    TransactionORM.kind: transaction.kind,
                    TransactionORM.merchant: transaction.merchant,
                    TransactionORM.account: transaction.account,
                    TransactionORM.category: transaction.category,
                    TransactionORM.category_confidence: transaction.category_confidence,
                    TransactionORM.category_source: transaction.category_source,
                    TransactionORM.notes: transaction.notes,
                    TransactionORM.updated_at: transaction.updated_at,
                    TransactionORM.version: TransactionORM.version + 1,
                },
                synchronize_session=False,
            )
            self._db.commit()

        if not updated:
            return None
        return self.get_by_id(transaction.owner_id, transaction.txn_id)

    def soft_delete(self, owner_id: str, txn_id: str, deleted_at: datetime) -> bool:
        """Mark a live transaction deleted. The row itself is kept."""
        with self._guard("soft_delete"):
            deleted = self._live(owner_id).filter(
                TransactionORM.txn_id == txn_id
            ).update(
                {TransactionORM.deleted_at: deleted_at},
                synchronize_session=False,
            )
            self._db.commit()
            return deleted > 0

    def _live(self, owner_id: str) -> Query:
        """Base query for every read: caller's rows that are not soft-deleted."""
        return self._db.query(TransactionORM).filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.deleted_at.is_(None),
        )

    def _filtered(self, owner_id: str, flt: TransactionFilter) -> Query:
        query = self._live(owner_id)

        if flt.start_date is not None:
            query = query.filter(TransactionORM.date >= flt.start_date)
        if flt.end_date is not None:
            query = query.filter(TransactionORM.date <= flt.end_date)
        if flt.account is not None:
            query = query.filter(TransactionORM.account == flt.account)
        if flt.category is not None:
            query = query.filter(TransactionORM.category == flt.category)
        if flt.merchant is not None:
            query = query.filter(
                self._lower(TransactionORM.merchant).contains(
                    flt.merchant.lower(), autoescape=True
                )
            )
        if flt.kind is not None:
            query = query.filter(TransactionORM.kind == flt.kind)

        return query

    def _lower(self, column):
        if self._db.get_bind().dialect.name == "sqlite":
            return getattr(func, SQLITE_LOWER)(column, type_=String)
        return func.lower(column)

    @staticmethod
    def _ordered(query: Query) -> Query:
        # txn_id makes the order total when date and created_at tie
        return query.order_by(
            TransactionORM.date.desc(),
            TransactionORM.created_at.desc(),
            TransactionORM.txn_id.desc(),
        )

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Roll back and report database failures as StoreUnavailableError."""
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("Transaction store failure during %s: %s", operation, exc)
            self._db.rollback()
            raise StoreUnavailableError(operation) from exc

    def _to_orm(self, txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            txn_id=txn.txn_id,
            owner_id=txn.owner_id,
            date=txn.date,
            amount=txn.amount,
            kind=txn.kind,
            merchant=txn.merchant,
            account=txn.account,
            category=txn.category,
            category_confidence=txn.category_confidence,
            category_source=txn.category_source,
            notes=txn.notes,
            version=txn.version,
            created_at=txn.created_at,
            updated_at=txn.updated_at,
            deleted_at=txn.deleted_at,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            owner_id=orm.owner_id,
            date=orm.date,
            amount=to_money(Decimal(str(orm.amount))),
            kind=orm.kind,
            merchant=orm.merchant,
            account=orm.account,
            category=orm.category,
            category_confidence=orm.category_confidence,
            category_source=orm.category_source,
            notes=orm.notes,
            version=orm.version,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
            updated_at=to_utc(orm.updated_at) if orm.updated_at else None,
            deleted_at=to_utc(orm.deleted_at) if orm.deleted_at else None,
        )
