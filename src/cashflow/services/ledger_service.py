"""Ledger service for transaction lifecycle management."""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from cashflow.core.clock import now_utc
from cashflow.core.exceptions import ConcurrencyConflictError, NotFoundError
from cashflow.domain.models import (
    Transaction,
    TransactionData,
    derive_category_source,
    to_money,
)
from cashflow.repositories.protocols import TransactionRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service owning create/update/soft-delete of transactions.

    Every operation is scoped to the owner_id passed in; a transaction owned
    by someone else behaves exactly like one that does not exist. Input is
    assumed to be validated by the caller.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._transaction_repo = transaction_repo
        self._clock = clock

    def create_transaction(self, owner_id: str, data: TransactionData) -> Transaction:
        """
        Record a new transaction for owner_id.

        Assigns id and created_at, and derives category_source from category.
        """
        transaction = Transaction(
            txn_id=str(uuid.uuid4()),
            owner_id=owner_id,
            date=data.date,
            amount=to_money(data.amount),
            kind=data.kind,
            merchant=data.merchant,
            account=data.account,
            category=data.category,
            category_confidence=None,
            category_source=derive_category_source(data.category),
            notes=data.notes,
            created_at=self._clock(),
            version=1,
        )

        created = self._transaction_repo.add(transaction)
        logger.info("Created transaction %s for owner %s", created.txn_id, owner_id)
        return created

    def get_transaction(self, owner_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get a live transaction, or None if the caller cannot see it."""
        return self._transaction_repo.get_by_id(owner_id, transaction_id)

    def require_transaction(self, owner_id: str, transaction_id: str) -> Transaction:
        """Get a live transaction, raising NotFoundError if absent."""
        transaction = self._transaction_repo.get_by_id(owner_id, transaction_id)
        if not transaction:
            raise NotFoundError("Transaction", transaction_id)
        return transaction

    def update_transaction(
        self,
        owner_id: str,
        transaction_id: str,
        data: TransactionData,
        expected_version: Optional[int] = None,
    ) -> Transaction:
        """
        Replace every mutable field of a transaction.

        Without expected_version the last writer wins. With it, the update is
        rejected if the stored version has moved on.
        """
        transaction = self.require_transaction(owner_id, transaction_id)
        if expected_version is not None and transaction.version != expected_version:
            raise ConcurrencyConflictError(transaction_id, expected_version, transaction.version)

        transaction.apply(data)
        transaction.updated_at = self._clock()

        updated = self._transaction_repo.update(transaction, expected_version=expected_version)
        if updated is None:
            # Row changed between our read and the conditional write
            current = self.require_transaction(owner_id, transaction_id)
            raise ConcurrencyConflictError(
                transaction_id,
                expected_version if expected_version is not None else transaction.version,
                current.version,
            )

        logger.info("Updated transaction %s (version %s)", transaction_id, updated.version)
        return updated

    def delete_transaction(self, owner_id: str, transaction_id: str) -> bool:
        """
        Soft delete a transaction.

        Returns False, without writing, if no live transaction was found.
        """
        deleted = self._transaction_repo.soft_delete(owner_id, transaction_id, self._clock())
        if deleted:
            logger.info("Soft-deleted transaction %s", transaction_id)
        return deleted
