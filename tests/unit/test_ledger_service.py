"""
Unit tests for LedgerService.

Tests cover:
- Transaction creation (id, timestamps, category source, amount scale)
- Get by id with owner scoping and soft-delete visibility
- Wholesale update, category source re-derivation, version checks
- Soft delete idempotence
- Store failures propagating unchanged
"""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from cashflow.core.exceptions import (
    ConcurrencyConflictError,
    NotFoundError,
    StoreUnavailableError,
)
from cashflow.domain.models import CategorySource, TransactionKind
from cashflow.services import LedgerService

from tests.conftest import OWNER, OTHER_OWNER, build_transaction, make_data


# =============================================================================
# CREATE TESTS
# =============================================================================


class TestCreateTransaction:
    """Tests for transaction creation."""

    def test_create_assigns_id_owner_and_created_at(self, ledger_service: LedgerService):
        """
        GIVEN valid transaction data
        WHEN I create a transaction
        THEN id, owner and created_at are assigned and updated_at is empty
        """
        txn = ledger_service.create_transaction(
            OWNER,
            make_data(date(2024, 1, 5), "100.00", TransactionKind.EXPENSE, "Cafe", category="Food"),
        )

        assert txn.txn_id
        assert txn.owner_id == OWNER
        assert txn.created_at is not None
        assert txn.updated_at is None
        assert txn.deleted_at is None
        assert txn.version == 1

    def test_create_with_category_is_user_sourced(self, ledger_service: LedgerService):
        txn = ledger_service.create_transaction(
            OWNER,
            make_data(date(2024, 1, 5), "9.99", TransactionKind.EXPENSE, "Cafe", category="Food"),
        )

        assert txn.category == "Food"
        assert txn.category_source == CategorySource.USER
        assert txn.category_confidence is None

    def test_create_without_category_has_no_source(self, ledger_service: LedgerService):
        txn = ledger_service.create_transaction(
            OWNER,
            make_data(date(2024, 1, 5), "9.99", TransactionKind.EXPENSE, "Cafe"),
        )

        assert txn.category is None
        assert txn.category_source == CategorySource.NONE

    def test_amount_persisted_with_two_decimals(self, ledger_service: LedgerService):
        txn = ledger_service.create_transaction(
            OWNER,
            make_data(date(2024, 1, 5), "12.5", TransactionKind.EXPENSE, "Cafe"),
        )

        assert txn.amount == Decimal("12.50")
        assert str(txn.amount) == "12.50"

    def test_ids_are_unique(self, ledger_service: LedgerService):
        data = make_data(date(2024, 1, 5), "1.00", TransactionKind.EXPENSE, "Cafe")

        ids = {ledger_service.create_transaction(OWNER, data).txn_id for _ in range(5)}

        assert len(ids) == 5


# =============================================================================
# GET TESTS
# =============================================================================


class TestGetTransaction:
    """Tests for reading a single transaction."""

    def test_get_returns_created_transaction(self, ledger_service, transaction_factory):
        created = transaction_factory(date(2024, 1, 5), "100.00", merchant="Cafe")

        fetched = ledger_service.get_transaction(OWNER, created.txn_id)

        assert fetched == created

    def test_get_unknown_id_returns_none(self, ledger_service: LedgerService):
        assert ledger_service.get_transaction(OWNER, "missing") is None

    def test_get_other_owners_transaction_returns_none(self, ledger_service, transaction_factory):
        """
        GIVEN a transaction owned by another user
        WHEN I read it by id
        THEN it is invisible, exactly like a missing id
        """
        theirs = transaction_factory(date(2024, 1, 5), "10.00", owner_id=OTHER_OWNER)

        assert ledger_service.get_transaction(OWNER, theirs.txn_id) is None

    def test_require_raises_same_error_for_missing_and_foreign(
        self, ledger_service, transaction_factory
    ):
        theirs = transaction_factory(date(2024, 1, 5), "10.00", owner_id=OTHER_OWNER)

        with pytest.raises(NotFoundError) as foreign:
            ledger_service.require_transaction(OWNER, theirs.txn_id)
        with pytest.raises(NotFoundError) as missing:
            ledger_service.require_transaction(OWNER, "no-such-id")

        assert foreign.value.code == missing.value.code == "NOT_FOUND"
        assert foreign.value.message.replace(theirs.txn_id, "X") == \
            missing.value.message.replace("no-such-id", "X")


# =============================================================================
# UPDATE TESTS
# =============================================================================


class TestUpdateTransaction:
    """Tests for wholesale updates."""

    def test_update_replaces_every_field(self, ledger_service, transaction_factory):
        """
        GIVEN an existing transaction
        WHEN I update it with entirely new data
        THEN a subsequent read reflects every field and updated_at > created_at
        """
        created = transaction_factory(
            date(2024, 1, 5), "100.00", TransactionKind.EXPENSE, "Cafe", "Checking",
            category="Food", notes="latte",
        )

        ledger_service.update_transaction(
            OWNER,
            created.txn_id,
            make_data(date(2024, 1, 6), "2500.00", TransactionKind.INCOME, "Employer",
                      "Savings", category="Salary", notes="bonus"),
        )
        fetched = ledger_service.get_transaction(OWNER, created.txn_id)

        assert fetched.date == date(2024, 1, 6)
        assert fetched.amount == Decimal("2500.00")
        assert fetched.kind == TransactionKind.INCOME
        assert fetched.merchant == "Employer"
        assert fetched.account == "Savings"
        assert fetched.category == "Salary"
        assert fetched.notes == "bonus"
        assert fetched.created_at == created.created_at
        assert fetched.updated_at > fetched.created_at
        assert fetched.version == 2

    def test_update_clears_omitted_optional_fields(self, ledger_service, transaction_factory):
        created = transaction_factory(
            date(2024, 1, 5), "100.00", merchant="Cafe", category="Food", notes="latte",
        )

        updated = ledger_service.update_transaction(
            OWNER,
            created.txn_id,
            make_data(date(2024, 1, 5), "100.00", TransactionKind.EXPENSE, "Cafe"),
        )

        assert updated.category is None
        assert updated.notes is None
        assert updated.category_source == CategorySource.NONE

    def test_update_adding_category_marks_user_source(self, ledger_service, transaction_factory):
        created = transaction_factory(date(2024, 1, 5), "100.00", merchant="Cafe")
        assert created.category_source == CategorySource.NONE

        updated = ledger_service.update_transaction(
            OWNER,
            created.txn_id,
            make_data(date(2024, 1, 5), "100.00", TransactionKind.EXPENSE, "Cafe", category="Food"),
        )

        assert updated.category_source == CategorySource.USER

    def test_update_missing_raises_not_found(self, ledger_service: LedgerService):
        with pytest.raises(NotFoundError):
            ledger_service.update_transaction(
                OWNER,
                "missing",
                make_data(date(2024, 1, 5), "1.00", TransactionKind.EXPENSE, "Cafe"),
            )

    def test_update_other_owner_raises_not_found_and_leaves_row(
        self, ledger_service, transaction_factory
    ):
        theirs = transaction_factory(date(2024, 1, 5), "10.00", merchant="Shop", owner_id=OTHER_OWNER)

        with pytest.raises(NotFoundError):
            ledger_service.update_transaction(
                OWNER,
                theirs.txn_id,
                make_data(date(2024, 1, 5), "99.00", TransactionKind.EXPENSE, "Hijack"),
            )

        unchanged = ledger_service.get_transaction(OTHER_OWNER, theirs.txn_id)
        assert unchanged.merchant == "Shop"
        assert unchanged.amount == Decimal("10.00")

    def test_update_deleted_raises_not_found(self, ledger_service, transaction_factory):
        created = transaction_factory(date(2024, 1, 5), "10.00")
        ledger_service.delete_transaction(OWNER, created.txn_id)

        with pytest.raises(NotFoundError):
            ledger_service.update_transaction(
                OWNER,
                created.txn_id,
                make_data(date(2024, 1, 5), "10.00", TransactionKind.EXPENSE, "Cafe"),
            )

    def test_last_writer_wins_without_version(self, ledger_service, transaction_factory):
        created = transaction_factory(date(2024, 1, 5), "10.00", merchant="Cafe")

        ledger_service.update_transaction(
            OWNER, created.txn_id,
            make_data(date(2024, 1, 5), "11.00", TransactionKind.EXPENSE, "First"),
        )
        ledger_service.update_transaction(
            OWNER, created.txn_id,
            make_data(date(2024, 1, 5), "12.00", TransactionKind.EXPENSE, "Second"),
        )

        assert ledger_service.get_transaction(OWNER, created.txn_id).merchant == "Second"

    def test_matching_version_is_accepted(self, ledger_service, transaction_factory):
        created = transaction_factory(date(2024, 1, 5), "10.00")

        updated = ledger_service.update_transaction(
            OWNER, created.txn_id,
            make_data(date(2024, 1, 5), "11.00", TransactionKind.EXPENSE, "Cafe"),
            expected_version=1,
        )

        assert updated.version == 2

    def test_stale_version_raises_conflict(self, ledger_service, transaction_factory):
        """
        GIVEN a transaction already updated once (version 2)
        WHEN I update it again claiming version 1
        THEN ConcurrencyConflictError is raised and the row keeps the first edit
        """
        created = transaction_factory(date(2024, 1, 5), "10.00", merchant="Cafe")
        ledger_service.update_transaction(
            OWNER, created.txn_id,
            make_data(date(2024, 1, 5), "11.00", TransactionKind.EXPENSE, "First"),
        )

        with pytest.raises(ConcurrencyConflictError) as exc_info:
            ledger_service.update_transaction(
                OWNER, created.txn_id,
                make_data(date(2024, 1, 5), "12.00", TransactionKind.EXPENSE, "Stale"),
                expected_version=1,
            )

        assert exc_info.value.code == "CONFLICT"
        assert ledger_service.get_transaction(OWNER, created.txn_id).merchant == "First"

    def test_conditional_write_losing_race_raises_conflict(self, clock):
        """
        GIVEN the store reports the conditional write matched no row
        WHEN I update with an expected version
        THEN ConcurrencyConflictError is raised
        """
        repo = MagicMock()
        repo.get_by_id.side_effect = [build_transaction(version=3), build_transaction(version=4)]
        repo.update.return_value = None
        service = LedgerService(transaction_repo=repo, clock=clock)

        with pytest.raises(ConcurrencyConflictError):
            service.update_transaction(
                "user-u", "txn-1",
                make_data(date(2024, 1, 5), "1.00", TransactionKind.EXPENSE, "Cafe"),
                expected_version=3,
            )


# =============================================================================
# DELETE TESTS
# =============================================================================


class TestDeleteTransaction:
    """Tests for soft delete."""

    def test_delete_twice_returns_true_then_false(self, ledger_service, transaction_factory):
        created = transaction_factory(date(2024, 1, 5), "10.00")

        assert ledger_service.delete_transaction(OWNER, created.txn_id) is True
        assert ledger_service.delete_transaction(OWNER, created.txn_id) is False

    def test_deleted_transaction_is_invisible(self, ledger_service, transaction_factory):
        created = transaction_factory(date(2024, 1, 5), "10.00")

        ledger_service.delete_transaction(OWNER, created.txn_id)

        assert ledger_service.get_transaction(OWNER, created.txn_id) is None

    def test_delete_other_owner_returns_false(self, ledger_service, transaction_factory):
        theirs = transaction_factory(date(2024, 1, 5), "10.00", owner_id=OTHER_OWNER)

        assert ledger_service.delete_transaction(OWNER, theirs.txn_id) is False
        assert ledger_service.get_transaction(OTHER_OWNER, theirs.txn_id) is not None

    def test_delete_missing_returns_false(self, ledger_service: LedgerService):
        assert ledger_service.delete_transaction(OWNER, "missing") is False


# =============================================================================
# STORE FAILURE TESTS
# =============================================================================


class TestStoreFailures:
    """Store errors reach the caller unchanged."""

    def test_store_unavailable_propagates_from_create(self, clock):
        repo = MagicMock()
        repo.add.side_effect = StoreUnavailableError("add")
        service = LedgerService(transaction_repo=repo, clock=clock)

        with pytest.raises(StoreUnavailableError):
            service.create_transaction(
                OWNER, make_data(date(2024, 1, 5), "1.00", TransactionKind.EXPENSE, "Cafe"),
            )

        repo.add.assert_called_once()

    def test_store_unavailable_propagates_from_delete(self, clock):
        repo = MagicMock()
        repo.soft_delete.side_effect = StoreUnavailableError("soft_delete")
        service = LedgerService(transaction_repo=repo, clock=clock)

        with pytest.raises(StoreUnavailableError):
            service.delete_transaction(OWNER, "txn-1")
