#!/usr/bin/env python3
"""
Generate realistic test data for the last 3 months.
Simulates a household's paychecks, rent and everyday spending.
"""

import random
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Optional

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from cashflow.config.settings import get_settings
from cashflow.domain.models import TransactionData, TransactionKind
from cashflow.repositories.sqlalchemy import (
    SqlAlchemyTransactionRepository,
    get_session,
    init_db,
    init_db_with_url,
)
from cashflow.services import LedgerService


def generate_realistic_data(owner_id: str, seed: int = 7, database_url: Optional[str] = None) -> int:
    """
    Generate ledger data for owner_id over the last 90 days. Returns rows created.

    Writes to the configured database unless database_url is given.
    """
    rng = random.Random(seed)

    if database_url:
        init_db_with_url(database_url)
    else:
        init_db()
    session = get_session()
    ledger = LedgerService(transaction_repo=SqlAlchemyTransactionRepository(session))

    today = date.today()
    start_date = today - timedelta(days=90)

    print(f"Generating transactions from {start_date} to {today}")
    print("=" * 60)

    # (merchant, category, low, high)
    everyday = [
        ("Corner Cafe", "Food", 3, 12),
        ("FreshMart", "Groceries", 25, 140),
        ("City Transit", "Transport", 2, 5),
        ("Fuel Stop", "Transport", 30, 70),
        ("Streamly", "Subscriptions", 10, 16),
        ("Bookworm", None, 8, 40),
    ]

    created = 0
    current = start_date
    while current <= today:
        if current.day in (1, 15):
            ledger.create_transaction(owner_id, TransactionData(
                date=current,
                amount=Decimal("2450.00"),
                kind=TransactionKind.INCOME,
                merchant="Employer Inc",
                account="Checking",
                category="Salary",
            ))
            created += 1
        if current.day == 1:
            ledger.create_transaction(owner_id, TransactionData(
                date=current,
                amount=Decimal("1600.00"),
                kind=TransactionKind.EXPENSE,
                merchant="Landlord",
                account="Checking",
                category="Housing",
            ))
            created += 1

        for _ in range(rng.randint(0, 3)):
            merchant, category, low, high = rng.choice(everyday)
            amount = Decimal(rng.randint(low * 100, high * 100)) / 100
            ledger.create_transaction(owner_id, TransactionData(
                date=current,
                amount=amount,
                kind=TransactionKind.EXPENSE,
                merchant=merchant,
                account=rng.choice(["Checking", "Credit Card"]),
                category=category,
            ))
            created += 1

        current += timedelta(days=1)

    session.close()
    print(f"✓ Created {created} transactions for {owner_id}")
    return created


if __name__ == "__main__":
    owner = sys.argv[1] if len(sys.argv) > 1 else get_settings().default_user_id
    database_url = sys.argv[2] if len(sys.argv) > 2 else None
    generate_realistic_data(owner, database_url=database_url)
