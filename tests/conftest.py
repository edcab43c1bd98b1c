from datetime import datetime, timezone

import pytest

from swipeledger import Book, CardNetwork, ChartOfAccounts, default_seed


@pytest.fixture
def book() -> Book:
    return Book.from_seed()


@pytest.fixture
def seed_chart() -> ChartOfAccounts:
    return ChartOfAccounts.from_accounts(default_seed().accounts)


@pytest.fixture
def swipe_cycle(book):
    """Rahul swipes 10000 by Visa through Wallet A and is paid out to HDFC."""
    date = datetime(2026, 1, 1, tzinfo=timezone.utc)
    inflow = book.swipe("C001", "W001", CardNetwork.Visa, 10_000, date=date)
    book.payout("C001", "A002", 9_800, transfer_commission=10, date=date)
    return book, inflow
