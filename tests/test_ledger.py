from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from swipeledger import (
    InsufficientEntries,
    InvalidAccountReference,
    LedgerEntry,
    Status,
    TransactionType,
    UnbalancedTransaction,
)
from swipeledger.ledger import Transaction, replay


def post(book, *entries, description="Test"):
    return book.post(description, TransactionType.Journal, entries)


def test_unbalanced_transaction_is_rejected(book):
    with pytest.raises(UnbalancedTransaction) as e:
        post(book, LedgerEntry.dr("A001", 100), LedgerEntry.cr("A002", 99))
    assert e.value.debits == 100
    assert e.value.credits == 99
    assert len(book.journal) == 0


def test_difference_within_tolerance_is_accepted(book):
    post(book, LedgerEntry.dr("A001", 100), LedgerEntry.cr("A002", "99.995"))
    assert len(book.journal) == 1


def test_single_entry_is_rejected(book):
    with pytest.raises(InsufficientEntries) as e:
        post(book, LedgerEntry.dr("A001", 100))
    assert e.value.count == 1
    assert len(book.journal) == 0


def test_invalid_account_is_rejected(book):
    with pytest.raises(InvalidAccountReference) as e:
        post(book, LedgerEntry.dr("X999", 100), LedgerEntry.cr("A001", 100))
    assert e.value.account_ids == ["X999"]
    assert book.get_account_balance("A001") == 500_000


def test_posted_transaction(book):
    date = datetime(2026, 3, 1, tzinfo=timezone.utc)
    txn = book.post(
        "Office rent",
        TransactionType.Journal,
        [LedgerEntry.dr("E003", 25_000), LedgerEntry.cr("A002", 25_000)],
        date=date,
    )
    assert txn.status == Status.Completed
    assert txn.date == date
    assert txn.amount == 25_000
    assert book.journal[0] is txn
    with pytest.raises(FrozenInstanceError):
        txn.description = "Changed"  # type: ignore


def test_transaction_ids_are_unique(book):
    ids = {
        post(book, LedgerEntry.dr("A001", 1), LedgerEntry.cr("A002", 1)).id
        for _ in range(5)
    }
    assert len(ids) == 5


def test_debit_normal_and_credit_normal_balances(book):
    post(book, LedgerEntry.dr("A001", 100), LedgerEntry.cr("I001", 100))
    post(book, LedgerEntry.dr("E003", 25_000), LedgerEntry.cr("A002", 25_000))
    assert book.get_account_balance("A001") == 500_100
    assert book.get_account_balance("I001") == 100
    assert book.get_account_balance("E003") == 25_000
    assert book.get_account_balance("A002") == 1_175_000


def test_unknown_account_balance_is_zero(book):
    assert book.get_account_balance("nope") == 0


def test_get_ledger_is_most_recent_first(book):
    first = post(book, LedgerEntry.dr("A001", 1), LedgerEntry.cr("A002", 1))
    post(book, LedgerEntry.dr("A003", 1), LedgerEntry.cr("A002", 1))
    third = post(book, LedgerEntry.dr("A001", 2), LedgerEntry.cr("A003", 2))
    assert book.get_ledger("A001") == [third, first]
    assert book.get_ledger("E003") == []


def test_projection_equals_replay(swipe_cycle):
    book, _ = swipe_cycle
    before = book.balances
    assert book.balances == before
    book.create_customer("Late", "9000000009")
    post(book, LedgerEntry.dr("A001", 7), LedgerEntry.cr("I001", 7))
    assert book.balances == book.engine.replay()


def test_replay_skips_pending_and_unknown_accounts(seed_chart):
    date = datetime(2026, 1, 1, tzinfo=timezone.utc)
    pending = Transaction(
        id="p",
        date=date,
        description="Pending",
        type=TransactionType.Journal,
        entries=(LedgerEntry.dr("A001", 10), LedgerEntry.cr("I001", 10)),
        status=Status.Pending,
    )
    dangling = Transaction(
        id="d",
        date=date,
        description="Dangling",
        type=TransactionType.Journal,
        entries=(LedgerEntry.dr("ZZZ", 10), LedgerEntry.cr("I001", 10)),
    )
    balances = replay(seed_chart, [pending, dangling])
    assert balances["A001"] == 500_000
    assert balances["I001"] == 10
    assert "ZZZ" not in balances


def test_trial_balance_columns_match(swipe_cycle):
    book, _ = swipe_cycle
    tb = book.trial_balance()
    assert tb["A004"] == (Decimal("9880.00"), None)
    assert tb["L001"] == (None, Decimal(0))
    assert tb.debits == tb.credits
