"""An append-only journal of transactions and the balances derived from it.

The journal is the single source of truth. `Poster` is the only way to
append to it and it validates each transaction in full before the append:

- at least two entries,
- debits equal credits within `TOLERANCE`,
- every entry refers to an account in the chart.

`BalanceEngine` derives account balances by replaying completed
transactions over seed balances. It keeps a projection that is advanced
by applying newly appended transactions only, so `balances()` always
equals `replay()`.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Iterator, Sequence
from uuid import uuid4

from .base import (
    TOLERANCE,
    Amount,
    InsufficientEntries,
    InvalidAccountReference,
    LedgerError,
    Status,
    TransactionType,
    UnbalancedTransaction,
)
from .chart import ChartOfAccounts
from .entry import LedgerEntry, total_credits, total_debits
from .rates import CardNetwork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionMetadata:
    customer_id: str | None = None
    wallet_id: str | None = None
    card_type: CardNetwork | None = None
    related_transaction_id: str | None = None


@dataclass(frozen=True)
class Transaction:
    id: str
    date: datetime
    description: str
    type: TransactionType
    entries: tuple[LedgerEntry, ...]
    status: Status = Status.Completed
    metadata: TransactionMetadata = field(default_factory=TransactionMetadata)

    @property
    def amount(self) -> Amount:
        """Sum of debits."""
        return total_debits(self.entries)

    def touches(self, account_id: str) -> bool:
        return any(entry.account_id == account_id for entry in self.entries)


class Journal(Sequence[Transaction]):
    """Transactions in the order they were posted. Nothing is edited or removed."""

    def __init__(self):
        self._transactions: list[Transaction] = []

    def __getitem__(self, index):
        return self._transactions[index]

    def __len__(self) -> int:
        return len(self._transactions)

    def _append(self, transaction: Transaction):
        self._transactions.append(transaction)

    def latest_first(self) -> Iterator[Transaction]:
        return reversed(self._transactions)

    def since(self, position: int) -> list[Transaction]:
        return self._transactions[position:]


def validate(entries: Sequence[LedgerEntry], chart: ChartOfAccounts) -> None:
    """Raise an error if entries cannot make a transaction."""
    if len(entries) < 2:
        raise InsufficientEntries(len(entries))
    debits, credits = total_debits(entries), total_credits(entries)
    if abs(debits - credits) > TOLERANCE:
        raise UnbalancedTransaction(debits, credits)
    if missing := chart.missing(entry.account_id for entry in entries):
        raise InvalidAccountReference(missing)


@dataclass
class Poster:
    chart: ChartOfAccounts
    journal: Journal

    def post(
        self,
        description: str,
        t: TransactionType,
        entries: Iterable[LedgerEntry],
        metadata: TransactionMetadata | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        entries = tuple(entries)
        try:
            validate(entries, self.chart)
        except LedgerError as e:
            logger.warning("Rejected %s %r: %s", t.value, description, e)
            raise
        transaction = Transaction(
            id=str(uuid4()),
            date=date or datetime.now(timezone.utc),
            description=description,
            type=t,
            entries=entries,
            status=Status.Completed,
            metadata=metadata or TransactionMetadata(),
        )
        self.journal._append(transaction)
        logger.info(
            "Posted %s %s for %s: %s",
            transaction.type.value,
            transaction.id,
            transaction.amount,
            description,
        )
        return transaction


def apply(
    balances: dict[str, Amount], chart: ChartOfAccounts, transaction: Transaction
):
    """Add effect of one transaction to *balances* in place."""
    if transaction.status != Status.Completed:
        return
    for entry in transaction.entries:
        account = chart.get_account(entry.account_id)
        if account is None:
            continue
        if account.is_debit_normal:
            change = entry.debit - entry.credit
        else:
            change = entry.credit - entry.debit
        balances[account.id] = balances.get(account.id, Decimal(0)) + change


def replay(
    chart: ChartOfAccounts, transactions: Iterable[Transaction]
) -> dict[str, Amount]:
    """Derive balances from seed balances and the full transaction history."""
    balances = {account.id: account.seed_balance for account in chart.values()}
    for transaction in transactions:
        apply(balances, chart, transaction)
    return balances


@dataclass
class BalanceEngine:
    chart: ChartOfAccounts
    journal: Journal
    _projection: dict[str, Amount] = field(default_factory=dict)
    _position: int = 0

    def _catch_up(self):
        for account in self.chart.values():
            self._projection.setdefault(account.id, account.seed_balance)
        for transaction in self.journal.since(self._position):
            apply(self._projection, self.chart, transaction)
        self._position = len(self.journal)

    def replay(self) -> dict[str, Amount]:
        logger.debug("Replaying %d transactions", len(self.journal))
        return replay(self.chart, self.journal)

    def balances(self) -> dict[str, Amount]:
        self._catch_up()
        return dict(self._projection)

    def get_account_balance(self, account_id: str) -> Amount:
        self._catch_up()
        return self._projection.get(account_id, Decimal(0))

    def get_ledger(self, account_id: str) -> list[Transaction]:
        """Transactions that touch the account, most recent first."""
        return [t for t in self.journal.latest_first() if t.touches(account_id)]

    def trial_balance(self) -> "TrialBalance":
        """Balances placed on the normal side of each account."""
        result = TrialBalance()
        for account_id, balance in self.balances().items():
            if self.chart[account_id].is_debit_normal:
                result[account_id] = (balance, None)
            else:
                result[account_id] = (None, balance)
        return result


class TrialBalance(dict[str, tuple[Amount | None, Amount | None]]):
    """Account ids with balances in debit and credit columns."""

    @property
    def debits(self) -> Amount:
        return Decimal(sum((d for d, _ in self.values() if d is not None), Decimal(0)))

    @property
    def credits(self) -> Amount:
        return Decimal(sum((c for _, c in self.values() if c is not None), Decimal(0)))
