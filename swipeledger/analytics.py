"""Profit by card network, wallet and customer, and customer activity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from .base import AccountType, Amount, TransactionType
from .chart import ChartOfAccounts
from .ledger import Transaction
from .rates import CardNetwork, Customer, Wallet

INACTIVE_AFTER_DAYS = 90
NEVER_ACTIVE_DAYS = 999


@dataclass
class SegmentPnL:
    name: str
    income: Amount = Decimal(0)
    expense: Amount = Decimal(0)
    count: int = 0

    @property
    def profit(self) -> Amount:
        return self.income - self.expense


def segment_pnl(
    name: str, transactions: Iterable[Transaction], chart: ChartOfAccounts
) -> SegmentPnL:
    """Credits to income accounts and debits to expense accounts over *transactions*."""
    result = SegmentPnL(name)
    for transaction in transactions:
        result.count += 1
        for entry in transaction.entries:
            account = chart.get_account(entry.account_id)
            if account is None:
                continue
            if account.type == AccountType.Income:
                result.income += entry.credit
            elif account.type == AccountType.Expense:
                result.expense += entry.debit
    return result


def by_card_network(transactions, chart) -> list[SegmentPnL]:
    return [
        segment_pnl(
            card.value.upper(),
            [t for t in transactions if t.metadata.card_type == card],
            chart,
        )
        for card in CardNetwork
    ]


def by_wallet(transactions, chart, wallets: Iterable[Wallet]) -> list[SegmentPnL]:
    return [
        segment_pnl(
            w.name, [t for t in transactions if t.metadata.wallet_id == w.id], chart
        )
        for w in wallets
    ]


def by_customer(
    transactions, chart, customers: Iterable[Customer], top: int = 10
) -> list[SegmentPnL]:
    """Most profitable customers, count is the number of swipe transactions."""
    result = []
    for c in customers:
        subset = [t for t in transactions if t.metadata.customer_id == c.id]
        pnl = segment_pnl(c.name, subset, chart)
        pnl.count = sum(1 for t in subset if t.type == TransactionType.SwipePay)
        result.append(pnl)
    result.sort(key=lambda pnl: pnl.profit, reverse=True)
    return result[:top]


@dataclass
class TransactionPnL:
    transaction_id: str
    date: datetime
    customer: str
    wallet: str
    card: str
    revenue: Amount
    cost: Amount

    @property
    def profit(self) -> Amount:
        return self.revenue - self.cost


def transaction_pnl(
    transactions, chart, customers: dict[str, Customer], wallets: dict[str, Wallet]
) -> list[TransactionPnL]:
    """Profit of each swipe transaction that went through a wallet."""
    result = []
    for t in transactions:
        if t.type != TransactionType.SwipePay or t.metadata.wallet_id is None:
            continue
        pnl = segment_pnl(t.id, [t], chart)
        customer = customers.get(t.metadata.customer_id or "")
        wallet = wallets.get(t.metadata.wallet_id)
        card = t.metadata.card_type
        result.append(
            TransactionPnL(
                transaction_id=t.id,
                date=t.date,
                customer=customer.name if customer else "Unknown",
                wallet=wallet.name if wallet else "N/A",
                card=card.value.upper() if card else "N/A",
                revenue=pnl.income,
                cost=pnl.expense,
            )
        )
    return result


@dataclass
class CustomerActivity:
    customer_id: str
    name: str
    total_volume: Amount
    transaction_count: int
    last_active: datetime | None
    days_inactive: int

    @property
    def status(self) -> str:
        return "inactive" if self.days_inactive > INACTIVE_AFTER_DAYS else "active"


def customer_activity(
    transactions,
    customers: Iterable[Customer],
    payables_account: str,
    now: datetime | None = None,
) -> list[CustomerActivity]:
    """Swipe volume is the first credit to payables in each customer transaction."""
    now = now or datetime.now(timezone.utc)
    result = []
    for c in customers:
        subset = [t for t in transactions if t.metadata.customer_id == c.id]
        volume = Decimal(0)
        for t in subset:
            credits = [
                e.credit
                for e in t.entries
                if e.account_id == payables_account and e.credit > 0
            ]
            if credits:
                volume += credits[0]
        last_active = max((t.date for t in subset), default=None)
        days = (now - last_active).days if last_active else NEVER_ACTIVE_DAYS
        result.append(
            CustomerActivity(
                customer_id=c.id,
                name=c.name,
                total_volume=volume,
                transaction_count=len(subset),
                last_active=last_active,
                days_inactive=days,
            )
        )
    return result
