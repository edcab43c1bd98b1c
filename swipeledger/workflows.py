"""Transaction shapes of the card swipe business.

Each workflow turns its inputs into a balanced list of ledger entries.
The poster does not know about workflows, it only sees the entries.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar

from .base import Amount, TransactionType, round_money, to_amount
from .config import Designations
from .entry import LedgerEntry
from .rates import percent_of


def nonzero(*entries: LedgerEntry) -> list[LedgerEntry]:
    return [e for e in entries if e.debit or e.credit]


class Workflow(ABC):
    type: ClassVar[TransactionType]

    @abstractmethod
    def to_entries(self, accounts: Designations) -> list[LedgerEntry]:
        pass


@dataclass
class SwipeInflow(Workflow):
    """Card swiped into a wallet, customer is owed the amount less service fee."""

    wallet_account: str
    amount: Amount
    service_rate: Amount
    mdr_rate: Amount
    type: ClassVar[TransactionType] = TransactionType.SwipePay

    @property
    def service_fee(self) -> Amount:
        return percent_of(self.amount, self.service_rate)

    @property
    def mdr(self) -> Amount:
        return percent_of(self.amount, self.mdr_rate)

    @property
    def net_payable(self) -> Amount:
        return round_money(to_amount(self.amount) - self.service_fee)

    @property
    def estimated_profit(self) -> Amount:
        return self.service_fee - self.mdr

    def to_entries(self, accounts: Designations) -> list[LedgerEntry]:
        amount = round_money(self.amount)
        return [
            LedgerEntry.dr(self.wallet_account, amount),
            LedgerEntry.cr(accounts.payables, amount),
            *nonzero(
                LedgerEntry.dr(accounts.mdr_expense, self.mdr),
                LedgerEntry.cr(self.wallet_account, self.mdr),
                LedgerEntry.dr(accounts.payables, self.service_fee),
                LedgerEntry.cr(accounts.service_income, self.service_fee),
            ),
        ]


@dataclass
class SwipePayout(Workflow):
    """Customer is paid out, transfer commission paid by the business is an expense."""

    payout_account: str
    amount: Amount
    transfer_commission: Amount = Decimal(0)
    type: ClassVar[TransactionType] = TransactionType.SwipePay

    def to_entries(self, accounts: Designations) -> list[LedgerEntry]:
        amount = round_money(self.amount)
        commission = round_money(self.transfer_commission)
        entries = [
            LedgerEntry.dr(accounts.payables, amount),
            LedgerEntry.cr(self.payout_account, amount + commission),
        ]
        if commission > 0:
            entries.append(LedgerEntry.dr(accounts.mdr_expense, commission))
        return entries


@dataclass
class AdvancePay(Workflow):
    """Business pays a bill for the customer before the card is swiped."""

    source_account: str
    amount: Amount
    type: ClassVar[TransactionType] = TransactionType.PaySwipe

    def to_entries(self, accounts: Designations) -> list[LedgerEntry]:
        amount = round_money(self.amount)
        return [
            LedgerEntry.dr(accounts.receivables, amount),
            LedgerEntry.cr(self.source_account, amount),
        ]


@dataclass
class Recovery(Workflow):
    """Advance is recovered by swiping the customer's card into a wallet."""

    wallet_account: str
    amount: Amount
    collection_account: str
    collection: Amount
    mdr_rate: Amount
    type: ClassVar[TransactionType] = TransactionType.PaySwipe

    @property
    def mdr(self) -> Amount:
        return percent_of(self.amount, self.mdr_rate)

    def to_entries(self, accounts: Designations) -> list[LedgerEntry]:
        amount = round_money(self.amount)
        collection = round_money(self.collection)
        return [
            LedgerEntry.dr(self.wallet_account, amount),
            LedgerEntry.cr(accounts.receivables, amount),
            *nonzero(
                LedgerEntry.dr(self.collection_account, collection),
                LedgerEntry.cr(accounts.service_income, collection),
                LedgerEntry.dr(accounts.mdr_expense, self.mdr),
                LedgerEntry.cr(self.wallet_account, self.mdr),
            ),
        ]


@dataclass
class MoneyTransfer(Workflow):
    """Domestic money transfer sent from a wallet for a cash or bank inflow."""

    inflow_account: str
    wallet_account: str
    amount: Amount
    service_charge: Amount = Decimal(0)
    type: ClassVar[TransactionType] = TransactionType.MoneyTransfer

    def to_entries(self, accounts: Designations) -> list[LedgerEntry]:
        amount = round_money(self.amount)
        charge = round_money(self.service_charge)
        return [
            LedgerEntry.dr(self.inflow_account, amount + charge),
            LedgerEntry.cr(self.wallet_account, amount),
            *nonzero(LedgerEntry.cr(accounts.service_income, charge)),
        ]


@dataclass
class WalletAdjustment(Workflow):
    """Bring wallet balance to the actual one. Negative difference is a shortage."""

    wallet_account: str
    difference: Amount
    type: ClassVar[TransactionType] = TransactionType.Reconciliation

    @property
    def is_shortage(self) -> bool:
        return self.difference < 0

    def to_entries(self, accounts: Designations) -> list[LedgerEntry]:
        amount = abs(round_money(self.difference))
        if self.is_shortage:
            return [
                LedgerEntry.dr(accounts.deficit_expense, amount),
                LedgerEntry.cr(self.wallet_account, amount),
            ]
        return [
            LedgerEntry.dr(self.wallet_account, amount),
            LedgerEntry.cr(accounts.surplus_income, amount),
        ]
