from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from .base import TOLERANCE, Amount, Numeric, to_amount


@dataclass(frozen=True)
class LedgerEntry:
    """One line of a transaction. Normally only one of debit and credit is non-zero."""

    account_id: str
    debit: Amount = Decimal(0)
    credit: Amount = Decimal(0)

    def __post_init__(self):
        object.__setattr__(self, "debit", to_amount(self.debit))
        object.__setattr__(self, "credit", to_amount(self.credit))
        if self.debit < 0 or self.credit < 0:
            raise ValueError(f"Negative amount in entry for {self.account_id}.")

    @classmethod
    def dr(cls, account_id: str, amount: Numeric) -> "LedgerEntry":
        return cls(account_id, debit=to_amount(amount))

    @classmethod
    def cr(cls, account_id: str, amount: Numeric) -> "LedgerEntry":
        return cls(account_id, credit=to_amount(amount))


def total_debits(entries: Iterable[LedgerEntry]) -> Amount:
    return Decimal(sum((e.debit for e in entries), Decimal(0)))


def total_credits(entries: Iterable[LedgerEntry]) -> Amount:
    return Decimal(sum((e.credit for e in entries), Decimal(0)))


@dataclass
class Entry:
    """Builder for a list of ledger entries.

    ```
    Entry("Office rent").amount(25_000).debit("E003").credit("A002")
    ```
    """

    title: str
    lines: list[LedgerEntry] = field(default_factory=list)
    _amount: Amount | None = None

    def amount(self, amount: Numeric):
        """Set default amount for the following lines."""
        self._amount = to_amount(amount)
        return self

    def get_amount(self, amount: Numeric | None = None) -> Amount:
        if amount is not None:
            return to_amount(amount)
        if self._amount is None:
            raise ValueError("Amount is not set.")
        return self._amount

    def debit(self, account_id: str, amount: Numeric | None = None):
        self.lines.append(LedgerEntry.dr(account_id, self.get_amount(amount)))
        return self

    def credit(self, account_id: str, amount: Numeric | None = None):
        self.lines.append(LedgerEntry.cr(account_id, self.get_amount(amount)))
        return self

    def double(self, debit: str, credit: str, amount: Numeric):
        self.debit(debit, amount)
        self.credit(credit, amount)
        return self

    def is_balanced(self) -> bool:
        return abs(total_debits(self.lines) - total_credits(self.lines)) <= TOLERANCE

    def __iter__(self):
        return iter(self.lines)
