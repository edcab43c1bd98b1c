from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from pathlib import Path
from typing import Iterable

Amount = Decimal
Numeric = int | float | str | Decimal

TOLERANCE = Decimal("0.01")
CENT = Decimal("0.01")


def to_amount(value: Numeric) -> Amount:
    """Convert number to Decimal, floats are converted through their string form."""
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Numeric) -> Amount:
    """Round to two decimal places, half-up."""
    return to_amount(value).quantize(CENT, rounding=ROUND_HALF_UP)


class AccountType(Enum):
    """Four types of accounts. Equity lives in liabilities with `Equity` category."""

    Asset = "ASSET"
    Liability = "LIABILITY"
    Income = "INCOME"
    Expense = "EXPENSE"

    def __repr__(self):
        return self.value.capitalize()

    @property
    def is_debit_normal(self) -> bool:
        return self in (AccountType.Asset, AccountType.Expense)


class Category(Enum):
    Cash = "Cash"
    Bank = "Bank"
    Wallet = "Wallet"
    Customer = "Customer"
    Revenue = "Revenue"
    Expense = "Expense"
    Equity = "Equity"


class TransactionType(Enum):
    SwipePay = "SWIPE_PAY"
    PaySwipe = "PAY_SWIPE"
    MoneyTransfer = "MONEY_TRANSFER"
    Journal = "JOURNAL"
    Reconciliation = "RECONCILIATION"


class Status(Enum):
    Completed = "COMPLETED"
    Pending = "PENDING"
    Failed = "FAILED"


class LedgerError(Exception):
    """Base error for the swipeledger project."""


class UnbalancedTransaction(LedgerError):
    def __init__(self, debits: Amount, credits: Amount):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Transaction unbalanced: debits {debits:.2f}, credits {credits:.2f}."
        )


class InsufficientEntries(LedgerError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"A transaction must have at least two entries, got {count}."
        )


class InvalidAccountReference(LedgerError):
    def __init__(self, account_ids: list[str]):
        self.account_ids = account_ids
        super().__init__(f"Invalid account ids: {', '.join(account_ids)}.")


class InvalidAmount(LedgerError):
    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Amount must be greater than zero, got {amount}.")

    @staticmethod
    def must_be_positive(amount: Numeric):
        if to_amount(amount) <= 0:
            raise InvalidAmount(amount)


class NotFound(LedgerError, KeyError):
    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} {key} not found.")

    def __str__(self):
        return self.args[0]

    @staticmethod
    def must_exist(collection: Iterable[str], key: str, kind: str = "Account"):
        if key not in collection:
            raise NotFound(kind, key)


class SaveLoadMixin:
    """A mix-in class for loading and saving pydantic models to files."""

    @classmethod
    def load(cls, filename: str | Path):
        return cls.model_validate_json(Path(filename).read_text())  # type: ignore

    def save(self, filename: str | Path, allow_overwrite: bool = False):
        if not allow_overwrite and Path(filename).exists():
            raise FileExistsError(f"File already exists: {filename}")
        content = self.model_dump_json(indent=2, warnings=False)  # type: ignore
        Path(filename).write_text(content)  # type: ignore
