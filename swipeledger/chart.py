"""Chart of accounts."""

import logging
import re
from collections import UserDict
from dataclasses import dataclass
from decimal import Decimal

from .base import AccountType, Amount, Category, Numeric, NotFound, to_amount

logger = logging.getLogger(__name__)

PREFIXES = {
    AccountType.Asset: "A",
    AccountType.Liability: "L",
    AccountType.Income: "I",
    AccountType.Expense: "E",
}


@dataclass(frozen=True)
class Account:
    """Ledger account. Balance is never stored here, only the seed balance."""

    id: str
    name: str
    type: AccountType
    category: Category
    seed_balance: Amount = Decimal(0)

    @property
    def is_debit_normal(self) -> bool:
        return self.type.is_debit_normal

    @property
    def is_equity(self) -> bool:
        return self.category == Category.Equity


def next_id(prefix: str, taken, width: int = 3) -> str:
    """Allocate *prefix* plus a number above every numeric suffix in use."""
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    numbers = [int(m.group(1)) for key in taken if (m := pattern.match(key))]
    n = max(numbers, default=0) + 1
    while (candidate := f"{prefix}{n:0{width}d}") in taken:
        n += 1
    return candidate


class ChartOfAccounts(UserDict[str, Account]):
    """Registry of accounts keyed by account id. Ids are never reused or removed."""

    @classmethod
    def from_accounts(cls, accounts):
        self = cls()
        for account in accounts:
            self.register(account)
        return self

    def register(self, account: Account) -> Account:
        if account.id in self.data:
            raise ValueError(f"Account {account.id} already exists.")
        self.data[account.id] = account
        return account

    def __delitem__(self, key):
        raise TypeError("Accounts are never deleted.")

    def new_account(
        self,
        name: str,
        t: AccountType,
        category: Category,
        seed_balance: Numeric = 0,
    ) -> Account:
        """Make an account with a fresh id without adding it to the chart."""
        return Account(
            id=next_id(PREFIXES[t], self.data),
            name=name,
            type=t,
            category=category,
            seed_balance=to_amount(seed_balance),
        )

    def create_account(
        self,
        name: str,
        t: AccountType,
        category: Category,
        seed_balance: Numeric = 0,
    ) -> Account:
        account = self.register(self.new_account(name, t, category, seed_balance))
        logger.info("Created account %s (%s)", account.id, account.name)
        return account

    def get_account(self, account_id: str) -> Account | None:
        return self.data.get(account_id)

    def require(self, account_id: str) -> Account:
        NotFound.must_exist(self.data, account_id)
        return self.data[account_id]

    def by_type(self, t: AccountType) -> list[Account]:
        return [account for account in self.data.values() if account.type == t]

    def by_category(self, category: Category) -> list[Account]:
        return [
            account for account in self.data.values() if account.category == category
        ]

    def missing(self, account_ids) -> list[str]:
        """Ids from *account_ids* missing in the chart, in order, without repeats."""
        result: list[str] = []
        for account_id in account_ids:
            if account_id not in self.data and account_id not in result:
                result.append(account_id)
        return result
