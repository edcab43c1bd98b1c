"""Seed data and account designations.

`SeedData` is plain configuration: the opening chart of accounts, master
records and which account ids play fixed roles in transaction workflows.
It can be loaded from a JSON file with `SeedData.load(path)`.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import AccountType, Category, SaveLoadMixin
from .chart import Account
from .rates import PGConfig, Rates


class Designations(BaseModel):
    """Account ids used by transaction workflows."""

    model_config = ConfigDict(extra="forbid")

    payables: str = "L001"
    receivables: str = "A006"
    service_income: str = "I001"
    surplus_income: str = "I002"
    mdr_expense: str = "E001"
    deficit_expense: str = "E002"
    retained_earnings: str = "Q002"


class CustomerSeed(BaseModel):
    id: str | None = None
    name: str
    phone: str
    commission_rates: Rates


class WalletSeed(BaseModel):
    id: str | None = None
    name: str
    ledger_account_id: str
    pgs: list[PGConfig] = Field(min_length=1)


class SeedData(BaseModel, SaveLoadMixin):
    model_config = ConfigDict(extra="forbid")

    accounts: list[Account] = []
    customers: list[CustomerSeed] = []
    wallets: list[WalletSeed] = []
    designations: Designations = Designations()
    default_commission_rates: Rates = Rates()

    @model_validator(mode="after")
    def check_references(self):
        types = {account.id: account.type for account in self.accounts}
        if len(types) != len(self.accounts):
            raise ValueError("Account ids are not unique.")
        for role, account_id in self.designations.model_dump().items():
            if account_id not in types:
                raise ValueError(f"Designated {role} account {account_id} not found.")
        for wallet in self.wallets:
            if types.get(wallet.ledger_account_id) != AccountType.Asset:
                raise ValueError(
                    f"Wallet {wallet.name} needs an asset account, "
                    f"got {wallet.ledger_account_id}."
                )
        return self


def _account(account_id, name, t, category, balance=0):
    return Account(account_id, name, t, category, Decimal(balance))


def default_seed() -> SeedData:
    """Reference chart, customers and wallets of a card swipe business."""
    T = AccountType
    accounts = [
        _account("A001", "Cash on Hand", T.Asset, Category.Cash, 500_000),
        _account("A002", "HDFC Bank Main", T.Asset, Category.Bank, 1_200_000),
        _account("A003", "ICICI Bank Ops", T.Asset, Category.Bank, 800_000),
        _account("A004", "Wallet A (Razorpay)", T.Asset, Category.Wallet),
        _account("A005", "Wallet B (Paytm)", T.Asset, Category.Wallet),
        _account("A006", "Customer Receivables", T.Asset, Category.Customer),
        _account("L001", "Customer Payables", T.Liability, Category.Customer),
        _account("L002", "Duties & Taxes", T.Liability, Category.Revenue),
        _account("Q001", "Owner's Equity", T.Liability, Category.Equity, 1_000_000),
        _account("Q002", "Retained Earnings", T.Liability, Category.Equity, 1_500_000),
        _account("I001", "Service Charges", T.Income, Category.Revenue),
        _account("I002", "Wallet Surplus", T.Income, Category.Revenue),
        _account("E001", "Wallet MDR Charges", T.Expense, Category.Expense),
        _account("E002", "Wallet Deficit", T.Expense, Category.Expense),
        _account("E003", "Office Rent", T.Expense, Category.Expense),
    ]
    customers = [
        CustomerSeed(
            id="C001",
            name="Rahul Sharma",
            phone="9876543210",
            commission_rates=Rates(visa=2.0, master=2.0, amex=3.0, rupay=1.5),
        ),
        CustomerSeed(
            id="C002",
            name="Priya Verma",
            phone="9988776655",
            commission_rates=Rates(visa=1.8, master=1.8, amex=2.8, rupay=1.2),
        ),
        CustomerSeed(
            id="C003",
            name="Enterprises Ltd",
            phone="8877665544",
            commission_rates=Rates(visa=1.5, master=1.5, amex=2.5, rupay=1.0),
        ),
    ]
    wallets = [
        WalletSeed(
            id="W001",
            name="Wallet A (Razorpay)",
            ledger_account_id="A004",
            pgs=[
                PGConfig(
                    name="Standard",
                    charges=Rates(visa=1.2, master=1.2, amex=2.5, rupay=0.5),
                ),
                PGConfig(
                    name="Premium",
                    charges=Rates(visa=1.5, master=1.5, amex=2.8, rupay=0.8),
                ),
            ],
        ),
        WalletSeed(
            id="W002",
            name="Wallet B (Paytm)",
            ledger_account_id="A005",
            pgs=[
                PGConfig(
                    name="Business",
                    charges=Rates(visa=1.1, master=1.1, amex=2.4, rupay=0.0),
                )
            ],
        ),
    ]
    return SeedData(
        accounts=accounts,
        customers=customers,
        wallets=wallets,
        default_commission_rates=Rates(visa=2.0, master=2.0, amex=3.5, rupay=1.0),
    )
