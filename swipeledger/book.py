"""User-facing Book class: the store of accounts, masters and transactions.

```
book = Book.from_seed()
book.swipe("C001", "W001", CardNetwork.Visa, 10_000)
book.payout("C001", "A002", 9_800)
book.generate_balance_sheet().is_balanced()
```
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from .base import (
    AccountType,
    Amount,
    Category,
    InvalidAmount,
    NotFound,
    Numeric,
    TransactionType,
)
from .chart import ChartOfAccounts, next_id
from .config import Designations, SeedData, default_seed
from .entry import LedgerEntry
from .ledger import BalanceEngine, Journal, Poster, Transaction, TransactionMetadata
from .rates import CardNetwork, Customer, PGConfig, Rates, Wallet, percent_of
from .reconcile import Reconciler
from .reports import BalanceSheet, ProfitAndLoss, Reporter
from .workflows import (
    AdvancePay,
    MoneyTransfer,
    Recovery,
    SwipeInflow,
    SwipePayout,
    Workflow,
)

logger = logging.getLogger(__name__)

EDITABLE_CUSTOMER_FIELDS = {"name", "phone", "commission_rates"}


@dataclass
class Book:
    chart: ChartOfAccounts = field(default_factory=ChartOfAccounts)
    customers: dict[str, Customer] = field(default_factory=dict)
    wallets: dict[str, Wallet] = field(default_factory=dict)
    journal: Journal = field(default_factory=Journal)
    accounts: Designations = field(default_factory=Designations)
    default_commission_rates: Rates = field(default_factory=Rates)

    def __post_init__(self):
        self.poster = Poster(self.chart, self.journal)
        self.engine = BalanceEngine(self.chart, self.journal)
        self.reconciler = Reconciler(
            self.wallets, self.engine, self.poster, self.accounts
        )

    @classmethod
    def from_seed(cls, seed: SeedData | None = None):
        seed = seed or default_seed()
        self = cls(
            chart=ChartOfAccounts.from_accounts(seed.accounts),
            accounts=seed.designations,
            default_commission_rates=seed.default_commission_rates,
        )
        for c in seed.customers:
            self.create_customer(c.name, c.phone, c.commission_rates, customer_id=c.id)
        for w in seed.wallets:
            wallet_id = w.id or next_id("W", self.wallets)
            self.wallets[wallet_id] = Wallet(
                id=wallet_id,
                name=w.name,
                ledger_account_id=w.ledger_account_id,
                pgs=[pg.model_copy(deep=True) for pg in w.pgs],
            )
        return self

    # Transactions

    def post(
        self,
        description: str,
        t: TransactionType,
        entries: Iterable[LedgerEntry],
        metadata: TransactionMetadata | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        return self.poster.post(description, t, entries, metadata, date)

    def post_workflow(
        self,
        description: str,
        workflow: Workflow,
        metadata: TransactionMetadata | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        entries = workflow.to_entries(self.accounts)
        return self.post(description, workflow.type, entries, metadata, date)

    def reconcile(self, wallet_id: str, actual_balance: Numeric) -> Transaction | None:
        return self.reconciler.reconcile(wallet_id, actual_balance)

    @property
    def transactions(self) -> list[Transaction]:
        """All transactions, most recent first."""
        return list(self.journal.latest_first())

    # Masters

    def create_customer(
        self,
        name: str,
        phone: str,
        commission_rates: Rates | None = None,
        customer_id: str | None = None,
    ) -> str:
        """Create customer together with its payable account. Returns customer id."""
        account = self.chart.new_account(
            f"{name} Payable", AccountType.Liability, Category.Customer
        )
        customer = Customer(
            id=customer_id or next_id("C", self.customers),
            name=name,
            phone=phone,
            commission_rates=commission_rates or self.default_commission_rates,
            ledger_account_id=account.id,
        )
        if customer.id in self.customers:
            raise ValueError(f"Customer {customer.id} already exists.")
        self.chart.register(account)
        self.customers[customer.id] = customer
        logger.info("Created customer %s with account %s", customer.id, account.id)
        return customer.id

    def get_customer(self, customer_id: str) -> Customer:
        NotFound.must_exist(self.customers, customer_id, "Customer")
        return self.customers[customer_id]

    def find_customer_by_phone(self, phone: str) -> Customer | None:
        for customer in self.customers.values():
            if customer.phone == phone:
                return customer
        return None

    def update_customer(self, customer_id: str, **fields) -> Customer:
        """Change name, phone or commission rates of a customer."""
        customer = self.get_customer(customer_id)
        if extra := set(fields) - EDITABLE_CUSTOMER_FIELDS:
            raise ValueError(f"Cannot update customer fields: {sorted(extra)}")
        updated = Customer.model_validate({**customer.model_dump(), **fields})
        self.customers[customer_id] = updated
        return updated

    def create_wallet(self, name: str, pg_name: str, charges: Rates) -> str:
        """Create wallet with one gateway and its asset account. Returns wallet id."""
        account = self.chart.new_account(name, AccountType.Asset, Category.Wallet)
        wallet = Wallet(
            id=next_id("W", self.wallets),
            name=name,
            ledger_account_id=account.id,
            pgs=[PGConfig(name=pg_name, charges=charges)],
        )
        self.chart.register(account)
        self.wallets[wallet.id] = wallet
        logger.info("Created wallet %s with account %s", wallet.id, account.id)
        return wallet.id

    def get_wallet(self, wallet_id: str) -> Wallet:
        NotFound.must_exist(self.wallets, wallet_id, "Wallet")
        return self.wallets[wallet_id]

    def add_wallet_pg(self, wallet_id: str, pg: PGConfig):
        wallet = self.get_wallet(wallet_id)
        if wallet.find_pg(pg.name) is not None:
            raise ValueError(f"Wallet {wallet_id} already has gateway {pg.name}.")
        wallet.pgs.append(pg.model_copy(deep=True))

    def update_wallet_pg(self, wallet_id: str, old_name: str, pg: PGConfig):
        """Replace gateway *old_name* in place."""
        wallet = self.get_wallet(wallet_id)
        names = [p.name for p in wallet.pgs]
        NotFound.must_exist(names, old_name, "Payment gateway")
        if pg.name != old_name and pg.name in names:
            raise ValueError(f"Wallet {wallet_id} already has gateway {pg.name}.")
        wallet.pgs[names.index(old_name)] = pg.model_copy(deep=True)

    def _pg(self, wallet: Wallet, pg_name: str | None) -> PGConfig:
        pg = wallet.find_pg(pg_name)
        if pg is None:
            raise NotFound("Payment gateway", str(pg_name))
        return pg

    def _rates(
        self, customer: Customer, card: CardNetwork, override: Numeric | None
    ) -> Rates:
        """Customer rates with the operator override for *card* applied."""
        if override is None:
            return customer.commission_rates
        return customer.commission_rates.with_rate(card, override)

    def _save_rates(self, customer: Customer, rates: Rates):
        if rates != customer.commission_rates:
            self.update_customer(customer.id, commission_rates=rates)

    # Workflows

    def swipe(
        self,
        customer_id: str,
        wallet_id: str,
        card: CardNetwork,
        amount: Numeric,
        pg_name: str | None = None,
        service_rate: Numeric | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        """Card swipe into a wallet, customer payable is credited net of service fee.

        A *service_rate* override becomes the customer rate for the card
        once the transaction is posted.
        """
        InvalidAmount.must_be_positive(amount)
        customer = self.get_customer(customer_id)
        wallet = self.get_wallet(wallet_id)
        pg = self._pg(wallet, pg_name)
        rates = self._rates(customer, card, service_rate)
        workflow = SwipeInflow(
            wallet.ledger_account_id, amount, rates.rate(card), pg.charges.rate(card)
        )
        metadata = TransactionMetadata(
            customer_id=customer.id, wallet_id=wallet.id, card_type=card
        )
        transaction = self.post_workflow(
            f"Swipe Inflow: {customer.name} ({card.value.upper()})",
            workflow,
            metadata,
            date,
        )
        self._save_rates(customer, rates)
        return transaction

    def payout(
        self,
        customer_id: str,
        payout_account: str,
        amount: Numeric,
        transfer_commission: Numeric = 0,
        related_transaction_id: str | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        InvalidAmount.must_be_positive(amount)
        customer = self.get_customer(customer_id)
        workflow = SwipePayout(payout_account, amount, transfer_commission)
        metadata = TransactionMetadata(
            customer_id=customer.id, related_transaction_id=related_transaction_id
        )
        return self.post_workflow(
            f"Payout Outflow: {customer.name}", workflow, metadata, date
        )

    def advance_pay(
        self,
        customer_id: str,
        source_account: str,
        amount: Numeric,
        date: datetime | None = None,
    ) -> Transaction:
        InvalidAmount.must_be_positive(amount)
        customer = self.get_customer(customer_id)
        return self.post_workflow(
            f"Advance Pay: {customer.name}",
            AdvancePay(source_account, amount),
            TransactionMetadata(customer_id=customer.id),
            date,
        )

    def recover(
        self,
        customer_id: str,
        wallet_id: str,
        card: CardNetwork,
        amount: Numeric,
        collection_account: str,
        collection: Numeric | None = None,
        pg_name: str | None = None,
        mdr_rate: Numeric | None = None,
        commission_rate: Numeric | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        """Recover an advance by swiping the card.

        Collection defaults to the customer commission on the amount.
        """
        InvalidAmount.must_be_positive(amount)
        customer = self.get_customer(customer_id)
        wallet = self.get_wallet(wallet_id)
        rates = self._rates(customer, card, commission_rate)
        if collection is None:
            collection = percent_of(amount, rates.rate(card))
        if mdr_rate is None:
            mdr_rate = self._pg(wallet, pg_name).charges.rate(card)
        workflow = Recovery(
            wallet.ledger_account_id, amount, collection_account, collection, mdr_rate
        )
        metadata = TransactionMetadata(
            customer_id=customer.id, wallet_id=wallet.id, card_type=card
        )
        transaction = self.post_workflow(
            f"Recovery: {customer.name} ({card.value.upper()})",
            workflow,
            metadata,
            date,
        )
        self._save_rates(customer, rates)
        return transaction

    def money_transfer(
        self,
        wallet_id: str,
        inflow_account: str,
        amount: Numeric,
        service_charge: Numeric = 0,
        customer_id: str | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        InvalidAmount.must_be_positive(amount)
        wallet = self.get_wallet(wallet_id)
        name = self.get_customer(customer_id).name if customer_id else "Walk-in"
        workflow = MoneyTransfer(
            inflow_account, wallet.ledger_account_id, amount, service_charge
        )
        metadata = TransactionMetadata(customer_id=customer_id, wallet_id=wallet.id)
        return self.post_workflow(f"DMT: {name}", workflow, metadata, date)

    # Queries

    def get_account_balance(self, account_id: str) -> Amount:
        return self.engine.get_account_balance(account_id)

    def get_ledger(self, account_id: str) -> list[Transaction]:
        return self.engine.get_ledger(account_id)

    @property
    def balances(self) -> dict[str, Amount]:
        return self.engine.balances()

    def trial_balance(self):
        return self.engine.trial_balance()

    def _reporter(self) -> Reporter:
        return Reporter(
            self.chart, self.engine.balances(), self.accounts.retained_earnings
        )

    def generate_profit_and_loss(self) -> ProfitAndLoss:
        return self._reporter().profit_and_loss()

    def generate_balance_sheet(self) -> BalanceSheet:
        return self._reporter().balance_sheet()
