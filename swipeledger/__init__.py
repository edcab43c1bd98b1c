import logging

from .base import (
    AccountType,
    Category,
    InsufficientEntries,
    InvalidAccountReference,
    InvalidAmount,
    LedgerError,
    NotFound,
    Status,
    TransactionType,
    UnbalancedTransaction,
    round_money,
)
from .book import Book
from .chart import Account, ChartOfAccounts
from .config import Designations, SeedData, default_seed
from .entry import Entry, LedgerEntry
from .ledger import Transaction, TransactionMetadata
from .rates import CardNetwork, Customer, PGConfig, Rates, Wallet
from .reports import BalanceSheet, ProfitAndLoss

logging.getLogger(__name__).addHandler(logging.NullHandler())
