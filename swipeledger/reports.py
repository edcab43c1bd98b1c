"""Profit and loss statement and balance sheet."""

import logging
from collections import UserDict
from dataclasses import dataclass
from decimal import Decimal

import simplejson as json  # type: ignore

from .base import TOLERANCE, AccountType, Amount, SaveLoadMixin
from .chart import Account, ChartOfAccounts

logger = logging.getLogger(__name__)


class ReportDict(UserDict[str, Decimal], SaveLoadMixin):
    """Account ids and balances."""

    @property
    def total(self) -> Amount:
        return Decimal(sum(self.data.values(), Decimal(0)))

    def model_dump_json(self, indent: int = 2, warnings: bool = False):
        return json.dumps(self.data, indent=indent)

    @classmethod
    def model_validate_json(cls, text: str):
        return cls(json.loads(text, use_decimal=True))


class Report:
    """Base class for financial reports."""


@dataclass
class ProfitAndLoss(Report):
    income: ReportDict
    expenses: ReportDict

    @property
    def total_income(self) -> Amount:
        return self.income.total

    @property
    def total_expenses(self) -> Amount:
        return self.expenses.total

    @property
    def net_profit(self) -> Amount:
        """Income less expenses."""
        return self.total_income - self.total_expenses


@dataclass
class BalanceSheet(Report):
    assets: ReportDict
    liabilities: ReportDict
    equity: ReportDict

    @property
    def total_assets(self) -> Amount:
        return self.assets.total

    @property
    def total_liabilities(self) -> Amount:
        return self.liabilities.total

    @property
    def total_equity(self) -> Amount:
        return self.equity.total

    @property
    def imbalance(self) -> Amount:
        """Assets less liabilities and equity. Zero for a correct ledger."""
        return self.total_assets - (self.total_liabilities + self.total_equity)

    def is_balanced(self) -> bool:
        """Return True if assets equal liabilities plus equity."""
        return abs(self.imbalance) <= TOLERANCE


@dataclass
class Reporter:
    chart: ChartOfAccounts
    balances: dict[str, Amount]
    retained_earnings: str

    def fill(self, accounts: list[Account]) -> ReportDict:
        return ReportDict(
            {a.id: self.balances.get(a.id, Decimal(0)) for a in accounts}
        )

    def profit_and_loss(self) -> ProfitAndLoss:
        return ProfitAndLoss(
            income=self.fill(self.chart.by_type(AccountType.Income)),
            expenses=self.fill(self.chart.by_type(AccountType.Expense)),
        )

    def balance_sheet(self) -> BalanceSheet:
        """Balance sheet with current period profit shown in retained earnings.

        Profit is added at reporting time only, no transaction is posted.
        """
        liabilities = [
            a for a in self.chart.by_type(AccountType.Liability) if not a.is_equity
        ]
        equity = self.fill([a for a in self.chart.values() if a.is_equity])
        if self.retained_earnings in equity:
            equity[self.retained_earnings] += self.profit_and_loss().net_profit
        sheet = BalanceSheet(
            assets=self.fill(self.chart.by_type(AccountType.Asset)),
            liabilities=self.fill(liabilities),
            equity=equity,
        )
        if not sheet.is_balanced():
            logger.warning("Balance sheet does not balance by %s", sheet.imbalance)
        return sheet
