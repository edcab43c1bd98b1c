import logging
from decimal import Decimal

from swipeledger import BalanceSheet, LedgerEntry, TransactionType
from swipeledger.reports import ReportDict, Reporter


def test_opening_balance_sheet(book):
    sheet = book.generate_balance_sheet()
    assert sheet.total_assets == 2_500_000
    assert sheet.total_liabilities == 0
    assert sheet.total_equity == 2_500_000
    assert sheet.is_balanced()


def test_equity_is_not_in_liabilities(book):
    sheet = book.generate_balance_sheet()
    assert "Q001" not in sheet.liabilities
    assert list(sheet.equity) == ["Q001", "Q002"]
    assert "L001" in sheet.liabilities


def test_profit_and_loss(swipe_cycle):
    book, _ = swipe_cycle
    pnl = book.generate_profit_and_loss()
    assert pnl.income == {"I001": 200, "I002": 0}
    assert pnl.expenses == {"E001": 130, "E002": 0, "E003": 0}
    assert pnl.total_income == 200
    assert pnl.total_expenses == 130
    assert pnl.net_profit == 70


def test_net_profit_folds_into_retained_earnings(book):
    book.post(
        "Cash fee",
        TransactionType.Journal,
        [LedgerEntry.dr("A001", 1_000), LedgerEntry.cr("I001", 1_000)],
    )
    sheet = book.generate_balance_sheet()
    assert sheet.equity["Q002"] == 1_501_000
    assert book.get_account_balance("Q002") == 1_500_000
    assert len(book.journal) == 1
    assert sheet.is_balanced()


def test_balance_sheet_after_swipe_cycle(swipe_cycle):
    book, _ = swipe_cycle
    sheet = book.generate_balance_sheet()
    assert sheet.total_assets == Decimal("2500070.00")
    assert sheet.total_equity == Decimal("2500070.00")
    assert sheet.imbalance == 0


def test_balance_sheet_is_not_balanced():
    sheet = BalanceSheet(
        assets=ReportDict({"A001": 350}),
        liabilities=ReportDict({"L001": 1}),
        equity=ReportDict({"Q001": 300, "Q002": 50}),
    )
    assert sheet.is_balanced() is False
    assert sheet.imbalance == -1


def test_unbalanced_sheet_is_logged(seed_chart, caplog):
    reporter = Reporter(seed_chart, {"A001": Decimal(5)}, "Q002")
    with caplog.at_level(logging.WARNING, logger="swipeledger.reports"):
        sheet = reporter.balance_sheet()
    assert sheet.is_balanced() is False
    assert "does not balance" in caplog.text


def test_report_dict_load_save(tmp_path):
    path = tmp_path / "pnl.json"
    d = ReportDict(I001=Decimal("200.50"))
    d.save(path)
    assert ReportDict.load(path) == {"I001": Decimal("200.50")}
    assert d.total == Decimal("200.50")
