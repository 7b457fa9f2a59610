"""Operating expense breakdown."""

from collections.abc import Sequence

from auction_accounting.config import ReportConfig
from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import Expense
from auction_accounting.models.report import (
    ExpenseCategorySummary,
    ExpenseSummaryReport,
    MonthlyAmount,
)
from auction_accounting.processing.aggregation import (
    bucket_by_month,
    group_sum,
    percentage_of,
    sorted_by_amount,
    sorted_by_key,
)
from auction_accounting.processing.date_filter import expenses_in_range
from auction_accounting.utils.decimal_utils import sum_amounts


def generate_expense_summary(
    expenses: Sequence[Expense],
    date_range: DateRange,
    report_config: ReportConfig | None = None,
) -> ExpenseSummaryReport:
    """Summarise operating expenses dated in range.

    Args:
        expenses: All operating expenses (read-only).
        date_range: Reporting window.
        report_config: Number of recent expenses to list.

    Returns:
        ExpenseSummaryReport.
    """
    report_config = report_config or ReportConfig()
    in_window = expenses_in_range(expenses, date_range)

    total = sum_amounts(e.amount for e in in_window)
    by_category = group_sum(in_window, lambda e: e.category, lambda e: e.amount)
    counts: dict[str, int] = {}
    for expense in in_window:
        counts[expense.category] = counts.get(expense.category, 0) + 1

    by_month = group_sum(in_window, lambda e: bucket_by_month(e.date), lambda e: e.amount)
    newest_first = sorted(in_window, key=lambda e: e.date, reverse=True)

    return ExpenseSummaryReport(
        total_expenses=total,
        expenses_by_category=tuple(
            ExpenseCategorySummary(category, amount, percentage_of(amount, total), counts[category])
            for category, amount in sorted_by_amount(by_category)
        ),
        expenses_by_month=tuple(
            MonthlyAmount(month, amount) for month, amount in sorted_by_key(by_month)
        ),
        recurring_total=sum_amounts(e.amount for e in in_window if e.is_recurring),
        recent_expenses=tuple(newest_first[:report_config.recent_expenses]),
    )
