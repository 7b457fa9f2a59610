"""Profit & Loss report generation.

Single source of truth for revenue, COGS and profit figures; the summary
report reads its numbers from here.
"""

from collections.abc import Sequence
from decimal import Decimal

from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import Expense, Purchase
from auction_accounting.models.report import (
    CostSection,
    MonthlyAmount,
    MonthlyResult,
    ProfitLossReport,
    RevenueSection,
    StatementLine,
)
from auction_accounting.processing.aggregation import (
    bucket_by_month,
    group_sum,
    percentage_of,
    sorted_by_key,
)
from auction_accounting.processing.date_filter import (
    cost_items_in_range,
    expenses_in_range,
    payments_in_range,
)
from auction_accounting.utils.decimal_utils import ZERO, sum_amounts
from auction_accounting.utils.logging_config import get_logger

logger = get_logger(__name__)


def _monthly(totals: dict[str, Decimal]) -> tuple[MonthlyAmount, ...]:
    return tuple(MonthlyAmount(month, amount) for month, amount in sorted_by_key(totals))


def generate_profit_loss(
    purchases: Sequence[Purchase],
    expenses: Sequence[Expense],
    date_range: DateRange,
) -> ProfitLossReport:
    """Generate the Profit & Loss report for a date range.

    Revenue is every payment dated in range; COGS is every per-vehicle cost
    item dated in range; operating expenses are standalone expenses dated in
    range. Line items are filtered on their own dates.

    Args:
        purchases: All purchases (read-only).
        expenses: All operating expenses (read-only).
        date_range: Reporting window.

    Returns:
        ProfitLossReport with totals, groupings, profits and margins.
    """
    payments = [payment for _, payment in payments_in_range(purchases, date_range)]
    cost_items = [item for _, item in cost_items_in_range(purchases, date_range)]
    operating = expenses_in_range(expenses, date_range)

    revenue = RevenueSection(
        total=sum_amounts(p.amount for p in payments),
        by_payment_method=group_sum(payments, lambda p: p.method, lambda p: p.amount),
        by_month=_monthly(group_sum(payments, lambda p: bucket_by_month(p.date), lambda p: p.amount)),
    )
    cogs = CostSection(
        total=sum_amounts(c.amount for c in cost_items),
        by_category=group_sum(cost_items, lambda c: c.category, lambda c: c.amount),
        by_month=_monthly(group_sum(cost_items, lambda c: bucket_by_month(c.date), lambda c: c.amount)),
    )
    operating_expenses = CostSection(
        total=sum_amounts(e.amount for e in operating),
        by_category=group_sum(operating, lambda e: e.category, lambda e: e.amount),
        by_month=_monthly(group_sum(operating, lambda e: bucket_by_month(e.date), lambda e: e.amount)),
    )

    gross_profit = revenue.total - cogs.total
    net_profit = gross_profit - operating_expenses.total

    logger.debug(
        f"P&L {date_range}: {len(payments)} payments, {len(cost_items)} cost items, "
        f"{len(operating)} expenses, net={net_profit}"
    )

    return ProfitLossReport(
        revenue=revenue,
        cost_of_goods_sold=cogs,
        operating_expenses=operating_expenses,
        gross_profit=gross_profit,
        gross_margin=percentage_of(gross_profit, revenue.total),
        net_profit=net_profit,
        net_margin=percentage_of(net_profit, revenue.total),
    )


def build_profit_loss_statement(
    report: ProfitLossReport,
    labels: dict[str, str] | None = None,
) -> list[StatementLine]:
    """Lay out the P&L as statement rows.

    Section rows are indented under their header and carry their share of
    the section total. Gross and net profit carry their margins.

    Args:
        report: Generated P&L report.
        labels: Optional display names for payment methods and categories.

    Returns:
        Ordered statement lines.
    """
    labels = labels or {}
    lines: list[StatementLine] = [StatementLine("Revenue", ZERO, is_subtotal=True)]

    for method, amount in report.revenue.by_payment_method.items():
        lines.append(StatementLine(
            labels.get(method, method),
            amount,
            percentage=percentage_of(amount, report.revenue.total),
            indent=1,
        ))
    lines.append(StatementLine("Total Revenue", report.revenue.total, is_subtotal=True))

    lines.append(StatementLine("Cost of Goods Sold", ZERO, is_subtotal=True))
    for category, amount in report.cost_of_goods_sold.by_category.items():
        lines.append(StatementLine(
            labels.get(category, category),
            amount,
            percentage=percentage_of(amount, report.cost_of_goods_sold.total),
            indent=1,
        ))
    lines.append(StatementLine("Total COGS", report.cost_of_goods_sold.total, is_subtotal=True))

    lines.append(StatementLine(
        "Gross Profit", report.gross_profit, percentage=report.gross_margin, is_total=True
    ))
    lines.append(StatementLine(
        "Operating Expenses", report.operating_expenses.total, is_subtotal=True
    ))
    lines.append(StatementLine(
        "Net Profit", report.net_profit, percentage=report.net_margin, is_total=True
    ))
    return lines


def combine_monthly_results(report: ProfitLossReport) -> list[MonthlyResult]:
    """Merge monthly revenue and COGS into one chronological series."""
    revenue = {m.month: m.amount for m in report.revenue.by_month}
    costs = {m.month: m.amount for m in report.cost_of_goods_sold.by_month}

    results = []
    for month in sorted(revenue.keys() | costs.keys()):
        month_revenue = revenue.get(month, ZERO)
        month_costs = costs.get(month, ZERO)
        results.append(MonthlyResult(month, month_revenue, month_costs, month_revenue - month_costs))
    return results
