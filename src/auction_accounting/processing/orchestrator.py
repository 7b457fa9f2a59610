"""Generates every accounting report for one date range."""

from collections.abc import Sequence
from datetime import datetime

from auction_accounting.config import ReportingConfig
from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import Expense, Purchase
from auction_accounting.models.report import FinancialReports
from auction_accounting.processing.cash_flow import generate_cash_flow
from auction_accounting.processing.cost_analysis import generate_cost_analysis
from auction_accounting.processing.date_filter import previous_range
from auction_accounting.processing.expense_summary import generate_expense_summary
from auction_accounting.processing.profit_loss import generate_profit_loss
from auction_accounting.processing.receivables import generate_accounts_receivable
from auction_accounting.processing.revenue_analytics import generate_revenue_analytics
from auction_accounting.processing.summary import generate_summary
from auction_accounting.utils.date_utils import to_local_naive
from auction_accounting.utils.logging_config import LogContext, get_logger

logger = get_logger(__name__)


def generate_reports(
    date_range: DateRange,
    purchases: Sequence[Purchase],
    expenses: Sequence[Expense],
    now: datetime,
    config: ReportingConfig | None = None,
) -> FinancialReports:
    """Generate all reports for a date range.

    Every generator receives the same range and the same ``now``. The
    summary reads from the P&L and receivables reports produced here; the
    P&L of the preceding window of equal length supplies its change figures.

    The function is pure: identical arguments give equal results, and the
    input records are never modified. An offset-aware ``now`` or range is
    converted to naive local time to match the loaded records.

    Args:
        date_range: Reporting window.
        purchases: Purchases snapshot.
        expenses: Operating expenses snapshot.
        now: Instant used for receivable ages.
        config: Aging and report options (defaults when None).

    Returns:
        FinancialReports bundle.
    """
    config = config or ReportingConfig()
    now = to_local_naive(now)
    date_range = DateRange(
        to_local_naive(date_range.start), to_local_naive(date_range.end), date_range.range_type
    )

    with LogContext(
        logger,
        "report generation",
        range=date_range,
        purchases=len(purchases),
        expenses=len(expenses),
        now=now.isoformat(),
    ):
        profit_loss = generate_profit_loss(purchases, expenses, date_range)
        previous_profit_loss = generate_profit_loss(purchases, expenses, previous_range(date_range))
        accounts_receivable = generate_accounts_receivable(
            purchases, date_range, now, config.aging
        )

        reports = FinancialReports(
            date_range=date_range,
            profit_loss=profit_loss,
            cash_flow=generate_cash_flow(purchases, expenses, date_range, config.reports),
            revenue_analytics=generate_revenue_analytics(purchases, date_range, config.reports),
            cost_analysis=generate_cost_analysis(purchases, date_range, config.reports),
            accounts_receivable=accounts_receivable,
            summary=generate_summary(profit_loss, accounts_receivable, previous_profit_loss),
            expense_summary=generate_expense_summary(expenses, date_range, config.reports),
        )

    logger.info(
        f"Generated reports for {date_range.range_type.value} range: "
        f"revenue={profit_loss.revenue.total}, net={profit_loss.net_profit}, "
        f"outstanding={accounts_receivable.total_outstanding}"
    )
    return reports
