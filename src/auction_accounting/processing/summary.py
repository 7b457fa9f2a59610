"""Headline summary derived from the P&L and receivables reports."""

from decimal import Decimal
from typing import Optional

from auction_accounting.models.report import (
    AccountingSummary,
    AccountsReceivableReport,
    ProfitLossReport,
)
from auction_accounting.utils.decimal_utils import HUNDRED, ZERO, safe_divide


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """Change from previous to current as a percentage of |previous|; 0 when previous is 0."""
    return safe_divide((current - previous) * HUNDRED, abs(previous))


def generate_summary(
    profit_loss: ProfitLossReport,
    accounts_receivable: AccountsReceivableReport,
    previous_profit_loss: Optional[ProfitLossReport] = None,
) -> AccountingSummary:
    """Build the summary by reading figures from already generated reports.

    Nothing is recomputed here: any change to how the P&L or receivables
    are calculated shows up in the summary unchanged.

    Args:
        profit_loss: P&L for the reporting window.
        accounts_receivable: Receivables for the reporting window.
        previous_profit_loss: P&L for the preceding window, for change figures.

    Returns:
        AccountingSummary.
    """
    revenue_change = ZERO
    profit_change = ZERO
    if previous_profit_loss is not None:
        revenue_change = percent_change(
            profit_loss.revenue.total, previous_profit_loss.revenue.total
        )
        profit_change = percent_change(profit_loss.net_profit, previous_profit_loss.net_profit)

    return AccountingSummary(
        total_revenue=profit_loss.revenue.total,
        total_costs=profit_loss.cost_of_goods_sold.total,
        gross_profit=profit_loss.gross_profit,
        net_profit=profit_loss.net_profit,
        outstanding_receivables=accounts_receivable.total_outstanding,
        revenue_change=revenue_change,
        profit_change=profit_change,
    )
