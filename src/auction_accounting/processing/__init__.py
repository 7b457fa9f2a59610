"""Report generators and the aggregation primitives they share."""

from auction_accounting.processing.cash_flow import generate_cash_flow
from auction_accounting.processing.cost_analysis import generate_cost_analysis
from auction_accounting.processing.date_filter import (
    format_range_label,
    in_range,
    previous_range,
    resolve_range,
)
from auction_accounting.processing.expense_summary import generate_expense_summary
from auction_accounting.processing.orchestrator import generate_reports
from auction_accounting.processing.profit_loss import (
    build_profit_loss_statement,
    combine_monthly_results,
    generate_profit_loss,
)
from auction_accounting.processing.receivables import generate_accounts_receivable
from auction_accounting.processing.revenue_analytics import generate_revenue_analytics
from auction_accounting.processing.summary import generate_summary

__all__ = [
    "resolve_range",
    "in_range",
    "previous_range",
    "format_range_label",
    "generate_profit_loss",
    "build_profit_loss_statement",
    "combine_monthly_results",
    "generate_cash_flow",
    "generate_revenue_analytics",
    "generate_cost_analysis",
    "generate_accounts_receivable",
    "generate_summary",
    "generate_expense_summary",
    "generate_reports",
]
