"""Cash flow report with a daily running balance."""

from collections.abc import Sequence
from decimal import Decimal

from auction_accounting.config import ReportConfig
from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import Expense, Purchase
from auction_accounting.models.report import (
    BalancePoint,
    CashFlowReport,
    CashInflows,
    CashOutflows,
    DailyAmount,
)
from auction_accounting.processing.aggregation import (
    bucket_by_day,
    group_sum,
    running_accumulate,
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


def _daily(totals: dict[str, Decimal]) -> tuple[DailyAmount, ...]:
    return tuple(DailyAmount(day, amount) for day, amount in sorted_by_key(totals))


def generate_cash_flow(
    purchases: Sequence[Purchase],
    expenses: Sequence[Expense],
    date_range: DateRange,
    report_config: ReportConfig | None = None,
) -> CashFlowReport:
    """Generate the cash flow report for a date range.

    Inflows are in-range payments. Outflows are in-range vehicle cost items
    by category plus in-range operating expenses, which are folded into a
    single operating category rather than reported separately.

    Args:
        purchases: All purchases (read-only).
        expenses: All operating expenses (read-only).
        date_range: Reporting window.
        report_config: Supplies the operating category name.

    Returns:
        CashFlowReport with daily series and running balance.
    """
    operating_category = (report_config or ReportConfig()).operating_category

    payments = [payment for _, payment in payments_in_range(purchases, date_range)]
    cost_items = [item for _, item in cost_items_in_range(purchases, date_range)]
    operating = expenses_in_range(expenses, date_range)

    # (category, date, amount) for every outflow line
    outflow_lines = [(c.category, c.date, c.amount) for c in cost_items]
    outflow_lines.extend((operating_category, e.date, e.amount) for e in operating)

    inflows_by_day = group_sum(payments, lambda p: bucket_by_day(p.date), lambda p: p.amount)
    outflows_by_day = group_sum(outflow_lines, lambda o: bucket_by_day(o[1]), lambda o: o[2])

    inflows = CashInflows(
        total=sum_amounts(p.amount for p in payments),
        by_payment_method=group_sum(payments, lambda p: p.method, lambda p: p.amount),
        by_date=_daily(inflows_by_day),
    )
    outflows = CashOutflows(
        total=sum_amounts(o[2] for o in outflow_lines),
        by_category=group_sum(outflow_lines, lambda o: o[0], lambda o: o[2]),
        by_date=_daily(outflows_by_day),
    )

    all_days = sorted(inflows_by_day.keys() | outflows_by_day.keys())
    net_by_day = [
        (day, inflows_by_day.get(day, ZERO) - outflows_by_day.get(day, ZERO))
        for day in all_days
    ]
    running_balance = tuple(
        BalancePoint(day, balance) for day, balance in running_accumulate(net_by_day)
    )

    net_cash_flow = inflows.total - outflows.total
    logger.debug(
        f"Cash flow {date_range}: in={inflows.total}, out={outflows.total}, "
        f"days={len(all_days)}"
    )

    return CashFlowReport(
        inflows=inflows,
        outflows=outflows,
        net_cash_flow=net_cash_flow,
        running_balance=running_balance,
    )
