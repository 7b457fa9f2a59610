"""Revenue analytics: revenue by period, payment method, customer and vehicle."""

from collections.abc import Sequence
from decimal import Decimal

from auction_accounting.config import ReportConfig
from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import Purchase
from auction_accounting.models.report import (
    CustomerRevenue,
    MethodRevenue,
    PeriodRevenue,
    RevenueAnalyticsReport,
    VehicleRevenue,
)
from auction_accounting.processing.aggregation import (
    bucket_by_month,
    group_sum,
    percentage_of,
    sorted_by_amount,
    sorted_by_key,
)
from auction_accounting.processing.date_filter import payments_in_range
from auction_accounting.utils.decimal_utils import safe_divide, sum_amounts
from auction_accounting.utils.logging_config import get_logger

logger = get_logger(__name__)


def generate_revenue_analytics(
    purchases: Sequence[Purchase],
    date_range: DateRange,
    report_config: ReportConfig | None = None,
) -> RevenueAnalyticsReport:
    """Generate revenue analytics for a date range.

    Each in-range payment is one transaction. Customer and vehicle rankings
    are ordered by amount, largest first, with ties kept in first-seen order.

    Args:
        purchases: All purchases (read-only).
        date_range: Reporting window.
        report_config: Ranking lengths.

    Returns:
        RevenueAnalyticsReport.
    """
    report_config = report_config or ReportConfig()
    entries = list(payments_in_range(purchases, date_range))

    total_revenue = sum_amounts(payment.amount for _, payment in entries)
    transaction_count = len(entries)

    revenue_by_month = group_sum(entries, lambda e: bucket_by_month(e[1].date), lambda e: e[1].amount)
    count_by_month: dict[str, int] = {}
    for _, payment in entries:
        month = bucket_by_month(payment.date)
        count_by_month[month] = count_by_month.get(month, 0) + 1

    by_method = group_sum(entries, lambda e: e[1].method, lambda e: e[1].amount)

    by_customer = group_sum(entries, lambda e: e[0].winner_id, lambda e: e[1].amount)
    customer_names: dict[str, str] = {}
    customer_counts: dict[str, int] = {}
    for purchase, _ in entries:
        customer_names.setdefault(purchase.winner_id, purchase.winner_name)
        customer_counts[purchase.winner_id] = customer_counts.get(purchase.winner_id, 0) + 1

    by_vehicle = group_sum(entries, lambda e: e[0].vehicle_info.label, lambda e: e[1].amount)

    logger.debug(
        f"Revenue analytics {date_range}: {transaction_count} transactions, "
        f"{len(by_customer)} customers, {len(by_vehicle)} vehicles"
    )

    return RevenueAnalyticsReport(
        total_revenue=total_revenue,
        average_transaction_value=safe_divide(total_revenue, Decimal(transaction_count)),
        transaction_count=transaction_count,
        revenue_by_period=tuple(
            PeriodRevenue(month, amount, count_by_month[month])
            for month, amount in sorted_by_key(revenue_by_month)
        ),
        revenue_by_payment_method=tuple(
            MethodRevenue(method, amount, percentage_of(amount, total_revenue))
            for method, amount in sorted_by_amount(by_method)
        ),
        revenue_by_customer=tuple(
            CustomerRevenue(customer_id, customer_names[customer_id], amount, customer_counts[customer_id])
            for customer_id, amount in sorted_by_amount(by_customer, report_config.top_customers)
        ),
        top_vehicles=tuple(
            VehicleRevenue(vehicle, amount)
            for vehicle, amount in sorted_by_amount(by_vehicle, report_config.top_vehicles)
        ),
    )
