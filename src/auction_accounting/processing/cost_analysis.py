"""Cost analysis over purchases that track per-vehicle costs."""

from collections.abc import Sequence
from decimal import Decimal

from auction_accounting.config import ReportConfig
from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import CostItem, Purchase
from auction_accounting.models.report import (
    CategoryAmount,
    CategoryTrend,
    CostAnalysisReport,
    MarginAnalysis,
    PeriodCost,
    VehicleMargin,
)
from auction_accounting.processing.aggregation import (
    bucket_by_month,
    group_sum,
    percentage_of,
    sorted_by_amount,
    sorted_by_key,
)
from auction_accounting.processing.date_filter import cost_items_in_range, payments_in_range
from auction_accounting.utils.decimal_utils import ZERO, safe_divide, sum_amounts
from auction_accounting.utils.logging_config import get_logger

logger = get_logger(__name__)


def generate_cost_analysis(
    purchases: Sequence[Purchase],
    date_range: DateRange,
    report_config: ReportConfig | None = None,
) -> CostAnalysisReport:
    """Generate cost analysis for a date range.

    Only purchases with cost tracking take part. A purchase counts as a
    vehicle when it has at least one cost item or payment dated in range;
    its margin is in-range revenue minus in-range costs.

    Args:
        purchases: All purchases (read-only).
        date_range: Reporting window.
        report_config: Length of the margin ranking.

    Returns:
        CostAnalysisReport.
    """
    report_config = report_config or ReportConfig()

    cost_items: list[CostItem] = []
    margins: list[VehicleMargin] = []

    for purchase in purchases:
        if not purchase.has_costs:
            continue

        vehicle_costs = [item for _, item in cost_items_in_range([purchase], date_range)]
        vehicle_payments = [payment for _, payment in payments_in_range([purchase], date_range)]
        if not vehicle_costs and not vehicle_payments:
            continue

        cost_items.extend(vehicle_costs)
        costs = sum_amounts(item.amount for item in vehicle_costs)
        revenue = sum_amounts(payment.amount for payment in vehicle_payments)
        margins.append(VehicleMargin(purchase.vehicle_info.label, revenue, costs, revenue - costs))

    total_costs = sum_amounts(item.amount for item in cost_items)
    vehicle_count = len(margins)

    by_category = group_sum(cost_items, lambda c: c.category, lambda c: c.amount)
    by_month = group_sum(cost_items, lambda c: bucket_by_month(c.date), lambda c: c.amount)

    category_by_month: dict[str, dict[str, Decimal]] = {}
    all_categories: dict[str, None] = {}
    for item in cost_items:
        month_categories = category_by_month.setdefault(bucket_by_month(item.date), {})
        month_categories[item.category] = month_categories.get(item.category, ZERO) + item.amount
        all_categories.setdefault(item.category, None)

    ranked_margins = sorted(margins, key=lambda m: m.margin, reverse=True)
    average_margin = safe_divide(sum_amounts(m.margin for m in margins), Decimal(vehicle_count))

    logger.debug(
        f"Cost analysis {date_range}: {vehicle_count} vehicles, total={total_costs}"
    )

    return CostAnalysisReport(
        total_costs=total_costs,
        average_cost_per_vehicle=safe_divide(total_costs, Decimal(vehicle_count)),
        vehicle_count=vehicle_count,
        costs_by_category=tuple(
            CategoryAmount(category, amount, percentage_of(amount, total_costs))
            for category, amount in sorted_by_amount(by_category)
        ),
        cost_trends=tuple(PeriodCost(month, amount) for month, amount in sorted_by_key(by_month)),
        category_trends=tuple(
            CategoryTrend(month, categories) for month, categories in sorted_by_key(category_by_month)
        ),
        all_categories=tuple(all_categories),
        margin_analysis=MarginAnalysis(
            average_margin=average_margin,
            margin_by_vehicle=tuple(ranked_margins[:report_config.top_margin_vehicles]),
        ),
    )
