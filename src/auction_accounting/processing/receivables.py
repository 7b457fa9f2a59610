"""Accounts receivable aging report."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from auction_accounting.config import AgingConfig
from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import Purchase
from auction_accounting.models.report import (
    AccountsReceivableReport,
    AgingBreakdown,
    CustomerBalance,
)
from auction_accounting.processing.aggregation import (
    AgingBucket,
    aging_bucket,
    days_elapsed,
    percentage_of,
)
from auction_accounting.processing.date_filter import in_range
from auction_accounting.utils.decimal_utils import HUNDRED, ZERO
from auction_accounting.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class _CustomerAccumulator:
    """Running totals for one customer while the report is being built."""

    name: str
    email: str
    total_owed: Decimal = ZERO
    paid_amount: Decimal = ZERO
    oldest_date: Optional[datetime] = None
    buckets: dict[AgingBucket, Decimal] = field(default_factory=dict)

    def add(self, purchase: Purchase, bucket: AgingBucket) -> None:
        self.total_owed += purchase.total_amount
        self.paid_amount += purchase.paid_amount
        self.buckets[bucket] = self.buckets.get(bucket, ZERO) + purchase.outstanding
        if self.oldest_date is None or purchase.auction_end_date < self.oldest_date:
            self.oldest_date = purchase.auction_end_date


def _breakdown(buckets: dict[AgingBucket, Decimal]) -> AgingBreakdown:
    return AgingBreakdown(
        current=buckets.get(AgingBucket.CURRENT, ZERO),
        thirty_days=buckets.get(AgingBucket.THIRTY_DAYS, ZERO),
        sixty_days=buckets.get(AgingBucket.SIXTY_DAYS, ZERO),
        ninety_days_plus=buckets.get(AgingBucket.NINETY_DAYS_PLUS, ZERO),
    )


def generate_accounts_receivable(
    purchases: Sequence[Purchase],
    date_range: DateRange,
    now: datetime,
    aging: AgingConfig | None = None,
) -> AccountsReceivableReport:
    """Generate the receivables aging report.

    A purchase contributes when its auction end date (the invoice date) is in
    range and it still has a positive outstanding balance. Its age is the
    whole days from the auction end date to ``now``; the same age drives the
    aging bucket and, through the oldest open invoice, the customer's days
    past due (age minus the grace period, never negative).

    Args:
        purchases: All purchases (read-only).
        date_range: Reporting window.
        now: Instant ages are measured against, fixed for the whole report.
        aging: Bucket boundaries and grace period.

    Returns:
        AccountsReceivableReport.
    """
    aging = aging or AgingConfig()

    customers: dict[str, _CustomerAccumulator] = {}
    aggregate: dict[AgingBucket, Decimal] = {}
    total_outstanding = ZERO
    total_paid = ZERO

    for purchase in purchases:
        if not in_range(purchase.auction_end_date, date_range):
            continue
        outstanding = purchase.outstanding
        if outstanding <= 0:
            continue

        bucket = aging_bucket(days_elapsed(purchase.auction_end_date, now), aging)
        aggregate[bucket] = aggregate.get(bucket, ZERO) + outstanding
        total_outstanding += outstanding
        total_paid += purchase.paid_amount

        customer = customers.get(purchase.winner_id)
        if customer is None:
            customer = _CustomerAccumulator(purchase.winner_name, purchase.winner_email)
            customers[purchase.winner_id] = customer
        customer.add(purchase, bucket)

    balances = []
    for customer_id, customer in customers.items():
        days_past_due = 0
        if customer.oldest_date is not None:
            days_past_due = max(0, days_elapsed(customer.oldest_date, now) - aging.grace_days)
        balances.append(CustomerBalance(
            customer_id=customer_id,
            customer_name=customer.name,
            customer_email=customer.email,
            total_owed=customer.total_owed,
            paid_amount=customer.paid_amount,
            outstanding=customer.total_owed - customer.paid_amount,
            oldest_invoice_date=customer.oldest_date,
            days_past_due=days_past_due,
            aging=_breakdown(customer.buckets),
        ))
    balances.sort(key=lambda b: b.outstanding, reverse=True)

    aging_totals = _breakdown(aggregate)
    collection_rate = percentage_of(total_paid, total_paid + total_outstanding, default=HUNDRED)

    logger.debug(
        f"Receivables {date_range}: {len(balances)} customers, "
        f"outstanding={total_outstanding}, as of {now.isoformat()}"
    )

    return AccountsReceivableReport(
        total_outstanding=total_outstanding,
        total_overdue=aging_totals.overdue,
        collection_rate=collection_rate,
        aging=aging_totals,
        customer_balances=tuple(balances),
    )
