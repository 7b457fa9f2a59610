"""Record factories shared by the test modules."""

from datetime import datetime
from decimal import Decimal

from auction_accounting.models.date_range import DateRange, DateRangeType
from auction_accounting.models.records import (
    CostItem,
    Expense,
    OurCosts,
    Payment,
    Purchase,
    VehicleInfo,
)

JANUARY = DateRange(
    datetime(2025, 1, 1),
    datetime(2025, 1, 31, 23, 59, 59, 999999),
    DateRangeType.MONTH,
)


def create_payment(
    amount: str | int,
    day: datetime,
    method: str = "card",
    payment_id: str = "PAY",
) -> Payment:
    """Helper to create a Payment for testing."""
    return Payment(id=payment_id, amount=Decimal(str(amount)), method=method, date=day)


def create_cost(
    amount: str | int,
    day: datetime,
    category: str = "transport",
    cost_id: str = "COST",
) -> CostItem:
    """Helper to create a CostItem for testing."""
    return CostItem(id=cost_id, category=category, amount=Decimal(str(amount)), date=day)


def create_purchase(
    purchase_id: str = "P-1",
    total: str | int = 0,
    paid: str | int = 0,
    payments: list[Payment] | None = None,
    costs: list[CostItem] | None = None,
    winner_id: str = "C-1",
    winner_name: str = "Hana Sato",
    auction_end_date: datetime = datetime(2025, 1, 3),
    vehicle: tuple[int, str, str] = (2019, "Toyota", "Supra"),
) -> Purchase:
    """Helper to create a Purchase for testing.

    Pass costs=[] to create a purchase with an empty cost container;
    leave it as None for a purchase without cost tracking.
    """
    return Purchase(
        id=purchase_id,
        winner_id=winner_id,
        winner_name=winner_name,
        winner_email=f"{winner_id.lower()}@example.com",
        vehicle_info=VehicleInfo(*vehicle),
        auction_end_date=auction_end_date,
        total_amount=Decimal(str(total)),
        paid_amount=Decimal(str(paid)),
        payments=tuple(payments or ()),
        our_costs=None if costs is None else OurCosts(items=tuple(costs)),
    )


def create_expense(
    amount: str | int,
    day: datetime,
    category: str = "rent",
    expense_id: str = "E-1",
    is_recurring: bool = False,
) -> Expense:
    """Helper to create an Expense for testing."""
    return Expense(
        id=expense_id,
        category=category,
        amount=Decimal(str(amount)),
        date=day,
        is_recurring=is_recurring,
    )
