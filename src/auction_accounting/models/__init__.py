"""Data models for source records, date ranges and generated reports."""

from auction_accounting.models.date_range import DateRange, DateRangeType
from auction_accounting.models.records import (
    CostCategory,
    CostItem,
    Expense,
    ExpenseCategory,
    OurCosts,
    Payment,
    PaymentMethod,
    Purchase,
    RecurringFrequency,
    VehicleInfo,
)

__all__ = [
    "DateRange",
    "DateRangeType",
    "CostCategory",
    "CostItem",
    "Expense",
    "ExpenseCategory",
    "OurCosts",
    "Payment",
    "PaymentMethod",
    "Purchase",
    "RecurringFrequency",
    "VehicleInfo",
]
