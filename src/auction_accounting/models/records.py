"""Source record models: won-auction purchases, their payments and costs, and operating expenses."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from auction_accounting.utils.date_utils import parse_datetime
from auction_accounting.utils.decimal_utils import parse_amount


class PaymentMethod(Enum):
    """How a customer paid."""

    CARD = "card"
    WIRE_TRANSFER = "wire_transfer"
    BANK_CHECK = "bank_check"
    PAYPAL = "paypal"
    CREDIT_CARD = "credit_card"
    CRYPTO = "crypto"
    CASH = "cash"


class CostCategory(Enum):
    """Per-vehicle cost categories."""

    AUCTION = "auction"
    TRANSPORT = "transport"
    REPAIR = "repair"
    DOCUMENTS = "documents"
    SHIPPING = "shipping"
    CUSTOMS = "customs"
    STORAGE = "storage"
    OTHER = "other"


class ExpenseCategory(Enum):
    """Standalone operating expense categories."""

    RENT = "rent"  # Office/warehouse rent
    UTILITIES = "utilities"  # Electricity, water, internet
    SALARIES = "salaries"
    OFFICE = "office"
    MARKETING = "marketing"
    INSURANCE = "insurance"
    TAXES = "taxes"  # Business taxes, licenses
    MAINTENANCE = "maintenance"
    TRAVEL = "travel"
    PROFESSIONAL = "professional"  # Legal, accounting services
    SOFTWARE = "software"
    OTHER = "other"


class RecurringFrequency(Enum):
    """Recurrence of a recurring expense."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


def _get(data: dict[str, object], *keys: str, default: object = None) -> object:
    """Return the first present key, accepting both snake_case and camelCase spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _optional_str(value: object) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class Payment:
    """A customer payment recorded against a purchase.

    Attributes:
        id: Payment identifier.
        amount: Amount received.
        method: Payment method value (see PaymentMethod; unknown values pass through).
        date: When the payment was received.
        reference_number: Bank/processor reference, if any.
    """

    id: str
    amount: Decimal
    method: str
    date: datetime
    reference_number: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Payment":
        """Create a Payment from a dictionary (e.g., from a YAML/JSON data file)."""
        return cls(
            id=str(data.get("id", "")),
            amount=parse_amount(data.get("amount")),
            method=str(data.get("method", "other")),
            date=parse_datetime(data["date"]),  # type: ignore[arg-type]
            reference_number=_optional_str(_get(data, "reference_number", "referenceNumber")),
        )


@dataclass(frozen=True)
class CostItem:
    """A cost we incurred for a specific vehicle.

    Attributes:
        id: Cost item identifier.
        category: Cost category value (see CostCategory).
        amount: Amount paid.
        date: When the cost was incurred.
        description: Free-text description.
        vendor: Who was paid.
    """

    id: str
    category: str
    amount: Decimal
    date: datetime
    description: str = ""
    vendor: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "CostItem":
        """Create a CostItem from a dictionary."""
        return cls(
            id=str(data.get("id", "")),
            category=str(data.get("category", CostCategory.OTHER.value)),
            amount=parse_amount(data.get("amount")),
            date=parse_datetime(data["date"]),  # type: ignore[arg-type]
            description=str(data.get("description", "")),
            vendor=_optional_str(data.get("vendor")),
        )


@dataclass(frozen=True)
class OurCosts:
    """Container for the cost items of one purchase."""

    items: tuple[CostItem, ...] = ()


@dataclass(frozen=True)
class VehicleInfo:
    """Identifying details of the purchased vehicle."""

    year: int
    make: str
    model: str

    @property
    def label(self) -> str:
        """Vehicle grouping key, e.g. "2019 Toyota Supra"."""
        return f"{self.year} {self.make} {self.model}"

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "VehicleInfo":
        """Create VehicleInfo from a dictionary."""
        return cls(
            year=int(data.get("year", 0)),  # type: ignore[arg-type]
            make=str(data.get("make", "")),
            model=str(data.get("model", "")),
        )


@dataclass(frozen=True)
class Purchase:
    """One won-auction transaction for one vehicle.

    Attributes:
        id: Purchase identifier.
        winner_id: Customer who won the auction.
        winner_name: Customer display name.
        winner_email: Customer email.
        vehicle_info: Year/make/model of the vehicle.
        auction_end_date: When the auction closed (invoice date for receivables).
        total_amount: Amount invoiced to the customer.
        paid_amount: Amount the customer has paid so far.
        payments: Individual payments received.
        our_costs: Costs we incurred for the vehicle, if tracked.
    """

    id: str
    winner_id: str
    winner_name: str
    winner_email: str
    vehicle_info: VehicleInfo
    auction_end_date: datetime
    total_amount: Decimal
    paid_amount: Decimal
    payments: tuple[Payment, ...] = ()
    our_costs: Optional[OurCosts] = None

    @property
    def outstanding(self) -> Decimal:
        """Invoiced minus paid. Negative values signal overpayment and are not clamped."""
        return self.total_amount - self.paid_amount

    @property
    def cost_items(self) -> tuple[CostItem, ...]:
        """Cost items, empty when costs are not tracked."""
        if self.our_costs is None:
            return ()
        return self.our_costs.items

    @property
    def has_costs(self) -> bool:
        """Whether at least one cost item is tracked for the vehicle."""
        return bool(self.cost_items)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Purchase":
        """Create a Purchase from a dictionary.

        Accepts snake_case or camelCase keys so exports from the web
        dashboard load without conversion.
        """
        payments = tuple(
            Payment.from_dict(p) for p in data.get("payments") or []  # type: ignore[union-attr]
        )

        our_costs = None
        costs_data = _get(data, "our_costs", "ourCosts")
        if isinstance(costs_data, dict):
            our_costs = OurCosts(
                items=tuple(CostItem.from_dict(c) for c in costs_data.get("items") or [])
            )

        vehicle_data = _get(data, "vehicle_info", "vehicleInfo", default={})

        return cls(
            id=str(data["id"]),
            winner_id=str(_get(data, "winner_id", "winnerId", default="")),
            winner_name=str(_get(data, "winner_name", "winnerName", default="")),
            winner_email=str(_get(data, "winner_email", "winnerEmail", default="")),
            vehicle_info=VehicleInfo.from_dict(vehicle_data),  # type: ignore[arg-type]
            auction_end_date=parse_datetime(
                _get(data, "auction_end_date", "auctionEndDate")  # type: ignore[arg-type]
            ),
            total_amount=parse_amount(_get(data, "total_amount", "totalAmount")),
            paid_amount=parse_amount(_get(data, "paid_amount", "paidAmount")),
            payments=payments,
            our_costs=our_costs,
        )

    def __repr__(self) -> str:
        return (
            f"Purchase(id={self.id!r}, vehicle={self.vehicle_info.label!r}, "
            f"total={self.total_amount}, paid={self.paid_amount})"
        )


@dataclass(frozen=True)
class Expense:
    """A standalone operating cost not tied to a vehicle.

    Attributes:
        id: Expense identifier.
        category: Expense category value (see ExpenseCategory).
        amount: Amount paid.
        date: When the expense was incurred.
        description: Free-text description.
        is_recurring: Whether the expense repeats.
        recurring_frequency: Repeat interval value for recurring expenses.
        vendor: Who was paid.
        payment_method: How it was paid.
    """

    id: str
    category: str
    amount: Decimal
    date: datetime
    description: str = ""
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    vendor: Optional[str] = None
    payment_method: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Expense":
        """Create an Expense from a dictionary.

        Raises:
            ValueError: If recurring_frequency is not a known frequency.
        """
        frequency = _get(data, "recurring_frequency", "recurringFrequency")
        return cls(
            id=str(data["id"]),
            category=str(data.get("category", ExpenseCategory.OTHER.value)),
            amount=parse_amount(data.get("amount")),
            date=parse_datetime(data["date"]),  # type: ignore[arg-type]
            description=str(data.get("description", "")),
            is_recurring=bool(_get(data, "is_recurring", "isRecurring", default=False)),
            recurring_frequency=(
                RecurringFrequency(str(frequency).lower()).value if frequency is not None else None
            ),
            vendor=_optional_str(data.get("vendor")),
            payment_method=_optional_str(_get(data, "payment_method", "paymentMethod")),
        )
