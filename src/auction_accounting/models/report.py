"""Report data models produced by the report generators.

Every report is a frozen value object. Sequences are tuples in the order the
dashboard charts and tables index them; mappings keep first-appearance order.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from auction_accounting.models.date_range import DateRange
from auction_accounting.models.records import Expense

ZERO = Decimal("0")


@dataclass(frozen=True)
class MonthlyAmount:
    """Amount for one "YYYY-MM" bucket."""

    month: str
    amount: Decimal


@dataclass(frozen=True)
class DailyAmount:
    """Amount for one "YYYY-MM-DD" bucket."""

    date: str
    amount: Decimal


@dataclass(frozen=True)
class BalancePoint:
    """Cumulative net cash at the end of a day bucket."""

    date: str
    balance: Decimal


# --- Profit & Loss ---------------------------------------------------------


@dataclass(frozen=True)
class RevenueSection:
    """Revenue received in range.

    Attributes:
        total: Sum of all in-range payments.
        by_payment_method: Amount keyed by payment method.
        by_month: Monthly amounts, ascending by month.
    """

    total: Decimal = ZERO
    by_payment_method: dict[str, Decimal] = field(default_factory=dict)
    by_month: tuple[MonthlyAmount, ...] = ()


@dataclass(frozen=True)
class CostSection:
    """Costs incurred in range, grouped by category.

    Attributes:
        total: Sum of all in-range cost lines.
        by_category: Amount keyed by category.
        by_month: Monthly amounts, ascending by month.
    """

    total: Decimal = ZERO
    by_category: dict[str, Decimal] = field(default_factory=dict)
    by_month: tuple[MonthlyAmount, ...] = ()


@dataclass(frozen=True)
class ProfitLossReport:
    """Profit & Loss for a date range.

    gross_profit = revenue.total - cost_of_goods_sold.total
    net_profit = gross_profit - operating_expenses.total
    Margins are percentages of revenue, 0 when there is no revenue.
    """

    revenue: RevenueSection
    cost_of_goods_sold: CostSection
    operating_expenses: CostSection
    gross_profit: Decimal
    gross_margin: Decimal
    net_profit: Decimal
    net_margin: Decimal


@dataclass(frozen=True)
class StatementLine:
    """One row of the rendered P&L statement."""

    label: str
    amount: Decimal
    percentage: Optional[Decimal] = None
    is_subtotal: bool = False
    is_total: bool = False
    indent: int = 0


@dataclass(frozen=True)
class MonthlyResult:
    """Revenue, COGS and their difference for one month."""

    month: str
    revenue: Decimal
    costs: Decimal
    profit: Decimal


# --- Cash Flow -------------------------------------------------------------


@dataclass(frozen=True)
class CashInflows:
    """Money received in range."""

    total: Decimal = ZERO
    by_payment_method: dict[str, Decimal] = field(default_factory=dict)
    by_date: tuple[DailyAmount, ...] = ()


@dataclass(frozen=True)
class CashOutflows:
    """Money paid out in range; operating expenses appear as one category."""

    total: Decimal = ZERO
    by_category: dict[str, Decimal] = field(default_factory=dict)
    by_date: tuple[DailyAmount, ...] = ()


@dataclass(frozen=True)
class CashFlowReport:
    """Cash flow for a date range.

    The last running_balance point equals net_cash_flow.
    """

    inflows: CashInflows
    outflows: CashOutflows
    net_cash_flow: Decimal
    running_balance: tuple[BalancePoint, ...] = ()


# --- Revenue Analytics -----------------------------------------------------


@dataclass(frozen=True)
class PeriodRevenue:
    period: str
    revenue: Decimal
    transactions: int


@dataclass(frozen=True)
class MethodRevenue:
    method: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class CustomerRevenue:
    customer_id: str
    customer_name: str
    amount: Decimal
    transactions: int


@dataclass(frozen=True)
class VehicleRevenue:
    vehicle: str
    amount: Decimal


@dataclass(frozen=True)
class RevenueAnalyticsReport:
    """Breakdown of in-range revenue by period, method, customer and vehicle."""

    total_revenue: Decimal
    average_transaction_value: Decimal
    transaction_count: int
    revenue_by_period: tuple[PeriodRevenue, ...] = ()
    revenue_by_payment_method: tuple[MethodRevenue, ...] = ()
    revenue_by_customer: tuple[CustomerRevenue, ...] = ()
    top_vehicles: tuple[VehicleRevenue, ...] = ()


# --- Cost Analysis ---------------------------------------------------------


@dataclass(frozen=True)
class CategoryAmount:
    category: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class PeriodCost:
    period: str
    costs: Decimal


@dataclass(frozen=True)
class CategoryTrend:
    period: str
    categories: dict[str, Decimal]


@dataclass(frozen=True)
class VehicleMargin:
    vehicle: str
    revenue: Decimal
    costs: Decimal
    margin: Decimal


@dataclass(frozen=True)
class MarginAnalysis:
    average_margin: Decimal = ZERO
    margin_by_vehicle: tuple[VehicleMargin, ...] = ()


@dataclass(frozen=True)
class CostAnalysisReport:
    """Per-vehicle cost analysis over purchases that track costs."""

    total_costs: Decimal
    average_cost_per_vehicle: Decimal
    vehicle_count: int
    costs_by_category: tuple[CategoryAmount, ...] = ()
    cost_trends: tuple[PeriodCost, ...] = ()
    category_trends: tuple[CategoryTrend, ...] = ()
    all_categories: tuple[str, ...] = ()
    margin_analysis: MarginAnalysis = field(default_factory=MarginAnalysis)


# --- Accounts Receivable ---------------------------------------------------


@dataclass(frozen=True)
class AgingBreakdown:
    """Outstanding amounts split into mutually exclusive age buckets."""

    current: Decimal = ZERO
    thirty_days: Decimal = ZERO
    sixty_days: Decimal = ZERO
    ninety_days_plus: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        """Sum of all buckets."""
        return self.current + self.thirty_days + self.sixty_days + self.ninety_days_plus

    @property
    def overdue(self) -> Decimal:
        """Everything older than the current bucket."""
        return self.thirty_days + self.sixty_days + self.ninety_days_plus


@dataclass(frozen=True)
class CustomerBalance:
    """Outstanding balance of one customer.

    Attributes:
        customer_id: Auction winner ID.
        customer_name: Display name.
        customer_email: Contact email.
        total_owed: Sum of invoiced totals of the customer's open purchases.
        paid_amount: Sum paid against those purchases.
        outstanding: total_owed - paid_amount.
        oldest_invoice_date: Earliest auction end date among open purchases.
        days_past_due: Days beyond the grace period since the oldest invoice.
        aging: Outstanding split by age bucket.
    """

    customer_id: str
    customer_name: str
    customer_email: str
    total_owed: Decimal
    paid_amount: Decimal
    outstanding: Decimal
    oldest_invoice_date: Optional[datetime]
    days_past_due: int
    aging: AgingBreakdown = field(default_factory=AgingBreakdown)


@dataclass(frozen=True)
class AccountsReceivableReport:
    """Open receivables for purchases invoiced in range."""

    total_outstanding: Decimal
    total_overdue: Decimal
    collection_rate: Decimal
    aging: AgingBreakdown = field(default_factory=AgingBreakdown)
    customer_balances: tuple[CustomerBalance, ...] = ()


# --- Summary ---------------------------------------------------------------


@dataclass(frozen=True)
class AccountingSummary:
    """Headline figures read from the P&L and receivables reports."""

    total_revenue: Decimal
    total_costs: Decimal
    gross_profit: Decimal
    net_profit: Decimal
    outstanding_receivables: Decimal
    revenue_change: Decimal = ZERO
    profit_change: Decimal = ZERO


# --- Expense Summary -------------------------------------------------------


@dataclass(frozen=True)
class ExpenseCategorySummary:
    category: str
    amount: Decimal
    percentage: Decimal
    count: int


@dataclass(frozen=True)
class ExpenseSummaryReport:
    """Operating expenses in range."""

    total_expenses: Decimal
    expenses_by_category: tuple[ExpenseCategorySummary, ...] = ()
    expenses_by_month: tuple[MonthlyAmount, ...] = ()
    recurring_total: Decimal = ZERO
    recent_expenses: tuple[Expense, ...] = ()


# --- Bundle ----------------------------------------------------------------


@dataclass(frozen=True)
class FinancialReports:
    """Every report generated for one date range and one "now"."""

    date_range: DateRange
    profit_loss: ProfitLossReport
    cash_flow: CashFlowReport
    revenue_analytics: RevenueAnalyticsReport
    cost_analysis: CostAnalysisReport
    accounts_receivable: AccountsReceivableReport
    summary: AccountingSummary
    expense_summary: ExpenseSummaryReport
