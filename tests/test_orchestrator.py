"""End-to-end tests for generating every report together."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from auction_accounting.config import ReportingConfig
from auction_accounting.models.date_range import DateRange, DateRangeType
from auction_accounting.models.records import Expense, Purchase
from auction_accounting.processing.orchestrator import generate_reports
from helpers import (
    JANUARY,
    create_cost,
    create_expense,
    create_payment,
    create_purchase,
)

NOW = datetime(2025, 2, 15, 9, 0)


@pytest.fixture
def purchases() -> list[Purchase]:
    """A mix of paid, partly paid and untracked purchases."""
    return [
        create_purchase(
            "P-1",
            total=1000000,
            paid=600000,
            payments=[create_payment(600000, datetime(2025, 1, 10))],
            costs=[create_cost(200000, datetime(2025, 1, 5))],
        ),
        create_purchase(
            "P-2",
            total=300000,
            paid=300000,
            winner_id="C-2",
            winner_name="Kenji Mori",
            auction_end_date=datetime(2024, 12, 28),
            payments=[
                create_payment(100000, datetime(2024, 12, 29), method="wire_transfer"),
                create_payment(200000, datetime(2025, 1, 4), method="wire_transfer"),
            ],
            costs=[create_cost(50000, datetime(2025, 1, 6), category="repair")],
        ),
        create_purchase(
            "P-3",
            total=450000,
            winner_id="C-3",
            winner_name="Mei Lin",
            auction_end_date=datetime(2025, 1, 25),
        ),
    ]


@pytest.fixture
def expenses() -> list[Expense]:
    """Operating expenses for December and January."""
    return [
        create_expense(150000, datetime(2025, 1, 1), is_recurring=True),
        create_expense(30000, datetime(2025, 1, 18), category="marketing", expense_id="E-2"),
        create_expense(150000, datetime(2024, 12, 1), expense_id="E-3", is_recurring=True),
    ]


class TestGenerateReports:
    """Tests for generate_reports."""

    def test_single_purchase_scenario(self) -> None:
        """Test the headline figures for one partly paid purchase."""
        purchase = create_purchase(
            total=1000000,
            paid=600000,
            payments=[create_payment(600000, datetime(2025, 1, 10), method="card")],
            costs=[create_cost(200000, datetime(2025, 1, 5), category="transport")],
        )

        reports = generate_reports(JANUARY, [purchase], [], NOW)

        assert reports.profit_loss.revenue.total == Decimal("600000")
        assert reports.profit_loss.gross_profit == Decimal("400000")
        assert reports.profit_loss.gross_margin.quantize(Decimal("0.1")) == Decimal("66.7")
        assert reports.accounts_receivable.total_outstanding == Decimal("400000")
        assert reports.cost_analysis.vehicle_count == 1
        assert reports.cost_analysis.margin_analysis.average_margin == Decimal("400000")

    def test_reports_agree_with_each_other(
        self, purchases: list[Purchase], expenses: list[Expense]
    ) -> None:
        """Test figures shared between reports are identical."""
        reports = generate_reports(JANUARY, purchases, expenses, NOW)

        profit_loss = reports.profit_loss
        assert reports.summary.total_revenue == profit_loss.revenue.total
        assert reports.summary.total_costs == profit_loss.cost_of_goods_sold.total
        assert reports.summary.gross_profit == profit_loss.gross_profit
        assert reports.summary.net_profit == profit_loss.net_profit
        assert reports.summary.outstanding_receivables == reports.accounts_receivable.total_outstanding
        assert reports.cash_flow.inflows.total == profit_loss.revenue.total
        assert reports.revenue_analytics.total_revenue == profit_loss.revenue.total
        assert reports.expense_summary.total_expenses == profit_loss.operating_expenses.total
        assert reports.cash_flow.outflows.total == (
            profit_loss.cost_of_goods_sold.total + profit_loss.operating_expenses.total
        )

    def test_january_figures(self, purchases: list[Purchase], expenses: list[Expense]) -> None:
        """Test line items are filtered on their own dates."""
        reports = generate_reports(JANUARY, purchases, expenses, NOW)

        assert reports.profit_loss.revenue.total == Decimal("800000")
        assert reports.profit_loss.cost_of_goods_sold.total == Decimal("250000")
        assert reports.profit_loss.operating_expenses.total == Decimal("180000")
        assert reports.profit_loss.net_profit == Decimal("370000")
        # P-2 closed in December, so only P-1 and P-3 are receivables
        assert reports.accounts_receivable.total_outstanding == Decimal("850000")
        assert reports.cash_flow.running_balance[-1].balance == reports.cash_flow.net_cash_flow

    def test_change_against_previous_month(
        self, purchases: list[Purchase], expenses: list[Expense]
    ) -> None:
        """Test the summary compares against the preceding window."""
        reports = generate_reports(JANUARY, purchases, expenses, NOW)

        # December: revenue 100000, net 100000 - 150000 = -50000
        assert reports.summary.revenue_change == Decimal("700")
        assert reports.summary.profit_change == Decimal("840")

    def test_idempotent(self, purchases: list[Purchase], expenses: list[Expense]) -> None:
        """Test identical inputs give equal reports."""
        config = ReportingConfig()

        first = generate_reports(JANUARY, purchases, expenses, NOW, config)
        second = generate_reports(JANUARY, purchases, expenses, NOW, config)

        assert first == second

    def test_empty_inputs(self) -> None:
        """Test every report is well formed with no data."""
        reports = generate_reports(JANUARY, [], [], NOW)

        assert reports.profit_loss.revenue.total == Decimal("0")
        assert reports.profit_loss.gross_margin == Decimal("0")
        assert reports.cash_flow.running_balance == ()
        assert reports.revenue_analytics.average_transaction_value == Decimal("0")
        assert reports.cost_analysis.vehicle_count == 0
        assert reports.accounts_receivable.collection_rate == Decimal("100")
        assert reports.summary.revenue_change == Decimal("0")
        assert reports.date_range == JANUARY

    def test_offset_aware_now_and_range(self) -> None:
        """Test aware inputs are compared with naive records without errors."""
        purchase = create_purchase(
            total=1000000,
            paid=600000,
            payments=[create_payment(600000, datetime(2025, 1, 10))],
            auction_end_date=datetime(2025, 1, 15),
        )
        aware_range = DateRange(
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 1, 31, 23, 59, 59, 999999, tzinfo=timezone.utc),
            DateRangeType.MONTH,
        )

        reports = generate_reports(
            aware_range, [purchase], [], datetime(2025, 2, 15, 9, 0, tzinfo=timezone.utc)
        )

        assert reports.date_range.start.tzinfo is None
        assert reports.profit_loss.revenue.total == Decimal("600000")
        assert reports.accounts_receivable.total_outstanding == Decimal("400000")
