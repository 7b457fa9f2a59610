"""Tests for revenue analytics."""

from datetime import datetime
from decimal import Decimal

from auction_accounting.config import ReportConfig
from auction_accounting.processing.revenue_analytics import generate_revenue_analytics
from helpers import JANUARY, create_payment, create_purchase


class TestGenerateRevenueAnalytics:
    """Tests for generate_revenue_analytics."""

    def test_totals_and_average(self) -> None:
        """Test revenue, transaction count and average transaction value."""
        purchase = create_purchase(
            payments=[
                create_payment(100, datetime(2025, 1, 2)),
                create_payment(200, datetime(2025, 1, 3)),
                create_payment(999, datetime(2025, 2, 3)),
            ],
        )

        report = generate_revenue_analytics([purchase], JANUARY)

        assert report.total_revenue == Decimal("300")
        assert report.transaction_count == 2
        assert report.average_transaction_value == Decimal("150")

    def test_empty_average_is_zero(self) -> None:
        """Test no transactions gives a zero average."""
        report = generate_revenue_analytics([], JANUARY)

        assert report.transaction_count == 0
        assert report.average_transaction_value == Decimal("0")
        assert report.revenue_by_customer == ()

    def test_revenue_by_period_counts_transactions(self) -> None:
        """Test monthly revenue carries its transaction count."""
        purchase = create_purchase(
            payments=[
                create_payment(100, datetime(2025, 1, 2)),
                create_payment(50, datetime(2025, 1, 30)),
            ],
        )

        report = generate_revenue_analytics([purchase], JANUARY)

        assert len(report.revenue_by_period) == 1
        period = report.revenue_by_period[0]
        assert (period.period, period.revenue, period.transactions) == ("2025-01", Decimal("150"), 2)

    def test_payment_methods_sorted_with_percentages(self) -> None:
        """Test methods are ranked by amount with their share of revenue."""
        purchase = create_purchase(
            payments=[
                create_payment(25, datetime(2025, 1, 2), method="cash"),
                create_payment(75, datetime(2025, 1, 3), method="wire_transfer"),
            ],
        )

        report = generate_revenue_analytics([purchase], JANUARY)

        assert [(m.method, m.amount, m.percentage) for m in report.revenue_by_payment_method] == [
            ("wire_transfer", Decimal("75"), Decimal("75")),
            ("cash", Decimal("25"), Decimal("25")),
        ]

    def test_customers_ranked_with_ties_in_first_seen_order(self) -> None:
        """Test customer ranking by amount keeps tied customers in input order."""
        purchases = [
            create_purchase("P-1", winner_id="C-1", winner_name="Aiko",
                            payments=[create_payment(100, datetime(2025, 1, 2))]),
            create_purchase("P-2", winner_id="C-2", winner_name="Ben",
                            payments=[create_payment(100, datetime(2025, 1, 3))]),
            create_purchase("P-3", winner_id="C-3", winner_name="Chen",
                            payments=[create_payment(300, datetime(2025, 1, 4))]),
            create_purchase("P-4", winner_id="C-1", winner_name="Aiko",
                            payments=[create_payment(50, datetime(2025, 1, 5))]),
        ]

        report = generate_revenue_analytics(purchases, JANUARY)

        assert [(c.customer_id, c.amount, c.transactions) for c in report.revenue_by_customer] == [
            ("C-3", Decimal("300"), 1),
            ("C-1", Decimal("150"), 2),
            ("C-2", Decimal("100"), 1),
        ]
        assert report.revenue_by_customer[1].customer_name == "Aiko"

    def test_customer_ranking_is_capped(self) -> None:
        """Test only the configured number of customers is listed."""
        purchases = [
            create_purchase(f"P-{i}", winner_id=f"C-{i}",
                            payments=[create_payment(i + 1, datetime(2025, 1, 2))])
            for i in range(12)
        ]

        report = generate_revenue_analytics(purchases, JANUARY)
        short = generate_revenue_analytics(purchases, JANUARY, ReportConfig(top_customers=3))

        assert len(report.revenue_by_customer) == 10
        assert report.revenue_by_customer[0].customer_id == "C-11"
        assert [c.customer_id for c in short.revenue_by_customer] == ["C-11", "C-10", "C-9"]

    def test_top_vehicles_grouped_by_label(self) -> None:
        """Test vehicles with the same year, make and model are combined."""
        purchases = [
            create_purchase("P-1", vehicle=(2019, "Toyota", "Supra"),
                            payments=[create_payment(100, datetime(2025, 1, 2))]),
            create_purchase("P-2", vehicle=(2021, "Nissan", "GT-R"),
                            payments=[create_payment(150, datetime(2025, 1, 3))]),
            create_purchase("P-3", vehicle=(2019, "Toyota", "Supra"),
                            payments=[create_payment(100, datetime(2025, 1, 4))]),
        ]

        report = generate_revenue_analytics(purchases, JANUARY)

        assert [(v.vehicle, v.amount) for v in report.top_vehicles] == [
            ("2019 Toyota Supra", Decimal("200")),
            ("2021 Nissan GT-R", Decimal("150")),
        ]
