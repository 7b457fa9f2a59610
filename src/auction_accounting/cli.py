"""Command-line interface for the accounting reports."""

import argparse
import os
import sys
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from auction_accounting import __version__
from auction_accounting.config import ConfigError, ReportingConfig, load_config
from auction_accounting.models.date_range import DateRangeType
from auction_accounting.models.records import CostCategory, PaymentMethod
from auction_accounting.models.report import FinancialReports
from auction_accounting.parsers.record_loader import RecordLoadError, load_records
from auction_accounting.processing.date_filter import format_range_label, resolve_range
from auction_accounting.processing.orchestrator import generate_reports
from auction_accounting.processing.profit_loss import build_profit_loss_statement
from auction_accounting.utils.date_utils import parse_datetime
from auction_accounting.utils.decimal_utils import format_currency, format_percentage
from auction_accounting.utils.logging_config import get_logger, setup_logging

# Load environment variables from .env file (if it exists)
load_dotenv()

console = Console()
logger = get_logger(__name__)

LOG_LEVEL_ENV = "AUCTION_ACCOUNTING_LOG_LEVEL"

# Display names for payment methods and cost categories on the P&L statement
STATEMENT_LABELS = {
    member.value: member.value.replace("_", " ").title()
    for enum in (PaymentMethod, CostCategory)
    for member in enum
}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="auction-accounting",
        description="Generate accounting reports from purchase and expense data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --data records.yaml
  %(prog)s --data records.json --range quarter
  %(prog)s --data records.yaml --range custom --from 2025-01-01 --to 2025-03-31
  %(prog)s --data records.yaml --as-of 2025-04-01T09:00:00 -v
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-d", "--data",
        type=Path,
        required=True,
        help="YAML or JSON file with purchases and expenses",
    )

    parser.add_argument(
        "-r", "--range",
        dest="range_type",
        choices=[t.value for t in DateRangeType],
        default=DateRangeType.MONTH.value,
        help="Reporting window (default: month)",
    )

    parser.add_argument(
        "--from",
        dest="custom_from",
        type=lambda s: date.fromisoformat(s),
        default=None,
        help="First day of a custom range (YYYY-MM-DD)",
    )

    parser.add_argument(
        "--to",
        dest="custom_to",
        type=lambda s: date.fromisoformat(s),
        default=None,
        help="Last day of a custom range (YYYY-MM-DD)",
    )

    parser.add_argument(
        "--as-of",
        type=parse_datetime,
        default=None,
        help="Instant receivable ages are measured against (default: now)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings.yaml (default: config/settings.yaml)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )

    return parser


def get_log_level(verbosity: int, configured: str = "WARNING") -> str:
    """Resolve the log level from -v flags, the environment, then settings.

    Args:
        verbosity: Number of -v flags.
        configured: Level from settings.yaml.

    Returns:
        Log level string.
    """
    if verbosity >= 2:
        return "DEBUG"
    elif verbosity >= 1:
        return "INFO"
    return os.environ.get(LOG_LEVEL_ENV, configured)


def _money(amount: Decimal, config: ReportingConfig) -> str:
    return format_currency(amount, symbol=config.currency_symbol)


def display_summary(reports: FinancialReports, config: ReportingConfig) -> None:
    """Print the headline figures."""
    summary = reports.summary
    table = Table(title="Summary")
    table.add_column("Metric")
    table.add_column("Amount", justify="right")
    table.add_row("Revenue", _money(summary.total_revenue, config))
    table.add_row("Cost of goods sold", _money(summary.total_costs, config))
    table.add_row("Gross profit", _money(summary.gross_profit, config))
    table.add_row("Net profit", _money(summary.net_profit, config))
    table.add_row("Outstanding receivables", _money(summary.outstanding_receivables, config))
    table.add_row("Revenue change", format_percentage(summary.revenue_change))
    table.add_row("Profit change", format_percentage(summary.profit_change))
    console.print(table)


def display_profit_loss(reports: FinancialReports, config: ReportingConfig) -> None:
    """Print the P&L statement."""
    table = Table(title="Profit & Loss")
    table.add_column("Line")
    table.add_column("Amount", justify="right")
    table.add_column("%", justify="right")
    for line in build_profit_loss_statement(reports.profit_loss, STATEMENT_LABELS):
        label = "  " * line.indent + line.label
        if line.is_total:
            label = f"[bold]{label}[/bold]"
        show_amount = line.amount != 0 or line.is_total or line.indent
        table.add_row(
            label,
            _money(line.amount, config) if show_amount else "",
            format_percentage(line.percentage) if line.percentage is not None else "",
        )
    console.print(table)


def display_receivables(reports: FinancialReports, config: ReportingConfig) -> None:
    """Print the aging breakdown and customer balances."""
    receivables = reports.accounts_receivable
    aging = Table(title="Receivables aging")
    for column in ("Current (0-30)", "31-60 Days", "61-90 Days", "90+ Days", "Collection rate"):
        aging.add_column(column, justify="right")
    aging.add_row(
        _money(receivables.aging.current, config),
        _money(receivables.aging.thirty_days, config),
        _money(receivables.aging.sixty_days, config),
        _money(receivables.aging.ninety_days_plus, config),
        format_percentage(receivables.collection_rate),
    )
    console.print(aging)

    if not receivables.customer_balances:
        return

    customers = Table(title="Customer balances")
    customers.add_column("Customer")
    customers.add_column("Outstanding", justify="right")
    customers.add_column("Oldest invoice")
    customers.add_column("Days past due", justify="right")
    for balance in receivables.customer_balances:
        oldest = balance.oldest_invoice_date
        customers.add_row(
            balance.customer_name,
            _money(balance.outstanding, config),
            oldest.strftime("%Y-%m-%d") if oldest else "",
            str(balance.days_past_due),
        )
    console.print(customers)


def main() -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args()

    # Captured once; every report in this run is aged against it
    now = args.as_of or datetime.now()

    setup_logging(level=get_log_level(args.verbose), console_output=args.verbose > 0)

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    # Re-apply with the configured level and log file
    setup_logging(
        level=get_log_level(args.verbose, config.logging.level),
        log_file=config.logging.file,
        console_output=args.verbose > 0,
    )

    custom_from = datetime.combine(args.custom_from, datetime.min.time()) if args.custom_from else None
    custom_to = datetime.combine(args.custom_to, datetime.min.time()) if args.custom_to else None
    if args.range_type == DateRangeType.CUSTOM.value and (custom_from is None or custom_to is None):
        console.print("[yellow]Custom range needs --from and --to; using this month[/yellow]")

    date_range = resolve_range(args.range_type, now, custom_from, custom_to)

    try:
        purchases, expenses = load_records(args.data)
    except RecordLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    reports = generate_reports(date_range, purchases, expenses, now, config)

    console.print(f"[bold]Auction Accounting v{__version__}[/bold]")
    console.print(f"Period: {format_range_label(date_range)} ({date_range.range_type.value})")
    console.print(f"[dim]As of {now.strftime('%Y-%m-%d %H:%M')}[/dim]\n")

    display_summary(reports, config)
    display_profit_loss(reports, config)
    display_receivables(reports, config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
