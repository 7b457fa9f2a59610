"""Load purchases and expenses from a YAML or JSON data file.

Expected layout (camelCase keys from the web dashboard export are accepted too):

    purchases:
      - id: P-001
        winner_id: C-1
        winner_name: Hana Sato
        winner_email: hana@example.com
        vehicle_info: {year: 2019, make: Toyota, model: Supra}
        auction_end_date: 2025-01-03
        total_amount: 1000000
        paid_amount: 600000
        payments:
          - {id: PAY-1, amount: 600000, method: card, date: 2025-01-10}
        our_costs:
          items:
            - {id: C-1, category: transport, amount: 200000, date: 2025-01-05}
    expenses:
      - {id: E-1, category: rent, amount: 150000, date: 2025-01-01, is_recurring: true}
"""

import json
from pathlib import Path
from typing import Optional

import yaml

from auction_accounting.models.records import Expense, Purchase
from auction_accounting.utils.logging_config import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}


class RecordLoadError(Exception):
    """Exception raised when a data file cannot be loaded."""

    def __init__(self, message: str, file_path: Optional[Path] = None):
        """Initialize RecordLoadError.

        Args:
            message: Error message.
            file_path: Optional path to the file that failed to load.
        """
        self.file_path = file_path
        super().__init__(message)


def _read_document(file_path: Path) -> dict[str, object]:
    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise RecordLoadError(
            f"Unsupported data file type '{suffix}' (expected .yaml, .yml or .json)", file_path
        )

    try:
        with open(file_path, encoding="utf-8") as f:
            if suffix == ".json":
                content = json.load(f)
            else:
                content = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise RecordLoadError(f"Data file not found: {file_path}", file_path) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RecordLoadError(f"Invalid data file {file_path}: {e}", file_path) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise RecordLoadError(
            f"{file_path} must contain a mapping, got {type(content).__name__}", file_path
        )
    return content


def _records(document: dict[str, object], key: str, file_path: Path) -> list[dict[str, object]]:
    records = document.get(key) or []
    if not isinstance(records, list):
        raise RecordLoadError(f"'{key}' must be a list, got {type(records).__name__}", file_path)
    return records


def load_records(file_path: Path) -> tuple[list[Purchase], list[Expense]]:
    """Load purchases and expenses from a data file.

    Args:
        file_path: Path to a .yaml, .yml or .json file.

    Returns:
        Tuple of (purchases, expenses).

    Raises:
        RecordLoadError: If the file is missing, unreadable or a record is malformed.
    """
    document = _read_document(file_path)

    purchases: list[Purchase] = []
    for index, data in enumerate(_records(document, "purchases", file_path)):
        try:
            purchases.append(Purchase.from_dict(data))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RecordLoadError(f"Invalid purchase #{index + 1}: {e!r}", file_path) from e

    expenses: list[Expense] = []
    for index, data in enumerate(_records(document, "expenses", file_path)):
        try:
            expenses.append(Expense.from_dict(data))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RecordLoadError(f"Invalid expense #{index + 1}: {e!r}", file_path) from e

    logger.info(f"Loaded {len(purchases)} purchases and {len(expenses)} expenses from {file_path}")
    return purchases, expenses
