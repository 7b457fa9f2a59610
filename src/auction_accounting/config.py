"""Configuration loading and validation for the accounting reports."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from auction_accounting.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SETTINGS_PATH = Path("config") / "settings.yaml"


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


@dataclass(frozen=True)
class AgingConfig:
    """Receivable aging boundaries and the past-due grace period.

    The grace period and the bucket boundaries are independent settings;
    both default to the 30-day figures used on the receivables dashboard.

    Attributes:
        current_days: Upper bound (inclusive) of the "current" bucket.
        thirty_days: Upper bound (inclusive) of the 31-60 bucket.
        sixty_days: Upper bound (inclusive) of the 61-90 bucket.
        grace_days: Days after the oldest invoice before a customer is past due.
    """

    current_days: int = 30
    thirty_days: int = 60
    sixty_days: int = 90
    grace_days: int = 30

    def __post_init__(self) -> None:
        if self.current_days < 0 or self.grace_days < 0:
            raise ConfigError("Aging boundaries and grace_days must not be negative")
        if not self.current_days < self.thirty_days < self.sixty_days:
            raise ConfigError(
                "Aging boundaries must be strictly increasing: "
                f"{self.current_days}, {self.thirty_days}, {self.sixty_days}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "AgingConfig":
        """Create from dictionary."""
        return cls(
            current_days=int(data.get("current_days", 30)),  # type: ignore[arg-type]
            thirty_days=int(data.get("thirty_days", 60)),  # type: ignore[arg-type]
            sixty_days=int(data.get("sixty_days", 90)),  # type: ignore[arg-type]
            grace_days=int(data.get("grace_days", 30)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class ReportConfig:
    """Report shaping options.

    Attributes:
        top_customers: Length of the revenue-by-customer ranking.
        top_vehicles: Length of the top-vehicles ranking.
        top_margin_vehicles: Length of the margin-by-vehicle ranking.
        recent_expenses: Number of expenses listed as recent.
        operating_category: Cash-flow outflow category that operating expenses fold into.
    """

    top_customers: int = 10
    top_vehicles: int = 10
    top_margin_vehicles: int = 10
    recent_expenses: int = 5
    operating_category: str = "operating"

    def __post_init__(self) -> None:
        limits = (self.top_customers, self.top_vehicles, self.top_margin_vehicles, self.recent_expenses)
        if any(limit < 0 for limit in limits):
            raise ConfigError("Report limits must not be negative")
        if not self.operating_category:
            raise ConfigError("operating_category must not be empty")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "ReportConfig":
        """Create from dictionary."""
        return cls(
            top_customers=int(data.get("top_customers", 10)),  # type: ignore[arg-type]
            top_vehicles=int(data.get("top_vehicles", 10)),  # type: ignore[arg-type]
            top_margin_vehicles=int(data.get("top_margin_vehicles", 10)),  # type: ignore[arg-type]
            recent_expenses=int(data.get("recent_expenses", 5)),  # type: ignore[arg-type]
            operating_category=str(data.get("operating_category", "operating")),
        )


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Path to log file, or None for console only.
    """

    level: str = "INFO"
    file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "LoggingConfig":
        """Create from dictionary."""
        log_file = data.get("file")
        return cls(
            level=str(data.get("level", "INFO")),
            file=str(log_file) if log_file else None,
        )


@dataclass(frozen=True)
class ReportingConfig:
    """Main configuration container.

    Attributes:
        aging: Receivable aging configuration.
        reports: Report shaping configuration.
        logging: Logging configuration.
        currency_symbol: Symbol used when printing amounts (display only).
    """

    aging: AgingConfig = field(default_factory=AgingConfig)
    reports: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    currency_symbol: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "ReportingConfig":
        """Create from the parsed settings document.

        Raises:
            ConfigError: If a section is not a mapping or a value is invalid.
        """
        sections: dict[str, dict[str, object]] = {}
        for name in ("aging", "reports", "logging"):
            section = data.get(name) or {}
            if not isinstance(section, dict):
                raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
            sections[name] = section

        try:
            return cls(
                aging=AgingConfig.from_dict(sections["aging"]),
                reports=ReportConfig.from_dict(sections["reports"]),
                logging=LoggingConfig.from_dict(sections["logging"]),
                currency_symbol=str(data.get("currency_symbol", "")),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid setting value: {e}") from e


def load_yaml_file(path: Path) -> dict[str, object]:
    """Load a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ConfigError: If the file is invalid YAML or not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(content).__name__}")
    return content


def load_config(settings_path: Optional[Path] = None) -> ReportingConfig:
    """Load reporting configuration from settings.yaml.

    A missing settings file is not an error; defaults are used.

    Args:
        settings_path: Path to settings.yaml (or None to use config/settings.yaml).

    Returns:
        Complete ReportingConfig.

    Raises:
        ConfigError: If the settings file exists but is invalid.
    """
    if settings_path is None:
        settings_path = DEFAULT_SETTINGS_PATH

    if not settings_path.exists():
        logger.warning(f"Settings file not found: {settings_path}, using defaults")
        return ReportingConfig()

    config = ReportingConfig.from_dict(load_yaml_file(settings_path))
    logger.info(f"Loaded settings from {settings_path}")
    return config
