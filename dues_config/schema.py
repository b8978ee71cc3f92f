"""
Dues policy configuration schema.

Frozen dataclasses the YAML loader parses into.  These are declarative
values only; ``dues_config.bridges`` turns them into engine inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

DEFAULT_DAILY_RATE = Decimal("15")


@dataclass(frozen=True)
class PenaltyConfig:
    """Late-fee regime."""

    daily_rate: Decimal = DEFAULT_DAILY_RATE
    implementation_date: date | None = None


@dataclass(frozen=True)
class DefaulterScanConfig:
    """Listing thresholds for one kind of defaulter scan."""

    threshold: Decimal = Decimal("0")
    min_months: int = 1


@dataclass(frozen=True)
class DuesPolicyConfig:
    """Complete dues policy as loaded from one YAML file."""

    config_id: str
    version: int
    currency: str = "INR"
    penalty: PenaltyConfig = field(default_factory=PenaltyConfig)
    defaulter_scans: tuple[tuple[str, DefaulterScanConfig], ...] = ()
    checksum: str = ""

    def scan(self, name: str) -> DefaulterScanConfig:
        """Thresholds of the named scan.

        Raises:
            KeyError: if no scan of that name is configured.
        """
        for scan_name, scan in self.defaulter_scans:
            if scan_name == name:
                return scan
        raise KeyError(name)

    @property
    def scan_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.defaulter_scans)
