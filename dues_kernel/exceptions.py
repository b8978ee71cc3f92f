"""
Typed Exception Hierarchy for the Dues Kernel.

===============================================================================
WHEN THE KERNEL RAISES
===============================================================================

The dues calculation degrades instead of failing: an unparseable lease date
or a non-numeric rent figure makes that interval or field contribute nothing,
and the report is still produced.  Malformed *data* therefore never surfaces
as an exception.

Exceptions are reserved for programming and configuration errors:
  - a penalty policy built with a negative daily rate
  - a YAML configuration file with invalid values
  - a ledger entry shape the calculator does not know about
  - an explicit request to parse a month label that is not ``YYYY-MM``

Every exception carries a class-level ``code`` (machine-readable) and keeps
its context as attributes, so the structured log formatter can emit them as
``exc_<attr>`` fields.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    DuesKernelError (base)
    |
    +-- ConfigurationError
    |   +-- InvalidPenaltyRateError
    |   +-- InvalidThresholdError
    |   +-- InvalidConfigurationError
    |
    +-- LedgerError
    |   +-- UnsupportedLedgerEntryError
    |
    +-- MonthLabelError
        +-- InvalidMonthLabelError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Configuration   | INVALID_PENALTY_RATE        | Daily penalty rate is negative
                | INVALID_THRESHOLD           | Defaulter threshold/min months negative
                | INVALID_CONFIGURATION       | YAML value missing or wrong type
----------------|-----------------------------|-----------------------------------------
Ledger          | UNSUPPORTED_LEDGER_ENTRY    | Ledger record of an unknown kind
----------------|-----------------------------|-----------------------------------------
Month label     | INVALID_MONTH_LABEL         | Label is not a YYYY-MM calendar month
"""

from decimal import Decimal


class DuesKernelError(Exception):
    """
    Base exception for all dues kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "DUES_KERNEL_ERROR"


# Configuration exceptions


class ConfigurationError(DuesKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class InvalidPenaltyRateError(ConfigurationError):
    """Daily penalty rate cannot be negative."""

    code: str = "INVALID_PENALTY_RATE"

    def __init__(self, daily_rate: Decimal | str):
        self.daily_rate = str(daily_rate)
        super().__init__(f"Daily penalty rate cannot be negative: {daily_rate}")


class InvalidThresholdError(ConfigurationError):
    """Defaulter scan threshold or minimum month count is invalid."""

    code: str = "INVALID_THRESHOLD"

    def __init__(self, name: str, value: Decimal | int | str):
        self.name = name
        self.value = str(value)
        super().__init__(f"Invalid defaulter threshold {name}: {value}")


class InvalidConfigurationError(ConfigurationError):
    """A configuration value is missing or has the wrong type."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for {key}: {reason}")


# Ledger exceptions


class LedgerError(DuesKernelError):
    """Base exception for payment ledger errors."""

    code: str = "LEDGER_ERROR"


class UnsupportedLedgerEntryError(LedgerError):
    """Ledger record declares a kind the calculator does not handle."""

    code: str = "UNSUPPORTED_LEDGER_ENTRY"

    def __init__(self, kind: str, shop_no: str | None = None):
        self.kind = kind
        self.shop_no = shop_no
        super().__init__(
            f"Unsupported ledger entry kind {kind!r}"
            + (f" for shop {shop_no}" if shop_no else "")
        )


# Month label exceptions


class MonthLabelError(DuesKernelError):
    """Base exception for month label errors."""

    code: str = "MONTH_LABEL_ERROR"


class InvalidMonthLabelError(MonthLabelError):
    """Label is not a valid YYYY-MM calendar month."""

    code: str = "INVALID_MONTH_LABEL"

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Invalid month label: {label!r}")
