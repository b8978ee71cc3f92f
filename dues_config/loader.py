"""
Configuration Loader (``dues_config.loader``).

Responsibility
--------------
Loads a dues policy YAML file and parses it into the frozen dataclasses of
``dues_config.schema``.  The runtime entry point is
``dues_config.get_active_policy()``; this module is its tooling.

Invariants enforced
-------------------
* Missing optional sections fall back to documented defaults (daily rate
  15, no policy implementation date, notice scan threshold 0 / 1 month).
* Present-but-invalid values raise ``InvalidConfigurationError`` (or
  ``InvalidPenaltyRateError`` / ``InvalidThresholdError``); configuration
  errors are never silently defaulted.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the parsed
  YAML for change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from dues_config.schema import (
    DEFAULT_DAILY_RATE,
    DefaulterScanConfig,
    DuesPolicyConfig,
    PenaltyConfig,
)
from dues_kernel.exceptions import (
    InvalidConfigurationError,
    InvalidPenaltyRateError,
    InvalidThresholdError,
)
from dues_kernel.utils.parsing import is_blank, parse_date, parse_decimal


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        InvalidConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(str(path), "top level must be a mapping")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 checksum of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _require_decimal(value: Any, key: str) -> Decimal:
    parsed = parse_decimal(value)
    if parsed is None:
        raise InvalidConfigurationError(key, f"expected a number, got {value!r}")
    return parsed


def _optional_date(value: Any, key: str) -> date | None:
    if is_blank(value):
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidConfigurationError(key, f"expected an ISO date, got {value!r}")
    return parsed


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(key, "expected a mapping")
    return section


def parse_penalty(data: dict[str, Any]) -> PenaltyConfig:
    """Parse the ``penalty`` section."""
    raw_rate = data.get("daily_rate")
    if is_blank(raw_rate):
        daily_rate = DEFAULT_DAILY_RATE
    else:
        daily_rate = _require_decimal(raw_rate, "penalty.daily_rate")
    if daily_rate < 0:
        raise InvalidPenaltyRateError(daily_rate)

    return PenaltyConfig(
        daily_rate=daily_rate,
        implementation_date=_optional_date(
            data.get("implementation_date"), "penalty.implementation_date",
        ),
    )


def parse_defaulter_scan(name: str, data: Any) -> DefaulterScanConfig:
    """Parse one entry of the ``defaulters`` section."""
    key = f"defaulters.{name}"
    if not isinstance(data, dict):
        raise InvalidConfigurationError(key, "expected a mapping")

    threshold = _require_decimal(data.get("threshold", "0"), f"{key}.threshold")
    if threshold < 0:
        raise InvalidThresholdError(f"{key}.threshold", threshold)

    raw_months = data.get("min_months", 1)
    if isinstance(raw_months, bool) or not isinstance(raw_months, int):
        raise InvalidConfigurationError(f"{key}.min_months", "expected an integer")
    if raw_months < 0:
        raise InvalidThresholdError(f"{key}.min_months", raw_months)

    return DefaulterScanConfig(threshold=threshold, min_months=raw_months)


def parse_policy_config(data: dict[str, Any]) -> DuesPolicyConfig:
    """
    Parse a full dues policy document.

    Postconditions:
        - Returns a DuesPolicyConfig with a checksum of ``data``.
        - A ``notice`` scan always exists (default thresholds if absent).
    """
    scans_raw = _section(data, "defaulters")
    scans = {name: parse_defaulter_scan(name, raw) for name, raw in scans_raw.items()}
    scans.setdefault("notice", DefaulterScanConfig())

    version = data.get("version", 1)
    if isinstance(version, bool) or not isinstance(version, int):
        raise InvalidConfigurationError("version", "expected an integer")

    return DuesPolicyConfig(
        config_id=str(data.get("config_id", "shop-rent-dues")),
        version=version,
        currency=str(data.get("currency", "INR")),
        penalty=parse_penalty(_section(data, "penalty")),
        defaulter_scans=tuple(sorted(scans.items())),
        checksum=compute_checksum(data),
    )


def load_policy_config(path: Path) -> DuesPolicyConfig:
    """Load and parse a dues policy YAML file."""
    return parse_policy_config(load_yaml_file(path))
