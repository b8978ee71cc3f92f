"""
dues_config -- single public entrypoint for dues policy configuration.

Responsibility:
    Provides the ONLY way to obtain the dues policy at runtime through
    ``get_active_policy()``.  Services receive the returned
    ``DuesPolicyConfig`` (or the engine inputs built from it by
    ``dues_config.bridges``); nothing else reads configuration files.

Architecture position:
    Configuration -- sits above ``dues_kernel`` and ``dues_engines`` and
    below ``dues_services``.  The kernel and engines MUST NEVER import from
    ``dues_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested policy file does not exist.
    - ``InvalidConfigurationError`` / ``InvalidPenaltyRateError`` /
      ``InvalidThresholdError`` -- invalid values.

Audit relevance:
    Every successful ``get_active_policy()`` call emits a
    ``DUES_CONFIG_TRACE`` log entry with the config id, version, checksum
    and penalty settings, tying each dues report back to the policy that
    priced it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dues_config.loader import load_policy_config
from dues_config.schema import (
    DEFAULT_DAILY_RATE,
    DefaulterScanConfig,
    DuesPolicyConfig,
    PenaltyConfig,
)

_logger = logging.getLogger("dues_kernel.config")

# Packaged default policy
DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_policy(config_path: Path | str | None = None) -> DuesPolicyConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: Policy YAML file; defaults to the packaged
            ``sets/default.yaml``.

    Returns:
        Parsed and validated DuesPolicyConfig.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    config = load_policy_config(path)

    _logger.info(
        "DUES_CONFIG_TRACE",
        extra={
            "trace_type": "DUES_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "currency": config.currency,
            "daily_rate": str(config.penalty.daily_rate),
            "implementation_date": (
                config.penalty.implementation_date.isoformat()
                if config.penalty.implementation_date else None
            ),
            "scans": list(config.scan_names),
            "path": str(path),
        },
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_DAILY_RATE",
    "DefaulterScanConfig",
    "DuesPolicyConfig",
    "PenaltyConfig",
    "get_active_policy",
]
