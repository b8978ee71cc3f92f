"""
Config -> Engine Bridges.

Functions that convert DuesPolicyConfig values into engine inputs.  They
live in dues_config (the producer) because the engines must NEVER import
dues_config.

Usage:
    from dues_config import get_active_policy
    from dues_config.bridges import build_penalty_policy, build_defaulter_criteria

    config = get_active_policy()
    policy = build_penalty_policy(config)
    criteria = build_defaulter_criteria(config, "dashboard")
"""

from __future__ import annotations

from dues_config.schema import DuesPolicyConfig
from dues_engines.defaulters import DefaulterCriteria
from dues_engines.penalty import PenaltyPolicy


def build_penalty_policy(config: DuesPolicyConfig) -> PenaltyPolicy:
    """PenaltyPolicy from the ``penalty`` section."""
    return PenaltyPolicy(
        daily_rate=config.penalty.daily_rate,
        implementation_date=config.penalty.implementation_date,
    )


def build_defaulter_criteria(config: DuesPolicyConfig, scan: str = "notice") -> DefaulterCriteria:
    """
    DefaulterCriteria for the named scan.

    Raises:
        KeyError: if the scan is not configured.
    """
    scan_config = config.scan(scan)
    return DefaulterCriteria(
        threshold=scan_config.threshold,
        min_months=scan_config.min_months,
    )
