"""
Dues services -- orchestration over the pure dues engines.

Services own the collaborators the engines must not touch: the payment
ledger lookup, the clock, and the active dues policy.
"""

from dues_services.outstanding_dues import OutstandingDuesService

__all__ = ["OutstandingDuesService"]
