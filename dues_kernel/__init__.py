"""
Dues Kernel

Shared foundation for the shop rent dues calculator:
- Structured JSON logging
- Typed exceptions with machine-readable codes
- Immutable domain values (lease terms, calendar months, ledger entries)
- Read-only access to the shop payment ledger
"""

__version__ = "0.1.0"
