"""
Ceramics Kernel - analytics and reconciliation core

Read-side foundation for the ceramics back office:
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Injectable clock and inclusive date ranges
- Closed catalog enumerations (products, statuses, payment methods)
- Immutable snapshot DTOs and read-only SQL selectors
"""

__version__ = "0.1.0"
