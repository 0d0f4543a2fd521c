"""
Typed Exception Hierarchy for the Ceramics Analytics Core.

===============================================================================
OVERVIEW
===============================================================================

Every failure a caller may need to distinguish has its own exception class.
Each class carries a static ``code`` attribute (machine-readable, API-safe)
and stores its context as attributes rather than only in the message, so
the structured log formatter can emit them as ``exc_*`` fields.

Arithmetic guards (division by zero, missing baseline month, empty groups)
are NOT errors in this system: they resolve to zero or to an empty
collection and never raise.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    CeramicsError (base)
    |
    +-- ValidationError
    |   +-- InvalidDateRangeError
    |   +-- InvalidLimitError
    |   +-- UnknownEnumValueError
    |
    +-- TransientError
    |   +-- RepositoryUnavailableError
    |
    +-- ReconciliationError
    |   +-- UnknownCategoryError
    |   +-- TrialBalanceImbalanceError
    |
    +-- ReportCancelledError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Validation      | INVALID_DATE_RANGE          | start date is after end date
                | INVALID_LIMIT               | negative top-N limit
                | UNKNOWN_ENUM_VALUE          | stored value outside a closed enumeration
----------------|-----------------------------|-----------------------------------------
Transient       | REPOSITORY_UNAVAILABLE      | data source could not be read
----------------|-----------------------------|-----------------------------------------
Reconciliation  | UNKNOWN_CATEGORY            | launch references a missing category
                | TRIAL_BALANCE_IMBALANCE     | breakdown rows do not sum to the total
----------------|-----------------------------|-----------------------------------------
Cancellation    | REPORT_CANCELLED            | caller signalled cancellation

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        report = service.trial_balance(start, end)
    except InvalidDateRangeError as e:
        return {"error": e.code, "start": e.start, "end": e.end}
    except TransientError:
        # Safe to retry the whole request; the core never retries itself
        raise
"""

from datetime import date
from decimal import Decimal


class CeramicsError(Exception):
    """
    Base exception for all ceramics analytics errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "CERAMICS_ERROR"


# Validation


class ValidationError(CeramicsError):
    """Caller supplied input the core refuses to process."""

    code: str = "VALIDATION_ERROR"


class InvalidDateRangeError(ValidationError):
    """Start date is after end date."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(
            f"Invalid date range: start {start.isoformat()} is after "
            f"end {end.isoformat()}"
        )


class InvalidLimitError(ValidationError):
    """Top-N limit is negative."""

    code: str = "INVALID_LIMIT"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Ranking limit must be zero or positive, got {limit}")


class UnknownEnumValueError(ValidationError):
    """A raw value does not belong to a closed enumeration."""

    code: str = "UNKNOWN_ENUM_VALUE"

    def __init__(self, enum_name: str, value: object):
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"Unknown {enum_name} value: {value!r}")


# Transient


class TransientError(CeramicsError):
    """Failure that may succeed on retry; the core never retries itself."""

    code: str = "TRANSIENT_ERROR"


class RepositoryUnavailableError(TransientError):
    """The backing data source could not be read."""

    code: str = "REPOSITORY_UNAVAILABLE"

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Repository unavailable during {operation}: {reason}")


# Reconciliation


class ReconciliationError(CeramicsError):
    """Base exception for trial balance reconciliation errors."""

    code: str = "RECONCILIATION_ERROR"


class UnknownCategoryError(ReconciliationError):
    """A launch references a category id that was not supplied."""

    code: str = "UNKNOWN_CATEGORY"

    def __init__(self, launch_id: str, category_id: str):
        self.launch_id = launch_id
        self.category_id = category_id
        super().__init__(
            f"Launch {launch_id} references unknown category {category_id}"
        )


class TrialBalanceImbalanceError(ReconciliationError):
    """
    Breakdown rows do not sum exactly to their grand total.

    Indicates a bug in the aggregation, never a data problem.
    """

    code: str = "TRIAL_BALANCE_IMBALANCE"

    def __init__(self, section: str, breakdown_total: Decimal, overall_total: Decimal):
        self.section = section
        self.breakdown_total = breakdown_total
        self.overall_total = overall_total
        super().__init__(
            f"Trial balance {section} breakdown sums to {breakdown_total}, "
            f"expected {overall_total}"
        )


# Cancellation


class ReportCancelledError(CeramicsError):
    """The caller cancelled a long-running report computation."""

    code: str = "REPORT_CANCELLED"

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"Report computation cancelled during {stage}")
