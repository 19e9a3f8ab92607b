class CfcalError(Exception):
    """Base error."""

class InvalidDateError(CfcalError, ValueError):
    """Raised when a field combination does not exist in a calendar (incl. the 1582 gap)."""

class MalformedSpecError(CfcalError, ValueError):
    """Raised when a '<unit> since <origin>' string does not follow the grammar."""

class CalendarMismatchError(CfcalError, TypeError):
    """Raised when an operation mixes instants of two different calendars."""

class InexactConversionError(CfcalError, ValueError):
    """Raised when a rescale would drop information and no rounding was requested."""

class DurationOverflowError(CfcalError, OverflowError):
    """Raised when duration arithmetic leaves the representable mantissa range."""

class InvalidStepError(CfcalError, ValueError):
    """Raised for a zero (or non-positive, where required) step."""

class OutOfRangeError(CfcalError, IndexError):
    """Raised when indexing past the end of a range."""

class PrecisionLossError(CfcalError, ValueError):
    """Raised when a host-type conversion cannot keep the source resolution."""
