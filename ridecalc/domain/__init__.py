"""Domain models and types for ridecalc.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from ridecalc.domain.errors import NothingToExportError, ValidationError
from ridecalc.domain.models import IsoDate, Km, Money, MonthKey, WeekKey

__all__ = ["Money", "Km", "IsoDate", "WeekKey", "MonthKey", "ValidationError", "NothingToExportError"]
