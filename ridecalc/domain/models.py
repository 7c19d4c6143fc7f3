"""Domain type definitions for ridecalc.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in the driver's currency
- Km: Distance or odometer reading in kilometres
- IsoDate: Calendar date in YYYY-MM-DD format
- WeekKey: ISO week in YYYY-Www format
- MonthKey: Month in YYYY-MM format
"""

from typing import NewType

# Money amounts are plain floats; savings slices are fractional by nature
Money = NewType("Money", float)

Km = NewType("Km", float)

# IsoDate is always in YYYY-MM-DD format (e.g., "2025-01-31")
IsoDate = NewType("IsoDate", str)

# WeekKey uses the ISO year, which can differ from the calendar year (e.g., "2025-W01")
WeekKey = NewType("WeekKey", str)

# MonthKey is always in YYYY-MM format (e.g., "2025-01")
MonthKey = NewType("MonthKey", str)
