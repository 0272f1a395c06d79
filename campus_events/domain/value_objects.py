"""Domain value objects.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DateRange:
    """Closed interval [start, end] of UTC instants.

    Raises:
        ValueError: If start is after end.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("DateRange start must not be after end")

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end
