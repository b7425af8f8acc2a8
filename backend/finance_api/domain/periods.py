from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from finance_api.core.datetime_utils import month_bounds
from finance_api.domain.errors import validation_error


@dataclass(frozen=True)
class DateOnlyPeriod:
    """Date range whose end is optional.

    Without an end the period denotes the single day ``start``.
    """

    start: date
    end: date | None = None

    def __post_init__(self) -> None:
        if self.end is not None and self.start > self.end:
            raise validation_error(
                "InvalidRange",
                "The first date can't be later than the second.",
                "datePeriod",
            )

    @classmethod
    def create(cls, start: date, end: date | None = None) -> DateOnlyPeriod:
        return cls(start, end)

    @classmethod
    def for_month(cls, year: int, month: int) -> DateOnlyPeriod:
        first, last = month_bounds(year, month)
        return cls(first, last)

    def contains(self, day: date) -> bool:
        if self.end is None:
            return day == self.start
        return self.start <= day <= self.end

    def __str__(self) -> str:
        if self.end is None:
            return f"{self.start:%d/%m/%Y}"
        return f"{self.start:%d/%m/%Y} - {self.end:%d/%m/%Y}"
