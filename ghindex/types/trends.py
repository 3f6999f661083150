"""Time window and trend series models."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Union

from ghindex.exceptions import ValidationError
from ghindex.types.results import TermError


@dataclass(frozen=True)
class TimeWindow:
    """Calendar period, inclusive on both ends at day granularity."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError(f"window start {self.start} is after end {self.end}")

    @property
    def predicate(self) -> str:
        """Range for a GitHub ``created:`` qualifier."""
        return f"{self.start.isoformat()}..{self.end.isoformat()}"

    @property
    def label(self) -> str:
        from ghindex.windows import format_period_label

        return format_period_label(self)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class TrendPoint:
    """Counts for one search term in one window."""

    window: TimeWindow
    period_label: str
    repository_count: int
    pull_request_count: int | None = None
    issue_count: int | None = None


TermSeries = Union[tuple[TrendPoint, ...], TermError]


class TrendSeries(Mapping[str, TermSeries]):
    """Read-only mapping of search term to its chronological points or error."""

    def __init__(self, data: Mapping[str, TermSeries]) -> None:
        self._data = MappingProxyType(dict(data))

    def __getitem__(self, term: str) -> TermSeries:
        return self._data[term]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"TrendSeries({dict(self._data)!r})"

    @property
    def errors(self) -> dict[str, TermError]:
        return {t: v for t, v in self._data.items() if isinstance(v, TermError)}

    @property
    def succeeded(self) -> dict[str, tuple[TrendPoint, ...]]:
        return {t: v for t, v in self._data.items() if not isinstance(v, TermError)}
