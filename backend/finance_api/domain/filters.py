from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from finance_api.domain.entities import TransactionType
from finance_api.domain.periods import DateOnlyPeriod


@dataclass(frozen=True)
class TransactionFilter:
    """Criteria for ``TransactionStore.filter``.

    Every field is optional and absent fields match everything; present
    fields are combined with AND:

    - ``title``: case-insensitive substring of the transaction title
      (blank counts as absent)
    - ``date_period``: inclusive range, or the exact day when it has no end
    - ``type``: exact match
    - ``category_ids``: membership (empty counts as absent)
    """

    title: str | None = None
    date_period: DateOnlyPeriod | None = None
    type: TransactionType | None = None
    category_ids: frozenset[uuid.UUID] = field(default_factory=frozenset)

    @property
    def title_term(self) -> str | None:
        if self.title is None or not self.title.strip():
            return None
        return self.title.strip()

    def for_period(self, period: DateOnlyPeriod) -> TransactionFilter:
        return TransactionFilter(
            title=self.title,
            date_period=period,
            type=self.type,
            category_ids=self.category_ids,
        )
