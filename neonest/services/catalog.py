"""Immutable milestone catalog.

Built once at startup and passed to the progress engine, so tests can swap
in a smaller catalog.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import lru_cache
from types import MappingProxyType

from neonest.core.constants import LATE_ACHIEVER_GRACE_MONTHS, UPCOMING_LOOKAHEAD_MONTHS
from neonest.core.enums import MilestoneCategory
from neonest.core.milestone_data import iter_milestone_rows
from neonest.schemas.milestone import MilestoneDefinition


class MilestoneCatalog:
    """Read-only table of MilestoneDefinition keyed by id, iterated in insertion order."""

    def __init__(self, definitions: Iterable[MilestoneDefinition]):
        table: dict[str, MilestoneDefinition] = {}
        for definition in definitions:
            if definition.id in table:
                raise ValueError(f"Duplicate milestone id {definition.id!r}")
            table[definition.id] = definition
        self._table = MappingProxyType(table)

    def __contains__(self, milestone_id: object) -> bool:
        return milestone_id in self._table

    def __iter__(self) -> Iterator[MilestoneDefinition]:
        return iter(self._table.values())

    def __len__(self) -> int:
        return len(self._table)

    def get(self, milestone_id: str) -> MilestoneDefinition | None:
        return self._table.get(milestone_id)

    def by_category(self, category: MilestoneCategory | str) -> list[MilestoneDefinition]:
        category = MilestoneCategory(category)
        return [m for m in self if m.category == category]

    def for_age(self, corrected_months: int, include_upcoming: bool = True) -> list[MilestoneDefinition]:
        """
        Milestones relevant at a corrected age: inside the expected window, up to
        one month past it for late achievers, and (optionally) up to two months
        before it so parents can see what is coming.
        """
        lookahead = UPCOMING_LOOKAHEAD_MONTHS if include_upcoming else 0
        return [
            m
            for m in self
            if m.window.earliest_months - lookahead
            <= corrected_months
            <= m.window.latest_months + LATE_ACHIEVER_GRACE_MONTHS
        ]


@lru_cache
def get_default_catalog() -> MilestoneCatalog:
    """Catalog built from the bundled reference table (cached for the process)."""
    return MilestoneCatalog(MilestoneDefinition.model_validate(row) for row in iter_milestone_rows())
