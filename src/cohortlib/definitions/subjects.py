"""In-memory subject records read by the characteristic evaluator."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from cohortlib.types.common import SubjectId


@dataclass(frozen=True)
class Subject:
    """Demographic facts about one subject."""

    subject_id: SubjectId
    gender: str = "U"
    birthdate: date | None = None
    death_date: date | None = None

    def age_on(self, on_date: date) -> int | None:
        """Age in whole years on *on_date*, or None when the birthdate is unknown."""
        if self.birthdate is None:
            return None
        years = on_date.year - self.birthdate.year
        if (on_date.month, on_date.day) < (self.birthdate.month, self.birthdate.day):
            years -= 1
        return years

    def is_alive_on(self, on_date: date) -> bool:
        return self.death_date is None or self.death_date > on_date


class SubjectStore:
    """Read-only collection of subjects keyed by identifier."""

    def __init__(self, subjects: Iterable[Subject] = ()) -> None:
        self._subjects: dict[SubjectId, Subject] = {}
        for subject in subjects:
            self._subjects[subject.subject_id] = subject

    def __iter__(self) -> Iterator[Subject]:
        return iter(self._subjects.values())

    def __len__(self) -> int:
        return len(self._subjects)
