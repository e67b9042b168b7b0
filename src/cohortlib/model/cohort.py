"""Immutable cohort result set."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from cohortlib.types.common import SubjectId


@dataclass(frozen=True)
class Cohort:
    """A set of subject identifiers produced by one evaluation."""

    member_ids: frozenset[SubjectId] = field(default_factory=frozenset)

    @classmethod
    def of(cls, member_ids: Iterable[SubjectId]) -> Cohort:
        """Build a cohort from any iterable of subject identifiers."""
        return cls(frozenset(member_ids))

    def intersect(self, other: Cohort) -> Cohort:
        """Return subjects present in both cohorts."""
        return Cohort(self.member_ids & other.member_ids)

    def union(self, other: Cohort) -> Cohort:
        """Return subjects present in either cohort."""
        return Cohort(self.member_ids | other.member_ids)

    def subtract(self, other: Cohort) -> Cohort:
        """Return subjects in this cohort that are not in *other*."""
        return Cohort(self.member_ids - other.member_ids)

    def contains(self, subject_id: SubjectId) -> bool:
        return subject_id in self.member_ids

    @property
    def size(self) -> int:
        return len(self.member_ids)

    def is_empty(self) -> bool:
        return not self.member_ids

    def __contains__(self, subject_id: object) -> bool:
        return subject_id in self.member_ids

    def __iter__(self) -> Iterator[SubjectId]:
        return iter(self.member_ids)

    def __len__(self) -> int:
        return len(self.member_ids)
