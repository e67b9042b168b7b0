"""Persistence-related exceptions."""

from __future__ import annotations

from cohortlib.exceptions.base import CohortError


class PersistenceError(CohortError):
    """Raised when a stored definition cannot be read or written."""
