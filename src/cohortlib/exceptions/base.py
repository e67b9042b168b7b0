"""Root exception for cohortlib."""

from __future__ import annotations


class CohortError(Exception):
    """Base class for all cohortlib errors."""
