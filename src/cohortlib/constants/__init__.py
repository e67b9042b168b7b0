"""Constant tables shared across cohortlib modules."""
