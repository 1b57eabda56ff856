"""Wasted space aggregation."""

from .wasted import efficiency_score, other_layers_size, summarize

__all__ = ["efficiency_score", "other_layers_size", "summarize"]
