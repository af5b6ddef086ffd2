"""Exceptions raised by the document pipeline."""
from __future__ import annotations


class ResourceLimitError(ValueError):
    """Input exceeds a defensive size bound; processing of that input stops."""

    def __init__(self, limit_name: str, limit: int, actual: int) -> None:
        super().__init__(f"{limit_name} exceeded: {actual} > {limit}")
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual


def check_limit(limit_name: str, limit: int, actual: int) -> None:
    """Raise :class:`ResourceLimitError` when ``actual`` is above ``limit``."""
    if actual > limit:
        raise ResourceLimitError(limit_name, limit, actual)
