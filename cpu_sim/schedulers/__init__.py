"""Schedulers package exports."""

from .policy import Discipline, comparator, order
from .registry import available_schedulers, register_discipline, resolve_discipline

__all__ = [
    "Discipline",
    "available_schedulers",
    "comparator",
    "order",
    "register_discipline",
    "resolve_discipline",
]
