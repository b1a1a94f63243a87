"""Discrete-event CPU scheduling simulator."""

__version__ = "0.2.0"
