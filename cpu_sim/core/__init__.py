"""Dispatch core exports."""

from .cores import CoreBank
from .engine import DispatchEngine
from .errors import ProtocolViolation
from .interfaces import IDispatchEngine
from .simulator import TraceSimulator
from .waitlist import OrderedWaitlist

__all__ = [
    "CoreBank",
    "DispatchEngine",
    "IDispatchEngine",
    "OrderedWaitlist",
    "ProtocolViolation",
    "TraceSimulator",
]
