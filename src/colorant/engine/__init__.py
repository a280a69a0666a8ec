"""Targeting engine module for colorant.

Ties together frame capture, region detection, and action dispatch,
and owns the enable toggle and collaborator lifecycle.

Public API:
    TargetingEngine -- Per-cycle detect-and-dispatch engine
    EngineState -- Disabled / enabled / stopped
    CycleRunner -- Repeatedly drives an engine
    CycleObserver -- Abstract per-cycle trace sink
    LoggingObserver -- Trace sink that logs at DEBUG
"""

from colorant.engine.observers import CycleObserver, LoggingObserver
from colorant.engine.runner import CycleRunner
from colorant.engine.targeting import EngineState, TargetingEngine

__all__ = [
    "CycleObserver",
    "CycleRunner",
    "EngineState",
    "LoggingObserver",
    "TargetingEngine",
]
