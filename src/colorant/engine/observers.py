"""Cycle observers.

Observers receive a CycleTrace after every processed cycle. They keep
diagnostics out of the detection and dispatch code paths.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from colorant.domain.models import CycleTrace

logger = logging.getLogger(__name__)


class CycleObserver(ABC):
    """Receives one trace per processed cycle.

    Called on the engine's task right after dispatch; implementations
    should return quickly and must not raise.
    """

    @abstractmethod
    def on_cycle(self, trace: CycleTrace) -> None:
        ...


class LoggingObserver(CycleObserver):
    """Writes one DEBUG line per cycle."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def on_cycle(self, trace: CycleTrace) -> None:
        if trace.centroid is None:
            self._log.debug(
                "Cycle %d [%s]: no target (%d px)",
                trace.frame_number, trace.action.value, trace.matched_pixels,
            )
            return
        self._log.debug(
            "Cycle %d [%s]: target at (%d, %d) from %d px -> %s",
            trace.frame_number,
            trace.action.value,
            trace.centroid.x,
            trace.centroid.y,
            trace.matched_pixels,
            ", ".join(trace.commands) or "no output",
        )
