"""Drives a TargetingEngine from a single asyncio task.

The engine itself processes exactly one cycle per call; the runner is
the external scheduler that keeps calling it.
"""

from __future__ import annotations

import asyncio
import logging

from colorant.domain.models import Action
from colorant.engine.targeting import EngineState, TargetingEngine
from colorant.output.base import PointerOutputError

logger = logging.getLogger(__name__)

# Sleep used while the engine is disabled so the loop does not spin
IDLE_DELAY = 0.05


class CycleRunner:
    """Repeatedly runs engine cycles for one action.

    Output errors are counted; the runner gives up and re-raises once
    ``max_consecutive_errors`` cycles in a row have failed.
    """

    def __init__(
        self,
        engine: TargetingEngine,
        action: Action = Action.MOVE,
        cycle_delay: float = 0.0,
        max_consecutive_errors: int = 5,
    ) -> None:
        self._engine = engine
        self._action = Action(action)
        self._cycle_delay = cycle_delay
        self._max_consecutive_errors = max_consecutive_errors
        self._running = False
        self._cycles = 0
        self._targets = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def cycles(self) -> int:
        return self._cycles

    @property
    def targets(self) -> int:
        return self._targets

    async def run(self, max_cycles: int | None = None) -> int:
        """Run cycles until ``stop()`` or ``max_cycles`` processed cycles.

        Returns:
            The number of cycles that returned a trace.
        """
        self._running = True
        consecutive_errors = 0
        logger.info("Runner starting: action=%s", self._action.value)

        try:
            while self._running:
                if max_cycles is not None and self._cycles >= max_cycles:
                    break
                if self._engine.state is EngineState.STOPPED:
                    logger.info("Engine stopped; runner exiting")
                    break
                if not self._engine.is_enabled:
                    await asyncio.sleep(IDLE_DELAY)
                    continue
                try:
                    trace = await self._engine.process_action(self._action)
                    consecutive_errors = 0
                except PointerOutputError as e:
                    consecutive_errors += 1
                    logger.error(
                        "Output error (attempt %d/%d): %s",
                        consecutive_errors, self._max_consecutive_errors, e,
                    )
                    if consecutive_errors >= self._max_consecutive_errors:
                        logger.error("Too many consecutive output errors, aborting")
                        raise
                    continue

                if trace is not None:
                    self._cycles += 1
                    if trace.centroid is not None:
                        self._targets += 1
                if self._cycle_delay > 0:
                    await asyncio.sleep(self._cycle_delay)
        finally:
            self._running = False
            logger.info("Runner finished: cycles=%d targets=%d", self._cycles, self._targets)
        return self._cycles

    def stop(self) -> None:
        """Signal the runner to stop after the current cycle."""
        self._running = False
        logger.info("Runner stop requested")
