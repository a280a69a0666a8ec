"""Maps a detected centroid to pointer commands.

The dispatcher is a single-step decision: given where the target sits
relative to the capture region center, it issues the command sequence
for the requested action and returns. It keeps no state between cycles.
"""

from __future__ import annotations

import logging

from colorant.domain.models import Action, Centroid, EngineConfig
from colorant.output.base import PointerOutput

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Issues move, click and flick sequences against a PointerOutput.

    Output errors are not caught: a failure aborts the rest of the
    sequence (a flick whose click fails never restores) and propagates
    to the caller unchanged.
    """

    def __init__(self, output: PointerOutput, config: EngineConfig) -> None:
        self._output = output
        self._config = config

    def offset(self, centroid: Centroid) -> tuple[float, float]:
        """Offset of the centroid from the capture region center."""
        cx, cy = self._config.center
        return centroid.x - cx, centroid.y - cy

    def is_centered(self, dx: float, dy: float) -> bool:
        tol_x, tol_y = self._config.click_tolerance
        return abs(dx) <= tol_x and abs(dy) <= tol_y

    async def dispatch(self, action: Action, centroid: Centroid | None) -> list[str]:
        """Run one action for one centroid.

        Returns:
            Names of the commands issued, in order. Empty when there was
            no target or the action's condition was not met.
        """
        if centroid is None:
            return []

        dx, dy = self.offset(centroid)
        if action is Action.MOVE:
            return await self._move(dx, dy)
        if action is Action.CLICK:
            return await self._click(dx, dy)
        if action is Action.FLICK:
            return await self._flick(dx, dy)
        raise ValueError(f"Unknown action: {action!r}")

    async def _move(self, dx: float, dy: float) -> list[str]:
        speed = self._config.move_speed
        await self._output.move(dx * speed, dy * speed)
        return ["move"]

    async def _click(self, dx: float, dy: float) -> list[str]:
        if not self.is_centered(dx, dy):
            logger.debug("Target off-center (%.1f, %.1f); holding click", dx, dy)
            return []
        await self._output.click()
        return ["click"]

    async def _flick(self, dx: float, dy: float) -> list[str]:
        speed = self._config.flick_speed
        flick_x = (dx + self._config.flick_x_bias) * speed
        flick_y = dy * speed
        restore = self._config.flick_restore_gain

        await self._output.flick(flick_x, flick_y)
        await self._output.click()
        await self._output.flick(-flick_x * restore, -flick_y * restore)
        return ["flick", "click", "restore"]
