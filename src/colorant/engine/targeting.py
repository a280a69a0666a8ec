"""The targeting engine.

Owns the configuration, the enable flag and both collaborator handles,
and runs one detect-and-dispatch cycle per call:

    frame source -> region detector -> action dispatcher -> pointer output
"""

from __future__ import annotations

import asyncio
import enum
import logging
import threading
from typing import Iterable

from colorant.capture.base import FrameSource
from colorant.control.dispatcher import ActionDispatcher
from colorant.domain.models import Action, CycleTrace, EngineConfig
from colorant.engine.observers import CycleObserver
from colorant.output.base import PointerOutput
from colorant.vision.detector import RegionDetector

logger = logging.getLogger(__name__)

DEFAULT_FRAME_TIMEOUT = 0.1


class EngineState(str, enum.Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"
    STOPPED = "stopped"


class TargetingEngine:
    """Detect-and-dispatch engine with an explicit enable toggle.

    The engine starts disabled. While disabled the frame source is
    paused and cycles return immediately without requesting a frame.
    ``close()`` stops the frame source and closes the pointer output
    exactly once; ``async with`` guarantees it runs on every exit path.

    Example usage::

        async with await TargetingEngine.create(config, output=pointer) as engine:
            engine.toggle()
            while True:
                await engine.process_action(Action.MOVE)
    """

    def __init__(
        self,
        config: EngineConfig,
        frame_source: FrameSource,
        output: PointerOutput,
        observers: Iterable[CycleObserver] = (),
        frame_timeout: float = DEFAULT_FRAME_TIMEOUT,
    ) -> None:
        self._config = config.with_derived_gains()
        self._source = frame_source
        self._output = output
        self._observers = list(observers)
        self._frame_timeout = frame_timeout
        self._detector = RegionDetector(self._config)
        self._dispatcher = ActionDispatcher(output, self._config)
        self._lock = threading.Lock()
        self._enabled = False
        self._closed = False

    @classmethod
    async def create(
        cls,
        config: EngineConfig,
        output: PointerOutput,
        frame_source: FrameSource | None = None,
        observers: Iterable[CycleObserver] = (),
        frame_timeout: float = DEFAULT_FRAME_TIMEOUT,
        poll_interval: float = 0.0,
    ) -> TargetingEngine:
        """Acquire both collaborators and return a disabled engine.

        Builds a ScreenCapture for the configured region unless a frame
        source is given, then opens the output. If opening the output
        fails the frame source is stopped before the error propagates.

        Raises:
            CaptureError: If the frame source cannot be created.
            PointerOutputError: If the output cannot be opened.
        """
        config = config.with_derived_gains()
        if frame_source is None:
            from colorant.capture.screen import ScreenCapture

            frame_source = ScreenCapture.with_region(
                config.x, config.y, config.x_fov, config.y_fov,
                poll_interval=poll_interval,
            )
        try:
            await output.open()
        except BaseException:
            frame_source.stop()
            raise

        logger.info(
            "Targeting engine ready: fov=%dx%d move_speed=%.4f flick_speed=%.4f",
            config.x_fov, config.y_fov, config.move_speed, config.flick_speed,
        )
        return cls(
            config,
            frame_source,
            output,
            observers=observers,
            frame_timeout=frame_timeout,
        )

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def state(self) -> EngineState:
        if self._closed:
            return EngineState.STOPPED
        return EngineState.ENABLED if self._enabled else EngineState.DISABLED

    def add_observer(self, observer: CycleObserver) -> None:
        self._observers.append(observer)

    def toggle(self) -> bool:
        """Flip the enable flag and return the new value."""
        with self._lock:
            return self._set_enabled(not self._enabled)

    def set_enabled(self, enabled: bool) -> bool:
        """Set the enable flag; the frame source is only signalled on a change."""
        with self._lock:
            return self._set_enabled(enabled)

    def _set_enabled(self, enabled: bool) -> bool:
        if self._closed:
            logger.warning("Ignoring toggle on a stopped engine")
            return False
        if enabled == self._enabled:
            return self._enabled
        self._enabled = enabled
        if enabled:
            self._source.resume()
            logger.info("Colorant: ENABLED")
        else:
            self._source.pause()
            logger.info("Colorant: DISABLED")
        return self._enabled

    async def process_action(self, action: Action | str) -> CycleTrace | None:
        """Run one cycle for ``action``.

        Returns:
            The cycle trace, or None when the engine is disabled or no
            frame arrived within the frame timeout.

        Raises:
            PointerOutputError: If the output fails mid-sequence; the
                rest of the sequence is skipped.
        """
        action = Action(action)
        if not self._enabled or self._closed:
            return None

        loop = asyncio.get_running_loop()
        frame = await loop.run_in_executor(None, self._source.next_frame, self._frame_timeout)
        if frame is None:
            logger.debug("No frame within %.3fs", self._frame_timeout)
            return None

        result = self._detector.scan(frame.image)
        commands = await self._dispatcher.dispatch(action, result.centroid)
        trace = CycleTrace(
            action=action,
            frame_number=frame.frame_number,
            centroid=result.centroid,
            matched_pixels=result.matched_pixels,
            commands=tuple(commands),
        )
        for observer in self._observers:
            observer.on_cycle(trace)
        return trace

    async def close(self) -> None:
        """Stop the frame source and close the output. Idempotent, never raises."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._enabled = False

        try:
            # stop() joins the capture thread
            await asyncio.get_running_loop().run_in_executor(None, self._source.stop)
        except Exception:
            logger.exception("Error stopping frame source")
        try:
            await self._output.close()
        except Exception:
            logger.exception("Error closing pointer output")
        logger.info("Colorant engine stopped")

    async def __aenter__(self) -> TargetingEngine:
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.close()

    def __del__(self) -> None:
        if getattr(self, "_closed", True):
            return
        self._closed = True
        logger.warning("Targeting engine collected without close()")
        try:
            self._source.stop()
        except Exception:
            logger.exception("Error stopping frame source")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; pointer output left open")
            return
        loop.create_task(_close_output(self._output))


async def _close_output(output: PointerOutput) -> None:
    try:
        await output.close()
    except Exception:
        logger.exception("Error closing pointer output")
