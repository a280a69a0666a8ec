"""Abstract base class for pointer action output.

All pointer output backends must conform to this interface, so the
engine can drive an HTTP pointer endpoint, a hardware bridge, or a test
double without changing any other code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class PointerOutput(ABC):
    """Abstract interface for sending pointer commands to a target.

    Displacements are in device units; implementations decide how to
    round or split them. Every call must complete before it returns so
    that the engine can sequence multi-step actions.

    Example usage::

        async with HttpPointerOutput(base_url="http://localhost:8090") as pointer:
            await pointer.move(12.5, -3.0)
            await pointer.click()
    """

    @abstractmethod
    async def open(self) -> None:
        """Open the connection to the pointer target.

        Raises:
            PointerOutputError: If the target cannot be reached.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the pointer target. Safe to call more than once."""
        ...

    @abstractmethod
    async def move(self, dx: float, dy: float) -> None:
        """Displace the cursor by ``(dx, dy)``.

        Raises:
            PointerOutputError: If the command cannot be delivered.
        """
        ...

    @abstractmethod
    async def click(self) -> None:
        """Press and release the primary button."""
        ...

    @abstractmethod
    async def flick(self, dx: float, dy: float) -> None:
        """Displace the cursor by ``(dx, dy)`` as a single fast motion.

        Unlike ``move``, backends should not smooth or split a flick.
        """
        ...

    async def __aenter__(self) -> PointerOutput:
        """Async context manager entry -- opens the pointer target."""
        await self.open()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Async context manager exit -- closes the pointer target."""
        await self.close()


class PointerOutputError(Exception):
    """Raised when pointer output fails."""

    def __init__(self, message: str, backend: str = "") -> None:
        super().__init__(message)
        self.backend = backend
