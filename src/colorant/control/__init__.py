"""Action dispatch for colorant."""

from colorant.control.dispatcher import ActionDispatcher

__all__ = ["ActionDispatcher"]
