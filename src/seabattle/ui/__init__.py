"""Terminal adapters for SeaBattle."""

from .console import (
    ConsoleCoordinateSource,
    ConsoleObserver,
    offer_tutorial,
    render_board,
)

__all__ = ["ConsoleCoordinateSource", "ConsoleObserver", "offer_tutorial", "render_board"]
