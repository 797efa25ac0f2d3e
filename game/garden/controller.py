"""
Controllers own one game instance and drive it from input or frames.

TurnController steps a grid game once per directional input.
FrameController steps a continuous game once per scheduled frame and can be
started and stopped explicitly; stopping cancels the scheduled callback.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from .render import Canvas, DESKTOP_FONT, draw_scene, outcome_message

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Repeating-callback source, e.g. arcade.schedule / arcade.unschedule"""

    def schedule(self, func: Callable[[float], None], interval: float) -> None: ...

    def unschedule(self, func: Callable[[float], None]) -> None: ...


class GameController:
    """Shared drawing and notification plumbing"""

    def __init__(
        self,
        game,
        canvas: Optional[Canvas] = None,
        notify: Optional[Callable[[str], None]] = None,
        font_size: int = DESKTOP_FONT,
        draw_each_step: bool = True,
    ):
        self.game = game
        self.canvas = canvas
        self.notify = notify
        self.font_size = font_size
        # Windows with their own draw callback redraw from there instead
        self.draw_each_step = draw_each_step

    def draw(self) -> bool:
        """Render the current state; returns False when there is nothing to draw on"""
        if self.canvas is None:
            logger.error("No canvas attached to %s, skipping draw", type(self.game).__name__)
            return False
        draw_scene(self.game, self.canvas, self.font_size)
        return True

    def _after_step(self) -> None:
        if self.draw_each_step:
            self.draw()

    def _send(self, message: str) -> None:
        logger.info(message)
        if self.notify is not None:
            self.notify(message)


class TurnController(GameController):
    """Drives ButterflyEnv from discrete direction events"""

    def handle_direction(self, direction: Optional[str]) -> None:
        if direction is None:
            return
        self.game.advance(direction)
        self._after_step()

        message = outcome_message(self.game)
        if message is not None:
            self._send(message)


class FrameController(GameController):
    """Drives a continuous game from a frame scheduler"""

    def __init__(self, game, scheduler: Scheduler, interval: float = 1 / 60, **kwargs):
        super().__init__(game, **kwargs)
        self.scheduler = scheduler
        self.interval = interval
        self._running = False
        self._notified = False
        # Same bound method for schedule and unschedule
        self._callback = self.on_frame

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self.scheduler.schedule(self._callback, self.interval)
        self._running = True
        logger.debug("Frame loop started for %s", type(self.game).__name__)

    def stop(self) -> None:
        if not self._running:
            return
        self.scheduler.unschedule(self._callback)
        self._running = False
        logger.debug("Frame loop stopped for %s", type(self.game).__name__)

    def on_frame(self, delta_time: float = 0.0) -> None:
        # Keeps running after game over so the overlay stays up
        self.game.tick()
        self._after_step()

        if self.game.game_over and not self._notified:
            self._notified = True
            message = outcome_message(self.game)
            if message is not None:
                self._send(message)

    def restart(self) -> bool:
        """Restart a finished game; False if it is still running or cannot restart"""
        restart = getattr(self.game, "restart", None)
        if restart is None or not self.game.game_over:
            return False
        restart()
        self._notified = False
        return True
