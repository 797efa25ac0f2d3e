"""
Arcade front end: a Canvas over arcade.draw_text and a window that feeds
keyboard and mouse input to the game controllers.
"""

from __future__ import annotations

import logging
from typing import Optional

import arcade

from .controller import FrameController, TurnController
from .controls import SwipeTracker, direction_for_key, heading_for_key
from .render import BG_C, DESKTOP_FONT, draw_scene

logger = logging.getLogger(__name__)

KEY_NAMES = {
    arcade.key.UP: "ArrowUp",
    arcade.key.DOWN: "ArrowDown",
    arcade.key.LEFT: "ArrowLeft",
    arcade.key.RIGHT: "ArrowRight",
}

TITLES = {
    "butterfly": "Butterfly Garden",
    "lane_dodge": "Butterfly Dodge",
    "free_roam": "Butterfly Roam",
}


class ArcadeCanvas:
    """Canvas with a top-left origin on top of arcade's bottom-left one"""

    def __init__(self, window: arcade.Window, color=(240, 240, 240)):
        self.window = window
        self.color = color
        self.font_size = DESKTOP_FONT

    def clear(self) -> None:
        self.window.clear()

    def set_font(self, size: int) -> None:
        self.font_size = size

    def draw_glyph(self, glyph: str, x: float, y: float) -> None:
        arcade.draw_text(glyph, x, self.window.height - y, self.color, self.font_size)

    def draw_text(self, text: str, x: float, y: float, align: str = "left") -> None:
        arcade.draw_text(text, x, self.window.height - y, self.color, self.font_size,
                         anchor_x=align)


class GardenWindow(arcade.Window):
    """Window for one garden game.

    Non-interactive windows only mirror the game (gymnasium ``human`` render
    mode). Interactive ones own a controller and translate input events.
    """

    def __init__(self, game, title: Optional[str] = None, font_size: int = DESKTOP_FONT,
                 interactive: bool = False):
        self.title_text = title or TITLES.get(game.scene, "Emoji Garden")
        super().__init__(int(game.width), int(game.height), self.title_text)
        self.background_color = BG_C

        self.game = game
        self.canvas = ArcadeCanvas(self)
        self.font_size = font_size
        self.message: Optional[str] = None
        self.swipe = SwipeTracker()
        self.controller = self._make_controller() if interactive else None

    def _make_controller(self):
        kwargs = dict(canvas=self.canvas, font_size=self.font_size, draw_each_step=False)
        if self.game.scene == "butterfly":
            return TurnController(self.game, notify=self._show_message, **kwargs)

        # The arcade module itself provides schedule/unschedule
        controller = FrameController(
            self.game,
            scheduler=arcade,
            interval=1 / self.game.metadata.get("render_fps", 60),
            notify=self._show_caption,
            **kwargs,
        )
        controller.start()
        return controller

    def _show_message(self, message: str) -> None:
        self.message = message

    def _show_caption(self, message: str) -> None:
        self.set_caption(f"{self.title_text} - {message}")

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        if self.controller is not None:
            self.controller.draw()
        else:
            draw_scene(self.game, self.canvas, self.font_size)

        if self.message:
            self.canvas.set_font(self.font_size)
            self.canvas.draw_text(self.message, self.width / 2, self.height / 2, align="center")

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if self.controller is None:
            return
        name = KEY_NAMES.get(symbol)
        scene = self.game.scene

        if scene == "butterfly":
            if name is not None:
                self.controller.handle_direction(direction_for_key(name))
        elif scene == "lane_dodge":
            if symbol == arcade.key.R:
                self._restart()
            elif name in ("ArrowLeft", "ArrowRight"):
                self.game.keys.press(direction_for_key(name))
        elif scene == "free_roam":
            heading = heading_for_key(name) if name else None
            if heading is not None:
                self.game.set_heading(heading)

    def on_key_release(self, symbol: int, modifiers: int):
        if self.controller is None or self.game.scene != "lane_dodge":
            return
        name = KEY_NAMES.get(symbol)
        if name in ("ArrowLeft", "ArrowRight"):
            self.game.keys.release(direction_for_key(name))

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if self.controller is None:
            return
        sy = self.height - y
        scene = self.game.scene

        if scene == "butterfly":
            self.swipe.start(x, sy)
        elif scene == "lane_dodge":
            if self.game.game_over:
                self._restart()
            else:
                self.game.keys.press("left" if x < self.width / 2 else "right")
        elif scene == "free_roam":
            self.game.steer_towards(x, sy)

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        if self.controller is None:
            return
        scene = self.game.scene

        if scene == "butterfly":
            direction = self.swipe.finish(x, self.height - y)
            if direction is not None:
                logger.debug("Swipe detected: %s", direction)
                self.controller.handle_direction(direction)
        elif scene == "lane_dodge":
            self.game.keys.release_all()

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int):
        if self.controller is not None and self.game.scene == "free_roam":
            self.game.steer_towards(x, self.height - y)

    def _restart(self):
        if self.controller.restart():
            self.set_caption(self.title_text)

    def on_close(self):
        if isinstance(self.controller, FrameController):
            self.controller.stop()
        super().on_close()
