"""
Stateless scene rendering.

Every ``render_*`` function reads a game and issues draw calls on a
``Canvas``; none of them mutate the game. Canvas coordinates are pixels
with y growing downwards, and ``draw_glyph`` anchors text at its left
baseline the way a browser canvas ``fillText`` does.
"""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np

BUTTERFLY = "🦋"
FLOWER = "🌸"
BIRD = "🐦"
OBSTACLE_GLYPHS = {"tree": "🌳", "rock": "🪨"}

DESKTOP_FONT = 24
MOBILE_FONT = 48


class Canvas(Protocol):
    """Drawing surface the renderers talk to"""

    def clear(self) -> None: ...

    def set_font(self, size: int) -> None: ...

    def draw_glyph(self, glyph: str, x: float, y: float) -> None: ...

    def draw_text(self, text: str, x: float, y: float, align: str = "left") -> None: ...


def font_size_for(is_mobile: bool) -> int:
    """Bigger sprites on touch screens"""
    return MOBILE_FONT if is_mobile else DESKTOP_FONT


def render_butterfly(game, canvas: Canvas, font_size: int = DESKTOP_FONT) -> None:
    canvas.clear()
    canvas.set_font(font_size)

    offset = font_size - 8
    cs = game.cell_size

    for o in game.obstacles:
        canvas.draw_glyph(OBSTACLE_GLYPHS.get(o.kind, OBSTACLE_GLYPHS["tree"]),
                          o.x * cs, o.y * cs + offset)

    b = game.butterfly
    canvas.draw_glyph(BUTTERFLY, b.x * cs, b.y * cs + offset)

    for f in game.flowers:
        canvas.draw_glyph(FLOWER, f.x * cs, f.y * cs + offset)

    for bird in game.birds:
        canvas.draw_glyph(BIRD, bird.x * cs, bird.y * cs + offset)


def _draw_centered(canvas: Canvas, glyph: str, x: float, y: float, size: float) -> None:
    half = size / 2
    canvas.draw_glyph(glyph, x - half, y + half)


def render_lane_dodge(game, canvas: Canvas, font_size: int = DESKTOP_FONT) -> None:
    canvas.clear()

    for h in game.hazards:
        canvas.set_font(int(h.width))
        _draw_centered(canvas, h.kind.glyph, h.x, h.y, h.width)

    p = game.player
    canvas.set_font(int(p.width))
    _draw_centered(canvas, BUTTERFLY, p.x, p.y, p.width)

    canvas.set_font(font_size)
    canvas.draw_text(f"Score: {game.display_score}", 10, font_size + 6)

    if game.game_over:
        cx, cy = game.width / 2, game.height / 2
        canvas.draw_text("Game Over!", cx, cy, align="center")
        canvas.draw_text("Press R or tap to restart", cx, cy + font_size + 10, align="center")


def render_free_roam(game, canvas: Canvas, font_size: int = DESKTOP_FONT) -> None:
    canvas.clear()
    canvas.set_font(font_size)

    for f in game.flowers:
        _draw_centered(canvas, FLOWER, f.x, f.y, font_size)

    for h in game.hazards:
        _draw_centered(canvas, h.kind.glyph, h.x, h.y, font_size)

    r = game.roamer
    _draw_centered(canvas, BUTTERFLY, r.x, r.y, font_size)

    canvas.draw_text(f"Score: {game.score}", 10, font_size + 6)
    canvas.draw_text(f"Speed: {r.speed:.2f}", game.width - 10, font_size + 6, align="right")

    if game.game_over:
        canvas.draw_text("Game Over! Reload to play again",
                         game.width / 2, game.height / 2, align="center")


SCENES = {
    "butterfly": render_butterfly,
    "lane_dodge": render_lane_dodge,
    "free_roam": render_free_roam,
}


def draw_scene(game, canvas: Canvas, font_size: int = DESKTOP_FONT) -> None:
    """Render any garden game by its scene name"""
    try:
        renderer = SCENES[game.scene]
    except KeyError:
        raise ValueError(f"No renderer for scene: {game.scene!r}") from None
    renderer(game, canvas, font_size)


def outcome_message(game) -> Optional[str]:
    """Text for the end-of-game notification, None while still playing"""
    score = getattr(game, "display_score", game.score)
    if game.game_over:
        return f"Game Over! Score: {score}"
    if getattr(game, "won", False):
        return f"You win! Score: {score}"
    return None


# ----------------------------
# rgb_array frames
# ----------------------------

BG_C = (18, 18, 22)
AVATAR_C = (80, 200, 240)
FLOWER_C = (240, 130, 190)
HAZARD_C = (220, 80, 80)
OBSTACLE_C = (90, 140, 70)


def _paint_disc(frame: np.ndarray, x: float, y: float, radius: float, color) -> None:
    h, w = frame.shape[:2]
    x0, x1 = max(0, int(x - radius)), min(w, int(x + radius) + 1)
    y0, y1 = max(0, int(y - radius)), min(h, int(y + radius) + 1)
    if x0 >= x1 or y0 >= y1:
        return
    yy, xx = np.ogrid[y0:y1, x0:x1]
    mask = (xx - x) ** 2 + (yy - y) ** 2 <= radius ** 2
    frame[y0:y1, x0:x1][mask] = color


def _paint_cell(frame: np.ndarray, x: int, y: int, size: int, color) -> None:
    frame[y * size:(y + 1) * size, x * size:(x + 1) * size] = color


def rasterize(game) -> np.ndarray:
    """Flat-colour RGB frame of the current state, shape (height, width, 3)"""
    frame = np.empty((int(game.height), int(game.width), 3), dtype=np.uint8)
    frame[:] = BG_C

    if game.scene == "butterfly":
        cs = game.cell_size
        for o in game.obstacles:
            _paint_cell(frame, o.x, o.y, cs, OBSTACLE_C)
        for f in game.flowers:
            _paint_cell(frame, int(f.x), int(f.y), cs, FLOWER_C)
        _paint_cell(frame, game.butterfly.x, game.butterfly.y, cs, AVATAR_C)
        for b in game.birds:
            _paint_cell(frame, b.x, b.y, cs, HAZARD_C)
        return frame

    if game.scene == "lane_dodge":
        avatar, radius = game.player, game.player.width / 2
        flowers = []
    else:
        avatar, radius = game.roamer, game.collect_radius / 2
        flowers = game.flowers

    for f in flowers:
        _paint_disc(frame, f.x, f.y, radius, FLOWER_C)
    for h in game.hazards:
        _paint_disc(frame, h.x, h.y, h.width / 2, HAZARD_C)
    _paint_disc(frame, avatar.x, avatar.y, radius, AVATAR_C)

    return frame
