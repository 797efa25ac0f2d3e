import numpy as np
import pytest

from game.garden import ButterflyEnv, LaneDodgeEnv, FreeRoamEnv
from game.garden.entities import Butterfly, Flower, Bird, Obstacle, Hazard
from game.garden.render import (
    BUTTERFLY, FLOWER, BIRD, OBSTACLE_GLYPHS, AVATAR_C,
    draw_scene, font_size_for, outcome_message, rasterize, render_butterfly,
)
from game.garden.spawner import LANE_HAZARD_KINDS


@pytest.fixture
def grid():
    env = ButterflyEnv()
    env.reset(seed=0)
    env.butterfly = Butterfly(5, 5)
    env.flowers = [Flower(1, 2)]
    env.birds = [Bird(9, 9)]
    env.obstacles = [Obstacle(3, 3, "tree"), Obstacle(4, 4, "rock")]
    return env


def test_butterfly_draw_order(grid, canvas):
    render_butterfly(grid, canvas, font_size=24)
    assert canvas.calls[0] == ("clear",)
    assert canvas.calls[1] == ("font", 24)
    assert canvas.glyphs() == [
        OBSTACLE_GLYPHS["tree"], OBSTACLE_GLYPHS["rock"], BUTTERFLY, FLOWER, BIRD,
    ]


def test_butterfly_cell_coordinates(grid, canvas):
    render_butterfly(grid, canvas, font_size=24)
    butterfly_call = next(c for c in canvas.calls if c[0] == "glyph" and c[1] == BUTTERFLY)
    # 30px cells, baseline offset font_size - 8
    assert butterfly_call[2:] == (150, 150 + 16)


def test_render_does_not_mutate(grid, canvas):
    before = (grid.butterfly, list(grid.flowers), list(grid.birds), grid.score)
    draw_scene(grid, canvas)
    assert (grid.butterfly, grid.flowers, grid.birds, grid.score) == before


def test_lane_dodge_overlay_only_when_over(canvas):
    env = LaneDodgeEnv(spawn_probability=0.0)
    env.reset(seed=0)
    env.hazards = [Hazard(10.0, 10.0, LANE_HAZARD_KINDS[0])]
    draw_scene(env, canvas)
    assert "Game Over!" not in canvas.texts()
    assert canvas.texts()[0] == "Score: 0"
    # Hazards before the avatar
    assert canvas.glyphs() == [LANE_HAZARD_KINDS[0].glyph, BUTTERFLY]

    env.game_over = True
    canvas.calls.clear()
    draw_scene(env, canvas)
    assert "Game Over!" in canvas.texts()


def test_free_roam_hud(canvas):
    env = FreeRoamEnv(num_flowers=2, num_hazards=1)
    env.reset(seed=0)
    draw_scene(env, canvas)
    assert canvas.glyphs()[-1] == BUTTERFLY
    assert canvas.glyphs().count(FLOWER) == 2
    assert "Score: 0" in canvas.texts()


def test_unknown_scene(canvas):
    class Other:
        scene = "chess"

    with pytest.raises(ValueError):
        draw_scene(Other(), canvas)


def test_font_size_for():
    assert font_size_for(True) == 48
    assert font_size_for(False) == 24


def test_outcome_messages(grid):
    assert outcome_message(grid) is None
    grid.flowers = []
    grid.score = 8
    assert outcome_message(grid) == "You win! Score: 8"
    grid.game_over = True
    assert outcome_message(grid) == "Game Over! Score: 8"


def test_lane_dodge_message_uses_display_score():
    env = LaneDodgeEnv()
    env.reset(seed=0)
    env.score = 123
    env.game_over = True
    assert outcome_message(env) == "Game Over! Score: 12"


def test_rasterize_marks_avatar(grid):
    frame = rasterize(grid)
    assert frame.shape == (grid.height, grid.width, 3)
    cs = grid.cell_size
    assert tuple(frame[5 * cs + 1, 5 * cs + 1]) == AVATAR_C


def test_rasterize_clips_offscreen_hazards():
    env = LaneDodgeEnv()
    env.reset(seed=0)
    env.hazards = [Hazard(-100.0, -100.0, LANE_HAZARD_KINDS[0]),
                   Hazard(10.0, -15.0, LANE_HAZARD_KINDS[0])]
    frame = rasterize(env)
    assert frame.dtype == np.uint8
    p = env.player
    assert tuple(frame[int(p.y), int(p.x)]) == AVATAR_C
