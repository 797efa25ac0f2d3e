import math

import pytest

from game.garden.controls import (
    LatchedKeys, SwipeTracker, decode_swipe, direction_for_key, heading_for_key,
)


@pytest.mark.parametrize("dx, dy, expected", [
    (50, 0, "right"),
    (-50, 10, "left"),
    (5, 40, "down"),
    (0, -31, "up"),
    (30, 0, None),   # must exceed the minimum
    (10, 10, None),
    (0, 0, None),
])
def test_decode_swipe(dx, dy, expected):
    assert decode_swipe(dx, dy) == expected


def test_swipe_tracker():
    swipe = SwipeTracker()
    assert swipe.finish(100, 100) is None

    swipe.start(100, 100)
    assert swipe.is_swiping
    assert swipe.finish(100, 20) == "up"
    assert not swipe.is_swiping
    # Released once already
    assert swipe.finish(100, 200) is None


def test_latched_keys_stay_down_until_released():
    keys = LatchedKeys("left", "right")
    keys.press("left")
    keys.press("jump")  # ignored
    assert keys["left"] and not keys["right"]
    keys.release("left")
    assert not keys["left"]

    keys.press("left")
    keys.press("right")
    keys.release_all()
    assert not keys["left"] and not keys["right"]


def test_key_maps():
    assert direction_for_key("ArrowUp") == "up"
    assert direction_for_key("Space") is None
    assert heading_for_key("ArrowDown") == pytest.approx(math.pi / 2)
    assert heading_for_key("ArrowLeft") == pytest.approx(math.pi)
    assert heading_for_key("x") is None
