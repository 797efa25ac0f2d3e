import pytest

from game.garden import LaneDodgeEnv
from game.garden.entities import Hazard
from game.garden.spawner import LANE_HAZARD_KINDS

ROCK, BIRD, BEE = LANE_HAZARD_KINDS


@pytest.fixture
def env():
    env = LaneDodgeEnv(spawn_probability=0.0)
    env.reset(seed=0)
    return env


def test_speed_ramp_is_linear(env):
    s0 = env.speed
    for n in range(1, 501):
        env.tick()
        assert env.speed == env.base_speed + env.speed_increment * n
    assert env.speed > s0


def test_player_moves_while_key_latched(env):
    x0 = env.player.x
    env.keys.press("right")
    env.tick()
    env.tick()
    assert env.player.x == pytest.approx(x0 + 2 * env.player_speed)

    env.keys.release("right")
    env.tick()
    assert env.player.x == pytest.approx(x0 + 2 * env.player_speed)


def test_both_keys_cancel(env):
    x0 = env.player.x
    env.keys.press("left")
    env.keys.press("right")
    env.tick()
    assert env.player.x == x0


def test_player_clamped_to_lane(env):
    env.keys.press("left")
    for _ in range(200):
        env.tick()
    assert env.player.x == env.player.width / 2

    env.keys.release_all()
    env.keys.press("right")
    for _ in range(200):
        env.tick()
    assert env.player.x == env.width - env.player.width / 2


def test_hazards_fall_at_shared_speed(env):
    env.hazards = [Hazard(x=50.0, y=0.0, kind=ROCK), Hazard(x=350.0, y=10.0, kind=ROCK)]
    s0 = env.speed
    env.tick()
    assert env.hazards[0].y == pytest.approx(s0)
    assert env.hazards[1].y == pytest.approx(10.0 + s0)
    # Non-followers keep their column
    assert env.hazards[0].x == 50.0


def test_follower_nudges_toward_player(env):
    env.player.x = 200.0
    env.hazards = [Hazard(x=100.0, y=0.0, kind=BIRD)]
    env.tick()
    assert env.hazards[0].x == pytest.approx(100.0 + 100.0 * env.follow_factor)


def test_follow_factor_is_tunable():
    env = LaneDodgeEnv(spawn_probability=0.0, follow_factor=0.5)
    env.reset(seed=0)
    env.hazards = [Hazard(x=100.0, y=0.0, kind=BIRD)]
    env.tick()
    assert env.hazards[0].x == pytest.approx(150.0)


def test_hazards_removed_below_screen(env):
    limit = env.height + env.despawn_margin
    env.hazards = [
        Hazard(x=20.0, y=limit - 0.5, kind=ROCK),
        Hazard(x=20.0, y=100.0, kind=ROCK),
    ]
    env.tick()
    assert len(env.hazards) == 1
    assert env.hazards[0].y == pytest.approx(100.0 + env.base_speed)


def test_spawn_at_top_from_table():
    env = LaneDodgeEnv(spawn_probability=1.0)
    env.reset(seed=3)
    env.tick()
    assert len(env.hazards) == 1
    h = env.hazards[0]
    assert h.kind in LANE_HAZARD_KINDS
    assert h.y == -h.width / 2
    assert h.width / 2 <= h.x <= env.width - h.width / 2


def test_spawns_are_reproducible():
    runs = []
    for _ in range(2):
        env = LaneDodgeEnv(spawn_probability=0.3)
        env.reset(seed=11)
        for _ in range(50):
            env.tick()
        runs.append([(h.kind.name, h.x, h.y) for h in env.hazards])
    assert runs[0] == runs[1]


def test_collision_ends_game_and_freezes(env):
    p = env.player
    env.hazards = [Hazard(x=p.x, y=p.y - env.speed, kind=ROCK)]
    env.tick()
    assert env.game_over
    # The crash frame still counts
    assert env.score == 1

    speed, hazard_y = env.speed, env.hazards[0].y
    env.tick()
    assert env.score == 1
    assert env.speed == speed
    assert env.hazards[0].y == hazard_y


def test_near_miss_is_not_a_collision(env):
    p = env.player
    gap = (p.width + ROCK.width) / 2
    env.hazards = [Hazard(x=p.x + gap + 1, y=p.y - env.speed, kind=ROCK)]
    env.tick()
    assert not env.game_over


def test_score_counts_ticks(env):
    for _ in range(25):
        env.tick()
    assert env.score == 25
    assert env.display_score == 2


def test_score_never_decreases():
    env = LaneDodgeEnv(spawn_probability=0.05)
    env.reset(seed=2)
    last = 0
    for _ in range(2000):
        env.keys.release_all()
        env.keys.press("left" if env.score % 80 < 40 else "right")
        env.tick()
        assert env.score >= last
        last = env.score


def test_restart_resets_everything(env):
    env.keys.press("left")
    for _ in range(30):
        env.tick()
    p = env.player
    env.hazards = [Hazard(x=p.x, y=p.y, kind=BEE)]
    env.tick()
    assert env.game_over

    env.restart()
    assert env.hazards == []
    assert env.score == 0
    assert env.speed == env.base_speed
    assert not env.game_over
    assert not env.keys["left"]
    assert env.player.x == env.width / 2


def test_step_api(env):
    obs, reward, terminated, truncated, info = env.step(1)
    assert obs.shape == env.observation_space.shape
    assert env.observation_space.contains(obs)
    assert reward == pytest.approx(env.survival_reward)
    assert not terminated and not truncated
    assert info["score"] == 1
    assert env.player.x == pytest.approx(env.width / 2 - env.player_speed)


def test_step_crash_penalty(env):
    p = env.player
    env.hazards = [Hazard(x=p.x, y=p.y - env.speed, kind=ROCK)]
    _, reward, terminated, _, info = env.step(0)
    assert terminated and info["game_over"]
    assert reward == pytest.approx(-env.crash_penalty)


def test_invalid_spawn_probability():
    with pytest.raises(ValueError):
        LaneDodgeEnv(spawn_probability=1.5)
