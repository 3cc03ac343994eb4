"""
Tests for the observation vector.
"""

import numpy as np
import pygame
import pytest

from src.env.observations import build_observation, OBS_SIZE
from src.game.engine import GravitySwapEngine


@pytest.fixture
def engine():
    return GravitySwapEngine(seed=11)


def test_shape_dtype_and_range(engine):
    for _ in range(300):
        obs = build_observation(engine.snapshot())
        assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
        assert np.all(obs >= 0.0) and np.all(obs <= 1.0)
        if not engine.advance():
            break


def test_fresh_engine(engine):
    obs = build_observation(engine.snapshot())
    assert obs[0] == 0.0                        # bottom lane
    assert obs[1] == 0.0                        # initial speed
    assert obs[2] == float(engine.horizontal_layout)
    assert obs[3] == 0.0 and obs[4] == 1.0      # no obstacle ahead
    assert obs[11] == 1.0                       # collectible ahead...
    assert obs[12] == pytest.approx((800 - 425) / 800)
    assert obs[13] == 0.0                       # ...on the bottom lane


def test_nearest_obstacles_first(engine):
    engine.level.obstacles = [pygame.Rect(700, 450, 50, 100), pygame.Rect(500, 0, 100, 50)]
    obs = build_observation(engine.snapshot())
    assert obs[3] == 1.0
    assert obs[4] == pytest.approx(75 / 800)
    assert obs[5] == pytest.approx(0.0) and obs[6] == pytest.approx(50 / 600)
    assert obs[7] == 1.0
    assert obs[8] == pytest.approx(275 / 800)
    assert obs[9] == pytest.approx(450 / 600) and obs[10] == pytest.approx(550 / 600)


def test_obstacles_behind_player_ignored(engine):
    engine.level.obstacles = [pygame.Rect(300, 450, 50, 100)]
    obs = build_observation(engine.snapshot())
    assert obs[3] == 0.0


def test_flipped_and_speed(engine):
    engine.toggle_gravity()
    engine.level.collectibles = [pygame.Rect(500, 50, 30, 30)]
    engine._add_score(500)
    obs = build_observation(engine.snapshot())
    assert obs[0] == 1.0
    assert obs[1] == pytest.approx(0.5)
    assert obs[13] == 1.0
