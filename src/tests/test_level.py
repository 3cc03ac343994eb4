"""
Tests for Level spawning and scrolling.
"""

import random

import pygame
import pytest

from src.game.config import WIDTH, HEIGHT, COLLECTIBLE_SIZE, OBSTACLE_WIDTH, OBSTACLE_HEIGHT
from src.game.level import Level


@pytest.fixture
def level():
    return Level(seed=42)


def test_seed_resolved_when_missing():
    assert isinstance(Level().seed, int)


def test_reroll_deterministic_with_seed():
    l1, l2 = Level(seed=7), Level(seed=7)
    assert [l1.reroll_layout() for _ in range(50)] == [l2.reroll_layout() for _ in range(50)]


def test_reroll_produces_both_layouts(level):
    seen = {level.reroll_layout() for _ in range(200)}
    assert seen == {True, False}


def test_uses_injected_rng():
    rng = random.Random(3)
    level = Level(rng=rng)
    assert level.rng is rng
    assert level.seed is None


def test_collectible_lanes(level):
    assert level.spawn_collectible(False) == pygame.Rect(WIDTH, HEIGHT - COLLECTIBLE_SIZE - 50, COLLECTIBLE_SIZE, COLLECTIBLE_SIZE)
    assert level.spawn_collectible(True) == pygame.Rect(WIDTH, 50, COLLECTIBLE_SIZE, COLLECTIBLE_SIZE)
    assert len(level.collectibles) == 2


def test_vertical_obstacles_stay_on_screen(level):
    level.horizontal_layout = False
    for _ in range(300):
        o = level.spawn_obstacle(False)
        assert 0 <= o.top and o.bottom <= HEIGHT - OBSTACLE_WIDTH
        assert o.size == (OBSTACLE_HEIGHT, OBSTACLE_WIDTH)


def test_collectible_culled_past_left_edge(level):
    level.collectibles = [pygame.Rect(-25, 0, COLLECTIBLE_SIZE, COLLECTIBLE_SIZE)]
    assert level.scroll_collectibles() == 0
    assert level.collectibles[0].x == -COLLECTIBLE_SIZE
    assert level.scroll_collectibles() == 1
    assert level.collectibles == []


def test_obstacles_culled_and_counted(level):
    level.obstacles = [
        pygame.Rect(-45, 0, OBSTACLE_WIDTH, OBSTACLE_HEIGHT),
        pygame.Rect(-43, 200, OBSTACLE_HEIGHT, OBSTACLE_WIDTH),
        pygame.Rect(300, 400, OBSTACLE_WIDTH, OBSTACLE_HEIGHT),
    ]
    assert level.scroll_obstacles(8) == 2
    assert [o.x for o in level.obstacles] == [292]


def test_take_collectibles_leaves_others(level):
    me = pygame.Rect(375, 500, 50, 50)
    level.collectibles = [
        pygame.Rect(380, 520, 30, 30),
        pygame.Rect(425, 520, 30, 30),   # touches the right edge only
        pygame.Rect(360, 520, 30, 30),
    ]
    assert level.take_collectibles(me) == 2
    assert level.collectibles == [pygame.Rect(425, 520, 30, 30)]


def test_first_obstacle_hit(level):
    me = pygame.Rect(375, 500, 50, 50)
    assert level.first_obstacle_hit(me) is None
    level.obstacles = [pygame.Rect(600, 450, 50, 100), pygame.Rect(400, 450, 50, 100)]
    assert level.first_obstacle_hit(me) == pygame.Rect(400, 450, 50, 100)
