"""
Tests for the snapshot renderer.
"""

import pygame
import pytest

from src.game.config import WIDTH, HEIGHT, COLOR_BG
from src.game.engine import GravitySwapEngine
from src.game.render import draw_world, draw_hud, draw_game_over


@pytest.fixture
def font():
    pygame.font.init()
    yield pygame.font.Font(None, 18)
    pygame.font.quit()


def _has_ink(surf: pygame.Surface, area: pygame.Rect) -> bool:
    return any(
        surf.get_at((x, y))[:3] != COLOR_BG
        for x in range(area.left, area.right)
        for y in range(area.top, area.bottom)
    )


def test_hud_reads_seed_from_snapshot(font):
    snap = GravitySwapEngine(seed=77).snapshot()
    surf = pygame.Surface((WIDTH, HEIGHT))
    draw_world(surf, snap)
    assert not _has_ink(surf, pygame.Rect(0, 40, 400, 20))
    draw_hud(surf, snap, font)
    assert _has_ink(surf, pygame.Rect(0, 40, 400, 20))


def test_world_and_game_over_text(font):
    engine = GravitySwapEngine(seed=3)
    engine.level.obstacles.append(engine.player_rect)
    engine.check_collisions()
    snap = engine.snapshot()

    surf = pygame.Surface((WIDTH, HEIGHT))
    draw_world(surf, snap)
    assert surf.get_at(snap.player.center)[:3] != COLOR_BG
    area = pygame.Rect(WIDTH // 2 - 60, HEIGHT // 2, 120, 60)
    assert not _has_ink(surf, area)
    draw_game_over(surf, snap, font)
    assert _has_ink(surf, area)
