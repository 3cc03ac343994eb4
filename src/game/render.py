# src/game/render.py
from __future__ import annotations
import pygame
from .config import (
    WIDTH, HEIGHT,
    COLOR_BG, COLOR_FG, COLOR_PLAYER, COLOR_COLLECTIBLE, COLOR_DANGER, COLOR_HUD,
)
from .engine import Snapshot


def draw_world(surf: pygame.Surface, snap: Snapshot):
    """Background, collectibles, obstacles and player. No text."""
    surf.fill(COLOR_BG)
    for c in snap.collectibles:
        pygame.draw.rect(surf, COLOR_COLLECTIBLE, c)
    for o in snap.obstacles:
        pygame.draw.rect(surf, COLOR_DANGER, o)
    pygame.draw.rect(surf, COLOR_PLAYER, snap.player)


def draw_hud(surf: pygame.Surface, snap: Snapshot, font: pygame.font.Font):
    surf.blit(font.render(f"Score: {snap.score}", True, COLOR_FG), (10, 20))
    g_txt = "↑" if snap.gravity_flipped else "↓"
    layout = "H" if snap.horizontal_layout else "V"
    hud = f"Seed: {snap.seed}   Speed: {snap.obstacle_speed}   Grav: {g_txt}   Layout: {layout}"
    surf.blit(font.render(hud, True, COLOR_HUD), (10, 42))


def draw_game_over(surf: pygame.Surface, snap: Snapshot, font: pygame.font.Font):
    lines = ["Game Over!", f"Final Score: {snap.score}", "Press R to Restart"]
    for i, msg in enumerate(lines):
        txt = font.render(msg, True, COLOR_FG)
        surf.blit(txt, (WIDTH // 2 - txt.get_width() // 2, HEIGHT // 2 + 20 * i))
