# src/env/observations.py
from __future__ import annotations
from typing import List, Sequence
import numpy as np
import pygame
from ..game.config import (
    WIDTH, HEIGHT, INITIAL_OBSTACLE_SPEED, MAX_OBSTACLE_SPEED,
)
from ..game.engine import Snapshot

N_OBSTACLES = 2          # nearest obstacles described in the vector
OBS_SIZE = 3 + 4 * N_OBSTACLES + 3


def _ahead(rects: Sequence[pygame.Rect], player: pygame.Rect) -> List[pygame.Rect]:
    """Rects not yet fully behind the player, nearest first."""
    return sorted((r for r in rects if r.right > player.left), key=lambda r: r.left)


def build_observation(snap: Snapshot) -> np.ndarray:
    """
    Returns float32 (OBS_SIZE,) in [0, 1]:
      [gravity_flipped, speed_norm, horizontal_layout,
       (present, dx, top, bottom) for the N_OBSTACLES nearest obstacles ahead,
       present, dx, lane_top for the nearest collectible ahead]
    dx is the gap between the player's right edge and the entity's left edge
    over the screen width (0 once they overlap horizontally). Missing
    entities read present=0, dx=1, everything else 0.
    """
    me = snap.player
    speed_norm = (snap.obstacle_speed - INITIAL_OBSTACLE_SPEED) / (MAX_OBSTACLE_SPEED - INITIAL_OBSTACLE_SPEED)
    obs: List[float] = [
        1.0 if snap.gravity_flipped else 0.0,
        speed_norm,
        1.0 if snap.horizontal_layout else 0.0,
    ]

    obstacles = _ahead(snap.obstacles, me)
    for i in range(N_OBSTACLES):
        if i < len(obstacles):
            o = obstacles[i]
            dx = max(0, o.left - me.right) / WIDTH
            obs += [1.0, dx, o.top / HEIGHT, o.bottom / HEIGHT]
        else:
            obs += [0.0, 1.0, 0.0, 0.0]

    collectibles = _ahead(snap.collectibles, me)
    if collectibles:
        c = collectibles[0]
        dx = max(0, c.left - me.right) / WIDTH
        obs += [1.0, dx, 1.0 if c.centery < HEIGHT / 2 else 0.0]
    else:
        obs += [0.0, 1.0, 0.0]

    return np.clip(np.asarray(obs, dtype=np.float32), 0.0, 1.0)
