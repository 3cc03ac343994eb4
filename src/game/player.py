# src/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from .config import HEIGHT, PLAYER_X, PLAYER_SIZE, LANE_INSET


def lane_y(flipped: bool, size: int) -> int:
    """Top y of an entity of height `size` sitting on the top (flipped) or bottom lane."""
    return LANE_INSET if flipped else HEIGHT - size - LANE_INSET


@dataclass
class Player:
    """
    Block pinned to one of two lanes:
    - gravity_flipped = False -> bottom lane
    - gravity_flipped = True  -> top lane
    """
    x: int = PLAYER_X
    gravity_flipped: bool = False

    @property
    def y(self) -> int:
        return lane_y(self.gravity_flipped, PLAYER_SIZE)

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, PLAYER_SIZE, PLAYER_SIZE)

    def flip(self):
        self.gravity_flipped = not self.gravity_flipped
