# src/game/level.py
from __future__ import annotations
import random
from typing import List, Optional
import pygame
from .config import (
    WIDTH, HEIGHT, COLLECTIBLE_SIZE, OBSTACLE_WIDTH, OBSTACLE_HEIGHT, SCROLL_STEP,
)
from .player import lane_y


class Level:
    """
    The two scrolling entity lists plus everything random about them.

    Collectibles and obstacles are plain pygame.Rect, spawned at the right edge
    and culled once they have left through the left edge. `horizontal_layout`
    decides the shape of the next obstacle:
      - True:  upright 50x100 block sitting on the player's current lane
      - False: flat 100x50 block at a random height
    """
    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.collectibles: List[pygame.Rect] = []
        self.obstacles: List[pygame.Rect] = []
        self.horizontal_layout = False

    def clear(self):
        self.collectibles = []
        self.obstacles = []

    def reroll_layout(self) -> bool:
        self.horizontal_layout = self.rng.random() < 0.5
        return self.horizontal_layout

    def spawn_collectible(self, gravity_flipped: bool) -> pygame.Rect:
        rect = pygame.Rect(WIDTH, lane_y(gravity_flipped, COLLECTIBLE_SIZE),
                           COLLECTIBLE_SIZE, COLLECTIBLE_SIZE)
        self.collectibles.append(rect)
        return rect

    def spawn_obstacle(self, gravity_flipped: bool) -> pygame.Rect:
        if self.horizontal_layout:
            rect = pygame.Rect(WIDTH, lane_y(gravity_flipped, OBSTACLE_HEIGHT),
                               OBSTACLE_WIDTH, OBSTACLE_HEIGHT)
        else:
            # lying on its side: the long edge runs horizontally
            y = self.rng.randrange(HEIGHT - OBSTACLE_HEIGHT)
            rect = pygame.Rect(WIDTH, y, OBSTACLE_HEIGHT, OBSTACLE_WIDTH)
        self.obstacles.append(rect)
        return rect

    def scroll_collectibles(self) -> int:
        """Move collectibles left by SCROLL_STEP and drop the ones gone off-screen. Returns how many were dropped."""
        for c in self.collectibles:
            c.x -= SCROLL_STEP
        before = len(self.collectibles)
        self.collectibles = [c for c in self.collectibles if c.x >= -COLLECTIBLE_SIZE]
        return before - len(self.collectibles)

    def scroll_obstacles(self, speed: int) -> int:
        """Move obstacles left by `speed`; returns how many were dodged (left the screen)."""
        for o in self.obstacles:
            o.x -= speed
        before = len(self.obstacles)
        # cull threshold is the upright width for both orientations
        self.obstacles = [o for o in self.obstacles if o.x >= -OBSTACLE_WIDTH]
        return before - len(self.obstacles)

    def take_collectibles(self, player_rect: pygame.Rect) -> int:
        """Remove every collectible overlapping the player; returns the count."""
        kept = [c for c in self.collectibles if not player_rect.colliderect(c)]
        taken = len(self.collectibles) - len(kept)
        self.collectibles = kept
        return taken

    def first_obstacle_hit(self, player_rect: pygame.Rect) -> Optional[pygame.Rect]:
        idx = player_rect.collidelist(self.obstacles)
        return self.obstacles[idx] if idx != -1 else None
