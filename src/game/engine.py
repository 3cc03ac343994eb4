# src/game/engine.py
"""
Purpose
-------
Headless simulation of the Gravity Swap game. The engine owns every piece of
game state and moves it forward one tick per `advance()` call; whoever drives
it (pygame shell, gym env, tests) only posts input events and reads state back.

Tick order
----------
    1. scroll collectibles, drop the ones off-screen
    2. scroll obstacles, +POINTS for every one dodged off-screen
    3. every COLLECTIBLE_EVERY frames: spawn a collectible on the player's lane
    4. every OBSTACLE_EVERY frames: spawn an obstacle
    5. every LAYOUT_REROLL_EVERY frames: re-roll the layout mode
    6. recompute obstacle speed from score
    7. collisions
    8. frame += 1

Collisions use pygame.Rect.colliderect, so rects that only share an edge do
not touch.
"""

from __future__ import annotations
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple
import pygame

from .config import (
    INITIAL_OBSTACLE_SPEED, MAX_OBSTACLE_SPEED, SPEED_INCREASE_INTERVAL, POINTS,
    COLLECTIBLE_EVERY, OBSTACLE_EVERY, LAYOUT_REROLL_EVERY, DEBUG_EVENTS,
)
from .level import Level
from .player import Player


class InputEvent(Enum):
    FLIP_GRAVITY = "flip_gravity"
    RESTART = "restart"


def obstacle_speed_for(score: int) -> int:
    return min(INITIAL_OBSTACLE_SPEED + score // SPEED_INCREASE_INTERVAL, MAX_OBSTACLE_SPEED)


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of everything a renderer or observer needs for one frame."""
    player: pygame.Rect
    collectibles: Tuple[pygame.Rect, ...]
    obstacles: Tuple[pygame.Rect, ...]
    score: int
    game_over: bool
    gravity_flipped: bool
    obstacle_speed: int
    frame: int
    horizontal_layout: bool
    seed: Optional[int]


class GravitySwapEngine:
    """
    Action: flip gravity (top <-> bottom lane) or restart after a game over.
    State: Player + Level + session counters (score, speed, frame, game_over).
    """
    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.level = Level(seed, rng)
        self.player = Player()
        self._score = 0
        self._obstacle_speed = INITIAL_OBSTACLE_SPEED
        self._frame = 0
        self._game_over = False
        self._events: Deque[InputEvent] = deque()
        self.reset()

    # -------------------- Shell -> Engine --------------------

    def reset(self, seed: Optional[int] = None):
        """Back to a fresh session. A seed, when given, reseeds the level RNG."""
        if seed is not None:
            self.level = Level(seed)
        self.player = Player()
        self.level.clear()
        self._score = 0
        self._obstacle_speed = INITIAL_OBSTACLE_SPEED
        self._frame = 0
        self._game_over = False
        self.level.reroll_layout()
        self.level.spawn_collectible(self.player.gravity_flipped)

    def toggle_gravity(self) -> bool:
        """Swap lanes. Ignored once the game is over; returns True if the flip happened."""
        if self._game_over:
            return False
        self.player.flip()
        return True

    def request_restart(self) -> bool:
        """Restart, honoured only on the game-over screen."""
        if not self._game_over:
            return False
        self.reset()
        return True

    def post(self, event: InputEvent):
        """Queue an input event; it is applied at the start of the next advance()."""
        self._events.append(event)

    def process_events(self) -> int:
        applied = 0
        while self._events:
            event = self._events.popleft()
            if event is InputEvent.FLIP_GRAVITY:
                self.toggle_gravity()
            elif event is InputEvent.RESTART:
                self.request_restart()
            applied += 1
        return applied

    def advance(self) -> bool:
        """Run one tick. Returns False (and changes nothing) while the game is over."""
        self.process_events()
        if self._game_over:
            return False

        # 1) collectibles leaving the screen are simply lost
        self.level.scroll_collectibles()

        # 2) every obstacle that makes it off-screen was dodged
        dodged = self.level.scroll_obstacles(self._obstacle_speed)
        if dodged:
            self._add_score(POINTS * dodged)

        # 3-5) spawning and layout, keyed on the frame about to finish
        flipped = self.player.gravity_flipped
        if self._frame % COLLECTIBLE_EVERY == 0:
            self.level.spawn_collectible(flipped)
        if self._frame % OBSTACLE_EVERY == 0:
            self.level.spawn_obstacle(flipped)
        if self._frame % LAYOUT_REROLL_EVERY == 0:
            horizontal = self.level.reroll_layout()
            if DEBUG_EVENTS:
                print(f"[engine] frame={self._frame} layout={'horizontal' if horizontal else 'vertical'}")

        # 6) difficulty
        self._obstacle_speed = obstacle_speed_for(self._score)

        # 7) collisions
        self.check_collisions()

        self._frame += 1
        return True

    def check_collisions(self):
        me = self.player.rect

        taken = self.level.take_collectibles(me)
        if taken:
            self._add_score(POINTS * taken)

        hit = self.level.first_obstacle_hit(me)
        if hit is not None:
            self._game_over = True
            if DEBUG_EVENTS:
                print(f"[engine] game over at frame={self._frame} score={self._score} obstacle={tuple(hit)}")

    def _add_score(self, points: int):
        self._score += points
        self._obstacle_speed = obstacle_speed_for(self._score)

    # -------------------- Engine -> Shell --------------------

    @property
    def player_rect(self) -> pygame.Rect:
        return self.player.rect

    @property
    def collectibles(self) -> List[pygame.Rect]:
        return [c.copy() for c in self.level.collectibles]

    @property
    def obstacles(self) -> List[pygame.Rect]:
        return [o.copy() for o in self.level.obstacles]

    @property
    def score(self) -> int:
        return self._score

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def gravity_flipped(self) -> bool:
        return self.player.gravity_flipped

    @property
    def obstacle_speed(self) -> int:
        return self._obstacle_speed

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def horizontal_layout(self) -> bool:
        return self.level.horizontal_layout

    @property
    def seed(self) -> Optional[int]:
        return self.level.seed

    def snapshot(self) -> Snapshot:
        return Snapshot(
            player=self.player_rect,
            collectibles=tuple(self.collectibles),
            obstacles=tuple(self.obstacles),
            score=self._score,
            game_over=self._game_over,
            gravity_flipped=self.player.gravity_flipped,
            obstacle_speed=self._obstacle_speed,
            frame=self._frame,
            horizontal_layout=self.level.horizontal_layout,
            seed=self.level.seed,
        )
