# src/env/gs_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS, POINTS
from src.game.engine import GravitySwapEngine, InputEvent
from src.game.render import draw_world, draw_hud
from src.env.observations import build_observation, OBS_SIZE


class GSEnv(gym.Env):
    """
    Gravity Swap Gymnasium environment (vector observations).
    - Simulation at FPS (120) ticks per second.
    - Agent acts every `frame_skip` ticks (default 4) -> 30 decisions/sec.
    - Observation: shape (OBS_SIZE,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    ALIVE_REWARD = 0.1
    DEATH_REWARD = -1.0

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = FPS / frame_skip
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = FLIP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=0.0, high=1.0, shape=(OBS_SIZE,), dtype=np.float32)

        # --- Runtime state ---
        self.engine: Optional[GravitySwapEngine] = None
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None  # engine's effective seed for this episode

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - If a seed is provided, use it directly for the engine for strict reproducibility.
        # - If not, draw one from self.np_random so unseeded resets follow the last seeded one.
        if seed is None:
            engine_seed = int(self.np_random.integers(0, 2**32 - 1))
        else:
            engine_seed = int(seed)
        self.engine = GravitySwapEngine(seed=engine_seed)
        self.timestep = 0
        self.current_seed = self.engine.seed

        obs = self._get_obs()
        info = self._info()
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.engine is not None, "Call reset() first."

        if int(action) == 1:
            self.engine.post(InputEvent.FLIP_GRAVITY)

        score_before = self.engine.score
        for _ in range(self.frame_skip):
            self.engine.advance()
            if self.engine.game_over:
                break

        if self.engine.game_over:
            reward = self.DEATH_REWARD
        else:
            reward = self.ALIVE_REWARD + (self.engine.score - score_before) / POINTS

        self.timestep += 1
        terminated = self.engine.game_over
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = self._info()

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.engine is not None
        return build_observation(self.engine.snapshot())

    def _info(self) -> Dict[str, Any]:
        assert self.engine is not None
        return {
            "score": self.engine.score,
            "frame": self.engine.frame,
            "timestep": self.timestep,
            "obstacle_speed": self.engine.obstacle_speed,
            "seed": self.current_seed,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.engine is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Gravity Swap - Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("jetbrainsmono", 18)

        snap = self.engine.snapshot()
        draw_world(self.screen, snap)
        draw_hud(self.screen, snap, self.font)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
