# experiments/replay.py
"""
Replay tool for GSEnv: quick command cheat sheet

# Replay a HEURISTIC episode by seed (uses experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --frame-skip 4

# Controls during replay
SPACE = pause/resume
R     = restart episode
ESC   = quit

Deterministic: given the same seed, frame_skip and action sequence, replay matches the original run.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional, List

import numpy as np
import pygame

from src.env.gs_env import GSEnv
from src.game.config import FPS

DEFAULT_OUT_DIR = "experiments/runs"

def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def _draw_overlay(env: GSEnv, step_idx: int, action: Optional[int]):
    surf = pygame.display.get_surface()
    if surf is None or env.engine is None:
        return
    font = pygame.font.SysFont("jetbrainsmono", 16)

    lines: List[str] = [
        f"Step={step_idx}  Action={'NOOP' if action == 0 else ('FLIP' if action == 1 else '-')}",
        f"Frame={env.engine.frame}  Score={env.engine.score}  {'OVER' if env.engine.game_over else 'ALIVE'}",
    ]

    panel = pygame.Surface((300, 20 * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (12, 70))
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (20, 76 + i * 20))

    pygame.display.flip()

def replay_episode(seed: int, actions: np.ndarray, frame_skip: int):
    """
    Replays an episode deterministically using GSEnv with on-screen overlay.
    Controls:
      SPACE: pause/resume   R: restart episode   ESC: quit
    """
    env = GSEnv(render_mode="human", frame_skip=frame_skip, time_limit_seconds=None)
    env.reset(seed=seed)

    paused = False
    step_idx = 0
    clock = pygame.time.Clock()

    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused:
                env.render()
                _draw_overlay(env, step_idx, action=None)
                clock.tick(30)
                continue

            action = int(actions[step_idx])
            _, _, term, trunc, _ = env.step(action)
            _draw_overlay(env, step_idx, action)
            step_idx += 1

            if term or trunc:
                # Final frame is already drawn; wait a moment
                pygame.time.delay(600)
                break
    finally:
        env.close()

def main():
    ap = argparse.ArgumentParser(description="Replay a recorded GSEnv episode with overlay.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / heuristic")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR,
                    help="Base directory where experiments/runs live")
    ap.add_argument("--frame-skip", type=int, default=-1,
                    help="Override frame_skip. If <0, use meta or default=4")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        # Trace files are named <seed>_actions.npy
        if args.seed is None:
            stem = trace_path.stem.split("_")[0]
            if stem.lstrip("-").isdigit():
                args.seed = int(stem)
        if args.seed is None:
            raise SystemExit("Could not infer seed from trace name; pass --seed")
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    fs = args.frame_skip
    if fs < 0:
        fs = 4
        if not args.trace:
            meta = _read_meta(out_dir, args.policy, args.seed)
            if meta.get("frame_skip", "").isdigit():
                fs = int(meta["frame_skip"])

    print(f"Replaying seed={args.seed}  policy={args.policy}  steps={len(actions)}  "
          f"frame_skip={fs}  ({FPS} ticks/s)")
    print("Controls: SPACE pause/resume | R restart | ESC quit")

    replay_episode(seed=args.seed, actions=actions, frame_skip=fs)

if __name__ == "__main__":
    main()
