"""
Tests for the scripted policies and rollout bookkeeping in experiments/.
"""

import numpy as np
import pytest

from experiments.sanity_rollout import run_one_episode, tiny_heuristic_policy_init, random_policy_init
from src.env.observations import OBS_SIZE


def _obs(flipped: bool, dx: float, top: float, bottom: float) -> np.ndarray:
    obs = np.zeros(OBS_SIZE, dtype=np.float32)
    obs[0] = 1.0 if flipped else 0.0
    obs[3:7] = [1.0, dx, top, bottom]
    return obs


def test_heuristic_dodges_lane_obstacle():
    act = tiny_heuristic_policy_init()
    # upright obstacle on the bottom lane, close by
    assert act(_obs(False, 0.05, 450 / 600, 550 / 600)) == 1
    # same obstacle far away
    assert act(_obs(False, 0.5, 450 / 600, 550 / 600)) == 0
    # obstacle on the other lane
    assert act(_obs(True, 0.05, 450 / 600, 550 / 600)) == 0


def test_random_policy_reproducible():
    a1, a2 = random_policy_init(5), random_policy_init(5)
    obs = np.zeros(OBS_SIZE, dtype=np.float32)
    assert [a1(obs) for _ in range(100)] == [a2(obs) for _ in range(100)]


def test_run_one_episode_writes_traces(tmp_path):
    ep_len, ret_sum, score, term, trunc, flips = run_one_episode(
        policy_name="heuristic", seed=101, frame_skip=4, steps_limit=50,
        save_traces=True, save_obs=True, out_dir=tmp_path,
    )
    trace_dir = tmp_path / "traces" / "heuristic"
    actions = np.load(trace_dir / "101_actions.npy")
    assert actions.ndim == 1 and len(actions) == ep_len
    assert np.load(trace_dir / "101_obs.npy").shape == (ep_len + 1, OBS_SIZE)
    assert "frame_skip=4" in (trace_dir / "101_meta.txt").read_text(encoding="utf-8")


def test_unknown_policy(tmp_path):
    with pytest.raises(ValueError):
        run_one_episode("rl", 1, 4, 10, False, False, tmp_path)
