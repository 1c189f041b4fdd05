"""Pause support: turn absolute deadlines into remaining time and back.

Every timer is frozen against the same pause timestamp and thawed against the
same resume timestamp, so a pause neither costs nor grants time.
"""
from __future__ import annotations

from time import monotonic
from typing import Optional

from esper import World

from blockfall.components.clear_state import ClearState, ShakeSignal
from blockfall.components.gravity_timer import GravityTimer
from blockfall.components.input_state import InputState
from blockfall.components.lock_state import LockState


def _elapsed(since: Optional[float], now: float) -> Optional[float]:
    return None if since is None else now - since


def _since(elapsed: Optional[float], now: float) -> Optional[float]:
    return None if elapsed is None else now - elapsed


def freeze_timers(world: World, now: float) -> None:
    for _, gravity in world.get_component(GravityTimer):
        if gravity.deadline is not None:
            gravity.remaining = max(0.0, gravity.deadline - now)
            gravity.deadline = None
    for _, lock in world.get_component(LockState):
        if lock.deadline is not None:
            lock.remaining = max(0.0, lock.deadline - now)
            lock.deadline = None
    for _, timed in list(world.get_component(ClearState)) + list(world.get_component(ShakeSignal)):
        if timed.remaining is None:
            timed.remaining = max(0.0, timed.deadline - now)
    for _, inputs in world.get_component(InputState):
        inputs.press_elapsed = _elapsed(inputs.press_time, now)
        inputs.shift_elapsed = _elapsed(inputs.last_shift, now)
        inputs.soft_drop_elapsed = _elapsed(inputs.last_soft_drop, now)


def thaw_timers(world: World, now: float) -> None:
    for _, gravity in world.get_component(GravityTimer):
        if gravity.remaining is not None:
            gravity.deadline = now + gravity.remaining
            gravity.remaining = None
    for _, lock in world.get_component(LockState):
        if lock.remaining is not None:
            lock.deadline = now + lock.remaining
            lock.remaining = None
    for _, timed in list(world.get_component(ClearState)) + list(world.get_component(ShakeSignal)):
        if timed.remaining is not None:
            # Keep the duration; move the start so that exactly `remaining` is left.
            timed.start = now + timed.remaining - timed.duration
            timed.remaining = None
    for _, inputs in world.get_component(InputState):
        if inputs.press_time is not None:
            inputs.press_time = _since(inputs.press_elapsed, now)
        if inputs.last_shift is not None:
            inputs.last_shift = _since(inputs.shift_elapsed, now)
        if inputs.last_soft_drop is not None:
            inputs.last_soft_drop = _since(inputs.soft_drop_elapsed, now)
        inputs.press_elapsed = None
        inputs.shift_elapsed = None
        inputs.soft_drop_elapsed = None


def monotonic_ms() -> float:
    return monotonic() * 1000.0
