"""Top-level orchestrator: owns one world, its systems and the command surface."""
from __future__ import annotations

import logging
import random
from typing import Callable

from esper import World

from blockfall.config import EngineConfig
from blockfall.components.board import Board
from blockfall.components.clear_state import ClearState, ShakeSignal
from blockfall.components.game_state import GameState, SessionMode
from blockfall.components.gravity_timer import GravityTimer
from blockfall.components.hold_state import HoldState
from blockfall.components.input_state import InputState
from blockfall.components.lock_state import LockState
from blockfall.components.session_counters import SessionCounters
from blockfall.components.tetromino import ActivePiece, NextPiece
from blockfall.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_GAME_RESTART,
    EVENT_HARD_DROP_REQUEST,
    EVENT_HOLD_REQUEST,
    EVENT_INPUT_HORIZONTAL,
    EVENT_INPUT_SOFT_DROP,
    EVENT_LEVEL_CHANGED,
    EVENT_LINES_CHANGED,
    EVENT_ROTATE_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_SPAWN_FAILED,
)
from blockfall.systems.gravity import GravitySystem
from blockfall.systems.hold import HoldSystem
from blockfall.systems.input_shaper import InputShaperSystem
from blockfall.systems.line_clear import LineClearSystem
from blockfall.systems.lock_timer import LockTimerSystem
from blockfall.systems.piece_control import PieceControlSystem
from blockfall.utils.bag_randomizer import BagRandomizer
from blockfall.utils.components import session_component, session_entity
from blockfall.utils.game_state import set_session_mode
from blockfall.utils.snapshot import RenderSnapshot, build_snapshot
from blockfall.utils.timeline import freeze_timers, monotonic_ms, thaw_timers
from blockfall.world import create_world

logger = logging.getLogger(__name__)


class GameSession:
    """One independent game.

    States: IDLE -> PLAYING <-> PAUSED, PLAYING -> GAME_OVER, and ``start()``
    from any state begins a fresh run. Commands are synchronous and silently
    ignored when they do not apply. ``advance()`` reads the clock once and runs
    every timer against that timestamp: clear window, input repeat, gravity,
    lock expiry.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        event_bus: EventBus | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.event_bus = event_bus or EventBus()
        self._clock = clock or monotonic_ms
        self.world: World = create_world(self.config, rng=rng)

        self.line_clear_system = LineClearSystem(self.world, self.event_bus, self.config)
        self.input_system = InputShaperSystem(self.world, self.event_bus, self.config)
        self.gravity_system = GravitySystem(self.world, self.event_bus, self.config)
        self.lock_system = LockTimerSystem(self.world, self.event_bus, self.config)
        self.piece_system = PieceControlSystem(self.world, self.event_bus, self.config)
        self.hold_system = HoldSystem(self.world, self.event_bus, self.config)
        self._tick_order = (
            self.line_clear_system,
            self.input_system,
            self.gravity_system,
            self.lock_system,
        )

        self.event_bus.subscribe(EVENT_SPAWN_FAILED, self._on_spawn_failed)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def mode(self) -> SessionMode:
        return session_component(self.world, GameState).mode

    @property
    def is_playing(self) -> bool:
        return self.mode == SessionMode.PLAYING

    @property
    def counters(self) -> SessionCounters:
        return session_component(self.world, SessionCounters)

    @property
    def score(self) -> int:
        return self.counters.score

    @property
    def lines(self) -> int:
        return self.counters.lines

    @property
    def level(self) -> int:
        return self.counters.level

    def snapshot(self) -> RenderSnapshot:
        return build_snapshot(self.world)

    def subscribe(self, name: str, fn) -> None:
        self.event_bus.subscribe(name, fn)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, start_level: int | None = None) -> None:
        """Reset board, bag, counters, hold and timers, then spawn the first piece."""
        now = self._clock()
        level = self.config.start_level if start_level is None else start_level
        state = session_component(self.world, GameState)
        state.generation += 1
        state.paused_at = None

        entity = session_entity(self.world)
        for transient in (ClearState, ShakeSignal):
            if self.world.has_component(entity, transient):
                self.world.remove_component(entity, transient)
        session_component(self.world, Board).clear()
        session_component(self.world, ActivePiece).piece = None
        bag = session_component(self.world, BagRandomizer)
        bag.reset()
        lock = session_component(self.world, LockState)
        lock.reset_budget = self.config.max_lock_resets
        lock.reset_for_new_piece()
        timer = session_component(self.world, GravityTimer)
        timer.deadline = None
        timer.remaining = None
        hold = session_component(self.world, HoldState)
        hold.held_type = None
        hold.used_since_last_lock = False
        session_component(self.world, InputState).release_all()
        counters = self.counters
        counters.reset(level)

        self.event_bus.emit(EVENT_SCORE_CHANGED, score=counters.score)
        self.event_bus.emit(EVENT_LINES_CHANGED, lines=counters.lines)
        self.event_bus.emit(EVENT_LEVEL_CHANGED, level=counters.level)
        self.event_bus.emit(EVENT_GAME_RESTART)
        logger.debug("session start (generation %d, level %d)", state.generation, counters.level)

        session_component(self.world, NextPiece).next_type = bag.draw()
        set_session_mode(self.world, self.event_bus, SessionMode.PLAYING)
        self.piece_system.spawn(now, source='start')

    def pause(self) -> None:
        if self.mode != SessionMode.PLAYING:
            return
        now = self._clock()
        freeze_timers(self.world, now)
        session_component(self.world, GameState).paused_at = now
        set_session_mode(self.world, self.event_bus, SessionMode.PAUSED)
        logger.debug("session paused at %.1f", now)

    def resume(self) -> None:
        if self.mode != SessionMode.PAUSED:
            return
        now = self._clock()
        thaw_timers(self.world, now)
        session_component(self.world, GameState).paused_at = None
        set_session_mode(self.world, self.event_bus, SessionMode.PLAYING)
        logger.debug("session resumed at %.1f", now)

    def advance(self) -> None:
        """Run one frame of timed work against a single clock reading."""
        if self.mode != SessionMode.PLAYING:
            return
        now = self._clock()
        for system in self._tick_order:
            if self.mode != SessionMode.PLAYING:
                break
            system.update(now)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def move_left(self, pressed: bool = True) -> None:
        self.event_bus.emit(EVENT_INPUT_HORIZONTAL, direction=-1, pressed=pressed, now=self._clock())

    def move_right(self, pressed: bool = True) -> None:
        self.event_bus.emit(EVENT_INPUT_HORIZONTAL, direction=1, pressed=pressed, now=self._clock())

    def soft_drop(self, pressed: bool = True) -> None:
        self.event_bus.emit(EVENT_INPUT_SOFT_DROP, pressed=pressed, now=self._clock())

    def hard_drop(self) -> None:
        if self.is_playing:
            self.event_bus.emit(EVENT_HARD_DROP_REQUEST, now=self._clock())

    def rotate_cw(self) -> None:
        if self.is_playing:
            self.event_bus.emit(EVENT_ROTATE_REQUEST, delta=1, now=self._clock())

    def rotate_ccw(self) -> None:
        if self.is_playing:
            self.event_bus.emit(EVENT_ROTATE_REQUEST, delta=-1, now=self._clock())

    def hold(self) -> None:
        if self.is_playing:
            self.event_bus.emit(EVENT_HOLD_REQUEST, now=self._clock())

    # ------------------------------------------------------------------
    # Game over
    # ------------------------------------------------------------------

    def _on_spawn_failed(self, sender, **payload) -> None:
        state = session_component(self.world, GameState)
        if state.mode != SessionMode.PLAYING:
            return
        session_component(self.world, ActivePiece).piece = None
        session_component(self.world, LockState).reset_for_new_piece()
        session_component(self.world, InputState).release_all()
        set_session_mode(self.world, self.event_bus, SessionMode.GAME_OVER)
        counters = self.counters
        logger.debug(
            "game over: %s could not spawn (%s), score %d",
            payload.get('piece_type'),
            payload.get('source'),
            counters.score,
        )
        self.event_bus.emit(EVENT_GAME_OVER, score=counters.score, lines=counters.lines, level=counters.level)
