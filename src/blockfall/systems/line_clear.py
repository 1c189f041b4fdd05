from __future__ import annotations

import logging

from esper import World

from blockfall.config import EngineConfig
from blockfall.constants import CLEAR_LABELS
from blockfall.components.board import Board
from blockfall.components.clear_state import ClearState, ShakeSignal
from blockfall.components.game_state import GameState
from blockfall.components.session_counters import SessionCounters
from blockfall.events.bus import (
    EventBus,
    EVENT_CLEAR_STARTED,
    EVENT_LEVEL_CHANGED,
    EVENT_LINE_CLEAR,
    EVENT_LINES_CHANGED,
    EVENT_PIECE_LOCKED,
    EVENT_SCORE_CHANGED,
    EVENT_SHAKE,
    EVENT_SPAWN_REQUEST,
)
from blockfall.systems.board_ops import find_full_rows, remove_rows
from blockfall.utils.components import optional_component, session_component, session_entity
from blockfall.utils.game_state import is_playing

logger = logging.getLogger(__name__)


class LineClearSystem:
    """Sequences line clears after every lock.

    Flow:
      - On ``piece_locked`` look for full rows. None: request the next spawn.
      - Otherwise attach a ClearState; control, gravity and the lock timer stay
        suspended while it exists.
      - When the window expires remove the rows, score them, update lines and
        level, then request the next spawn.
    """

    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig):
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self.on_piece_locked)

    def on_piece_locked(self, sender, **payload):
        now = payload.get('now')
        if now is None or not is_playing(self.world):
            return
        board = session_component(self.world, Board)
        rows = find_full_rows(board)
        if not rows:
            self.event_bus.emit(EVENT_SPAWN_REQUEST, now=now, source='lock')
            return
        self.start_clear(rows, now)

    def start_clear(self, rows: list[int], now: float) -> ClearState:
        is_tetris = len(rows) >= 4
        duration = self.config.tetris_clear_duration_ms if is_tetris else self.config.clear_duration_ms
        state = session_component(self.world, GameState)
        clear = ClearState(
            rows=list(rows),
            start=now,
            duration=duration,
            is_tetris=is_tetris,
            generation=state.generation,
        )
        self.world.add_component(session_entity(self.world), clear)
        self.event_bus.emit(EVENT_CLEAR_STARTED, rows=list(rows), duration=duration, is_tetris=is_tetris)
        return clear

    def update(self, now: float) -> None:
        if not is_playing(self.world):
            return
        self._expire_shake(now)
        clear = optional_component(self.world, ClearState)
        if clear is None:
            return
        state = session_component(self.world, GameState)
        if clear.generation != state.generation:
            # Left over from an earlier run; never touch the current board with it.
            self.world.remove_component(session_entity(self.world), ClearState)
            return
        if now < clear.deadline:
            return
        self.finalize(clear, now)

    def finalize(self, clear: ClearState, now: float) -> None:
        entity = session_entity(self.world)
        board = session_component(self.world, Board)
        counters = session_component(self.world, SessionCounters)
        remove_rows(board, clear.rows)
        count = len(clear.rows)
        points = self.config.line_score(count) * counters.level
        counters.score += points
        counters.lines += count
        counters.level = max(
            counters.level,
            counters.start_level + counters.lines // self.config.lines_per_level,
        )
        self.world.remove_component(entity, ClearState)
        logger.debug("cleared %d rows %s for %d points (level %d)", count, clear.rows, points, counters.level)

        self.event_bus.emit(EVENT_SCORE_CHANGED, score=counters.score)
        self.event_bus.emit(EVENT_LINES_CHANGED, lines=counters.lines)
        self.event_bus.emit(EVENT_LEVEL_CHANGED, level=counters.level)
        self.event_bus.emit(
            EVENT_LINE_CLEAR,
            count=count,
            rows=list(clear.rows),
            points=points,
            label=CLEAR_LABELS.get(count),
            is_tetris=clear.is_tetris,
        )
        if clear.is_tetris:
            shake = ShakeSignal(
                start=now,
                duration=self.config.shake_duration_ms,
                amplitude=self.config.shake_amplitude,
            )
            self.world.add_component(entity, shake)
            self.event_bus.emit(EVENT_SHAKE, duration=shake.duration, amplitude=shake.amplitude)
        self.event_bus.emit(EVENT_SPAWN_REQUEST, now=now, source='clear')

    def _expire_shake(self, now: float) -> None:
        shake = optional_component(self.world, ShakeSignal)
        if shake is not None and now >= shake.deadline:
            self.world.remove_component(session_entity(self.world), ShakeSignal)
