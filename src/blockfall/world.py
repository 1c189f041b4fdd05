import random

from esper import World

from blockfall.config import EngineConfig
from blockfall.components.board import Board
from blockfall.components.game_state import GameState, SessionMode
from blockfall.components.gravity_timer import GravityTimer
from blockfall.components.hold_state import HoldState
from blockfall.components.input_state import InputState
from blockfall.components.lock_state import LockState
from blockfall.components.session_counters import SessionCounters
from blockfall.components.tetromino import ActivePiece, NextPiece
from blockfall.utils.bag_randomizer import BagRandomizer


def create_world(
    config: EngineConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding one session entity with every singleton component.

    ClearState and ShakeSignal are attached later, only while they exist.
    """
    config = config or EngineConfig()
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(
        GameState(mode=SessionMode.IDLE),
        Board(cols=config.cols, rows=config.rows),
        ActivePiece(),
        NextPiece(),
        BagRandomizer(rng=getattr(world, "random")),
        LockState(reset_budget=config.max_lock_resets),
        GravityTimer(),
        HoldState(),
        SessionCounters(start_level=config.start_level, level=config.start_level),
        InputState(),
    )
    return world
