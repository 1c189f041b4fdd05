from typing import Optional, Type, TypeVar

from esper import World

T = TypeVar("T")


def session_component(world: World, component_type: Type[T]) -> T:
    """Return the single instance of a session-wide component."""
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} not found")


def optional_component(world: World, component_type: Type[T]) -> Optional[T]:
    for _, component in world.get_component(component_type):
        return component
    return None


def session_entity(world: World) -> int:
    from blockfall.components.game_state import GameState
    for entity, _ in world.get_component(GameState):
        return entity
    raise RuntimeError("Session entity not found")
