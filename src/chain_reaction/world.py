import random
from typing import Sequence

from esper import World
from chain_reaction.events.bus import EventBus
from chain_reaction.components.game_state import GameState, GameMode
from chain_reaction.components.highlight import Highlight
from chain_reaction.components.palette import Palette
from chain_reaction.components.session import Session
from chain_reaction.constants import COLOR_POOL, MIN_MATCH


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.READY,
    *,
    palette: Sequence[str] = COLOR_POOL,
    rng: random.Random | None = None,
    high_score: int = 0,
) -> World:
    """Create the ECS world with its shared resources.

    The board itself is owned by BoardSystem; this only registers the palette, the
    round state, the session scoreboard and the highlight overlay.
    """
    palette_comp = Palette(colors=list(palette))
    if len(palette_comp) < MIN_MATCH:
        raise ValueError(f"Palette needs at least {MIN_MATCH} colors, got {len(palette_comp)}")

    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(palette_comp)
    world.create_entity(GameState(mode=initial_mode))
    world.create_entity(Session(high_score=max(0, int(high_score))), Highlight())
    return world
