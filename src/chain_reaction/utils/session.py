from esper import World

from chain_reaction.components.highlight import Highlight
from chain_reaction.components.session import Session


def get_or_create_session(world: World) -> Session:
    """Return the shared Session component, creating it if absent."""
    existing = list(world.get_component(Session))
    if existing:
        return existing[0][1]
    world.create_entity(Session(), Highlight())
    return list(world.get_component(Session))[0][1]


def get_highlight(world: World) -> Highlight:
    existing = list(world.get_component(Highlight))
    if existing:
        return existing[0][1]
    world.create_entity(Highlight())
    return list(world.get_component(Highlight))[0][1]
