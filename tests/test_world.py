import random

import pytest

from chain_reaction.components.game_state import GameMode, GameState
from chain_reaction.components.palette import Palette, hex_to_rgb
from chain_reaction.components.session import Session
from chain_reaction.constants import COLOR_POOL
from chain_reaction.events.bus import EventBus, EVENT_GAME_MODE_CHANGED
from chain_reaction.systems.grid_ops import get_palette, world_rng
from chain_reaction.utils.game_state import get_game_mode, set_game_mode
from chain_reaction.world import create_world


def test_create_world_registers_resources():
    bus = EventBus()
    rng = random.Random(1)
    world = create_world(bus, rng=rng, high_score=500)
    assert world_rng(world) is rng
    assert get_palette(world).colors == COLOR_POOL
    assert get_game_mode(world) == GameMode.READY
    sessions = list(world.get_component(Session))
    assert len(sessions) == 1
    assert sessions[0][1].high_score == 500


def test_create_world_rejects_small_palette():
    with pytest.raises(ValueError):
        create_world(EventBus(), palette=["#000000", "#ffffff"])


def test_palette_dedupes_and_converts_colors():
    palette = Palette(colors=["#aa0000", "#00bb00", "#aa0000", "#0000cc"])
    assert palette.colors == ["#aa0000", "#00bb00", "#0000cc"]
    assert palette.rgb_for("#00bb00") == (0, 187, 0)
    with pytest.raises(ValueError):
        Palette(colors=[])


def test_hex_to_rgb_short_form_and_errors():
    assert hex_to_rgb("#fff") == (255, 255, 255)
    assert hex_to_rgb("f97316") == (249, 115, 22)
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


def test_set_game_mode_emits_only_on_change():
    bus = EventBus(); world = create_world(bus)
    changes = []
    bus.subscribe(EVENT_GAME_MODE_CHANGED, lambda s, **k: changes.append(k))
    set_game_mode(world, bus, GameMode.RUNNING)
    set_game_mode(world, bus, GameMode.RUNNING)
    assert changes == [{"previous_mode": GameMode.READY, "new_mode": GameMode.RUNNING}]
    states = list(world.get_component(GameState))
    assert len(states) == 1 and states[0][1].mode == GameMode.RUNNING
