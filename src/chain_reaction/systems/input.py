from chain_reaction.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_CELL_CLICK,
    EVENT_RESTART_REQUESTED,
    EVENT_PLAYBACK_SKIP_REQUESTED,
)
from chain_reaction.constants import KEY_RESTART, KEY_SKIP, MOUSE_BUTTON_LEFT
from chain_reaction.systems.grid_ops import get_board
from chain_reaction.ui.layout import cell_at_point, compute_board_geometry


class InputSystem:
    """Translates raw window input into board events."""
    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        side = get_board(self.world).side
        geometry = compute_board_geometry(self.window.width, self.window.height, side)
        index = cell_at_point(x, y, geometry)
        if index is None:
            return
        self.event_bus.emit(EVENT_CELL_CLICK, index=index)

    def handle_key_press(self, symbol: int, modifiers: int = 0):
        if symbol == KEY_RESTART:
            self.event_bus.emit(EVENT_RESTART_REQUESTED)
        elif symbol == KEY_SKIP:
            self.event_bus.emit(EVENT_PLAYBACK_SKIP_REQUESTED)
