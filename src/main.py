"""Entry point for the Chain Reaction color-cycling puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import arcade
from arcade import Window, run

from chain_reaction.world import create_world
from chain_reaction.constants import GRID_SIZE, WINDOW_HEIGHT, WINDOW_WIDTH
from chain_reaction.events.bus import EVENT_TICK, EVENT_MOUSE_PRESS, EventBus
from chain_reaction.systems.board import BoardSystem
from chain_reaction.systems.high_score_system import HighScoreSystem
from chain_reaction.systems.input import InputSystem
from chain_reaction.systems.playback import CascadePlaybackSystem
from chain_reaction.systems.render import RenderSystem
from chain_reaction.systems.session_system import SessionSystem


class ChainReactionWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Chain Reaction", resizable=True)
        self.set_update_rate(1/60)
        self.background_color = arcade.color.BLACK
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)
        # Session systems
        self.session_system = SessionSystem(self.world, self.event_bus)
        self.high_score_system = HighScoreSystem(self.world, self.event_bus)
        # Board and playback systems
        self.board_system = BoardSystem(self.world, self.event_bus, GRID_SIZE)
        self.playback_system = CascadePlaybackSystem(self.world, self.event_bus)
        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)

    def on_resize(self, width: int, height: int):
        self.render_system.notify_resize(width, height)
        return super().on_resize(width, height)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.input_system.handle_key_press(symbol, modifiers)


def main():
    ChainReactionWindow()
    run()


if __name__ == "__main__":
    main()
