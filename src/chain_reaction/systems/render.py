import arcade

from esper import World
from chain_reaction.components.highlight import Highlight
from chain_reaction.constants import HUD_HEIGHT, INITIAL_TIME, TILE_PADDING
from chain_reaction.events.bus import EVENT_TICK, EventBus
from chain_reaction.systems.grid_ops import get_board, get_palette
from chain_reaction.ui.hud import build_hud_cards, combo_trail_text, footer_text, timer_progress
from chain_reaction.ui.layout import BoardGeometry, compute_board_geometry
from chain_reaction.utils.game_state import get_game_mode
from chain_reaction.utils.session import get_highlight, get_or_create_session

HIGHLIGHT_COLOR = (255, 255, 255)
SHAKE_AMPLITUDE = 6.0


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window, *, round_time: float = INITIAL_TIME):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.round_time = round_time
        self._time = 0.0
        self._geometry: BoardGeometry | None = None
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def notify_resize(self, width: int, height: int):
        self._geometry = None

    def on_tick(self, sender, **kwargs):
        self._time += kwargs.get('dt', 1/60)

    def _board_geometry(self) -> BoardGeometry:
        side = get_board(self.world).side
        if self._geometry is None or self._geometry.side != side:
            self._geometry = compute_board_geometry(self.window.width, self.window.height, side)
        return self._geometry

    def process(self):
        self._draw_board()
        self._draw_hud()

    def _draw_board(self):
        board = get_board(self.world)
        palette = get_palette(self.world)
        highlight: Highlight = get_highlight(self.world)
        session = get_or_create_session(self.world)
        geometry = self._board_geometry()
        offset_x = 0.0
        if session.board_shake:
            # Alternate left/right a few times per second while shaking.
            offset_x = SHAKE_AMPLITUDE if int(self._time * 30) % 2 == 0 else -SHAKE_AMPLITUDE
        half = (geometry.tile_size - TILE_PADDING) / 2
        flashing = set(highlight.indices)
        for index, color in enumerate(board.cells):
            cx, cy = geometry.cell_center(index)
            cx += offset_x
            try:
                rgb = palette.rgb_for(color)
            except ValueError:
                rgb = (90, 90, 90)
            if index in flashing:
                # Pulse brightness while the cell waits to be cleared.
                pulse = 0.5 + 0.5 * abs(((self._time * 4) % 2) - 1)
                rgb = tuple(int(c + (255 - c) * pulse) for c in rgb)
            arcade.draw_lrbt_rectangle_filled(cx - half, cx + half, cy - half, cy + half, rgb)
            if index in flashing:
                arcade.draw_lrbt_rectangle_outline(cx - half, cx + half, cy - half, cy + half, HIGHLIGHT_COLOR, 3)
        if session.just_scored:
            top = geometry.start_y + geometry.width
            arcade.draw_text(
                f"+{session.just_scored}",
                geometry.start_x + geometry.width / 2,
                top - geometry.tile_size / 2,
                arcade.color.WHITE,
                font_size=28,
                anchor_x="center",
                bold=True,
            )

    def _draw_hud(self):
        session = get_or_create_session(self.world)
        width, height = self.window.width, self.window.height
        cards = build_hud_cards(session)
        card_w = width / len(cards)
        base_y = height - HUD_HEIGHT
        for slot, card in enumerate(cards):
            x = slot * card_w + card_w / 2
            label_color = arcade.color.YELLOW if (card.label == "Multiplier" and session.combo_pulse) else arcade.color.LIGHT_GRAY
            arcade.draw_text(card.label, x, base_y + 80, label_color, font_size=12, anchor_x="center")
            arcade.draw_text(card.value, x, base_y + 48, arcade.color.WHITE, font_size=24, anchor_x="center", bold=True)
            if card.sub:
                arcade.draw_text(card.sub, x, base_y + 26, arcade.color.LIGHT_GRAY, font_size=11, anchor_x="center")
        # Timer bar
        progress = timer_progress(session.time_left, self.round_time)
        bar_left, bar_right = width * 0.1, width * 0.9
        arcade.draw_lrbt_rectangle_filled(bar_left, bar_right, base_y + 6, base_y + 14, (60, 60, 60))
        arcade.draw_lrbt_rectangle_filled(
            bar_left, bar_left + (bar_right - bar_left) * progress, base_y + 6, base_y + 14, (34, 211, 238)
        )
        arcade.draw_text(combo_trail_text(session), width - 20, 30, arcade.color.LIGHT_GRAY, font_size=12, anchor_x="right")
        arcade.draw_text(footer_text(get_game_mode(self.world)), 20, 30, arcade.color.WHITE, font_size=12)
