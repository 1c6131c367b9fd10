GRID_SIZE = 6
MIN_MATCH = 3
BASE_POINTS = 90
# Upper bound on cascade iterations triggered by a single click.
COMBO_CAP = 15

# Palette in cycling order; clicking a cell advances it to the next entry.
COLOR_POOL = ["#f97316", "#0ea5e9", "#facc15", "#22d3ee", "#a855f7", "#ec4899"]

# Round timing (seconds)
INITIAL_TIME = 30
COMBO_RESOLVE_DELAY = 0.32  # highlight phase of one cascade step
FILL_DELAY = 0.14           # pause after a step's refill is shown
SCORE_FLASH_DURATION = 0.9
COMBO_PULSE_DURATION = 0.48
MULTIPLIER_TRAIL_LENGTH = 4

# Window / board geometry
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 720
TILE_SIZE = 72
BOTTOM_MARGIN = 60
HUD_HEIGHT = 110
# Board may not exceed these fractions of the window.
BOARD_MAX_WIDTH_PCT = 0.6
BOARD_MAX_HEIGHT_PCT = 0.9
TILE_PADDING = 4

# Input codes (pyglet values, as delivered by arcade)
MOUSE_BUTTON_LEFT = 1
KEY_RESTART = 114  # R
KEY_SKIP = 32      # SPACE

HIGH_SCORE_FILENAME = "chain_reaction_high_score.json"
