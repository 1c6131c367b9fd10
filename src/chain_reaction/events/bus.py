from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_CELL_CLICK = "cell_click"                    # payload: index=int
EVENT_CELL_CLICK_REJECTED = "cell_click_rejected"  # payload: index, reason=str
EVENT_RESTART_REQUESTED = "restart_requested"      # payload: None
EVENT_PLAYBACK_SKIP_REQUESTED = "playback_skip_requested"  # payload: None


# ============================================================================
# BOARD & CASCADE
# ============================================================================
EVENT_CELL_CYCLED = "cell_cycled"                  # payload: index=int, previous=str, color=str
EVENT_CASCADE_RESOLVED = "cascade_resolved"        # payload: result=ResolutionResult, index=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: combo_level=int, indices=tuple[int,...], score=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: combos=int, total_score=int, skipped=bool
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, indices=list[int]


# ============================================================================
# SESSION & SCORE
# ============================================================================
EVENT_ROUND_STARTED = "round_started"              # payload: time_left=float
EVENT_ROUND_OVER = "round_over"                    # payload: score=int, high_score=int
EVENT_ROUND_RESET = "round_reset"                  # payload: None
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_HIGH_SCORE_CHANGED = "high_score_changed"    # payload: high_score=int, previous=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
