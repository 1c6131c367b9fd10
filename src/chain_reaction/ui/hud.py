"""Text shown in the HUD, kept free of drawing code so it can be tested headless."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from chain_reaction.components.game_state import GameMode
from chain_reaction.components.session import Session


@dataclass(frozen=True, slots=True)
class HudCard:
    label: str
    value: str
    sub: str = ""


def format_time(seconds: float) -> str:
    """Render whole seconds remaining as m:ss (partial seconds round up)."""
    whole = max(0, int(-(-seconds // 1)))
    minutes, secs = divmod(whole, 60)
    return f"{minutes}:{secs:02d}"


def timer_progress(time_left: float, round_time: float) -> float:
    """Fraction of the round remaining, clamped to [0, 1]."""
    if round_time <= 0:
        return 0.0
    return max(0.0, min(1.0, time_left / round_time))


def build_hud_cards(session: Session) -> List[HudCard]:
    score_sub = f"+{session.just_scored}" if session.just_scored else ""
    return [
        HudCard("Score", str(session.score), score_sub),
        HudCard("Multiplier", f"x{session.multiplier}", f"Best combo x{max(1, session.best_combo)}"),
        HudCard("Time", format_time(session.time_left)),
        HudCard("High score", str(session.high_score)),
    ]


def combo_trail_text(session: Session) -> str:
    if not session.multiplier_trail:
        return "No combos yet"
    return "  ".join(f"x{combo}" for combo in session.multiplier_trail)


def footer_text(mode: GameMode | None) -> str:
    if mode == GameMode.TIME_UP:
        return "Time's up!  Press R to play again"
    if mode == GameMode.READY:
        return "Click any cell to cycle its color and start the clock"
    return "Line up 3+ matching colors.  R restarts, SPACE skips the animation"
