from dataclasses import dataclass, field
from typing import List, Optional

from chain_reaction.constants import INITIAL_TIME


@dataclass(slots=True)
class Session:
    """Per-round scoring and HUD state aggregated from cascade results."""

    score: int = 0
    high_score: int = 0
    time_left: float = float(INITIAL_TIME)
    last_combo: int = 0
    best_combo: int = 0
    just_scored: Optional[int] = None
    just_scored_timer: float = 0.0
    combo_pulse_timer: float = 0.0
    board_shake_timer: float = 0.0
    multiplier_trail: List[int] = field(default_factory=list)
    # True while a cascade's steps are being played back; clicks are ignored meanwhile.
    animating: bool = False

    @property
    def multiplier(self) -> int:
        return max(1, self.last_combo)

    @property
    def combo_pulse(self) -> bool:
        return self.combo_pulse_timer > 0.0

    @property
    def board_shake(self) -> bool:
        return self.board_shake_timer > 0.0
