from dataclasses import dataclass, field
from typing import Tuple

@dataclass(slots=True)
class Highlight:
    """Cells currently flashing before they are cleared; empty between steps."""
    indices: Tuple[int, ...] = field(default_factory=tuple)
    combo_level: int = 0
