from dataclasses import dataclass
from typing import Any

@dataclass(slots=True)
class CascadePlayback:
    """Progress through the steps of one resolved cascade.

    phase: 'highlight' while the step's cells flash, 'fill' after its grid_after is adopted.
    """
    result: Any
    step_index: int = 0
    phase: str = "highlight"
    elapsed: float = 0.0
