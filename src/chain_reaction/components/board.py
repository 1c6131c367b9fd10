from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class Board:
    """Authoritative square grid, row-major (index = row * side + col)."""
    side: int
    cells: List[str] = field(default_factory=list)
