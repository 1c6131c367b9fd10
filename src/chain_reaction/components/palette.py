from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

@dataclass(slots=True)
class Palette:
    """Canonical color palette stored on a single registry entity.

    ``colors`` is kept in cycling order; duplicates are dropped while preserving order.
    """
    colors: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.colors = _unique(self.colors)
        if not self.colors:
            raise ValueError("Palette requires at least one color")

    def __len__(self) -> int:
        return len(self.colors)

    def rgb_for(self, color: str) -> Tuple[int, int, int]:
        return hex_to_rgb(color)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    raw = value.lstrip("#")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6:
        raise ValueError(f"Not a hex color: {value!r}")
    return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)


def _unique(colors: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for color in colors:
        if color not in seen:
            ordered.append(color)
            seen.add(color)
    return ordered
