from __future__ import annotations

import json
from pathlib import Path

from esper import World

from chain_reaction.constants import HIGH_SCORE_FILENAME
from chain_reaction.events.bus import EVENT_HIGH_SCORE_CHANGED, EventBus
from chain_reaction.utils.session import get_or_create_session


class HighScoreSystem:
    """Loads and persists the best score across rounds. Grid state is never saved."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
        load_existing: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self.event_bus.subscribe(EVENT_HIGH_SCORE_CHANGED, self._on_high_score_changed)

        if load_existing:
            self.load_high_score()
        else:
            self.save_high_score()

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / HIGH_SCORE_FILENAME

    @property
    def save_path(self) -> Path:
        return self._save_path

    def load_high_score(self) -> int:
        session = get_or_create_session(self.world)
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            stored = int(payload.get("high_score", 0))
        except FileNotFoundError:
            stored = 0
            self._write(max(session.high_score, stored))
        except (json.JSONDecodeError, AttributeError, TypeError, ValueError):
            # Corrupt save: start over from what the session already knows.
            stored = 0
            self._write(max(session.high_score, stored))
        session.high_score = max(session.high_score, stored, 0)
        return session.high_score

    def save_high_score(self) -> None:
        self._write(get_or_create_session(self.world).high_score)

    def reset_high_score(self) -> None:
        get_or_create_session(self.world).high_score = 0
        self._write(0)

    def _write(self, value: int) -> None:
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump({"high_score": int(value)}, handle, indent=2)

    def _on_high_score_changed(self, sender, **kwargs):
        self.save_high_score()
