from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Tuple

from chain_reaction.events.bus import EventBus


@dataclass(slots=True)
class EventTrace:
    """Records ``(name, payload)`` pairs for every traced event in emission order.

    Used by tests and by ``debug_bus.py`` to watch what the systems emit. An optional
    ``sink`` receives each record as it arrives (e.g. ``print``).
    """

    records: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)
    sink: Callable[[str], None] | None = None

    def attach(self, event_bus: EventBus, names: Iterable[str]) -> "EventTrace":
        for name in names:
            event_bus.subscribe(name, self._recorder(name))
        return self

    def _recorder(self, name: str):
        def _record(sender, **payload):
            self.records.append((name, dict(payload)))
            if self.sink is not None:
                self.sink(f"{name}: {_format_payload(payload)}")
        return _record

    def names(self) -> List[str]:
        return [name for name, _ in self.records]

    def payloads(self, name: str) -> List[Dict[str, Any]]:
        return [payload for event, payload in self.records if event == name]

    def last(self, name: str) -> Dict[str, Any] | None:
        matching = self.payloads(name)
        return matching[-1] if matching else None

    def clear(self) -> None:
        self.records.clear()


def _format_payload(payload: Dict[str, Any]) -> str:
    return ", ".join(f"{key}={value!r}" for key, value in sorted(payload.items()))
