from esper import World

from chain_reaction.components.game_state import GameMode
from chain_reaction.components.session import Session
from chain_reaction.constants import (
    COMBO_PULSE_DURATION,
    INITIAL_TIME,
    MULTIPLIER_TRAIL_LENGTH,
    SCORE_FLASH_DURATION,
)
from chain_reaction.events.bus import (
    EVENT_CASCADE_RESOLVED,
    EVENT_HIGH_SCORE_CHANGED,
    EVENT_RESTART_REQUESTED,
    EVENT_ROUND_OVER,
    EVENT_ROUND_RESET,
    EVENT_SCORE_CHANGED,
    EVENT_TICK,
    EventBus,
)
from chain_reaction.utils.game_state import get_game_mode, set_game_mode
from chain_reaction.utils.session import get_or_create_session


class SessionSystem:
    """Aggregates cascade results into the round scoreboard.

    Logic:
      - On EVENT_CASCADE_RESOLVED: add total_score to the running score, raise the high
        score when beaten, track last/best combo and the recent multiplier trail, and
        start the score flash, combo pulse (combos > 0) and board shake (combos > 1).
      - On EVENT_TICK: count the round timer down while RUNNING and expire HUD flashes.
        Reaching zero moves the game to TIME_UP and emits EVENT_ROUND_OVER.
      - On EVENT_RESTART_REQUESTED: reset the round, keeping the high score.
    """
    def __init__(self, world: World, event_bus: EventBus, *, round_time: float = INITIAL_TIME):
        self.world = world
        self.event_bus = event_bus
        self.round_time = float(round_time)
        session = get_or_create_session(self.world)
        session.time_left = self.round_time
        self.event_bus.subscribe(EVENT_CASCADE_RESOLVED, self.on_cascade_resolved)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_RESTART_REQUESTED, self.on_restart)

    @property
    def session(self) -> Session:
        return get_or_create_session(self.world)

    def on_cascade_resolved(self, sender, **kwargs):
        result = kwargs.get('result')
        if result is None:
            return
        session = self.session
        if result.total_score > 0:
            session.score += result.total_score
            session.just_scored = result.total_score
            session.just_scored_timer = SCORE_FLASH_DURATION
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=result.total_score)
            self._ensure_high_score(session.score)
        else:
            session.just_scored = None
            session.just_scored_timer = 0.0

        session.last_combo = result.combos
        session.best_combo = max(session.best_combo, result.combos)
        if result.combos > 0:
            session.combo_pulse_timer = COMBO_PULSE_DURATION
            session.multiplier_trail = (session.multiplier_trail + [result.combos])[-MULTIPLIER_TRAIL_LENGTH:]
        else:
            session.combo_pulse_timer = 0.0
        session.board_shake_timer = COMBO_PULSE_DURATION if result.combos > 1 else 0.0

    def _ensure_high_score(self, value: int) -> None:
        session = self.session
        if value > session.high_score:
            previous = session.high_score
            session.high_score = value
            self.event_bus.emit(EVENT_HIGH_SCORE_CHANGED, high_score=value, previous=previous)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        session = self.session
        # HUD flashes
        if session.just_scored_timer > 0.0:
            session.just_scored_timer = max(0.0, session.just_scored_timer - dt)
            if session.just_scored_timer == 0.0:
                session.just_scored = None
        session.combo_pulse_timer = max(0.0, session.combo_pulse_timer - dt)
        session.board_shake_timer = max(0.0, session.board_shake_timer - dt)
        # Round timer
        if get_game_mode(self.world) != GameMode.RUNNING:
            return
        session.time_left = max(0.0, session.time_left - dt)
        if session.time_left <= 0.0:
            set_game_mode(self.world, self.event_bus, GameMode.TIME_UP)
            self.event_bus.emit(EVENT_ROUND_OVER, score=session.score, high_score=session.high_score)

    def on_restart(self, sender, **kwargs):
        session = self.session
        session.score = 0
        session.time_left = self.round_time
        session.last_combo = 0
        session.best_combo = 0
        session.just_scored = None
        session.just_scored_timer = 0.0
        session.combo_pulse_timer = 0.0
        session.board_shake_timer = 0.0
        session.multiplier_trail = []
        session.animating = False
        set_game_mode(self.world, self.event_bus, GameMode.READY)
        self.event_bus.emit(EVENT_ROUND_RESET)
