import logging
import random
from typing import Optional, Tuple

from engine import (
    GameSession,
    SelectOutcome,
    SessionView,
    new_session,
    resolve_mismatch,
    select_card,
    snapshot,
    tick,
)
from scheduler import Job, Scheduler
from settings import Settings
from tiers import get_tier


class GameController:
    """Owns the current session and every timer scheduled against it.

    Each session gets a new generation number. Scheduled callbacks capture the
    generation they were created for and do nothing once it is stale, so a
    mismatch reset or tick left over from an old game never reaches the new one.
    """

    def __init__(self, settings: Optional[Settings] = None, scheduler: Optional[Scheduler] = None,
                 rng: Optional[random.Random] = None):
        self.settings = settings or Settings()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random()
        self.generation = 0
        self.show_congrats = False
        self._ticker: Optional[Job] = None
        self._mismatch: Optional[Job] = None
        self.session: GameSession = self._replace(self.settings.default_difficulty)

    # --------------- Session lifecycle ---------------

    def _replace(self, difficulty: str) -> GameSession:
        get_tier(difficulty)  # fail before tearing down the running game
        self.scheduler.cancel_all()
        self._ticker = None
        self._mismatch = None
        self.generation += 1
        self.show_congrats = False
        self.session = new_session(difficulty, rng=self.rng, generation=self.generation)
        return self.session

    def new_game(self, difficulty: str) -> GameSession:
        return self._replace(difficulty)

    def restart(self) -> GameSession:
        return self._replace(self.session.difficulty)

    def change_difficulty(self, difficulty: str) -> GameSession:
        # an in-progress game is discarded without asking
        if self.session.move_count:
            logging.info(f"Discarding {self.session.difficulty} game after {self.session.move_count} moves")
        logging.info(f"Difficulty changed to {difficulty}")
        return self._replace(difficulty)

    # --------------- Input ---------------

    def select(self, card_id: int) -> SelectOutcome:
        session = self.session
        was_active = session.active
        outcome = select_card(session, card_id)
        if outcome is SelectOutcome.IGNORED:
            return outcome

        if session.active and not was_active:
            self._start_ticking()

        if outcome is SelectOutcome.MISMATCHED:
            self._schedule_mismatch_reset(tuple(session.selection))
        elif outcome is SelectOutcome.WON:
            self._stop_ticking()
            self.show_congrats = True
        return outcome

    def dismiss_congrats(self):
        self.show_congrats = False

    # --------------- Timers ---------------

    def _start_ticking(self):
        generation = self.generation

        def on_tick():
            if generation != self.generation:
                logging.debug(f"Dropped stale tick for session #{generation}")
                return
            if not tick(self.session):
                self._stop_ticking()

        self._ticker = self.scheduler.call_every(self.settings.tick_seconds, on_tick, token=generation)

    def _stop_ticking(self):
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _schedule_mismatch_reset(self, pair: Tuple[int, int]):
        generation = self.generation

        def on_reset():
            if generation != self.generation:
                logging.debug(f"Dropped stale mismatch reset for session #{generation}")
                return
            resolve_mismatch(self.session, pair)
            self._mismatch = None

        self._mismatch = self.scheduler.call_later(self.settings.mismatch_delay, on_reset, token=generation)

    @property
    def mismatch_pending(self) -> bool:
        return self._mismatch is not None and not self._mismatch.cancelled

    @property
    def needs_polling(self) -> bool:
        '''True while a tick or a mismatch reset is waiting on the clock.'''
        return self.session.active or self.mismatch_pending

    def pump(self, now: Optional[float] = None) -> bool:
        '''Run due timers. Returns True if the board itself changed (a mismatch flipped back).'''
        had_mismatch = self.mismatch_pending
        self.scheduler.run_due(now)
        return had_mismatch and not self.mismatch_pending

    # --------------- Output ---------------

    def view(self) -> SessionView:
        return snapshot(self.session)
