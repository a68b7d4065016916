import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from tiers import get_tier


class SelectOutcome(str, Enum):
    IGNORED = "ignored"
    FLIPPED = "flipped"
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    WON = "won"


@dataclass
class Card:
    id: int
    symbol: str
    face_up: bool = False
    matched: bool = False

    @property
    def visible(self) -> bool:
        return self.face_up or self.matched


@dataclass
class GameSession:
    difficulty: str
    deck: List[Card]
    selection: List[int] = field(default_factory=list)
    move_count: int = 0
    elapsed_seconds: int = 0
    active: bool = False
    completed: bool = False
    generation: int = 0

    def card(self, card_id) -> Optional[Card]:
        # ids are assigned 0..N-1 in deck order
        if isinstance(card_id, int) and not isinstance(card_id, bool) and 0 <= card_id < len(self.deck):
            return self.deck[card_id]
        return None

    @property
    def pairs_found(self) -> int:
        return sum(1 for c in self.deck if c.matched) // 2

    @property
    def total_pairs(self) -> int:
        return len(self.deck) // 2


@dataclass(frozen=True)
class CardView:
    id: int
    symbol: Optional[str]
    visible: bool
    matched: bool


@dataclass(frozen=True)
class SessionView:
    difficulty: str
    grid_size: int
    cards: Tuple[CardView, ...]
    move_count: int
    elapsed_seconds: int
    elapsed: str
    pairs_found: int
    total_pairs: int
    active: bool
    completed: bool


def build_deck(symbols: Sequence[str], pair_count: int, rng: random.Random) -> List[Card]:
    '''Pick distinct symbols, duplicate each and shuffle into a fresh deck.'''
    chosen = rng.sample(list(symbols), pair_count)
    faces = chosen * 2
    rng.shuffle(faces)
    return [Card(id=i, symbol=s) for i, s in enumerate(faces)]


def new_session(difficulty: str, rng: Optional[random.Random] = None, generation: int = 0) -> GameSession:
    tier = get_tier(difficulty)
    rng = rng or random.Random()
    session = GameSession(
        difficulty=tier.name,
        deck=build_deck(tier.palette, tier.pair_count, rng),
        generation=generation,
    )
    logging.info(f"New {tier.name} session #{generation}: {len(session.deck)} cards, {tier.pair_count} pairs")
    return session


def select_card(session: GameSession, card_id: int) -> SelectOutcome:
    """Flip a face-down card and resolve the pair once two are up.

    Invalid selections (unknown id, card already up or matched, two cards
    still waiting on a mismatch reset, finished game) change nothing and
    return ``SelectOutcome.IGNORED``.

    A mismatch leaves both cards up and the selection full; the caller is
    expected to call :func:`resolve_mismatch` after the mismatch delay.
    """
    card = session.card(card_id)
    if card is None:
        logging.debug(f"Ignored selection of unknown card {card_id!r}")
        return SelectOutcome.IGNORED
    if session.completed or len(session.selection) >= 2 or card.face_up or card.matched:
        logging.debug(f"Ignored selection of card {card_id}")
        return SelectOutcome.IGNORED

    if not session.active:
        session.active = True
    card.face_up = True
    session.selection.append(card.id)
    session.move_count += 1

    if len(session.selection) < 2:
        return SelectOutcome.FLIPPED

    first, second = (session.deck[i] for i in session.selection)
    if first.symbol != second.symbol:
        logging.debug(f"Mismatch: {first.id} {first.symbol} / {second.id} {second.symbol}")
        return SelectOutcome.MISMATCHED

    first.matched = second.matched = True
    session.selection.clear()
    logging.debug(f"Match: {first.id} / {second.id} {first.symbol}")

    if all(c.matched for c in session.deck):
        session.completed = True
        session.active = False
        logging.info(
            f"Session #{session.generation} won in {format_elapsed(session.elapsed_seconds)} "
            f"with {session.move_count} moves"
        )
        return SelectOutcome.WON
    return SelectOutcome.MATCHED


def resolve_mismatch(session: GameSession, card_ids: Sequence[int]) -> bool:
    '''Turn a mismatched pair back face-down. Returns False if it was already resolved.'''
    if list(card_ids) != session.selection:
        return False
    for card_id in card_ids:
        card = session.deck[card_id]
        if not card.matched:
            card.face_up = False
    session.selection.clear()
    return True


def tick(session: GameSession) -> bool:
    if not session.active:
        return False
    session.elapsed_seconds += 1
    return True


def format_elapsed(seconds: int) -> str:
    minutes, rest = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{rest:02d}"


def snapshot(session: GameSession) -> SessionView:
    cards = tuple(
        CardView(id=c.id, symbol=c.symbol if c.visible else None, visible=c.visible, matched=c.matched)
        for c in session.deck
    )
    return SessionView(
        difficulty=session.difficulty,
        grid_size=get_tier(session.difficulty).grid_size,
        cards=cards,
        move_count=session.move_count,
        elapsed_seconds=session.elapsed_seconds,
        elapsed=format_elapsed(session.elapsed_seconds),
        pairs_found=session.pairs_found,
        total_pairs=session.total_pairs,
        active=session.active,
        completed=session.completed,
    )
