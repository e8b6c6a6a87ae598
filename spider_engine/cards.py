from __future__ import annotations

import random
from dataclasses import dataclass, field, replace

SUITS = ("spades", "hearts", "diamonds", "clubs")
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
RANK_VALUES = {rank: value for value, rank in enumerate(RANKS, start=1)}
SUIT_SYMBOLS = {"spades": "♠", "hearts": "♥", "diamonds": "♦", "clubs": "♣"}

NUM_PER_SUIT = len(RANKS)
DECK_SIZE = 104
SUIT_COUNT_ORDER = (1, 2, 4)


@dataclass(frozen=True, slots=True)
class Card:
    """A single playing card. `id` is a stable key and never takes part in equality."""

    id: str = field(compare=False)
    suit: str
    rank: str
    face_up: bool = False

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    def flipped(self, face_up: bool = True) -> "Card":
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)


class IdGenerator:
    """Hands out `card_<n>` ids from a counter owned by the caller."""

    def __init__(self, start: int = 0):
        self.counter = start

    def next_id(self) -> str:
        self.counter += 1
        return f"card_{self.counter}"


def suits_for(suit_count: int) -> tuple[str, ...]:
    if suit_count not in SUIT_COUNT_ORDER:
        raise ValueError(f"unsupported suit count: {suit_count}")
    return SUITS[:suit_count]


def create_deck(suit_count: int, ids: IdGenerator | None = None) -> list[Card]:
    """
    Build the 104 face-down cards for a game.

    The chosen suits are repeated until eight full A..K runs exist:
    8 repeats for one suit, 4 for two suits, 2 for four suits.
    """
    suits = suits_for(suit_count)
    ids = ids if ids is not None else IdGenerator()
    repeats = DECK_SIZE // (NUM_PER_SUIT * len(suits))
    cards = []
    for _ in range(repeats):
        for suit in suits:
            for rank in RANKS:
                cards.append(Card(id=ids.next_id(), suit=suit, rank=rank, face_up=False))
    return cards


def shuffle_deck(cards, rng: random.Random | None = None) -> list[Card]:
    # Fisher-Yates on a copy.
    pick_rng = rng if rng is not None else random
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = pick_rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def card_label(card: Card) -> str:
    if not card.face_up:
        return "---"
    return f"{card.rank}{SUIT_SYMBOLS[card.suit]}"
