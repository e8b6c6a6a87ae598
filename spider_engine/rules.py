from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from spider_engine.cards import NUM_PER_SUIT, Card

Column = Sequence[Card]


@dataclass(frozen=True, slots=True)
class CompleteSequence:
    start: int
    cards: tuple[Card, ...]


def _links(lower: Card, upper: Card) -> bool:
    """True when `upper` may sit on `lower` inside a movable run."""
    return (
        lower.face_up
        and upper.face_up
        and lower.suit == upper.suit
        and lower.value == upper.value + 1
    )


def is_valid_sequence(cards: Column) -> bool:
    if len(cards) == 0:
        return True
    if len(cards) == 1:
        return cards[0].face_up
    for i in range(len(cards) - 1):
        if not _links(cards[i], cards[i + 1]):
            return False
    return True


def get_valid_sequence(column: Column, start_index: int) -> Optional[tuple[Card, ...]]:
    """
    :param column: cards from bottom (index 0) to top.
    :param start_index: index of the card the player grabbed.
    :return: the cards from `start_index` to the top if they move as one unit, else None.
    """
    if start_index < 0 or start_index >= len(column):
        return None
    sequence = tuple(column[start_index:])
    if not sequence[0].face_up:
        return None
    if not is_valid_sequence(sequence):
        return None
    return sequence


def can_move_to_column(moving: Column, target: Column) -> bool:
    if len(moving) == 0:
        return False
    if not moving[0].face_up:
        return False
    # Any run may open an empty column.
    if len(target) == 0:
        return True
    # Suits may differ across the seam; only same-suit runs complete later.
    return target[-1].value == moving[0].value + 1


def has_complete_sequence(column: Column) -> Optional[CompleteSequence]:
    if len(column) < NUM_PER_SUIT:
        return None
    for start in range(len(column) - NUM_PER_SUIT, -1, -1):
        window = tuple(column[start:start + NUM_PER_SUIT])
        if window[0].rank != "K" or window[-1].rank != "A":
            continue
        if is_valid_sequence(window):
            return CompleteSequence(start=start, cards=window)
    return None


def movable_starts(column: Column) -> tuple[int, ...]:
    """Return every index that starts a run reaching the top of the column."""
    n = len(column)
    if n == 0 or not column[-1].face_up:
        return ()
    starts = [n - 1]
    for idx in range(n - 2, -1, -1):
        if not _links(column[idx], column[idx + 1]):
            break
        starts.append(idx)
    starts.reverse()
    return tuple(starts)


def legal_destinations(tableau: Sequence[Column], from_col: int, card_index: int) -> list[int]:
    if from_col < 0 or from_col >= len(tableau):
        return []
    sequence = get_valid_sequence(tableau[from_col], card_index)
    if sequence is None:
        return []
    dests = []
    for col in range(len(tableau)):
        if col == from_col:
            continue
        if can_move_to_column(sequence, tableau[col]):
            dests.append(col)
    return dests
