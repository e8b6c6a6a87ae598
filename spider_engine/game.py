from __future__ import annotations

import random
import time
from dataclasses import dataclass, fields, replace
from typing import Callable, Optional

from spider_engine.cards import Card, IdGenerator, create_deck, shuffle_deck
from spider_engine.rules import (
    can_move_to_column,
    get_valid_sequence,
    has_complete_sequence,
    legal_destinations,
    movable_starts,
)

COLUMN_COUNT = 10
INITIAL_DEAL = 54
WIN_PILE_COUNT = 8

Tableau = tuple[tuple[Card, ...], ...]
Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class GameSettings:
    # Only suit_count affects the rules; the rest is carried for the front end.
    suit_count: int = 1
    sound_enabled: bool = True
    haptic_enabled: bool = True
    immersive_enabled: bool = True
    animations_enabled: bool = True
    auto_complete: bool = True
    show_timer: bool = True


DEFAULT_SETTINGS = GameSettings()
SETTING_NAMES = tuple(f.name for f in fields(GameSettings))


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of one game. Engine functions return new snapshots."""

    tableau: Tableau
    stock: tuple[Card, ...]
    completed: tuple[tuple[Card, ...], ...] = ()
    moves: int = 0
    # Epoch milliseconds of the first action, None until the player acts.
    start_time: Optional[int] = None
    is_won: bool = False
    settings: GameSettings = DEFAULT_SETTINGS


def _flip_top(column: list[Card]) -> None:
    if column and not column[-1].face_up:
        column[-1] = column[-1].flipped(True)


def _freeze(columns: list[list[Card]]) -> Tableau:
    return tuple(tuple(col) for col in columns)


def initialize_game(
    settings: GameSettings = DEFAULT_SETTINGS,
    rng: random.Random | None = None,
    ids: IdGenerator | None = None,
) -> GameState:
    deck = shuffle_deck(create_deck(settings.suit_count, ids), rng)
    columns: list[list[Card]] = [[] for _ in range(COLUMN_COUNT)]

    # Columns 0..3 get 6 cards, 4..9 get 5; only the last card dealt shows.
    pos = 0
    for col in range(COLUMN_COUNT):
        count = 6 if col < 4 else 5
        for i in range(count):
            columns[col].append(deck[pos].flipped(i == count - 1))
            pos += 1

    stock = tuple(card.flipped(False) for card in deck[INITIAL_DEAL:])
    return GameState(tableau=_freeze(columns), stock=stock, settings=settings)


def check_and_remove_complete_sequences(state: GameState) -> GameState:
    columns = [list(col) for col in state.tableau]
    completed = list(state.completed)
    changed = False

    for col in columns:
        found = has_complete_sequence(col)
        if found is None:
            continue
        del col[found.start:found.start + len(found.cards)]
        completed.append(found.cards)
        _flip_top(col)
        changed = True

    if not changed:
        return state
    return replace(
        state,
        tableau=_freeze(columns),
        completed=tuple(completed),
        is_won=len(completed) == WIN_PILE_COUNT,
    )


def execute_move(
    state: GameState,
    from_col: int,
    card_index: int,
    to_col: int,
    clock: Clock = now_ms,
) -> Optional[GameState]:
    """
    Move the run starting at `card_index` of `from_col` onto `to_col`.

    :return: the new snapshot, or None when the move is not legal.
    """
    count = len(state.tableau)
    if from_col == to_col:
        return None
    if not (0 <= from_col < count and 0 <= to_col < count):
        return None
    sequence = get_valid_sequence(state.tableau[from_col], card_index)
    if sequence is None:
        return None
    if not can_move_to_column(sequence, state.tableau[to_col]):
        return None

    columns = [list(col) for col in state.tableau]
    del columns[from_col][card_index:]
    columns[to_col].extend(sequence)
    _flip_top(columns[from_col])

    moved = replace(
        state,
        tableau=_freeze(columns),
        moves=state.moves + 1,
        start_time=state.start_time if state.start_time is not None else clock(),
    )
    return check_and_remove_complete_sequences(moved)


def can_deal(state: GameState) -> bool:
    if len(state.stock) == 0:
        return False
    return all(len(col) > 0 for col in state.tableau)


def deal_from_stock(state: GameState, clock: Clock = now_ms) -> Optional[GameState]:
    if not can_deal(state):
        return None

    columns = [list(col) for col in state.tableau]
    draw_count = min(len(columns), len(state.stock))
    for col in range(draw_count):
        columns[col].append(state.stock[col].flipped(True))

    dealt = replace(
        state,
        tableau=_freeze(columns),
        stock=state.stock[draw_count:],
        moves=state.moves + 1,
        start_time=state.start_time if state.start_time is not None else clock(),
    )
    return check_and_remove_complete_sequences(dealt)


def find_best_move(state: GameState, from_col: int, card_index: int) -> Optional[int]:
    """Pick the most promising destination for a tapped run, or None."""
    dests = legal_destinations(state.tableau, from_col, card_index)
    if not dests:
        return None
    moving = state.tableau[from_col][card_index]

    best_col = None
    best_score = -1
    for col in dests:
        target = state.tableau[col]
        if target:
            score = len(target)
            if target[-1].suit == moving.suit:
                score += 100
        else:
            # Only kings really deserve an empty column.
            score = 50 if moving.rank == "K" else 1
        if score > best_score:
            best_score = score
            best_col = col
    return best_col


def is_game_stuck(state: GameState) -> bool:
    if can_deal(state):
        return False
    for from_col, column in enumerate(state.tableau):
        for card_index in movable_starts(column):
            if legal_destinations(state.tableau, from_col, card_index):
                return False
    return True


def clone_game_state(state: GameState) -> GameState:
    """Structural copy. Immutable pieces (cards, column tuples) may be shared."""
    return replace(
        state,
        tableau=tuple(tuple(col) for col in state.tableau),
        stock=tuple(state.stock),
        completed=tuple(tuple(pile) for pile in state.completed),
        settings=replace(state.settings),
    )


def update_settings(state: GameState, **changes) -> GameState:
    unknown = set(changes) - set(SETTING_NAMES)
    if unknown:
        raise TypeError(f"unknown settings: {', '.join(sorted(unknown))}")
    return replace(state, settings=replace(state.settings, **changes))
