from __future__ import annotations

from dataclasses import dataclass

from spider_engine.game import GameState


class GameEvent:
    def is_auto(self) -> bool:
        return False


@dataclass(frozen=True)
class CardMove(GameEvent):
    # (column, index) of the first moved card before and after the move.
    src: tuple[int, int]
    dest: tuple[int, int]
    count: int


@dataclass(frozen=True)
class CallDeal(GameEvent):
    draw_count: int


@dataclass(frozen=True)
class RevealTop(GameEvent):
    column: int

    def is_auto(self) -> bool:
        return True


@dataclass(frozen=True)
class FreeStack(GameEvent):
    column: int
    suit: str

    def is_auto(self) -> bool:
        return True


def _was_hidden(before: GameState, column: int, index: int) -> bool:
    cards = before.tableau[column]
    return 0 <= index < len(cards) and not cards[index].face_up


def _free_events(before: GameState, after: GameState, columns) -> list[GameEvent]:
    """Events for the piles the completion sweep removed from `columns`."""
    events: list[GameEvent] = []
    piles = iter(after.completed[len(before.completed):])
    for col in columns:
        pile = next(piles, None)
        if pile is None:
            break
        events.append(FreeStack(column=col, suit=pile[0].suit))
        remaining = len(after.tableau[col])
        if remaining and _was_hidden(before, col, remaining - 1):
            events.append(RevealTop(column=col))
    return events


def move_events(before: GameState, after: GameState, from_col: int, card_index: int, to_col: int) -> list[GameEvent]:
    count = len(before.tableau[from_col]) - card_index
    events: list[GameEvent] = [
        CardMove(src=(from_col, card_index), dest=(to_col, len(before.tableau[to_col])), count=count)
    ]
    if card_index > 0 and _was_hidden(before, from_col, card_index - 1):
        events.append(RevealTop(column=from_col))
    if len(after.completed) > len(before.completed):
        events.extend(_free_events(before, after, [to_col]))
    return events


def deal_events(before: GameState, after: GameState) -> list[GameEvent]:
    draw_count = len(before.stock) - len(after.stock)
    events: list[GameEvent] = [CallDeal(draw_count=draw_count)]
    if len(after.completed) > len(before.completed):
        # A column shorter than its dealt length lost a finished run.
        freed = [
            col
            for col in range(len(after.tableau))
            if len(after.tableau[col]) < len(before.tableau[col]) + (1 if col < draw_count else 0)
        ]
        events.extend(_free_events(before, after, freed))
    return events
