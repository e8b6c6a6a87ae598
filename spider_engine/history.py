from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from spider_engine.game import (
    Clock,
    GameSettings,
    GameState,
    clone_game_state,
    deal_from_stock,
    execute_move,
    find_best_move,
    initialize_game,
    now_ms,
    update_settings,
)


@dataclass(frozen=True)
class SetState:
    state: GameState


@dataclass(frozen=True)
class MoveCards:
    from_col: int
    card_index: int
    to_col: int


@dataclass(frozen=True)
class AutoMove:
    from_col: int
    card_index: int


@dataclass(frozen=True)
class Deal:
    pass


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class NewGame:
    settings: Optional[GameSettings] = None


@dataclass(frozen=True)
class UpdateSettings:
    changes: dict = field(default_factory=dict)


Command = Union[SetState, MoveCards, AutoMove, Deal, Undo, Redo, NewGame, UpdateSettings]


@dataclass(frozen=True)
class History:
    """
    Linear undo/redo over immutable snapshots.

    `past` is ordered oldest first, `future` holds the next redo first.
    """

    current: GameState
    past: tuple[GameState, ...] = ()
    future: tuple[GameState, ...] = ()

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0


def _record(history: History, new_state: Optional[GameState]) -> History:
    if new_state is None:
        return history
    # A fresh action discards the redo branch.
    return History(
        current=new_state,
        past=history.past + (clone_game_state(history.current),),
        future=(),
    )


def _with_settings(state: GameState, settings: GameSettings) -> GameState:
    if state.settings == settings:
        return state
    return replace(state, settings=settings)


def transition(
    history: History,
    command: Command,
    rng: random.Random | None = None,
    clock: Clock = now_ms,
) -> History:
    """Apply one command. Rejected commands return `history` itself."""
    current = history.current

    if isinstance(command, SetState):
        return History(current=command.state)

    if isinstance(command, MoveCards):
        return _record(history, execute_move(current, command.from_col, command.card_index, command.to_col, clock))

    if isinstance(command, AutoMove):
        target = find_best_move(current, command.from_col, command.card_index)
        if target is None:
            return history
        return _record(history, execute_move(current, command.from_col, command.card_index, target, clock))

    if isinstance(command, Deal):
        return _record(history, deal_from_stock(current, clock))

    if isinstance(command, Undo):
        if not history.can_undo:
            return history
        # Settings changes are not undoable, so they follow the player around.
        return History(
            current=_with_settings(history.past[-1], current.settings),
            past=history.past[:-1],
            future=(clone_game_state(current),) + history.future,
        )

    if isinstance(command, Redo):
        if not history.can_redo:
            return history
        return History(
            current=_with_settings(history.future[0], current.settings),
            past=history.past + (clone_game_state(current),),
            future=history.future[1:],
        )

    if isinstance(command, NewGame):
        settings = command.settings if command.settings is not None else current.settings
        return History(current=initialize_game(settings, rng))

    if isinstance(command, UpdateSettings):
        return replace(history, current=update_settings(current, **command.changes))

    raise TypeError(f"unknown command: {type(command).__name__}")
