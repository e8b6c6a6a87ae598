from __future__ import annotations

import random
from typing import Optional

from spider_engine.events import GameEvent, deal_events, move_events
from spider_engine.game import (
    DEFAULT_SETTINGS,
    Clock,
    GameSettings,
    GameState,
    find_best_move,
    initialize_game,
    is_game_stuck,
    now_ms,
)
from spider_engine.history import (
    Command,
    Deal,
    History,
    MoveCards,
    NewGame,
    Redo,
    SetState,
    Undo,
    UpdateSettings,
    transition,
)
from spider_engine.interface import Interface


class GameSession:
    """
    Owns the undo/redo history of one player and notifies an optional interface.

    Every action returns True when it changed the game, False when it was ignored.
    """

    def __init__(
        self,
        settings: GameSettings = DEFAULT_SETTINGS,
        rng: random.Random | None = None,
        clock: Clock = now_ms,
        state: Optional[GameState] = None,
    ):
        self.rng = rng
        self.clock = clock
        self.interface: Optional[Interface] = None
        if state is None:
            state = initialize_game(settings, rng)
        self.history = History(current=state)

    def register_interface(self, interface: Interface):
        self.interface = interface
        interface.session = self
        interface.on_start(self.state)

    @property
    def state(self) -> GameState:
        return self.history.current

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def is_stuck(self) -> bool:
        return is_game_stuck(self.state)

    def dispatch(self, command: Command) -> bool:
        before = self.history
        self.history = transition(before, command, self.rng, self.clock)
        return self.history is not before

    def _emit(self, events: list[GameEvent]):
        if self.interface is None:
            return
        for event in events:
            self.interface.on_event(event)
        self.interface.notify_redraw()
        if self.state.is_won:
            self.interface.on_win(self.state)

    def move_cards(self, from_col: int, card_index: int, to_col: int) -> bool:
        before = self.state
        if not self.dispatch(MoveCards(from_col, card_index, to_col)):
            return False
        self._emit(move_events(before, self.state, from_col, card_index, to_col))
        return True

    def auto_move(self, from_col: int, card_index: int) -> bool:
        target = find_best_move(self.state, from_col, card_index)
        if target is None:
            return False
        return self.move_cards(from_col, card_index, target)

    def deal(self) -> bool:
        before = self.state
        if not self.dispatch(Deal()):
            return False
        self._emit(deal_events(before, self.state))
        return True

    def undo(self) -> bool:
        if not self.dispatch(Undo()):
            return False
        if self.interface is not None:
            self.interface.on_undo(self.state)
        return True

    def redo(self) -> bool:
        if not self.dispatch(Redo()):
            return False
        if self.interface is not None:
            self.interface.on_redo(self.state)
        return True

    def new_game(self, settings: Optional[GameSettings] = None):
        self.dispatch(NewGame(settings))
        if self.interface is not None:
            self.interface.on_start(self.state)

    def load_state(self, state: GameState):
        self.dispatch(SetState(state))
        if self.interface is not None:
            self.interface.on_start(self.state)

    def update_settings(self, **changes):
        self.dispatch(UpdateSettings(changes))
