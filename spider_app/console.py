import argparse
import random
from dataclasses import replace

from spider_app import game_store, settings_store
from spider_engine.cards import SUIT_COUNT_ORDER, card_label
from spider_engine.events import FreeStack
from spider_engine.interface import Interface
from spider_engine.rules import movable_starts
from spider_engine.session import GameSession


class ConsoleInterface(Interface):

    def print_all(self):
        state = self.session.state
        print(f"Completed: {len(state.completed)}        Stock: {len(state.stock)}        Moves: {state.moves}")
        print("-----0----1----2----3----4----5----6----7----8----9--")
        i = 0
        while True:
            has = False
            line = f"{i:2d}: "
            for column in state.tableau:
                if len(column) <= i:
                    line += "     "
                    continue
                has = True
                line += f"{card_label(column[i]):<5}"
            if not has:
                break
            print(line.rstrip())
            i += 1
        print()

    def on_start(self, state):
        print("Game started!")
        self.notify_redraw()

    def on_event(self, event):
        if isinstance(event, FreeStack):
            print(f"Run of {event.suit} completed from column {event.column}!")

    def notify_redraw(self):
        self.print_all()
        if self.session.is_stuck() and not self.session.state.is_won:
            print("No moves left.")

    def on_win(self, state):
        print("You win!")


def _parse_src(session, tokens):
    """`<col>` means the longest movable run of that column, `<col> <idx>` is explicit."""
    col = int(tokens[0])
    if len(tokens) > 1:
        return col, int(tokens[1])
    starts = movable_starts(session.state.tableau[col])
    if not starts:
        raise ValueError(f"nothing to move in column {col}")
    return col, starts[0]


def run(session: GameSession, slot: int):
    while not session.state.is_won:
        try:
            command = input("> ").strip().split()
        except EOFError:
            break
        if not command:
            continue
        name, args = command[0], command[1:]
        if name == "mv":
            try:
                src = _parse_src(session, args[:-1])
                dest = int(args[-1])
            except (ValueError, IndexError):
                print("Invalid index!")
                continue
            if not session.move_cards(src[0], src[1], dest):
                print("Cannot move!")
        elif name == "auto":
            try:
                src = _parse_src(session, args)
            except (ValueError, IndexError):
                print("Invalid index!")
                continue
            if not session.auto_move(*src):
                print("Cannot move!")
        elif name == "deal":
            if not session.deal():
                print("Cannot deal!")
        elif name == "undo":
            if not session.undo():
                print("Cannot undo!")
        elif name == "redo":
            if not session.redo():
                print("Cannot redo!")
        elif name == "new":
            session.new_game()
        elif name == "save":
            print("Saved." if game_store.save_game(session.state, slot) else "Save failed!")
        elif name == "load":
            state = game_store.load_game(slot)
            if state is None:
                print("No saved game!")
            else:
                session.load_state(state)
        elif name == "quit":
            break
        else:
            print("Invalid command!")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Spider Solitaire in the terminal.")
    parser.add_argument("--suits", type=int, choices=SUIT_COUNT_ORDER, default=None, help="Suit count; defaults to saved settings.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible deal.")
    parser.add_argument("--slot", type=int, default=1, help="Save slot used by save/load.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = settings_store.load_settings()
    if args.suits is not None:
        settings = replace(settings, suit_count=args.suits)
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(settings, rng=rng)
    session.register_interface(ConsoleInterface())
    run(session, args.slot)


if __name__ == '__main__':
    main()
