from spider_engine.events import GameEvent
from spider_engine.game import GameState


class Interface:

    def __init__(self):
        self.session = None

    def on_start(self, state: GameState):
        self.notify_redraw()

    def on_event(self, event: GameEvent):
        """
        Invoked for every event a successful move or deal produced.
        :param event:
        :return:
        """
        pass

    def on_undo(self, state: GameState):
        self.notify_redraw()

    def on_redo(self, state: GameState):
        self.notify_redraw()

    def notify_redraw(self):
        pass

    def on_win(self, state: GameState):
        pass
