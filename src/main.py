"""Entry point for the match-three game.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
from arcade import Window, run, set_background_color, color, key
from match3.world import create_world
from match3.constants import WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE
from match3.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_NEW_GAME_REQUEST, EVENT_HINT_REQUEST
from match3.systems.board import BoardSystem
from match3.systems.input import InputSystem
from match3.systems.match import MatchSystem
from match3.systems.match_resolution import MatchResolutionSystem
from match3.systems.render import RenderSystem
from match3.systems.score_system import ScoreSystem
from match3.utils.logging import setup_logger

LOG = setup_logger(name="match3", level="info")


class Match3Window(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)

        # Board systems; resolution subscribes before the board is first filled
        self.score_system = ScoreSystem(self.world, self.event_bus)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus)

        set_background_color(color.BLACK)
        LOG.info("new game started (N: new game, H: hint)")

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.N:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
        elif symbol == key.H:
            self.event_bus.emit(EVENT_HINT_REQUEST)


def main():
    Match3Window()
    run()

if __name__ == "__main__":
    main()
