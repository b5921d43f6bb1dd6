"""
termsnake game engine and command line entry point.

One asyncio event loop drives everything: keyboard input arrives through a
reader callback on stdin and the simulation advances from a fixed-interval
timer. Both run to completion before the loop dispatches anything else, so
the game state is never touched concurrently.
"""

import argparse
import asyncio
import logging
import random
import signal
import sys
from typing import Callable, Optional, Tuple

from termsnake.config import GameConfig, load_config
from termsnake.domain.board import Board
from termsnake.domain.constants import (
    INITIAL_BODY,
    INITIAL_DIRECTION,
    INITIAL_LENGTH,
    KEY_DIRECTIONS,
    VALID_MOVES,
    GAME_OVER_MESSAGE,
    FAREWELL_MESSAGE,
)
from termsnake.domain.game_state import GameState
from termsnake.domain.snake import Snake
from termsnake.services.keyboard import Key, KeyboardReader, RawMode
from termsnake.services.renderer import Renderer
from termsnake.services.terminal import Terminal
from termsnake.services.ticker import Ticker

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Manages:
      - Board geometry
      - The snake and its direction
      - Food placement
      - Per-tick simulation and incremental drawing
      - Game over
    """

    def __init__(
        self,
        board: Board,
        renderer: Renderer,
        config: Optional[GameConfig] = None,
        on_exit: Optional[Callable[[str], None]] = None,
        rng: Optional[random.Random] = None
    ):
        self.board = board
        self.renderer = renderer
        self.terminal = renderer.terminal
        self.config = config or GameConfig()
        self.snake = Snake(INITIAL_BODY)
        # direction is what the snake last moved in; pending_direction is
        # what the next step will use.
        self.direction: Tuple[int, int] = INITIAL_DIRECTION
        self.pending_direction: Tuple[int, int] = INITIAL_DIRECTION
        self.food: Optional[Tuple[int, int]] = None
        self.tick_count = 0
        self.game_over = False
        self.exit_message: Optional[str] = None
        self.ticker: Optional[Ticker] = None
        self._on_exit = on_exit
        self._random = rng or random.Random()

    @property
    def score(self) -> int:
        return len(self.snake) - INITIAL_LENGTH

    def setup(self) -> None:
        """Draw the border, the initial snake and the first food."""
        self.terminal.hide_cursor()
        self.renderer.draw_board()
        self.renderer.fill_points(self.snake.positions)
        self.generate_food()
        logger.info(
            "Game started on %dx%d board, tick=%dms",
            self.board.columns, self.board.rows, self.config.tick_ms
        )

    def set_direction(self, requested: Tuple[int, int]) -> None:
        """
        Queue a direction for the next step.

        Unknown vectors are ignored, and so is the exact reverse of either
        the pending direction or the direction the snake last moved in.
        Several calls between two ticks coalesce into the last accepted one.
        """
        if requested not in VALID_MOVES:
            return
        for d_row, d_col in (self.pending_direction, self.direction):
            if requested == (-d_row, -d_col):
                return
        self.pending_direction = requested

    def handle_key(self, key: Key) -> None:
        if key.ctrl and key.name == "c":
            self.quit()
            return
        direction = KEY_DIRECTIONS.get(key.name)
        if direction is not None:
            self.set_direction(direction)

    def generate_food(self) -> Tuple[int, int]:
        """
        Place food on a random cell with an even row and an even column.

        Row and column are sampled by two independent rejection loops. The
        snake body is not checked, so food can land underneath it.
        """
        row = 1
        column = 1
        while row % 2 != 0:
            row = self._random.randint(2, self.board.rows - 1)
        while column % 2 != 0:
            column = self._random.randint(2, self.board.columns - 1)
        self.food = (row, column)
        self.renderer.draw_food(self.food)
        logger.debug("Food placed at %s", self.food)
        return self.food

    def step(self) -> bool:
        """
        Advance the snake one cell.

        Returns True while the game is running, False once it is over.
        """
        if self.game_over:
            return False

        self.direction = self.pending_direction
        head_row, head_col = self.snake.head
        d_row, d_col = self.direction
        candidate = (head_row + d_row, head_col + d_col)

        if not self.board.is_in_bounds(*candidate):
            self._collide("wall", candidate)
            return False
        if self.snake.occupies(candidate):
            self._collide("self", candidate)
            return False

        self.snake.advance(candidate)
        self.tick_count += 1

        if candidate == self.food:
            self.snake.grow()
            logger.info("Food eaten at %s, score %d", candidate, self.score)
            self.generate_food()

        return True

    def tick(self) -> None:
        """One scheduled step: erase the old body, simulate, draw the new body."""
        self.renderer.clear_points(self.snake.positions)
        if not self.step():
            return
        self.renderer.fill_points(self.snake.positions)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Tick %d\n%s", self.tick_count, self.get_current_state().print_board())

        if self.terminal.backpressured and self.ticker is not None and self.ticker.running:
            logger.warning("Terminal output is backed up, pausing ticks until it drains")
            self.ticker.stop()

    def resume(self) -> None:
        """Output drained: start ticking again on a fresh schedule."""
        if self.game_over or self.ticker is None:
            return
        self.ticker.restart()

    def quit(self) -> None:
        logger.info("Quit requested at score %d", self.score)
        self.end_game(FAREWELL_MESSAGE)

    def end_game(self, message: str) -> None:
        if self.game_over:
            return
        self.game_over = True
        self.exit_message = message
        if self.ticker is not None:
            self.ticker.stop()
        self.restore_screen()
        if self._on_exit is not None:
            self._on_exit(message)

    def restore_screen(self) -> None:
        self.terminal.show_cursor()
        self.terminal.cursor_to(1, 1)
        self.terminal.clear_screen()

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick=self.tick_count,
            snake_positions=list(self.snake.positions),
            direction=self.direction,
            food=self.food,
            score=self.score,
            rows=self.board.rows,
            columns=self.board.columns,
            alive=self.snake.alive,
            death_reason=self.snake.death_reason
        )

    def _collide(self, reason: str, cell: Tuple[int, int]) -> None:
        self.snake.die(reason)
        logger.info("Game over: %s collision at %s, score %d", reason, cell, self.score)
        self.end_game(GAME_OVER_MESSAGE + str(self.score))


# -------------------------------
# Event loop wiring
# -------------------------------

def run_game(config: GameConfig, stdin_fd: int = 0, stdout_fd: int = 1) -> str:
    """
    Play one game on the terminal attached to the given descriptors.

    Returns the message to show once the terminal is back to normal.
    """
    loop = asyncio.new_event_loop()
    errors = []

    def on_exit(message: str) -> None:
        loop.stop()

    def handle_exception(loop, context):
        logger.error("Unhandled error in event loop: %s", context.get("message"))
        errors.append(context.get("exception") or RuntimeError(context.get("message")))
        loop.stop()

    loop.set_exception_handler(handle_exception)

    try:
        terminal = Terminal(stdout_fd, loop=loop)
        board = Board.from_terminal_size(terminal.size)
        board.validate()

        renderer = Renderer(terminal, board, config)
        game = SnakeGame(board, renderer, config, on_exit=on_exit)
        game.ticker = Ticker(loop, config.tick_seconds, game.tick)
        terminal.on_drain(game.resume)
        keyboard = KeyboardReader(stdin_fd, loop, game.handle_key, on_eof=game.quit)
        signals = (signal.SIGINT, signal.SIGTERM)

        with RawMode(stdin_fd):
            terminal.start()
            try:
                game.setup()
                keyboard.attach()
                for sig in signals:
                    loop.add_signal_handler(sig, game.quit)
                game.ticker.start()
                loop.run_forever()
            finally:
                for sig in signals:
                    loop.remove_signal_handler(sig)
                keyboard.detach()
                game.ticker.stop()
                if not game.game_over:
                    game.restore_screen()
                terminal.close()
    finally:
        loop.close()

    if errors:
        raise errors[0]
    return game.exit_message


def configure_logging(config: GameConfig) -> None:
    # stdout belongs to the game; only log when a file is configured
    if config.log_file:
        logging.basicConfig(
            filename=config.log_file,
            level=config.log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(handlers=[logging.NullHandler()])


# -------------------------------
# Main Entry Point
# -------------------------------
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Play Snake in the terminal. Arrow keys steer, Ctrl+C quits."
    )
    parser.add_argument("--tick-ms", type=int, default=None,
                        help="Milliseconds between moves (default: 150 or SNAKE_TICK_MS)")
    parser.add_argument("--snake-char", type=str, default=None,
                        help="Glyph for the snake body (default: '*')")
    parser.add_argument("--food-char", type=str, default=None,
                        help="Glyph for the food (default: '$')")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Write logs to this file (default: no logging)")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level name (default: INFO)")

    args = parser.parse_args(argv)

    config = load_config(
        tick_ms=args.tick_ms,
        snake_char=args.snake_char,
        food_char=args.food_char,
        log_file=args.log_file,
        log_level=args.log_level.upper() if args.log_level else None,
    )
    configure_logging(config)

    message = run_game(config)
    print(message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
