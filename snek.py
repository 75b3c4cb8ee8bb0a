"""
Play snek in the terminal.

Controls:
    Arrow keys to steer
    Esc to pause / resume
    q to quit
"""

import logging
import sys
from typing import Optional

from snek_config import DEFAULT_CONFIG, Color, GameConfig
from snek_env import DOWN, LEFT, RIGHT, UP, SnakeEnv
from snek_terminal import TerminalEngine, TerminalInitError

logger = logging.getLogger(__name__)


class Game:
    def __init__(self, config: GameConfig, engine, seed: Optional[int] = None):
        self.config = config
        self.env = SnakeEnv(config.width, config.height, config.starting_body, seed=seed)
        self.paused = False
        self.engine = engine

    @property
    def snake(self):
        return self.env.snake

    def main_loop(self) -> None:
        self.engine.set_title(self.config.title)
        while self.snake.alive:
            quitting = self.quit()
            self.snake.alive = not (quitting or self.env.dead())
            if quitting:
                self.snake.death_reason = "quit"
            if not self.snake.alive:
                logger.debug(
                    "Game over (%s) after %d steps, score %d",
                    self.snake.death_reason,
                    self.env.steps,
                    self.score(),
                )
            self.draw()

            self.engine.draw()
            self.engine.clear_screen()
            self.engine.wait_frame()

            self.input()
            if self.snake.alive and not self.paused:
                self.env.step()

    def score(self) -> int:
        return self.env.score

    def quit(self) -> bool:
        return self.engine.is_key_pressed(self.config.quit_key)

    def input(self) -> None:
        cfg = self.config
        if self.engine.is_key_pressed(cfg.pause_key):
            self.paused = not self.paused
            logger.debug("Paused" if self.paused else "Resumed")
        elif self.engine.is_key_pressed(cfg.up_key):
            self.env.change_direction(UP)
        elif self.engine.is_key_pressed(cfg.down_key):
            self.env.change_direction(DOWN)
        elif self.engine.is_key_pressed(cfg.left_key):
            self.env.change_direction(LEFT)
        elif self.engine.is_key_pressed(cfg.right_key):
            self.env.change_direction(RIGHT)

    def draw(self) -> None:
        self.draw_map()
        self.draw_prompts()
        self.draw_food()
        self.draw_snake()

    def draw_map(self) -> None:
        self.engine.fill(self.config.border_color)
        self.engine.fill_rect(
            2,
            1,
            self.engine.width - 3,
            self.engine.height - 2,
            self.config.map_color,
        )

    def draw_prompts(self) -> None:
        cfg = self.config
        score = f"{cfg.score_prompt}{self.score()}"
        mid = self.engine.width // 2 - len(score) // 2
        self.engine.print_fbg(mid, self.engine.height - 1, score, Color.RESET, cfg.border_color)

        prompt = cfg.pause_prompt if self.paused else cfg.game_prompt
        mid = self.engine.width // 2 - len(prompt) // 2
        self.engine.print_fbg(mid, 0, prompt, Color.RESET, cfg.border_color)

    def _draw_cell(self, x: int, y: int, glyph: str, fg: Color, bg: Color) -> None:
        # One grid cell covers two terminal columns.
        self.engine.set_pxl(x * 2 + 2, y + 1, glyph, fg, bg)
        self.engine.set_pxl(x * 2 + 3, y + 1, glyph, fg, bg)

    def draw_food(self) -> None:
        if self.env.food is None:
            return
        fx, fy = self.env.food
        self._draw_cell(fx, fy, " ", Color.RESET, self.config.food_color)

    def draw_snake(self) -> None:
        cfg = self.config
        for x, y in self.snake.body:
            self._draw_cell(x, y, " ", Color.RESET, cfg.snake_color)
        hx, hy = self.snake.head
        eye = cfg.eye_char if self.snake.alive else cfg.dead_eye_char
        self._draw_cell(hx, hy, eye, cfg.head_color, cfg.snake_color)


def run(config: GameConfig = DEFAULT_CONFIG, seed: Optional[int] = None) -> int:
    with TerminalEngine.init(config.screen_width, config.screen_height, config.fps) as engine:
        game = Game(config, engine, seed=seed)
        try:
            game.main_loop()
        except KeyboardInterrupt:
            game.snake.alive = False
            game.snake.death_reason = "quit"

    score = game.score()
    print(f"{config.end_message}{score}")
    return score


def main() -> None:
    try:
        run()
    except TerminalInitError as exc:
        print(f"snek: terminal engine failed to initialize: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
