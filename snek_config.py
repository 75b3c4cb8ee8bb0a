from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from snek_env import Point


class Color(Enum):
    RESET = -1
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


END_MESSAGE = (
    "Due to your subpar prowess and deriliction of duty, the snek's concept "
    "of a subjective experience and consciousness has ceased to be...\nFinal Score: "
)


@dataclass(frozen=True)
class GameConfig:
    # Grid and pacing
    width: int = 17
    height: int = 15
    fps: int = 8

    # Controls
    quit_key: str = "q"
    pause_key: str = "esc"
    up_key: str = "up"
    down_key: str = "down"
    left_key: str = "left"
    right_key: str = "right"

    # Colors of the on screen objects
    map_color: Color = Color.GREEN
    border_color: Color = Color.BLACK
    food_color: Color = Color.RED
    snake_color: Color = Color.BLUE
    head_color: Color = Color.BLACK

    # Glyphs and prompts
    eye_char: str = "^"
    dead_eye_char: str = "x"
    title: str = "SNEK"
    game_prompt: str = "SNEK"
    pause_prompt: str = "PAUSED"
    score_prompt: str = "SCORE: "
    end_message: str = END_MESSAGE

    starting_body: Tuple[Point, ...] = ((0, 0), (1, 0), (2, 0), (3, 0))

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be positive, got {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if not self.starting_body:
            raise ValueError("starting_body must contain at least one point")
        for x, y in self.starting_body:
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise ValueError(f"starting body cell {(x, y)} is outside the grid")
        if len(set(self.starting_body)) != len(self.starting_body):
            raise ValueError("starting_body must not overlap itself")

    @property
    def screen_width(self) -> int:
        # Every grid cell is two terminal columns wide, plus a two column border per side.
        return self.width * 2 + 4

    @property
    def screen_height(self) -> int:
        return self.height + 2


DEFAULT_CONFIG = GameConfig()
