import logging
import random
from collections import deque
from enum import IntEnum
from itertools import islice
from typing import Iterable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Vector = Tuple[int, int]


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    def to_vector(self) -> Vector:
        return DIR_VECS[self]


UP, RIGHT, DOWN, LEFT = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT

DIR_VECS = {
    UP: (0, -1),
    RIGHT: (1, 0),
    DOWN: (0, 1),
    LEFT: (-1, 0),
}


def translate(point: Point, vector: Vector) -> Point:
    return (point[0] + vector[0], point[1] + vector[1])


def in_bounds(point: Point, width: int, height: int) -> bool:
    return 0 <= point[0] < width and 0 <= point[1] < height


def random_point(
    width: int,
    height: int,
    exclude: Iterable[Point],
    rng: Optional[random.Random] = None,
    max_tries: Optional[int] = None,
) -> Optional[Point]:
    """Pick a uniformly random grid cell that is not in ``exclude``.

    Draws are rejected until a free cell comes up. After ``max_tries``
    rejections the remaining free cells are enumerated and one is chosen
    directly, so a crowded grid still terminates. Returns ``None`` when
    every cell is taken.
    """
    rng = rng or random
    taken = set(exclude)
    if max_tries is None:
        max_tries = 4 * width * height

    for _ in range(max_tries):
        pos = (rng.randrange(width), rng.randrange(height))
        if pos not in taken:
            return pos

    free = [
        (x, y)
        for y in range(height)
        for x in range(width)
        if (x, y) not in taken
    ]
    if not free:
        return None
    return rng.choice(free)


class Snake:
    """The snake's body and heading.

    ``body`` runs tail to head, so the head is always ``body[-1]``.
    """

    def __init__(self, starting_body: Sequence[Point], direction: Direction = RIGHT):
        if not starting_body:
            raise ValueError("starting_body must contain at least one point")
        self.body = deque(tuple(p) for p in starting_body)
        self.start_len = len(self.body)
        self.direction = Direction(direction)
        self.eating = False
        self.alive = True
        self.death_reason: Optional[str] = None

    @property
    def head(self) -> Point:
        return self.body[-1]

    def slither(
        self,
        food: Optional[Point],
        width: int,
        height: int,
        rng: Optional[random.Random] = None,
    ) -> Optional[Point]:
        """Advance one cell and return where the food is afterwards."""
        self.body.append(translate(self.head, self.direction.to_vector()))
        self.eat(food)
        if not self.eating:
            self.body.popleft()
            return food

        self.eating = False
        logger.debug("Ate food at %s, length is now %d", food, len(self.body))
        return random_point(width, height, self.body, rng=rng)

    def eat(self, food: Optional[Point]) -> None:
        if food is not None and self.head == food:
            self.eating = True

    def dead(self, width: int, height: int) -> bool:
        head = self.head
        if not in_bounds(head, width, height):
            self.death_reason = "wall"
            return True
        if head in islice(self.body, len(self.body) - 1):
            self.death_reason = "self"
            return True
        return False

    def change_direction(self, direction: Direction) -> None:
        if direction != self.direction.opposite():
            self.direction = direction

    def score(self) -> int:
        return len(self.body) - self.start_len


class SnakeEnv:
    """Snake, food and grid size with no terminal or clock attached."""

    def __init__(
        self,
        width: int,
        height: int,
        starting_body: Sequence[Point],
        *,
        direction: Direction = RIGHT,
        seed: Optional[int] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = width
        self.height = height
        self.starting_body = tuple(tuple(p) for p in starting_body)
        self.start_direction = Direction(direction)
        self.seed(seed)
        self.reset()

    def seed(self, seed: Optional[int] = None) -> Optional[int]:
        self._seed = seed
        self._rng = random.Random(seed)
        return seed

    def reset(self) -> None:
        self.snake = Snake(self.starting_body, self.start_direction)
        self.food = random_point(self.width, self.height, self.snake.body, rng=self._rng)
        self.steps = 0

    @property
    def score(self) -> int:
        return self.snake.score()

    def dead(self) -> bool:
        return self.snake.dead(self.width, self.height)

    def change_direction(self, direction: Direction) -> None:
        self.snake.change_direction(direction)

    def step(self) -> None:
        self.food = self.snake.slither(self.food, self.width, self.height, rng=self._rng)
        self.steps += 1
