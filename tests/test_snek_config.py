import dataclasses

import pytest

from snek_config import DEFAULT_CONFIG, GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = DEFAULT_CONFIG
        assert (cfg.width, cfg.height, cfg.fps) == (17, 15, 8)
        assert cfg.quit_key == "q"
        assert cfg.pause_key == "esc"
        assert cfg.starting_body == ((0, 0), (1, 0), (2, 0), (3, 0))

    def test_screen_size(self):
        assert DEFAULT_CONFIG.screen_width == 38
        assert DEFAULT_CONFIG.screen_height == 17

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.fps = 30

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -1},
            {"fps": 0},
            {"starting_body": ()},
            {"width": 3, "starting_body": ((0, 0), (3, 0))},
            {"starting_body": ((0, 0), (0, 0))},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)
