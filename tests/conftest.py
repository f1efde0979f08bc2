import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random

import pytest

from pixel_vacuum.core.config import AppConfig, PhysicsConfig
from pixel_vacuum.physics.entities import Pixel


class RecordingHaptics:
    def __init__(self):
        self.events = []

    def impact(self, strength):
        self.events.append(("impact", strength))

    def success(self):
        self.events.append(("success", None))

    def close(self):
        pass


def make_pixel(x, y, vx=0.0, vy=0.0, pixel_id=0, **kwargs):
    return Pixel(
        id=pixel_id,
        position=[float(x), float(y)],
        velocity=[float(vx), float(vy)],
        size=3.0,
        color=(0, 242, 255),
        glow_color=(0, 242, 255, 153),
        opacity=1.0,
        **kwargs,
    )


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def still_config():
    """Config without random recentering or turbo jitter."""
    return AppConfig(physics=PhysicsConfig(recenter_jitter=0.0, turbo_jitter=0.0))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def haptics():
    return RecordingHaptics()
