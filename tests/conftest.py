import sys, os

# Ensure src (and the repository root, for tests.helpers) is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest

from action_economy.events.bus import EventBus
from action_economy.settings import Settings
from action_economy.world import create_world, install_systems


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def plugin(settings):
    bus = EventBus()
    world = create_world()
    systems = install_systems(world, bus, settings)
    return bus, world, systems
