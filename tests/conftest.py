import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeonforge import create_app  # noqa: E402
from dungeonforge.dungeon import GenerationConfig  # noqa: E402


@pytest.fixture()
def test_app(tmp_path):
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def small_rect_config():
    """20x20 dungeon, 4x4 minimum rooms, offset 1, rectangular rooms."""
    return GenerationConfig(
        dungeon_width=20,
        dungeon_height=20,
        min_room_width=4,
        min_room_height=4,
        room_offset=1,
        use_random_walk=False,
    )
