import io

import pytest

from geco.engine.animation_engine import AnimationEngine
from geco.models.enums import FeatureType, LogLevel
from geco.utils.logger import configure_logger


@pytest.fixture(autouse=True)
def log_output():
    """
    Route the logger singleton into a buffer for every test.

    DEBUG level so debug-only branches still run their log calls.
    """
    buffer = io.StringIO()
    configure_logger(LogLevel.DEBUG, use_colors=False, stream=buffer)
    yield buffer
    configure_logger()


@pytest.fixture
def engine():
    return AnimationEngine()


@pytest.fixture
def polygon_engine():
    """
    Engine holding one polygon "square" visible on [0, 100):
    four points on the equator added at frame 0, p1 moving to the
    north pole at frame 10.
    """
    eng = AnimationEngine(name="Equator")
    fid = eng.create_feature("square", FeatureType.POLYGON, 0, 100, feature_id="square")
    eng.add_point(fid, "p1", 0, 1, 0, 0)
    eng.add_point(fid, "p2", 0, 0, 1, 0)
    eng.add_point(fid, "p3", 0, -1, 0, 0)
    eng.add_point(fid, "p4", 0, 0, -1, 0)
    eng.add_position_keyframe_to_point(fid, "p1", 10, 0, 0, 1)
    return eng
